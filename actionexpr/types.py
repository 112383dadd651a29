"""Types of values appearing in workflow expressions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class ExprType(ABC):
    """Base of all expression value types."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the human readable name of the type."""

    @abstractmethod
    def assignable(self, other: ExprType) -> bool:
        """Return whether a value of ``other`` type can be assigned to this type."""

    @abstractmethod
    def merge(self, other: ExprType) -> ExprType:
        """Merge ``other`` into this type, falling back to any on conflict."""

    @abstractmethod
    def deep_copy(self) -> ExprType:
        """Return a copy of this type with all child types copied recursively."""


@dataclass(frozen=True)
class AnyType(ExprType):
    """A type whose values cannot be checked statically."""

    def __str__(self) -> str:
        return "any"

    def assignable(self, other: ExprType) -> bool:
        return True

    def merge(self, other: ExprType) -> ExprType:
        return self

    def deep_copy(self) -> ExprType:
        return self


@dataclass(frozen=True)
class NullType(ExprType):
    """The type of the null value."""

    def __str__(self) -> str:
        return "null"

    def assignable(self, other: ExprType) -> bool:
        return isinstance(other, (NullType, AnyType))

    def merge(self, other: ExprType) -> ExprType:
        if isinstance(other, NullType):
            return self
        return AnyType()

    def deep_copy(self) -> ExprType:
        return self


@dataclass(frozen=True)
class NumberType(ExprType):
    """The type of integer and float values."""

    def __str__(self) -> str:
        return "number"

    def assignable(self, other: ExprType) -> bool:
        return isinstance(other, (NumberType, AnyType))

    def merge(self, other: ExprType) -> ExprType:
        if isinstance(other, NumberType):
            return self
        if isinstance(other, StringType):
            return other
        return AnyType()

    def deep_copy(self) -> ExprType:
        return self


@dataclass(frozen=True)
class BoolType(ExprType):
    """The type of boolean values."""

    def __str__(self) -> str:
        return "bool"

    def assignable(self, other: ExprType) -> bool:
        # Every value can be coerced into bool.
        return True

    def merge(self, other: ExprType) -> ExprType:
        if isinstance(other, BoolType):
            return self
        if isinstance(other, StringType):
            return other
        return AnyType()

    def deep_copy(self) -> ExprType:
        return self


@dataclass(frozen=True)
class StringType(ExprType):
    """The type of string values."""

    def __str__(self) -> str:
        return "string"

    def assignable(self, other: ExprType) -> bool:
        return isinstance(other, (StringType, NumberType, AnyType))

    def merge(self, other: ExprType) -> ExprType:
        if isinstance(other, (StringType, NumberType, BoolType)):
            return self
        return AnyType()

    def deep_copy(self) -> ExprType:
        return self


@dataclass
class ObjectType(ExprType):
    """An object holding key-value pairs.

    ``mapped`` is the type of every unknown property. ``AnyType`` makes a loose
    object, ``None`` makes a strict object that allows only ``props``.
    """

    props: dict[str, ExprType] = field(default_factory=dict)
    mapped: ExprType | None = None

    def is_strict(self) -> bool:
        return self.mapped is None

    def is_loose(self) -> bool:
        return isinstance(self.mapped, AnyType)

    def strict(self) -> None:
        self.mapped = None

    def loose(self) -> None:
        self.mapped = AnyType()

    def __str__(self) -> str:
        if not self.is_strict():
            if self.is_loose():
                return "object"
            return f"{{string => {self.mapped}}}"
        inner = "; ".join(f"{name}: {ty}" for name, ty in self.props.items())
        return f"{{{inner}}}"

    def assignable(self, other: ExprType) -> bool:
        if isinstance(other, AnyType):
            return True
        if not isinstance(other, ObjectType):
            return False
        if not self.is_strict():
            if not other.is_strict():
                return self.mapped.assignable(other.mapped)
            return all(self.mapped.assignable(t) for t in other.props.values())
        if not other.is_strict():
            return all(t.assignable(other.mapped) for t in self.props.values())
        return all(
            name in self.props and self.props[name].assignable(r)
            for name, r in other.props.items()
        )

    def merge(self, other: ExprType) -> ExprType:
        if not isinstance(other, ObjectType):
            return AnyType()
        if not self.props and other.is_loose():
            return other
        if not other.props and self.is_loose():
            return self

        mapped = self.mapped
        if mapped is None:
            mapped = other.mapped
        elif other.mapped is not None:
            mapped = mapped.merge(other.mapped)

        props = dict(self.props)
        for name, r in other.props.items():
            if name in props:
                props[name] = props[name].merge(r)
            else:
                props[name] = r
                if mapped is not None:
                    mapped = mapped.merge(r)
        return ObjectType(props, mapped)

    def deep_copy(self) -> ExprType:
        props = {name: ty.deep_copy() for name, ty in self.props.items()}
        mapped = self.mapped.deep_copy() if self.mapped is not None else None
        return ObjectType(props, mapped)


@dataclass
class ArrayType(ExprType):
    """An array. ``deref`` is set when derived from object filtering (``foo.*``)."""

    elem: ExprType
    deref: bool = False

    def __str__(self) -> str:
        return f"array<{self.elem}>"

    def assignable(self, other: ExprType) -> bool:
        if isinstance(other, AnyType):
            return True
        if isinstance(other, ArrayType):
            return self.elem.assignable(other.elem)
        return False

    def merge(self, other: ExprType) -> ExprType:
        if not isinstance(other, ArrayType):
            return AnyType()
        if isinstance(self.elem, AnyType):
            return self
        if isinstance(other.elem, AnyType):
            return other
        # Merging breaks a property dereference chain, so deref is dropped.
        return ArrayType(self.elem.merge(other.elem), False)

    def deep_copy(self) -> ExprType:
        return ArrayType(self.elem.deep_copy(), self.deref)


def new_empty_object_type() -> ObjectType:
    """Create a loose object with no known properties."""
    return ObjectType({}, AnyType())


def new_object_type(props: dict[str, ExprType]) -> ObjectType:
    """Create a loose object with the given known properties."""
    return ObjectType(props, AnyType())


def new_empty_strict_object_type() -> ObjectType:
    """Create a strict object with no properties."""
    return ObjectType({}, None)


def new_strict_object_type(props: dict[str, ExprType]) -> ObjectType:
    """Create a strict object allowing only the given properties."""
    return ObjectType(props, None)


def new_map_object_type(mapped: ExprType) -> ObjectType:
    """Create an object mapping every key to the given type."""
    return ObjectType({}, mapped)


def equal_types(left: ExprType, right: ExprType) -> bool:
    """Return whether the two types are mutually assignable."""
    return left.assignable(right) and right.assignable(left)