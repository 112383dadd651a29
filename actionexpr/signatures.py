"""Built-in function signatures and context variable types of workflow expressions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from actionexpr.types import (
    AnyType,
    ArrayType,
    BoolType,
    ExprType,
    NumberType,
    ObjectType,
    StringType,
    new_empty_object_type,
    new_empty_strict_object_type,
    new_map_object_type,
    new_object_type,
    new_strict_object_type,
)

__all__ = [
    "FuncSignature",
    "ordinal",
    "builtin_func_signatures",
    "builtin_global_variable_types",
]


def ordinal(i: int) -> str:
    """Return ``i`` with its English ordinal suffix, e.g. ``1st`` or ``12th``."""
    suffix = "th"
    last = i % 10
    if last == 1 and i % 100 != 11:
        suffix = "st"
    elif last == 2 and i % 100 != 12:
        suffix = "nd"
    elif last == 3 and i % 100 != 13:
        suffix = "rd"
    return f"{i}{suffix}"


@dataclass
class FuncSignature:
    """Signature of a function: its name, return type and parameter types.

    When ``variable_length_params`` is set, the last parameter may be repeated
    any number of times, so ``params`` must not be empty.
    """

    name: str
    ret: ExprType
    params: list[ExprType] = field(default_factory=list)
    variable_length_params: bool = False

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.params)
        ellipsis = "..." if self.variable_length_params else ""
        return f"{self.name}({params}{ellipsis}) -> {self.ret}"

    def _not_assignable(self, index: int, param: ExprType, arg: ExprType) -> TypeError:
        return TypeError(
            f"{ordinal(index + 1)} argument of function call is not assignable. "
            f'"{arg}" cannot be assigned to "{param}". called function type is "{self}"'
        )

    def check_args(self, args: Sequence[ExprType]) -> ExprType:
        """Check argument types against this signature and return the return type.

        Raises ``TypeError`` describing the first mismatch found.
        """
        lp, la = len(self.params), len(args)
        if (self.variable_length_params and lp > la) or (
            not self.variable_length_params and lp != la
        ):
            at_least = "at least " if self.variable_length_params else ""
            raise TypeError(
                f'number of arguments is wrong. function "{self}" takes '
                f"{at_least}{lp} parameters but {la} arguments are given"
            )

        for index, (param, arg) in enumerate(zip(self.params, args)):
            if not param.assignable(arg):
                raise self._not_assignable(index, param, arg)

        # Unlike many languages, zero arguments for the variable part are not allowed.
        if self.variable_length_params:
            last = self.params[-1]
            for index, arg in enumerate(args[lp:], start=lp):
                if not last.assignable(arg):
                    raise self._not_assignable(index, last, arg)

        return self.ret


def builtin_func_signatures() -> dict[str, list[FuncSignature]]:
    """Return a fresh map from lower-case function names to their overloads."""
    return {
        "contains": [
            FuncSignature("contains", BoolType(), [StringType(), StringType()]),
            FuncSignature("contains", BoolType(), [ArrayType(AnyType()), AnyType()]),
        ],
        "startswith": [
            FuncSignature("startsWith", BoolType(), [StringType(), StringType()]),
        ],
        "endswith": [
            FuncSignature("endsWith", BoolType(), [StringType(), StringType()]),
        ],
        "format": [
            FuncSignature("format", StringType(), [StringType(), AnyType()], True),
        ],
        "join": [
            FuncSignature("join", StringType(), [ArrayType(StringType()), StringType()]),
            FuncSignature("join", StringType(), [StringType(), StringType()]),
            # Without the separator, values are joined with ','.
            FuncSignature("join", StringType(), [ArrayType(StringType())]),
            FuncSignature("join", StringType(), [StringType()]),
        ],
        "tojson": [FuncSignature("toJSON", StringType(), [AnyType()])],
        "fromjson": [FuncSignature("fromJSON", AnyType(), [StringType()])],
        "hashfiles": [FuncSignature("hashFiles", StringType(), [StringType()], True)],
        "success": [FuncSignature("success", BoolType(), [])],
        "always": [FuncSignature("always", BoolType(), [])],
        "cancelled": [FuncSignature("cancelled", BoolType(), [])],
        "failure": [FuncSignature("failure", BoolType(), [])],
    }


def _github_context() -> ObjectType:
    string_props = [
        "action",
        "action_path",
        "actor",
        "base_ref",
    ]
    props: dict[str, ExprType] = {name: StringType() for name in string_props}
    props["event"] = new_empty_object_type()
    for name in [
        "event_name",
        "event_path",
        "head_ref",
        "job",
        "ref",
        "ref_name",
        "ref_protected",
        "ref_type",
        "repository",
        "repository_owner",
        "run_id",
        "run_number",
        "run_attempt",
        "server_url",
        "sha",
        "token",
        "workflow",
        "workspace",
        # Not documented but present at runtime.
        "action_ref",
        "action_repository",
        "api_url",
        "env",
        "graphql_url",
        "path",
        "repositoryurl",
    ]:
        props[name] = StringType()
    props["retention_days"] = NumberType()
    return new_strict_object_type(props)


def builtin_global_variable_types() -> dict[str, ExprType]:
    """Return a fresh map from lower-case context names to their types."""
    return {
        "github": _github_context(),
        "env": new_map_object_type(StringType()),
        "job": new_strict_object_type(
            {
                "container": new_strict_object_type(
                    {"id": StringType(), "network": StringType()}
                ),
                "services": new_map_object_type(
                    new_strict_object_type(
                        {
                            "id": StringType(),
                            "network": StringType(),
                            "ports": new_empty_object_type(),
                        }
                    )
                ),
                "status": StringType(),
            }
        ),
        "steps": new_empty_strict_object_type(),
        "runner": new_strict_object_type(
            {
                "name": StringType(),
                "os": StringType(),
                "temp": StringType(),
                "tool_cache": StringType(),
                "workspace": StringType(),
            }
        ),
        "secrets": new_map_object_type(StringType()),
        "strategy": new_object_type(
            {
                "fail-fast": BoolType(),
                "job-index": NumberType(),
                "job-total": NumberType(),
                "max-parallel": NumberType(),
            }
        ),
        "matrix": new_empty_strict_object_type(),
        "needs": new_empty_strict_object_type(),
        "inputs": new_empty_strict_object_type(),
    }