# actionexpr

Building blocks for static checks of workflow files:

- a small type system for the values that workflow expressions produce
  (`any`, `null`, `number`, `bool`, `string`, objects and arrays);
- the signatures of the built-in expression functions and the types of the
  built-in context variables;
- validation of glob patterns used in branch, tag and path filters.

It has no runtime dependencies.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Types (`actionexpr.types`)

```python
from actionexpr.types import (
    StringType, NumberType, NullType, ArrayType,
    new_strict_object_type, new_map_object_type, equal_types,
)

env = new_map_object_type(StringType())
print(env)                                        # {string => string}

obj = new_strict_object_type({"foo": StringType()})
print(env.assignable(obj))                        # True
print(equal_types(env, obj))                      # True

print(NumberType().merge(StringType()))           # string
print(ArrayType(NullType()).merge(ArrayType(StringType())))  # array<any>
```

Every type has `assignable(other)`, `merge(other)` (falling back to `any`
on conflict) and `deep_copy()`.

An `ObjectType` is *strict* when only its known properties may be accessed
(`mapped` is `None`), *loose* when any property is allowed and typed as
`any`, and a *map* when every property has one element type.
`is_strict()`, `is_loose()`, `strict()` and `loose()` inspect and change
that. The helpers `new_empty_object_type()`, `new_object_type(props)`,
`new_empty_strict_object_type()`, `new_strict_object_type(props)` and
`new_map_object_type(mapped)` build the common shapes. An `ArrayType` has an
element type and a `deref` flag set for arrays produced by object filtering.

## Built-in functions and contexts (`actionexpr.signatures`)

```python
from actionexpr.signatures import (
    builtin_func_signatures, builtin_global_variable_types, ordinal,
)
from actionexpr.types import StringType

sigs = builtin_func_signatures()
print(sigs["startswith"][0])           # startsWith(string, string) -> bool
print(sigs["startswith"][0].check_args([StringType(), StringType()]))  # bool

contexts = builtin_global_variable_types()
print(contexts["env"])                 # {string => string}

print(ordinal(2), ordinal(11))         # 2nd 11th
```

Both functions return fresh dictionaries on every call, so they can be
changed freely. Function names are keyed in lower case because calls are
matched without regard to case; each key maps to a list of overloads.

`FuncSignature.check_args(args)` checks a list of argument types against a
signature and returns its return type. It raises `TypeError` describing the
first mismatch: a wrong number of arguments, or an argument that is not
assignable to its parameter. With `variable_length_params`, the last
parameter must be given at least once and may repeat.

## Glob filters (`actionexpr.glob`)

```python
from actionexpr.glob import validate_ref_glob, validate_path_glob

for err in validate_ref_glob("/^v\\d+$/"):
    print(err)            # "<column>: <message>"

print(validate_path_glob("docs/**/*.md"))   # []
```

Both functions return a list of `InvalidGlobPattern` errors, each with a
`message` and a 1-based `column` (0 when the pattern is empty or the error
comes after a newline in the pattern). Ref globs additionally reject
characters that are not allowed in branch and tag names, a leading `/`, and
a trailing `/` or `.`.

## What it does not do

The package provides types, signatures and glob validation only. It does
not lex or parse expression text, does not walk expressions to infer or
check their types, does not read workflow files, and has no command-line
tool.