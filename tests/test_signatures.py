import pytest

from actionexpr.signatures import (
    FuncSignature,
    builtin_func_signatures,
    builtin_global_variable_types,
    ordinal,
)
from actionexpr.types import (
    AnyType,
    ArrayType,
    BoolType,
    NullType,
    NumberType,
    ObjectType,
    StringType,
)


def _sig(name):
    return builtin_func_signatures()[name]


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, "1st"),
        (2, "2nd"),
        (3, "3rd"),
        (4, "4th"),
        (11, "11th"),
        (12, "12th"),
        (13, "13th"),
        (21, "21st"),
        (22, "22nd"),
        (23, "23rd"),
        (101, "101st"),
        (111, "111th"),
        (112, "112th"),
    ],
)
def test_ordinal(value, expected):
    assert ordinal(value) == expected


def test_builtin_function_signatures_are_consistent():
    for name, sigs in builtin_func_signatures().items():
        assert sigs, name
        assert name == name.lower()
        assert all(c.islower() for c in name)
        for sig in sigs:
            assert sig.name.lower() == name
            if sig.variable_length_params:
                assert len(sig.params) > 0


def test_signature_strings():
    contains = _sig("contains")
    assert str(contains[0]) == "contains(string, string) -> bool"
    assert str(contains[1]) == "contains(array<any>, any) -> bool"
    assert str(_sig("hashfiles")[0]) == "hashFiles(string...) -> string"
    assert str(_sig("always")[0]) == "always() -> bool"


def test_wrong_number_of_arguments_for_contains():
    contains = _sig("contains")
    with pytest.raises(TypeError) as first:
        contains[0].check_args([StringType()])
    assert str(first.value) == (
        'number of arguments is wrong. function "contains(string, string) -> bool" '
        "takes 2 parameters but 1 arguments are given"
    )
    with pytest.raises(TypeError) as second:
        contains[1].check_args([StringType()])
    assert str(second.value) == (
        'number of arguments is wrong. function "contains(array<any>, any) -> bool" '
        "takes 2 parameters but 1 arguments are given"
    )


def test_wrong_number_of_variable_length_arguments():
    with pytest.raises(TypeError) as err:
        _sig("hashfiles")[0].check_args([])
    assert str(err.value) == (
        'number of arguments is wrong. function "hashFiles(string...) -> string" '
        "takes at least 1 parameters but 0 arguments are given"
    )


def test_format_without_arguments():
    with pytest.raises(TypeError, match="takes at least 2 parameters but 1 arguments are given"):
        _sig("format")[0].check_args([StringType()])


def test_wrong_type_at_parameter():
    with pytest.raises(TypeError) as err:
        _sig("startswith")[0].check_args([StringType(), NullType()])
    assert str(err.value).startswith(
        '2nd argument of function call is not assignable. "null" cannot be assigned to "string"'
    )
    assert str(err.value).endswith(
        'called function type is "startsWith(string, string) -> bool"'
    )


def test_wrong_type_at_overloaded_parameter():
    contains = _sig("contains")
    with pytest.raises(TypeError, match='2nd argument .* "null" cannot be assigned to "string"'):
        contains[0].check_args([StringType(), NullType()])
    with pytest.raises(
        TypeError, match='1st argument .* "string" cannot be assigned to "array<any>"'
    ):
        contains[1].check_args([StringType(), NullType()])


@pytest.mark.parametrize(
    "args, expected",
    [
        ([NullType()], '1st argument of function call is not assignable. "null"'),
        ([StringType(), NullType()], '2nd argument of function call is not assignable. "null"'),
    ],
)
def test_wrong_type_at_rest_parameter(args, expected):
    with pytest.raises(TypeError) as err:
        _sig("hashfiles")[0].check_args(args)
    assert str(err.value).startswith(expected)


def test_check_args_ok_returns_return_type():
    assert _sig("contains")[0].check_args([StringType(), StringType()]) == BoolType()
    assert _sig("format")[0].check_args([StringType(), NumberType(), BoolType()]) == StringType()
    assert _sig("startswith")[0].check_args([StringType(), NumberType()]) == BoolType()
    assert _sig("always")[0].check_args([]) == BoolType()
    assert _sig("fromjson")[0].check_args([StringType()]) == AnyType()


def test_array_dereference_coerced_into_array_parameter():
    contains = _sig("contains")
    args = [ArrayType(NumberType(), True), NumberType()]
    with pytest.raises(TypeError):
        contains[0].check_args(args)
    assert contains[1].check_args(args) == BoolType()


def test_custom_signature_with_object_return():
    ret = ObjectType({"bar": BoolType()}, AnyType())
    sig = FuncSignature("test", ret)
    assert sig.check_args([]) is ret
    assert str(sig) == "test() -> object"


def _assert_props_lower(ty):
    if isinstance(ty, ObjectType):
        for name, child in ty.props.items():
            assert not any("A" <= c <= "Z" for c in name), name
            _assert_props_lower(child)
    elif isinstance(ty, ArrayType):
        _assert_props_lower(ty.elem)


def test_builtin_global_variable_names_are_lower_case():
    for ctx, ty in builtin_global_variable_types().items():
        assert not any("A" <= c <= "Z" for c in ctx), ctx
        _assert_props_lower(ty)


def test_builtin_global_variable_shapes():
    variables = builtin_global_variable_types()
    assert set(variables) == {
        "github", "env", "job", "steps", "runner", "secrets",
        "strategy", "matrix", "needs", "inputs",
    }
    assert str(variables["env"]) == "{string => string}"
    assert str(variables["secrets"]) == "{string => string}"
    assert str(variables["steps"]) == "{}"
    assert str(variables["strategy"]) == "object"
    github = variables["github"]
    assert github.is_strict()
    assert github.props["event"].is_loose()
    assert github.props["retention_days"] == NumberType()
    job = variables["job"]
    assert job.props["container"].props["network"] == StringType()
    services = job.props["services"]
    assert services.mapped.props["network"] == StringType()


def test_builtin_tables_are_fresh_copies():
    variables = builtin_global_variable_types()
    variables["matrix"] = ObjectType({"foo": StringType()}, None)
    variables["github"].props["event"].props["inputs"] = NullType()
    again = builtin_global_variable_types()
    assert str(again["matrix"]) == "{}"
    assert "inputs" not in again["github"].props["event"].props

    sigs = builtin_func_signatures()
    sigs["contains"].clear()
    assert len(builtin_func_signatures()["contains"]) == 2