import pytest

from sigmacomp.expr import parse_expr
from sigmacomp.types import (
    AExprFold,
    AExprType,
    ExprTypeError,
    Kind,
    aexpr_type_from_str,
    expr_type,
    vardict_from_strs,
)


@pytest.fixture
def vars():
    return vardict_from_strs([("a", "S"), ("A", "pP"), ("v", "vS")])


def const(value):
    return AExprType(Kind.SCALAR, True, False, value)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2", 2),
        ("-4", -4),
        ("(2)", 2),
        ("1<<20", 1048576),
        ("(3-2)<<(4*5)", 1048576),
        ("127<<120", 168811955464684315858783496655603761152),
        ("-(-170141183460469231731687303715884105727)",
         170141183460469231731687303715884105727),
    ],
)
def test_constant_expressions(vars, text, expected):
    assert expr_type(vars, text) == const(expected)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("A", "pP"),
        ("a*A", "P"),
        ("A*3", "pP"),
        ("(a-1)*(A+A)", "P"),
        ("(v-1)*(A+A)", "vP"),
        ("A-A", "pP"),
        ("sum(v)", "S"),
        ("v*A", "vP"),
    ],
)
def test_expression_types(vars, text, expected):
    assert expr_type(vars, text) == aexpr_type_from_str(expected)


def test_accepts_parsed_expression(vars):
    assert expr_type(vars, parse_expr("a*A")) == aexpr_type_from_str("Point")


def test_negating_i128_min_loses_constant(vars):
    result = expr_type(vars, "-(-170141183460469231731687303715884105727-1)")
    assert result == AExprType(Kind.SCALAR, True, False, None)


@pytest.mark.parametrize(
    "text",
    [
        "B",
        "a+A",
        "A*A",
        "A/A",
        "A.size",
        "a*a",
        "a*(a*A)",
        "a<<2",
        "1<<a",
        "1<<128",
        "170141183460469231731687303715884105728",
        "sum(a)",
        "sum(v, v)",
        "foo(v)",
        "!a",
        "a = A",
    ],
)
def test_invalid_expressions(vars, text):
    with pytest.raises(ExprTypeError):
        expr_type(vars, text)


def test_type_names():
    assert aexpr_type_from_str("pub vec Scalar") == AExprType(Kind.SCALAR, True, True)
    assert aexpr_type_from_str("vP") == AExprType(Kind.POINT, False, True)
    assert str(aexpr_type_from_str("pvS")) == "pub vec Scalar"


def test_illegal_type_name():
    with pytest.raises(ValueError):
        aexpr_type_from_str("Vector")


def test_point_with_value_rejected():
    with pytest.raises(ValueError):
        AExprType(Kind.POINT, True, False, 3)


def test_vardict_from_strs():
    vd = vardict_from_strs([("x", "pS"), ("P", "vP")])
    assert vd == {
        "x": AExprType(Kind.SCALAR, True, False),
        "P": AExprType(Kind.POINT, False, True),
    }


class _Recorder(AExprFold):
    def __init__(self):
        self.calls = []

    def ident(self, id, restype):
        self.calls.append(("ident", id))
        return id

    def const_i128(self, restype):
        self.calls.append(("const", restype.val))
        return str(restype.val)

    def mul_scalar_point(self, sarg, parg, restype):
        self.calls.append(("mul_sp", sarg[0].kind, parg[0].kind))
        return f"{sarg[1]}@{parg[1]}"

    def add_scalars(self, larg, rarg, restype):
        self.calls.append(("add_s",))
        return f"{larg[1]}+{rarg[1]}"

    def sum_scalars(self, arg, restype):
        self.calls.append(("sum_s",))
        return f"sum[{arg[1]}]"


def test_fold_passes_scalar_first(vars):
    rec = _Recorder()
    restype, result = rec.fold(vars, "A*a")
    assert restype == aexpr_type_from_str("P")
    assert result == "a@A"
    assert ("mul_sp", Kind.SCALAR, Kind.POINT) in rec.calls


def test_fold_collapses_constants(vars):
    rec = _Recorder()
    restype, result = rec.fold(vars, "a+(2*3)")
    assert result == "a+None" or result == "a+6"
    assert ("const", 6) in rec.calls
    assert restype == aexpr_type_from_str("S")


def test_fold_sum_hook(vars):
    rec = _Recorder()
    restype, result = rec.fold(vars, "sum(v)")
    assert result == "sum[v]"
    assert restype == AExprType(Kind.SCALAR, False, False)