import pytest

from sigmacomp.expr import tokenize
from sigmacomp.tokens import (
    AExprTokenFold,
    const_i128_tokens,
    expr_type_tokens,
    expr_type_tokens_id_closure,
    tokens_add_maybe_vec,
    tokens_mul_maybe_vec,
    tokens_paren_if_needed,
    tokens_sub_maybe_vec,
)
from sigmacomp.types import ExprTypeError, aexpr_type_from_str, vardict_from_strs


@pytest.fixture
def vars():
    return vardict_from_strs([("a", "S"), ("A", "pP"), ("v", "vS")])


def same_tokens(actual, expected):
    return tokenize(actual) == tokenize(expected)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("0", "Scalar::from_u128(0u128)"),
        ("5", "Scalar::from_u128(5u128)"),
        ("-77", "Scalar::from_u128(77u128).neg()"),
        ("1<<20", "Scalar::from_u128(1048576u128)"),
        ("(3-2)<<(4*5)", "Scalar::from_u128(1048576u128)"),
        ("127<<120", "Scalar::from_u128(168811955464684315858783496655603761152u128)"),
        (
            "-(-170141183460469231731687303715884105727)",
            "Scalar::from_u128(170141183460469231731687303715884105727u128)",
        ),
        (
            "-(-170141183460469231731687303715884105727-1)",
            "-(Scalar::from_u128(170141183460469231731687303715884105728u128).neg())",
        ),
        (
            "(a-(2-3))*(A+(3*4)*A)",
            "(a-(Scalar::from_u128(1u128).neg()))*(A+(A*(Scalar::from_u128(12u128))))",
        ),
        (
            "(a-(2-3))*(A+A*(3*4))",
            "(a-(Scalar::from_u128(1u128).neg()))*(A+(A*(Scalar::from_u128(12u128))))",
        ),
    ],
)
def test_expr_type_tokens_cases(vars, source, expected):
    _, tokens = expr_type_tokens(vars, source)
    assert same_tokens(tokens, expected)


def test_expr_type_tokens_returns_type(vars):
    aetype, tokens = expr_type_tokens(vars, "a*A")
    assert aetype == aexpr_type_from_str("P")
    assert same_tokens(tokens, "a * A")


def test_private_scalar_moved_left(vars):
    _, tokens = expr_type_tokens(vars, "2*a")
    assert same_tokens(tokens, "a * Scalar::from_u128(2u128)")


def test_public_scalar_moved_right_of_point(vars):
    _, tokens = expr_type_tokens(vars, "3*A")
    assert same_tokens(tokens, "A * Scalar::from_u128(3u128)")


def test_vector_expression(vars):
    aetype, tokens = expr_type_tokens(vars, "(v-1)*(A+A)")
    assert aetype == aexpr_type_from_str("vP")
    assert same_tokens(
        tokens,
        "mul_vec_nv(&(sub_vec_nv(&v, &Scalar::from_u128(1u128))), &(A + A))",
    )


def test_sum_of_vector(vars):
    aetype, tokens = expr_type_tokens(vars, "sum(v)")
    assert aetype == aexpr_type_from_str("S")
    assert same_tokens(tokens, "sigmacomp::vecutils::sum_vec(&(v))")


def test_unknown_variable_raises(vars):
    with pytest.raises(ExprTypeError):
        expr_type_tokens(vars, "B")


def test_multiplying_private_raises(vars):
    with pytest.raises(ExprTypeError):
        expr_type_tokens(vars, "a*a")


def test_id_closure_is_used(vars):
    seen = []

    def closure(name, restype):
        seen.append((name, restype))
        return f"self.{name}"

    _, tokens = expr_type_tokens_id_closure(vars, "a*A", closure)
    assert same_tokens(tokens, "self.a * self.A")
    assert seen == [
        ("a", aexpr_type_from_str("S")),
        ("A", aexpr_type_from_str("pP")),
    ]


def test_const_i128_tokens():
    assert const_i128_tokens(7) == "Scalar::from_u128(7u128)"
    assert const_i128_tokens(-7) == "Scalar::from_u128(7u128).neg()"
    assert const_i128_tokens(0) == "Scalar::from_u128(0u128)"


@pytest.mark.parametrize(
    "tok, expected",
    [
        ("a + b", "(a + b)"),
        ("-a", "(-a)"),
        ("c", "c"),
        ("(a + b)", "(a + b)"),
        ("f(x)", "f(x)"),
    ],
)
def test_tokens_paren_if_needed(tok, expected):
    assert tokens_paren_if_needed(tok) == expected


@pytest.mark.parametrize(
    "func, lvec, rvec, expected",
    [
        (tokens_add_maybe_vec, True, True, "add_vecs(&x, &(y + z))"),
        (tokens_add_maybe_vec, False, True, "add_nv_vec(&x, &(y + z))"),
        (tokens_add_maybe_vec, True, False, "add_vec_nv(&x, &(y + z))"),
        (tokens_add_maybe_vec, False, False, "x + (y + z)"),
        (tokens_sub_maybe_vec, True, True, "sub_vecs(&x, &(y + z))"),
        (tokens_sub_maybe_vec, False, True, "sub_nv_vec(&x, &(y + z))"),
        (tokens_sub_maybe_vec, True, False, "sub_vec_nv(&x, &(y + z))"),
        (tokens_sub_maybe_vec, False, False, "x - (y + z)"),
        (tokens_mul_maybe_vec, True, True, "mul_vecs(&x, &(y + z))"),
        (tokens_mul_maybe_vec, False, True, "mul_nv_vec(&x, &(y + z))"),
        (tokens_mul_maybe_vec, True, False, "mul_vec_nv(&x, &(y + z))"),
        (tokens_mul_maybe_vec, False, False, "x * (y + z)"),
    ],
)
def test_maybe_vec_combinators(func, lvec, rvec, expected):
    assert same_tokens(func("x", lvec, "y + z", rvec), expected)


def test_const_i128_without_value_raises():
    with pytest.raises(ExprTypeError):
        AExprTokenFold().const_i128(aexpr_type_from_str("pS"))


def test_add_scalars_rejects_points():
    point = aexpr_type_from_str("pP")
    with pytest.raises(TypeError):
        AExprTokenFold().add_scalars((point, "A"), (point, "B"), point)


def test_mul_scalar_point_rejects_swapped_arguments():
    scalar = aexpr_type_from_str("S")
    point = aexpr_type_from_str("pP")
    with pytest.raises(TypeError):
        AExprTokenFold().mul_scalar_point((point, "A"), (scalar, "a"), point)