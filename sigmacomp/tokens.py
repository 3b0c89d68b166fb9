"""Generate evaluation code for arithmetic expressions.

The fold in this module walks an arithmetic expression, as
:class:`~sigmacomp.types.AExprFold` does, and builds source text that
evaluates it.  Constants become ``Scalar::from_u128(...)`` calls.
Operations that involve vectors become calls to the componentwise
helpers in :mod:`sigmacomp.vecutils`.
"""

from __future__ import annotations

from typing import Callable, Mapping, Optional, Tuple, Union

from .expr import Binary, Expr, Unary, parse_expr
from .types import AExprFold, AExprType, ExprTypeError, Kind

TokenArg = Tuple[AExprType, str]
IdentClosure = Callable[[str, AExprType], str]

_SUM_VEC_PATH = "sigmacomp::vecutils::sum_vec"


def const_i128_tokens(val: int) -> str:
    """Return code that evaluates to a Scalar with the signed value ``val``."""
    uval = abs(val)
    if val >= 0:
        return f"Scalar::from_u128({uval}u128)"
    return f"Scalar::from_u128({uval}u128).neg()"


def tokens_paren_if_needed(tok: str) -> str:
    """Wrap ``tok`` in parentheses if it is a unary or binary expression.

    For example ``a + b`` becomes ``(a + b)``, while ``c`` and ``(a + b)``
    are returned unchanged.
    """
    if isinstance(parse_expr(tok), (Unary, Binary)):
        return f"({tok})"
    return tok


def _combine(
    op: str,
    helper: str,
    left: str,
    left_is_vec: bool,
    right: str,
    right_is_vec: bool,
) -> str:
    lp = tokens_paren_if_needed(left)
    rp = tokens_paren_if_needed(right)
    if left_is_vec and right_is_vec:
        return f"{helper}_vecs(&{lp}, &{rp})"
    if right_is_vec:
        return f"{helper}_nv_vec(&{lp}, &{rp})"
    if left_is_vec:
        return f"{helper}_vec_nv(&{lp}, &{rp})"
    return f"{lp} {op} {rp}"


def tokens_add_maybe_vec(
    left: str, left_is_vec: bool, right: str, right_is_vec: bool
) -> str:
    """Return code for the sum of two operands, either of which may be a vector."""
    return _combine("+", "add", left, left_is_vec, right, right_is_vec)


def tokens_sub_maybe_vec(
    left: str, left_is_vec: bool, right: str, right_is_vec: bool
) -> str:
    """Return code for the difference of two operands, either of which may be a vector."""
    return _combine("-", "sub", left, left_is_vec, right, right_is_vec)


def tokens_mul_maybe_vec(
    left: str, left_is_vec: bool, right: str, right_is_vec: bool
) -> str:
    """Return code for the product of two operands, either of which may be a vector."""
    return _combine("*", "mul", left, left_is_vec, right, right_is_vec)


def _require(arg: TokenArg, kind: Kind, hook: str) -> AExprType:
    aetype = arg[0]
    if aetype.kind is not kind:
        raise TypeError(f"non-{kind.value} passed to {hook}")
    return aetype


class AExprTokenFold(AExprFold):
    """Fold an arithmetic expression into code that evaluates it.

    ``ident_closure`` produces the code for each variable; by default a
    variable is written as its own name.
    """

    def __init__(self, ident_closure: Optional[IdentClosure] = None) -> None:
        self._ident_closure = ident_closure

    def ident(self, id: str, restype: AExprType) -> str:
        if self._ident_closure is None:
            return id
        return self._ident_closure(id, restype)

    def const_i128(self, restype: AExprType) -> str:
        if restype.kind is not Kind.SCALAR or restype.val is None:
            raise ExprTypeError("const_i128 called on a type without a constant value")
        return const_i128_tokens(restype.val)

    def neg(self, arg: TokenArg, restype: AExprType) -> str:
        return f"-{arg[1]}"

    def paren(self, arg: TokenArg, restype: AExprType) -> str:
        return f"({arg[1]})"

    def add_scalars(self, larg: TokenArg, rarg: TokenArg, restype: AExprType) -> str:
        lt = _require(larg, Kind.SCALAR, "add_scalars")
        rt = _require(rarg, Kind.SCALAR, "add_scalars")
        return tokens_add_maybe_vec(larg[1], lt.is_vec, rarg[1], rt.is_vec)

    def add_points(self, larg: TokenArg, rarg: TokenArg, restype: AExprType) -> str:
        lt = _require(larg, Kind.POINT, "add_points")
        rt = _require(rarg, Kind.POINT, "add_points")
        return tokens_add_maybe_vec(larg[1], lt.is_vec, rarg[1], rt.is_vec)

    def sum_scalars(self, arg: TokenArg, restype: AExprType) -> str:
        return f"{_SUM_VEC_PATH}(&({arg[1]}))"

    def sum_points(self, arg: TokenArg, restype: AExprType) -> str:
        return f"{_SUM_VEC_PATH}(&({arg[1]}))"

    def sub_scalars(self, larg: TokenArg, rarg: TokenArg, restype: AExprType) -> str:
        lt = _require(larg, Kind.SCALAR, "sub_scalars")
        rt = _require(rarg, Kind.SCALAR, "sub_scalars")
        return tokens_sub_maybe_vec(larg[1], lt.is_vec, rarg[1], rt.is_vec)

    def sub_points(self, larg: TokenArg, rarg: TokenArg, restype: AExprType) -> str:
        lt = _require(larg, Kind.POINT, "sub_points")
        rt = _require(rarg, Kind.POINT, "sub_points")
        return tokens_sub_maybe_vec(larg[1], lt.is_vec, rarg[1], rt.is_vec)

    def mul_scalars(self, larg: TokenArg, rarg: TokenArg, restype: AExprType) -> str:
        lt = _require(larg, Kind.SCALAR, "mul_scalars")
        rt = _require(rarg, Kind.SCALAR, "mul_scalars")
        # With one public and one private operand, the private one goes left.
        if lt.is_pub and not rt.is_pub:
            return tokens_mul_maybe_vec(rarg[1], rt.is_vec, larg[1], lt.is_vec)
        return tokens_mul_maybe_vec(larg[1], lt.is_vec, rarg[1], rt.is_vec)

    def mul_scalar_point(
        self, sarg: TokenArg, parg: TokenArg, restype: AExprType
    ) -> str:
        st = _require(sarg, Kind.SCALAR, "mul_scalar_point")
        pt = _require(parg, Kind.POINT, "mul_scalar_point")
        # A public Scalar goes on the right.
        if st.is_pub:
            return tokens_mul_maybe_vec(parg[1], pt.is_vec, sarg[1], st.is_vec)
        return tokens_mul_maybe_vec(sarg[1], st.is_vec, parg[1], pt.is_vec)


def expr_type_tokens(
    vars: Mapping[str, AExprType], expr: Union[Expr, str]
) -> Tuple[AExprType, str]:
    """Return the type of an arithmetic expression and code that evaluates it."""
    return AExprTokenFold().fold(vars, expr)


def expr_type_tokens_id_closure(
    vars: Mapping[str, AExprType],
    expr: Union[Expr, str],
    ident_closure: IdentClosure,
) -> Tuple[AExprType, str]:
    """Like :func:`expr_type_tokens`, with custom code for each variable."""
    return AExprTokenFold(ident_closure).fold(vars, expr)