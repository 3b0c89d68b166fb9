"""Types of arithmetic expressions over Scalars and Points.

Every variable is a private Scalar, a public Scalar or a public Point,
and each may be a vector or not.  Arithmetic expressions built from them
may additionally be private Points.  A public, non-vector Scalar
expression whose value is a known constant fitting in a signed 128-bit
integer carries that value in :attr:`AExprType.val`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .expr import (
    Binary,
    Call,
    Expr,
    IntLit,
    Name,
    Paren,
    Unary,
    parse_expr,
)

I128_MIN = -(1 << 127)
I128_MAX = (1 << 127) - 1
_U32_MAX = (1 << 32) - 1


class ExprTypeError(ValueError):
    """Raised when an expression is not a valid arithmetic expression."""


class Kind(enum.Enum):
    """Whether an expression is a Scalar or a Point."""

    SCALAR = "Scalar"
    POINT = "Point"


@dataclass(frozen=True)
class AExprType:
    """The type of an arithmetic expression.

    ``val`` holds the constant value of a public non-vector Scalar
    expression when it is known; it is always ``None`` for Points.
    """

    kind: Kind
    is_pub: bool
    is_vec: bool
    val: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is Kind.POINT and self.val is not None:
            raise ValueError("a Point type cannot carry a constant value")
        if self.val is not None and not I128_MIN <= self.val <= I128_MAX:
            raise ValueError("constant value does not fit in i128")

    def __str__(self) -> str:
        words = []
        if self.is_pub:
            words.append("pub")
        if self.is_vec:
            words.append("vec")
        words.append(self.kind.value)
        return " ".join(words)


def _scalar(is_pub: bool, is_vec: bool, val: Optional[int] = None) -> AExprType:
    return AExprType(Kind.SCALAR, is_pub, is_vec, val)


def _point(is_pub: bool, is_vec: bool) -> AExprType:
    return AExprType(Kind.POINT, is_pub, is_vec)


_TYPE_NAMES = {
    ("Scalar", "S"): _scalar(False, False),
    ("pub Scalar", "pS"): _scalar(True, False),
    ("vec Scalar", "vS"): _scalar(False, True),
    ("pub vec Scalar", "pvS"): _scalar(True, True),
    ("Point", "P"): _point(False, False),
    ("pub Point", "pP"): _point(True, False),
    ("vec Point", "vP"): _point(False, True),
    ("pub vec Point", "pvP"): _point(True, True),
}
_TYPE_LOOKUP = {name: t for names, t in _TYPE_NAMES.items() for name in names}


def aexpr_type_from_str(s: str) -> AExprType:
    """Build an :class:`AExprType` from a name such as ``"pub vec Scalar"``.

    Accepted names (short forms in parentheses): ``Scalar`` (``S``),
    ``pub Scalar`` (``pS``), ``vec Scalar`` (``vS``), ``pub vec Scalar``
    (``pvS``), and the same four for ``Point`` (``P``, ``pP``, ``vP``,
    ``pvP``).
    """
    try:
        return _TYPE_LOOKUP[s]
    except KeyError:
        raise ValueError(f"illegal type name {s!r}") from None


def vardict_from_strs(strs: Sequence[Tuple[str, str]]) -> dict[str, AExprType]:
    """Build a variable dictionary from ``(name, type name)`` pairs."""
    return {name: aexpr_type_from_str(type_name) for name, type_name in strs}


def _checked(value: int) -> Optional[int]:
    return value if I128_MIN <= value <= I128_MAX else None


def _checked_shl(value: int, shift: int) -> Optional[int]:
    # Shifts of 128 or more are rejected; smaller shifts wrap like i128.
    if shift >= 128:
        return None
    bits = (value << shift) & ((1 << 128) - 1)
    return bits - (1 << 128) if bits > I128_MAX else bits


def _as_expr(expr: Union[Expr, str]) -> Expr:
    return parse_expr(expr) if isinstance(expr, str) else expr


Arg = Tuple[AExprType, Any]


class AExprFold:
    """A fold over arithmetic expressions.

    :meth:`fold` walks an expression, determines its type, and calls one
    hook per node with the ``(type, result)`` pairs of the node's
    components and the type of the node itself.  The hooks here compute
    nothing and return ``None``; subclasses override them to build a
    result.

    An arithmetic expression consists of variables in the dictionary,
    integer constants, ``*``, ``+``, ``-`` (binary or unary), ``<<``
    between constant expressions, ``sum`` of a single vector argument,
    and parentheses.
    """

    def ident(self, id: str, restype: AExprType) -> Any:
        """Called for a variable found in the dictionary."""
        return None

    def const_i128(self, restype: AExprType) -> Any:
        """Called when a subexpression evaluates to a constant."""
        return None

    def neg(self, arg: Arg, restype: AExprType) -> Any:
        """Called for unary negation."""
        return None

    def paren(self, arg: Arg, restype: AExprType) -> Any:
        """Called for a parenthesized expression."""
        return None

    def add_scalars(self, larg: Arg, rarg: Arg, restype: AExprType) -> Any:
        """Called when adding two Scalars."""
        return None

    def add_points(self, larg: Arg, rarg: Arg, restype: AExprType) -> Any:
        """Called when adding two Points."""
        return None

    def sum_scalars(self, arg: Arg, restype: AExprType) -> Any:
        """Called when summing a vector of Scalars."""
        return None

    def sum_points(self, arg: Arg, restype: AExprType) -> Any:
        """Called when summing a vector of Points."""
        return None

    def sub_scalars(self, larg: Arg, rarg: Arg, restype: AExprType) -> Any:
        """Called when subtracting two Scalars."""
        return None

    def sub_points(self, larg: Arg, rarg: Arg, restype: AExprType) -> Any:
        """Called when subtracting two Points."""
        return None

    def mul_scalars(self, larg: Arg, rarg: Arg, restype: AExprType) -> Any:
        """Called when multiplying two Scalars."""
        return None

    def mul_scalar_point(self, sarg: Arg, parg: Arg, restype: AExprType) -> Any:
        """Called when multiplying a Scalar (always first) and a Point."""
        return None

    def fold(self, vars: Mapping[str, AExprType], expr: Union[Expr, str]) -> Arg:
        """Recursively process ``expr``, returning its type and fold result."""
        expr = _as_expr(expr)
        if isinstance(expr, IntLit):
            return self._fold_int(expr)
        if isinstance(expr, Unary) and expr.op == "-":
            return self._fold_neg(vars, expr)
        if isinstance(expr, Paren):
            aetype, inner = self.fold(vars, expr.inner)
            return aetype, self.paren((aetype, inner), aetype)
        if isinstance(expr, Name):
            vt = vars.get(expr.path) if "::" not in expr.path else None
            if vt is None:
                raise ExprTypeError(f"not a known variable: {expr.path}")
            return vt, self.ident(expr.path, vt)
        if isinstance(expr, Binary):
            return self._fold_binary(vars, expr)
        if isinstance(expr, Call):
            return self._fold_call(vars, expr)
        raise ExprTypeError(f"not a valid arithmetic expression: {expr.render()}")

    def _constant(self, value: int) -> Arg:
        restype = _scalar(True, False, value)
        return restype, self.const_i128(restype)

    def _fold_int(self, lit: IntLit) -> Arg:
        if lit.value > I128_MAX:
            raise ExprTypeError("int literal does not fit in i128")
        return self._constant(lit.value)

    def _fold_neg(self, vars: Mapping[str, AExprType], expr: Unary) -> Arg:
        argtype, arg = self.fold(vars, expr.operand)
        if argtype.kind is Kind.SCALAR and argtype.is_pub and not argtype.is_vec \
                and argtype.val is not None:
            negv = _checked(-argtype.val)
            if negv is not None:
                return self._constant(negv)
            restype = _scalar(True, False)
            return restype, self.neg((argtype, arg), restype)
        return argtype, self.neg((argtype, arg), argtype)

    def _fold_binary(self, vars: Mapping[str, AExprType], expr: Binary) -> Arg:
        if expr.op in ("+", "-"):
            return self._fold_add_sub(vars, expr)
        if expr.op == "*":
            return self._fold_mul(vars, expr)
        if expr.op == "<<":
            return self._fold_shl(vars, expr)
        raise ExprTypeError(f"invalid operation for arithmetic expression: {expr.op}")

    def _fold_add_sub(self, vars: Mapping[str, AExprType], expr: Binary) -> Arg:
        lt, le = self.fold(vars, expr.left)
        rt, re_ = self.fold(vars, expr.right)
        is_add = expr.op == "+"
        if lt.kind is Kind.SCALAR and rt.kind is Kind.SCALAR:
            val = None
            if lt.val is not None and rt.val is not None:
                val = _checked(lt.val + rt.val if is_add else lt.val - rt.val)
            restype = _scalar(lt.is_pub and rt.is_pub, lt.is_vec or rt.is_vec, val)
            if val is not None:
                return restype, self.const_i128(restype)
            hook = self.add_scalars if is_add else self.sub_scalars
            return restype, hook((lt, le), (rt, re_), restype)
        if lt.kind is Kind.POINT and rt.kind is Kind.POINT:
            restype = _point(lt.is_pub and rt.is_pub, lt.is_vec or rt.is_vec)
            hook = self.add_points if is_add else self.sub_points
            return restype, hook((lt, le), (rt, re_), restype)
        raise ExprTypeError("cannot add/subtract a Scalar and a Point")

    def _fold_mul(self, vars: Mapping[str, AExprType], expr: Binary) -> Arg:
        lt, le = self.fold(vars, expr.left)
        rt, re_ = self.fold(vars, expr.right)
        if lt.kind is Kind.POINT and rt.kind is Kind.POINT:
            raise ExprTypeError("cannot multiply a Point and a Point")
        if not lt.is_pub and not rt.is_pub:
            raise ExprTypeError("cannot multiply two private expressions")
        is_pub = lt.is_pub and rt.is_pub
        is_vec = lt.is_vec or rt.is_vec
        if lt.kind is Kind.SCALAR and rt.kind is Kind.SCALAR:
            val = None
            if lt.val is not None and rt.val is not None:
                val = _checked(lt.val * rt.val)
            restype = _scalar(is_pub, is_vec, val)
            if val is not None:
                return restype, self.const_i128(restype)
            return restype, self.mul_scalars((lt, le), (rt, re_), restype)
        if lt.kind is Kind.SCALAR:
            sarg, parg = (lt, le), (rt, re_)
        else:
            sarg, parg = (rt, re_), (lt, le)
        restype = _point(is_pub, is_vec)
        return restype, self.mul_scalar_point(sarg, parg, restype)

    def _fold_shl(self, vars: Mapping[str, AExprType], expr: Binary) -> Arg:
        lt, _ = self.fold(vars, expr.left)
        rt, _ = self.fold(vars, expr.right)
        if all(
            t.kind is Kind.SCALAR and t.is_pub and not t.is_vec and t.val is not None
            for t in (lt, rt)
        ) and 0 <= rt.val <= _U32_MAX:
            value = _checked_shl(lt.val, rt.val)
            if value is not None:
                return self._constant(value)
        raise ExprTypeError("can shift left only on constant i128 expressions")

    def _fold_call(self, vars: Mapping[str, AExprType], expr: Call) -> Arg:
        if not (isinstance(expr.func, Name) and expr.func.path == "sum"):
            raise ExprTypeError(f"unknown function: {expr.func.render()}")
        if len(expr.args) != 1:
            raise ExprTypeError("sum must have exactly one argument")
        at, ae = self.fold(vars, expr.args[0])
        if not at.is_vec:
            raise ExprTypeError("argument to sum must be a vector")
        if at.kind is Kind.SCALAR:
            restype = _scalar(at.is_pub, False)
            return restype, self.sum_scalars((at, ae), restype)
        restype = _point(at.is_pub, False)
        return restype, self.sum_points((at, ae), restype)


def expr_type(vars: Mapping[str, AExprType], expr: Union[Expr, str]) -> AExprType:
    """Return the :class:`AExprType` of an arithmetic expression."""
    return AExprFold().fold(vars, expr)[0]