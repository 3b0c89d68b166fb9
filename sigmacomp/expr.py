"""Syntax trees and a parser for the expressions used in statements.

The accepted language is a small subset of Rust expression syntax:
integer literals (with optional type suffixes), identifiers and
``::`` paths, unary ``-``, ``!`` and ``&``, the usual binary operators,
assignment, parentheses, function calls, method calls and field access.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass


class ExprParseError(ValueError):
    """Raised when text is not a well-formed expression."""


_PUNCTUATION = (
    "::", "<<", ">>", "<=", ">=", "==", "!=", "&&", "||",
    "+", "-", "*", "/", "%", "<", ">", "=", "!", "&", "(", ")", ",", ".",
)
_SPACE_RE = re.compile(r"\s+")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(r"[0-9][A-Za-z0-9_]*")
_INT_RE = re.compile(
    r"(?P<digits>0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+|[0-9][0-9_]*)"
    r"(?P<suffix>[iu](?:8|16|32|64|128|size))?"
)
_SUFFIX_RE = re.compile(r"(?:[iu](?:8|16|32|64|128|size))?")

_BINARY_PRECEDENCE = {
    "||": 1,
    "&&": 2,
    "==": 3, "!=": 3, "<": 3, ">": 3, "<=": 3, ">=": 3,
    "<<": 4, ">>": 4,
    "+": 5, "-": 5,
    "*": 6, "/": 6, "%": 6,
}
_ASSIGN_PREC = 0
_UNARY_PREC = 7
_POSTFIX_PREC = 8


def tokenize(text: str) -> list[str]:
    """Split ``text`` into identifier, number and punctuation tokens."""
    tokens: list[str] = []
    pos = 0
    while pos < len(text):
        space = _SPACE_RE.match(text, pos)
        if space:
            pos = space.end()
            continue
        word = _IDENT_RE.match(text, pos) or _NUMBER_RE.match(text, pos)
        if word:
            tokens.append(word.group())
            pos = word.end()
            continue
        punct = next((p for p in _PUNCTUATION if text.startswith(p, pos)), None)
        if punct is None:
            raise ExprParseError(f"unexpected character {text[pos]!r} at offset {pos}")
        tokens.append(punct)
        pos += len(punct)
    return tokens


class Expr(ABC):
    """Base class of all expression nodes."""

    @property
    def _precedence(self) -> int:
        return _POSTFIX_PREC

    @abstractmethod
    def render(self) -> str:
        """Return source text that parses back to this expression."""

    def __str__(self) -> str:
        return self.render()


def _wrap(expr: Expr, minimum: int) -> str:
    text = expr.render()
    return f"({text})" if expr._precedence < minimum else text


def _render_args(args: tuple[Expr, ...]) -> str:
    return ", ".join(arg.render() for arg in args)


@dataclass(frozen=True)
class IntLit(Expr):
    """A non-negative integer literal with an optional type suffix."""

    value: int
    suffix: str = ""

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("integer literals are non-negative")
        if not _SUFFIX_RE.fullmatch(self.suffix):
            raise ValueError(f"invalid integer suffix {self.suffix!r}")

    def render(self) -> str:
        return f"{self.value}{self.suffix}"


@dataclass(frozen=True)
class Name(Expr):
    """An identifier, or a ``::``-separated path."""

    path: str

    def render(self) -> str:
        return self.path


@dataclass(frozen=True)
class Unary(Expr):
    """A prefix ``-`` or ``!`` applied to an operand."""

    op: str
    operand: Expr

    def __post_init__(self) -> None:
        if self.op not in ("-", "!"):
            raise ValueError(f"invalid unary operator {self.op!r}")

    @property
    def _precedence(self) -> int:
        return _UNARY_PREC

    def render(self) -> str:
        return self.op + _wrap(self.operand, _UNARY_PREC)


@dataclass(frozen=True)
class Reference(Expr):
    """A borrow ``&operand``."""

    operand: Expr

    @property
    def _precedence(self) -> int:
        return _UNARY_PREC

    def render(self) -> str:
        return "&" + _wrap(self.operand, _UNARY_PREC)


@dataclass(frozen=True)
class Paren(Expr):
    """An explicitly parenthesized expression."""

    inner: Expr

    def render(self) -> str:
        return f"({self.inner.render()})"


@dataclass(frozen=True)
class Binary(Expr):
    """A binary operation ``left op right``."""

    op: str
    left: Expr
    right: Expr

    def __post_init__(self) -> None:
        if self.op not in _BINARY_PRECEDENCE:
            raise ValueError(f"invalid binary operator {self.op!r}")

    @property
    def _precedence(self) -> int:
        return _BINARY_PRECEDENCE[self.op]

    def render(self) -> str:
        prec = self._precedence
        return f"{_wrap(self.left, prec)} {self.op} {_wrap(self.right, prec + 1)}"


@dataclass(frozen=True)
class Call(Expr):
    """A function call ``func(args...)``."""

    func: Expr
    args: tuple[Expr, ...] = ()

    def render(self) -> str:
        return f"{_wrap(self.func, _POSTFIX_PREC)}({_render_args(self.args)})"


@dataclass(frozen=True)
class MethodCall(Expr):
    """A method call ``receiver.method(args...)``."""

    receiver: Expr
    method: str
    args: tuple[Expr, ...] = ()

    def render(self) -> str:
        return (
            f"{_wrap(self.receiver, _POSTFIX_PREC)}.{self.method}"
            f"({_render_args(self.args)})"
        )


@dataclass(frozen=True)
class Field(Expr):
    """A field access ``receiver.name``."""

    receiver: Expr
    name: str

    def render(self) -> str:
        return f"{_wrap(self.receiver, _POSTFIX_PREC)}.{self.name}"


@dataclass(frozen=True)
class Assign(Expr):
    """An assignment ``left = right``."""

    left: Expr
    right: Expr

    @property
    def _precedence(self) -> int:
        return _ASSIGN_PREC

    def render(self) -> str:
        return f"{_wrap(self.left, _ASSIGN_PREC + 1)} = {_wrap(self.right, _ASSIGN_PREC)}"


def _parse_int(token: str) -> IntLit:
    match = _INT_RE.fullmatch(token)
    if not match:
        raise ExprParseError(f"invalid integer literal {token!r}")
    digits = match.group("digits").replace("_", "")
    base = {"0x": 16, "0o": 8, "0b": 2}.get(digits[:2], 10)
    try:
        value = int(digits[2:] if base != 10 else digits, base)
    except ValueError as exc:
        raise ExprParseError(f"invalid integer literal {token!r}") from exc
    return IntLit(value, match.group("suffix") or "")


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    def peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def advance(self) -> str:
        token = self.peek()
        if token is None:
            raise ExprParseError("unexpected end of expression")
        self._pos += 1
        return token

    def expect(self, token: str) -> None:
        found = self.advance()
        if found != token:
            raise ExprParseError(f"expected {token!r}, found {found!r}")

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def assignment(self) -> Expr:
        left = self.binary(1)
        if self.peek() == "=":
            self.advance()
            return Assign(left, self.assignment())
        return left

    def binary(self, min_prec: int) -> Expr:
        left = self.unary()
        while True:
            op = self.peek()
            prec = _BINARY_PRECEDENCE.get(op) if op is not None else None
            if prec is None or prec < min_prec:
                return left
            self.advance()
            left = Binary(op, left, self.binary(prec + 1))

    def unary(self) -> Expr:
        token = self.peek()
        if token in ("-", "!"):
            self.advance()
            return Unary(token, self.unary())
        if token == "&":
            self.advance()
            return Reference(self.unary())
        if token == "&&":
            self.advance()
            return Reference(Reference(self.unary()))
        return self.postfix()

    def call_args(self) -> tuple[Expr, ...]:
        self.expect("(")
        args: list[Expr] = []
        while self.peek() != ")":
            args.append(self.assignment())
            if self.peek() == ",":
                self.advance()
            elif self.peek() != ")":
                raise ExprParseError(f"expected ',' or ')', found {self.peek()!r}")
        self.advance()
        return tuple(args)

    def postfix(self) -> Expr:
        expr = self.primary()
        while True:
            token = self.peek()
            if token == "(":
                expr = Call(expr, self.call_args())
            elif token == ".":
                self.advance()
                name = self.advance()
                if _IDENT_RE.fullmatch(name) and self.peek() == "(":
                    expr = MethodCall(expr, name, self.call_args())
                elif _IDENT_RE.fullmatch(name) or name.isdigit():
                    expr = Field(expr, name)
                else:
                    raise ExprParseError(f"invalid member name {name!r}")
            else:
                return expr

    def primary(self) -> Expr:
        token = self.advance()
        if token[0].isdigit():
            return _parse_int(token)
        if _IDENT_RE.fullmatch(token):
            segments = [token]
            while self.peek() == "::":
                self.advance()
                segment = self.advance()
                if not _IDENT_RE.fullmatch(segment):
                    raise ExprParseError(f"invalid path segment {segment!r}")
                segments.append(segment)
            return Name("::".join(segments))
        if token == "(":
            inner = self.assignment()
            self.expect(")")
            return Paren(inner)
        raise ExprParseError(f"unexpected token {token!r}")


def parse_expr(text: str) -> Expr:
    """Parse ``text`` into an expression tree."""
    tokens = tokenize(text)
    if not tokens:
        raise ExprParseError("empty expression")
    parser = _Parser(tokens)
    expr = parser.assignment()
    if not parser.at_end():
        raise ExprParseError(f"unexpected token {parser.peek()!r}")
    return expr