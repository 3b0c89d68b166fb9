"""Tagged variable declarations and variable dictionaries.

A Scalar declaration is an identifier preceded by zero or more of the
tags ``pub``, ``rand`` and ``vec``; ``pub`` and ``rand`` exclude each
other.  A Point declaration is an identifier preceded by zero or more of
the tags ``cind``, ``const`` and ``vec``.  Points are always public.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from .expr import ExprParseError, tokenize
from .types import AExprType, Kind

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TagError(ValueError):
    """Raised when a tagged declaration is malformed."""


@dataclass(frozen=True)
class TaggedScalar:
    """A Scalar variable together with its ``pub``, ``rand`` and ``vec`` tags."""

    id: str
    is_pub: bool = False
    is_rand: bool = False
    is_vec: bool = False

    def __post_init__(self) -> None:
        if self.is_pub and self.is_rand:
            raise TagError("a Scalar cannot be both pub and rand")

    def aexpr_type(self) -> AExprType:
        """Return the arithmetic-expression type of this variable."""
        return AExprType(Kind.SCALAR, self.is_pub, self.is_vec)

    def __str__(self) -> str:
        tags = [
            tag
            for tag, present in (
                ("pub", self.is_pub),
                ("rand", self.is_rand),
                ("vec", self.is_vec),
            )
            if present
        ]
        return " ".join([*tags, self.id])


@dataclass(frozen=True)
class TaggedPoint:
    """A Point variable together with its ``cind``, ``const`` and ``vec`` tags."""

    id: str
    is_cind: bool = False
    is_const: bool = False
    is_vec: bool = False

    def aexpr_type(self) -> AExprType:
        """Return the arithmetic-expression type of this variable (always public)."""
        return AExprType(Kind.POINT, True, self.is_vec)

    def __str__(self) -> str:
        tags = [
            tag
            for tag, present in (
                ("vec", self.is_vec),
                ("const", self.is_const),
                ("cind", self.is_cind),
            )
            if present
        ]
        return " ".join([*tags, self.id])


TaggedIdent = Union[TaggedScalar, TaggedPoint]


def _words(text: str) -> list[str]:
    try:
        tokens = tokenize(text)
    except ExprParseError as exc:
        raise TagError(str(exc)) from exc
    for token in tokens:
        if not _IDENT_RE.fullmatch(token):
            raise TagError(f"expected identifier, found {token!r}")
    return tokens


def _split_declaration(text: str, allowed: dict[str, str], forbidden: set[str]):
    """Return the set tag flags and the declared name, checking the order."""
    flags: dict[str, bool] = {}
    words = _words(text)
    for pos, word in enumerate(words):
        if word in allowed and allowed[word] not in flags.get("_excl", ()):
            flags[allowed[word]] = True
            continue
        if word in forbidden:
            raise TagError(f"tag {word!r} not allowed in this position")
        if pos != len(words) - 1:
            raise TagError(f"unexpected token {words[pos + 1]!r} after {word!r}")
        return flags, word
    raise TagError(f"missing identifier in declaration {text!r}")


def parse_tagged_scalar(text: str) -> TaggedScalar:
    """Parse a Scalar declaration such as ``"pub vec x"``."""
    is_pub = is_rand = is_vec = False
    words = _words(text)
    for pos, word in enumerate(words):
        if word == "pub" and not is_rand:
            is_pub = True
        elif word == "rand" and not is_pub:
            is_rand = True
        elif word in ("pub", "rand", "cind", "const"):
            raise TagError(f"tag {word!r} not allowed in this position")
        elif word == "vec":
            is_vec = True
        else:
            if pos != len(words) - 1:
                raise TagError(f"unexpected token {words[pos + 1]!r} after {word!r}")
            return TaggedScalar(word, is_pub, is_rand, is_vec)
    raise TagError(f"missing identifier in declaration {text!r}")


def parse_tagged_point(text: str) -> TaggedPoint:
    """Parse a Point declaration such as ``"cind const A"``."""
    is_cind = is_const = is_vec = False
    words = _words(text)
    for pos, word in enumerate(words):
        if word == "cind":
            is_cind = True
        elif word == "const":
            is_const = True
        elif word in ("pub", "rand"):
            raise TagError(f"tag {word!r} not allowed in this position")
        elif word == "vec":
            is_vec = True
        else:
            if pos != len(words) - 1:
                raise TagError(f"unexpected token {words[pos + 1]!r} after {word!r}")
            return TaggedPoint(word, is_cind, is_const, is_vec)
    raise TagError(f"missing identifier in declaration {text!r}")


def taggedvardict_to_vardict(vd: Mapping[str, TaggedIdent]) -> dict[str, AExprType]:
    """Map each variable name to the arithmetic-expression type of its declaration."""
    return {name: tagged.aexpr_type() for name, tagged in vd.items()}


def collect_cind_points(vars: Mapping[str, TaggedIdent]) -> list[str]:
    """Return the sorted names of the non-vector Points tagged ``cind``."""
    return sorted(
        tagged.id
        for tagged in vars.values()
        if isinstance(tagged, TaggedPoint) and tagged.is_cind and not tagged.is_vec
    )


def taggedvardict_from_strs(
    scalar_strs: Iterable[str], point_strs: Iterable[str]
) -> dict[str, TaggedIdent]:
    """Build a tagged variable dictionary from Scalar and Point declarations."""
    vars: dict[str, TaggedIdent] = {}
    for text in scalar_strs:
        scalar = parse_tagged_scalar(text)
        vars[scalar.id] = scalar
    for text in point_strs:
        point = parse_tagged_point(text)
        vars[point.id] = point
    return vars