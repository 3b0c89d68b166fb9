"""Componentwise arithmetic helpers for vectors of scalars and points.

Functions combining two vectors stop at the end of the shorter one.
"""

from __future__ import annotations

import operator
from functools import reduce
from typing import Any, Iterable, Sequence


def add_vecs(left: Sequence[Any], right: Sequence[Any]) -> list[Any]:
    """Add two vectors componentwise."""
    return [l + r for l, r in zip(left, right)]


def add_vec_nv(left: Sequence[Any], right: Any) -> list[Any]:
    """Add a non-vector to each component of a vector."""
    return [l + right for l in left]


def add_nv_vec(left: Any, right: Sequence[Any]) -> list[Any]:
    """Add each component of a vector to a non-vector."""
    return [left + r for r in right]


def sub_vecs(left: Sequence[Any], right: Sequence[Any]) -> list[Any]:
    """Subtract two vectors componentwise."""
    return [l - r for l, r in zip(left, right)]


def sub_vec_nv(left: Sequence[Any], right: Any) -> list[Any]:
    """Subtract a non-vector from each component of a vector."""
    return [l - right for l in left]


def sub_nv_vec(left: Any, right: Sequence[Any]) -> list[Any]:
    """Subtract each component of a vector from a non-vector."""
    return [left - r for r in right]


def mul_vecs(left: Sequence[Any], right: Sequence[Any]) -> list[Any]:
    """Multiply two vectors componentwise."""
    return [l * r for l, r in zip(left, right)]


def mul_vec_nv(left: Sequence[Any], right: Any) -> list[Any]:
    """Multiply each component of a vector by a non-vector."""
    return [l * right for l in left]


def mul_nv_vec(left: Any, right: Sequence[Any]) -> list[Any]:
    """Multiply a non-vector by each component of a vector."""
    return [left * r for r in right]


def sum_vec(summable: Iterable[Any]) -> Any:
    """Add the elements of a vector together.

    The result has whatever type adding the elements produces; an empty
    vector sums to ``0``.
    """
    return reduce(operator.add, summable, 0) if not summable else reduce(operator.add, summable)