"""Typed arithmetic expressions, tagged declarations and runtime helpers for sigma-protocol compilation."""

__version__ = "0.2.0"

__all__ = ["dumper", "vecutils", "expr", "types", "tokens", "syntax", "rangeutils"]