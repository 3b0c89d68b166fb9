"""Runtime helpers for range statements over a prime-order scalar field.

Scalars are represented as Python integers modulo an odd prime
``modulus``.  Bit vectors are lists of booleans with the low bit first.
"""

from __future__ import annotations

from typing import Optional, Sequence

_MAX_BITS = 127


class VerificationFailure(ValueError):
    """Raised when a value cannot be used to build a range representation."""


def _check_modulus(modulus: int) -> None:
    if modulus < 3 or modulus % 2 == 0:
        raise ValueError("modulus must be an odd prime")


def bit_decomp_vartime(s: int, modulus: int) -> Optional[tuple[int, int]]:
    """Return ``(value, nbits)`` for a scalar that fits in 127 bits.

    ``value`` is the integer value of ``s`` and ``nbits`` its bit length.
    Returns ``None`` if ``s`` does not fit in a non-negative i128.  This
    assumes ``s`` is public and does not try to run in constant time.
    """
    _check_modulus(modulus)
    s %= modulus
    two_inv = (modulus + 1) // 2
    val = 0
    bitnum = 0
    while bitnum < _MAX_BITS and s:
        if s & 1:
            val |= 1 << bitnum
            s -= 1
        bitnum += 1
        s = s * two_inv % modulus
    return (val, bitnum) if s == 0 else None


def bit_decomp(s: int, nbits: int, modulus: int) -> list[bool]:
    """Return the low ``nbits`` bits of ``s`` (at most 127), low bit first."""
    _check_modulus(modulus)
    s %= modulus
    two_inv = (modulus + 1) // 2
    bits: list[bool] = []
    for _ in range(min(nbits, _MAX_BITS)):
        lowbit = bool(s & 1)
        s = (s - int(lowbit)) * two_inv % modulus
        bits.append(lowbit)
    return bits


def bitrep_scalars_vartime(upper: int, modulus: int) -> list[int]:
    """Return scalars whose distinct subset sums are exactly ``0 <= x < upper``.

    The low entries are the powers 1, 2, 4, ...; the last one is
    ``upper - 2**(nbits-1)``, where ``nbits`` is the largest value with
    ``2**(nbits-1) < upper``.  For ``upper == 100`` this gives
    1, 2, 4, 8, 16, 32, 36.  ``upper`` must be public and at least 2.

    Raises :class:`VerificationFailure` if ``upper`` is less than 2 or
    does not fit in a non-negative i128.
    """
    decomp = bit_decomp_vartime(upper, modulus)
    if decomp is None:
        raise VerificationFailure("upper bound does not fit in i128")
    upper_val, nbits = decomp
    if nbits < 2:
        raise VerificationFailure("upper bound must be at least 2")
    if upper_val == 1 << (nbits - 1):
        nbits -= 1
    top = 1 << (nbits - 1)
    return [1 << i for i in range(nbits - 1)] + [(upper_val - top) % modulus]


def compute_bitrep(x: int, bitrep_scalars: Sequence[int], modulus: int) -> list[bool]:
    """Choose elements of ``bitrep_scalars`` whose sum is ``x``.

    Returns one boolean per element.  If ``x`` is not below the ``upper``
    that produced ``bitrep_scalars``, the chosen elements cannot sum to
    ``x``.
    """
    nbits = len(bitrep_scalars)
    if not 1 <= nbits <= _MAX_BITS:
        raise ValueError("bitrep_scalars must have between 1 and 127 elements")
    x %= modulus
    high_bit = bit_decomp(x, nbits, modulus)[-1]
    if high_bit:
        x = (x - bitrep_scalars[-1]) % modulus
    return bit_decomp(x, nbits - 1, modulus) + [high_bit]