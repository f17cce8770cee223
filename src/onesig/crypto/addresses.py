"""Canonical signer ordering.

Addresses are ordered by their numeric value, so 20-byte EVM addresses
and 32-byte addresses compare consistently and checksum casing never
affects the result.
"""

from __future__ import annotations


def sort_key(address: str) -> int:
    """Numeric value of a hex address, case-insensitive.

    Raises ValueError if the text is not a hex integer.
    """
    return int(address, 16)


def compare_addresses(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to, or after ``b``."""
    a_numeric = sort_key(a)
    b_numeric = sort_key(b)
    if a_numeric == b_numeric:
        return 0
    if a_numeric < b_numeric:
        return -1
    return 1
