from __future__ import annotations

"""
Deterministic string hashing.

Identifiers for virtual directories and files must survive process restarts
and match the values other note tools store, so Python's salted hash() is
not an option. This is the classic 31-multiplier hash over UTF-16 code
units, truncated to a signed 32-bit integer.
"""

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def string_hash(value: str) -> int:
    """
    Compute the signed 32-bit hash of a string.

    Args:
        value: Input text.

    Returns:
        int: Value in the range [-2**31, 2**31 - 1]. Empty string hashes to 0.
    """
    h = 0
    data = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & _INT32_MASK

    return h - (1 << 32) if h & _INT32_SIGN else h
