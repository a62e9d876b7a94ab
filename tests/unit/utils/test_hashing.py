from __future__ import annotations

"""
Unit tests for the deterministic string hash.

Verifies:
1. Known reference values (31-multiplier hash over UTF-16 code units).
2. Signed 32-bit wraparound.
3. Case sensitivity and determinism.
"""

import pytest

from notefolders.utils.hashing import string_hash


@pytest.mark.parametrize("text, expected", [
    ("", 0),
    ("a", 97),
    ("ab", 3105),
    ("hello", 99162322),
])
def test_reference_values(text: str, expected: int) -> None:
    """TC-01: Match the well-known values of the classic string hash."""
    assert string_hash(text) == expected


def test_wraps_to_signed_32_bit() -> None:
    """TC-02: Overflow wraps around exactly like a signed 32-bit integer."""
    assert string_hash("polygenelubricants") == -2147483648


def test_astral_characters_use_surrogate_pairs() -> None:
    """TC-03: Characters outside the BMP hash as two UTF-16 code units."""
    assert string_hash("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_range_and_case_sensitivity() -> None:
    """TC-04: Results stay in int32 range and differ by case."""
    long_text = "/home/user/notes/" + "x" * 500 + ".md"
    h = string_hash(long_text)
    assert -2**31 <= h < 2**31
    assert string_hash(long_text) == h
    assert string_hash("Notes") != string_hash("notes")
