"""Strict text -> number parsing for schema values."""

from __future__ import annotations

import re
from typing import Optional

import numpy as np

INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1

_INT_RE = re.compile(r'[+-]?[0-9]+')
_FLOAT_RE = re.compile(
    r'[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)[fFdD]?'
)


def parse_int(text: str) -> Optional[int]:
    """Parse a signed 32-bit decimal integer, or None.

    No whitespace, no decimal point, no out-of-range values.
    """
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def parse_float(text: str) -> Optional[np.float32]:
    """Parse a single-precision float, or None.

    Accepts surrounding whitespace, exponents, ``NaN``/``Infinity`` and
    a trailing f/F/d/D type suffix.
    """
    stripped = text.strip()
    if not _FLOAT_RE.fullmatch(stripped):
        return None
    if stripped[-1] in 'fFdD':
        stripped = stripped[:-1]
    return np.float32(float(stripped))


def truncate_to_int32(value: np.float32) -> int:
    """Truncate toward zero, saturating at the int32 bounds (NaN -> 0)."""
    if np.isnan(value):
        return 0
    if value >= INT32_MAX:
        return INT32_MAX
    if value <= INT32_MIN:
        return INT32_MIN
    return int(value)


def wrap_to_int32(value: int) -> int:
    """Keep the low 32 bits of an integer, as a signed int32."""
    return ((value + (1 << 31)) % (1 << 32)) - (1 << 31)
