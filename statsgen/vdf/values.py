"""
Binary KeyValues Value Types

Tagged value container for the decoded record tree, plus the text
conversions the schema compiler relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

import numpy as np


class ValueType(IntEnum):
    """Type tags of the binary KeyValues wire format."""
    SUBSECTION = 0x00
    STRING = 0x01
    INT32 = 0x02
    FLOAT32 = 0x03
    INT64 = 0x07
    END = 0x08
    UINT64 = 0x0A


def format_float32(value: Any) -> str:
    """Format a number the way a single-precision float prints as text.

    Uses the shortest digits that round-trip through float32, in plain
    notation for 1e-3 <= |x| < 1e7 and as ``d.dddE[-]n`` otherwise.
    """
    f = np.float32(value)
    if np.isnan(f):
        return "NaN"
    if np.isinf(f):
        return "-Infinity" if f < 0 else "Infinity"
    if f == 0:
        return "-0.0" if np.signbit(f) else "0.0"

    magnitude = abs(f)
    if np.float32(1e-3) <= magnitude < np.float32(1e7):
        return np.format_float_positional(f, unique=True, trim='0')

    text = np.format_float_scientific(f, unique=True, trim='0', exp_digits=1)
    mantissa, exponent = text.split('e')
    return f"{mantissa}E{int(exponent)}"


@dataclass(frozen=True)
class DecodedValue:
    """One decoded value with its wire type tag.

    ``value`` holds a ``str`` for STRING, an ``int`` for the integer
    types (UINT64 keeps its full unsigned value), a ``numpy.float32``
    for FLOAT32 and a ``dict`` of key -> DecodedValue for SUBSECTION.
    """
    type: ValueType
    value: Any

    @classmethod
    def string(cls, text: str) -> 'DecodedValue':
        return cls(ValueType.STRING, text)

    @classmethod
    def int32(cls, number: int) -> 'DecodedValue':
        return cls(ValueType.INT32, number)

    @classmethod
    def float32(cls, number: float) -> 'DecodedValue':
        return cls(ValueType.FLOAT32, np.float32(number))

    @classmethod
    def int64(cls, number: int) -> 'DecodedValue':
        return cls(ValueType.INT64, number)

    @classmethod
    def uint64(cls, number: int) -> 'DecodedValue':
        return cls(ValueType.UINT64, number)

    @classmethod
    def map(cls, entries: Dict[str, 'DecodedValue']) -> 'DecodedValue':
        return cls(ValueType.SUBSECTION, entries)

    @property
    def is_map(self) -> bool:
        return self.type == ValueType.SUBSECTION

    def get(self, key: str) -> Optional['DecodedValue']:
        """Child lookup; None for missing keys or non-map values."""
        if not self.is_map:
            return None
        return self.value.get(key)

    def items(self):
        """Map entries in insertion order (empty for scalars)."""
        if not self.is_map:
            return iter(())
        return iter(self.value.items())

    def to_text(self) -> str:
        """Scalar value as text; maps render as ``{key=value, ...}``."""
        if self.type == ValueType.STRING:
            return self.value
        if self.type == ValueType.FLOAT32:
            return format_float32(self.value)
        if self.type in (ValueType.INT32, ValueType.INT64, ValueType.UINT64):
            return str(self.value)
        inner = ", ".join(f"{k}={v.to_text()}" for k, v in self.value.items())
        return "{" + inner + "}"

    def to_python(self) -> Any:
        """Convert to plain Python types (dict/str/int/float)."""
        if self.is_map:
            return {k: v.to_python() for k, v in self.value.items()}
        if self.type == ValueType.FLOAT32:
            return float(self.value)
        return self.value

    def __str__(self) -> str:
        return self.to_text()


def tree_to_python(tree: Dict[str, DecodedValue]) -> Dict[str, Any]:
    """Convert a decoded root map to plain Python types."""
    return {key: value.to_python() for key, value in tree.items()}
