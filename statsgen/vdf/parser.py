"""
Binary KeyValues Parser

Decodes the binary KeyValues (VDF) format used by game stats schemas
into an ordered tree of DecodedValue, and encodes such a tree back.

Wire format, one record per entry:
    [type:u8][key:cstring][payload]
    0x00 SUBSECTION  payload = nested records up to 0x08
    0x01 STRING      payload = cstring (UTF-8)
    0x02 INT32       payload = 4 bytes LE signed
    0x03 FLOAT32     payload = 4 bytes LE IEEE-754 single
    0x07 INT64       payload = 8 bytes LE signed
    0x0A UINT64      payload = 8 bytes LE unsigned
    0x08 END         closes the current level (no key)

Decoding is permissive: a truncated stream or an unknown tag ends the
current level and whatever was read so far is kept.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import numpy as np

from statsgen.vdf.values import DecodedValue, ValueType

INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1
INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_FIXED_WIDTH = {
    ValueType.INT32: ('<i', 4),
    ValueType.FLOAT32: ('<f', 4),
    ValueType.INT64: ('<q', 8),
    ValueType.UINT64: ('<Q', 8),
}


class _Truncated(Exception):
    """Read ran past the end of the buffer."""


@dataclass
class DecodeStats:
    """Diagnostics collected while decoding.

    A level that stops early (truncation or unknown tag) is counted
    here; the decoded tree itself is returned unchanged.
    """
    premature_terminations: int = 0
    unknown_tags: int = 0
    bytes_consumed: int = 0

    @property
    def clean(self) -> bool:
        return self.premature_terminations == 0 and self.unknown_tags == 0


class BinaryVdfDecoder:
    """Single-pass decoder over a byte buffer."""

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._pos = 0
        self.stats = DecodeStats()

    def _read(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            self._pos = len(self._data)
            raise _Truncated()
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _read_cstring(self) -> str:
        end = self._data.find(b'\x00', self._pos)
        if end == -1:
            self._pos = len(self._data)
            raise _Truncated()
        raw = self._data[self._pos:end]
        self._pos = end + 1
        return raw.decode('utf-8', errors='replace')

    def _read_value(self, tag: ValueType) -> DecodedValue:
        if tag == ValueType.STRING:
            return DecodedValue.string(self._read_cstring())
        fmt, size = _FIXED_WIDTH[tag]
        number = struct.unpack(fmt, self._read(size))[0]
        if tag == ValueType.FLOAT32:
            return DecodedValue.float32(number)
        return DecodedValue(tag, number)

    def decode_map(self, depth: int = 0) -> Dict[str, DecodedValue]:
        """Decode records until END, end of buffer, or a bad record.

        The root map may end with the buffer; a nested map must see END.
        """
        result: Dict[str, DecodedValue] = {}

        while self._pos < len(self._data):
            raw_tag = self._data[self._pos]
            self._pos += 1

            if raw_tag == ValueType.END:
                return result

            try:
                tag = ValueType(raw_tag)
            except ValueError:
                self.stats.unknown_tags += 1
                self.stats.premature_terminations += 1
                return result

            try:
                key = self._read_cstring()
                if tag == ValueType.SUBSECTION:
                    result[key] = DecodedValue.map(self.decode_map(depth + 1))
                else:
                    result[key] = self._read_value(tag)
            except _Truncated:
                self.stats.premature_terminations += 1
                return result

        if depth > 0:
            self.stats.premature_terminations += 1
        return result

    def decode(self) -> Dict[str, DecodedValue]:
        """Decode the whole buffer as the root map."""
        root = self.decode_map()
        self.stats.bytes_consumed = self._pos
        return root


def binary_loads(data: bytes, stats: Optional[DecodeStats] = None) -> Dict[str, DecodedValue]:
    """Decode a binary KeyValues buffer into an ordered root map.

    Args:
        data: Raw schema bytes
        stats: Optional DecodeStats that receives the decode diagnostics

    Returns:
        Dict of key -> DecodedValue, in wire order
    """
    decoder = BinaryVdfDecoder(data)
    root = decoder.decode()
    if stats is not None:
        stats.premature_terminations = decoder.stats.premature_terminations
        stats.unknown_tags = decoder.stats.unknown_tags
        stats.bytes_consumed = decoder.stats.bytes_consumed
    return root


# =============================================================================
# ENCODING
# =============================================================================

def _coerce(value: Any) -> DecodedValue:
    """Wrap a plain Python value in the narrowest matching DecodedValue."""
    if isinstance(value, DecodedValue):
        return value
    if isinstance(value, Mapping):
        return DecodedValue.map({str(k): _coerce(v) for k, v in value.items()})
    if isinstance(value, str):
        return DecodedValue.string(value)
    if isinstance(value, bool):
        return DecodedValue.int32(int(value))
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return DecodedValue.int32(value)
        if INT64_MIN <= value <= INT64_MAX:
            return DecodedValue.int64(value)
        if 0 <= value <= UINT64_MAX:
            return DecodedValue.uint64(value)
        raise ValueError(f"Integer out of 64-bit range: {value}")
    if isinstance(value, (float, np.floating)):
        return DecodedValue.float32(value)
    raise TypeError(f"Cannot encode {type(value).__name__} as KeyValues")


def _encode_cstring(text: str) -> bytes:
    raw = text.encode('utf-8')
    if b'\x00' in raw:
        raise ValueError(f"NUL byte not allowed in KeyValues string: {text!r}")
    return raw + b'\x00'


def _encode_map(entries: Mapping[str, Any], out: bytearray) -> None:
    for key, raw_value in entries.items():
        value = _coerce(raw_value)
        out.append(value.type)
        out += _encode_cstring(key)
        if value.is_map:
            _encode_map(value.value, out)
            out.append(ValueType.END)
        elif value.type == ValueType.STRING:
            out += _encode_cstring(value.value)
        else:
            fmt, _ = _FIXED_WIDTH[value.type]
            out += struct.pack(fmt, value.value)


def binary_dumps(tree: Mapping[str, Any]) -> bytes:
    """Encode a root map to binary KeyValues.

    Accepts DecodedValue entries (their tag is kept) or plain Python
    values: str, int (INT32, then INT64, then UINT64 by range), float
    (FLOAT32) and nested mappings.
    """
    out = bytearray()
    _encode_map(tree, out)
    out.append(ValueType.END)
    return bytes(out)
