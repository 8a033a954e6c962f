"""Binary KeyValues layer - decoding and encoding of schema blobs."""

from statsgen.vdf.values import (
    ValueType,
    DecodedValue,
    format_float32,
    tree_to_python,
)
from statsgen.vdf.parser import (
    BinaryVdfDecoder,
    DecodeStats,
    binary_loads,
    binary_dumps,
)

__all__ = [
    "ValueType",
    "DecodedValue",
    "format_float32",
    "tree_to_python",
    "BinaryVdfDecoder",
    "DecodeStats",
    "binary_loads",
    "binary_dumps",
]
