"""Game stats schema compiler.

Decodes binary KeyValues stats schemas and writes the achievements.json /
stats.json descriptors used by local stats emulation.

Example:
    from statsgen import compile_schema, DescriptorReader

    result = compile_schema(schema_bytes, "steam_settings")
    print(len(result.achievements), result.copy_default_unlocked_img)

    reader = DescriptorReader("steam_settings")
    print(reader.summary())
"""

from statsgen.vdf import (
    ValueType,
    DecodedValue,
    DecodeStats,
    binary_loads,
    binary_dumps,
)
from statsgen.data.models import (
    StatType,
    Achievement,
    Stat,
    ProcessingResult,
)
from statsgen.compiler import (
    StatCoercionError,
    compile_schema,
    compile_schema_async,
    copy_default_images,
)
from statsgen.data.reader import DescriptorReader

__all__ = [
    "ValueType",
    "DecodedValue",
    "DecodeStats",
    "binary_loads",
    "binary_dumps",
    "StatType",
    "Achievement",
    "Stat",
    "ProcessingResult",
    "StatCoercionError",
    "compile_schema",
    "compile_schema_async",
    "copy_default_images",
    "DescriptorReader",
]

__version__ = "0.1.0"
