"""Schema compiler - extraction, normalization and descriptor output."""

from statsgen.compiler.extract import (
    extract_records,
    extract_achievement,
    extract_stat,
)
from statsgen.compiler.normalize import (
    StatCoercionError,
    NormalizedRecords,
    normalize_records,
    coerce_stat_values,
)
from statsgen.compiler.serialize import (
    ACHIEVEMENTS_FILE,
    STATS_FILE,
    escape_text,
    render_achievements,
    render_stats,
    write_descriptors,
)
from statsgen.compiler.generator import (
    compile_schema,
    compile_schema_async,
    copy_default_images,
)

__all__ = [
    "extract_records",
    "extract_achievement",
    "extract_stat",
    "StatCoercionError",
    "NormalizedRecords",
    "normalize_records",
    "coerce_stat_values",
    "ACHIEVEMENTS_FILE",
    "STATS_FILE",
    "escape_text",
    "render_achievements",
    "render_stats",
    "write_descriptors",
    "compile_schema",
    "compile_schema_async",
    "copy_default_images",
]
