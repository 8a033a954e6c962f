"""
Schema Extraction

Walks a decoded stats schema tree and splits it into achievements
(bits of BITS stat groups) and scalar stats.

Tree shape:
    <appid>
        stats
            <stat id>
                type     "4" for an achievement group, else 1/2/3
                name
                bits                 (BITS only)
                    <bit index>
                        name
                        display
                            name     locale map or plain text
                            desc     locale map or plain text
                            hidden
                            icon / icon_gray / icongray
                        progress
                default / Default / min   (scalar stats)

Malformed entries are skipped without error.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from statsgen.data.models import Achievement, Stat, StatType, STAT_TYPE_NAMES
from statsgen.compiler.numbers import parse_int, truncate_to_int32, wrap_to_int32
from statsgen.vdf.values import DecodedValue, ValueType


def _locale_map(value: DecodedValue) -> Dict[str, str]:
    """Locale -> text; a plain value is treated as english."""
    if value.is_map:
        return {lang: text.to_text() for lang, text in value.items()}
    return {"english": value.to_text()}


def _hidden_flag(value: DecodedValue) -> int:
    """Integer hidden flag; numbers are narrowed to int32, anything else is 0."""
    number = parse_int(value.to_text())
    if number is not None:
        return number
    if value.type == ValueType.FLOAT32:
        return truncate_to_int32(value.value)
    if value.type in (ValueType.INT64, ValueType.UINT64):
        return wrap_to_int32(value.value)
    return 0


def extract_achievement(entry: DecodedValue) -> Achievement:
    """Build one Achievement from a bit entry of a BITS group."""
    display = entry.get("display")
    display_name: Optional[Dict[str, str]] = None
    description: Optional[Dict[str, str]] = None
    hidden = 0
    extra: Dict[str, str] = {}

    if display is not None and display.is_map:
        for key, value in display.items():
            lowered = key.lower()
            if lowered == "name":
                display_name = _locale_map(value)
            elif lowered == "desc":
                description = _locale_map(value)
            elif lowered == "hidden":
                hidden = _hidden_flag(value)
            else:
                extra[key] = value.to_text()

    name = entry.get("name")
    progress = entry.get("progress")

    return Achievement(
        name=name.to_text() if name is not None else "",
        display_name=display_name,
        description=description,
        hidden=hidden,
        icon=extra.pop("icon", None),
        icon_gray=extra.pop("icon_gray", None),
        icongray=extra.pop("icongray", None),
        progress=progress.to_python() if progress is not None else None,
        extra=extra,
    )


def extract_stat(entry: DecodedValue, stat_type: str) -> Stat:
    """Build one scalar Stat; ``Default`` takes precedence over ``default``.

    An unrecognized schema type is treated as an int stat.
    """
    name = entry.get("name")
    default = entry.get("Default")
    if default is None:
        default = entry.get("default")
    minimum = entry.get("min")

    return Stat(
        name=name.to_text() if name is not None else "",
        type=STAT_TYPE_NAMES.get(stat_type, "int"),
        default=default.to_text() if default is not None else "0",
        global_value="0",
        min=minimum.to_text() if minimum is not None else None,
    )


def extract_records(tree: Dict[str, DecodedValue]) -> Tuple[List[Achievement], List[Stat]]:
    """Extract achievements and stats from a decoded schema root.

    Args:
        tree: Root map (appid -> app data) from binary_loads

    Returns:
        Tuple of (achievements, stats) in schema order
    """
    achievements: List[Achievement] = []
    stats: List[Stat] = []

    for _app_id, app_data in tree.items():
        stat_info = app_data.get("stats")
        if stat_info is None or not stat_info.is_map:
            continue

        for _stat_key, stat_data in stat_info.items():
            if not stat_data.is_map:
                continue
            raw_type = stat_data.get("type")
            if raw_type is None:
                continue
            stat_type = raw_type.to_text()

            if stat_type == StatType.BITS:
                bits = stat_data.get("bits")
                if bits is None or not bits.is_map:
                    continue
                for _bit_key, bit_data in bits.items():
                    if bit_data.is_map:
                        achievements.append(extract_achievement(bit_data))
            else:
                stats.append(extract_stat(stat_data, stat_type))

    return achievements, stats
