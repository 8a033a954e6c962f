"""
Record Normalization

Turns extracted records into descriptor entries: icon paths get the
``img/`` prefix (or a fallback icon), stat defaults are coerced to
numeric text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from statsgen.data.models import Achievement, Stat
from statsgen.compiler.numbers import parse_float, parse_int, truncate_to_int32
from statsgen.vdf.values import format_float32

IMG_DIR = "img"
DEFAULT_UNLOCKED_ICON = "steam_default_icon_unlocked.jpg"
DEFAULT_LOCKED_ICON = "steam_default_icon_locked.jpg"


class StatCoercionError(ValueError):
    """A stat default/global value could not be turned into a number."""

    def __init__(self, stat: Stat, reason: str):
        self.stat = stat
        super().__init__(
            f"Stat '{stat.name}' (type={stat.type}, default={stat.default!r}, "
            f"min={stat.min!r}): {reason}"
        )


@dataclass
class NormalizedRecords:
    """Descriptor entries ready for serialization."""
    achievements: List[Dict[str, Any]] = field(default_factory=list)
    stats: List[Dict[str, Any]] = field(default_factory=list)
    copy_default_unlocked_img: bool = False
    copy_default_locked_img: bool = False


def normalize_achievement(achievement: Achievement) -> Dict[str, Any]:
    """Descriptor entry for one achievement (icons resolved, no flags)."""
    entry: Dict[str, Any] = {
        "name": achievement.name,
        "hidden": achievement.hidden,
    }
    if achievement.display_name is not None:
        entry["displayName"] = achievement.display_name
    if achievement.description is not None:
        entry["description"] = achievement.description

    if achievement.icon:
        entry["icon"] = f"{IMG_DIR}/{achievement.icon}"
    else:
        entry["icon"] = f"{IMG_DIR}/{DEFAULT_UNLOCKED_ICON}"

    if achievement.icon_gray:
        entry["icon_gray"] = f"{IMG_DIR}/{achievement.icon_gray}"
    else:
        entry["icon_gray"] = f"{IMG_DIR}/{DEFAULT_LOCKED_ICON}"

    if achievement.icongray:
        entry["icongray"] = achievement.icongray
    if achievement.progress is not None:
        entry["progress"] = achievement.progress
    return entry


def coerce_stat_values(stat: Stat) -> Dict[str, str]:
    """Numeric text for a stat's default and global values.

    int stats: integer parse, then float parse truncated to int, then
    ``min`` as the default (global "0"). Other stats: float parse.

    Raises:
        StatCoercionError: no step of the chain yields a number
    """
    if stat.type is not None and stat.type.lower() == "int":
        default_int = parse_int(stat.default)
        global_int = parse_int(stat.global_value)
        if default_int is not None and global_int is not None:
            return {"default": str(default_int), "global": str(global_int)}

        default_float = parse_float(stat.default)
        global_float = parse_float(stat.global_value)
        if default_float is not None and global_float is not None:
            return {
                "default": str(truncate_to_int32(default_float)),
                "global": str(truncate_to_int32(global_float)),
            }

        if stat.min:
            min_int = parse_int(stat.min)
            if min_int is None:
                raise StatCoercionError(stat, "min is not an integer")
            return {"default": str(min_int), "global": "0"}

        raise StatCoercionError(stat, "no numeric default and no min to fall back on")

    default_float = parse_float(stat.default)
    global_float = parse_float(stat.global_value)
    if default_float is None or global_float is None:
        raise StatCoercionError(stat, "default/global is not a number")
    return {
        "default": format_float32(default_float),
        "global": format_float32(global_float),
    }


def normalize_stat(stat: Stat) -> Dict[str, Any]:
    """Descriptor entry for one stat; type is omitted when unset."""
    entry: Dict[str, Any] = {"name": stat.name}
    if stat.type is not None:
        entry["type"] = stat.type
    entry.update(coerce_stat_values(stat))
    return entry


def normalize_records(achievements: List[Achievement], stats: List[Stat]) -> NormalizedRecords:
    """Normalize all records and collect the fallback icon flags."""
    records = NormalizedRecords()

    for achievement in achievements:
        entry = normalize_achievement(achievement)
        if not achievement.icon:
            records.copy_default_unlocked_img = True
        if not achievement.icon_gray:
            records.copy_default_locked_img = True
        records.achievements.append(entry)

    for stat in stats:
        records.stats.append(normalize_stat(stat))

    return records
