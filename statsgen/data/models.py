"""
Stats Schema Data Models

Data classes for the records extracted from a stats schema.
Numeric stat fields stay text until the compiler coerces them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from statsgen.vdf.parser import DecodeStats


class StatType:
    """Raw ``type`` values of schema stat entries."""
    INT = "1"
    FLOAT = "2"
    AVGRATE = "3"
    BITS = "4"


# Raw schema type -> descriptor type name
STAT_TYPE_NAMES = {
    StatType.INT: "int",
    StatType.FLOAT: "float",
    StatType.AVGRATE: "avgrate",
}


@dataclass
class Achievement:
    """One achievement (a bit of a BITS stat group)."""
    name: str
    display_name: Optional[Dict[str, str]] = None
    description: Optional[Dict[str, str]] = None
    hidden: int = 0
    icon: Optional[str] = None
    icon_gray: Optional[str] = None
    icongray: Optional[str] = None  # legacy spelling, kept separate
    progress: Optional[Any] = None
    extra: Dict[str, str] = field(default_factory=dict)

    @property
    def is_hidden(self) -> bool:
        return self.hidden != 0

    def localized_name(self, language: str = "english") -> str:
        """Display name in ``language``, falling back to english, then the id."""
        names = self.display_name or {}
        return names.get(language) or names.get("english") or self.name

    def localized_description(self, language: str = "english") -> str:
        texts = self.description or {}
        return texts.get(language) or texts.get("english") or ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {"name": self.name, "hidden": self.hidden}
        if self.display_name is not None:
            data["displayName"] = dict(self.display_name)
        if self.description is not None:
            data["description"] = dict(self.description)
        if self.icon is not None:
            data["icon"] = self.icon
        if self.icon_gray is not None:
            data["icon_gray"] = self.icon_gray
        if self.icongray is not None:
            data["icongray"] = self.icongray
        if self.progress is not None:
            data["progress"] = self.progress
        return data

    @classmethod
    def from_descriptor(cls, data: Dict[str, Any]) -> 'Achievement':
        """Create Achievement from an achievements.json entry."""
        def _locale_map(value: Any) -> Optional[Dict[str, str]]:
            if value is None:
                return None
            if isinstance(value, dict):
                return {str(k): str(v) for k, v in value.items()}
            return {"english": str(value)}

        return cls(
            name=str(data.get("name", "")),
            display_name=_locale_map(data.get("displayName")),
            description=_locale_map(data.get("description")),
            hidden=int(data.get("hidden", 0) or 0),
            icon=data.get("icon"),
            icon_gray=data.get("icon_gray"),
            icongray=data.get("icongray"),
            progress=data.get("progress"),
        )


@dataclass
class Stat:
    """One scalar stat (int, float or avgrate)."""
    name: str
    type: Optional[str] = "int"  # unrecognized schema types extract as int
    default: str = "0"
    global_value: str = "0"
    min: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "default": self.default,
            "global": self.global_value,
        }
        if self.min is not None:
            data["min"] = self.min
        return data

    @classmethod
    def from_descriptor(cls, data: Dict[str, Any]) -> 'Stat':
        """Create Stat from a stats.json entry."""
        return cls(
            name=str(data.get("name", "")),
            type=data.get("type"),
            default=str(data.get("default", "0")),
            global_value=str(data.get("global", "0")),
            min=data.get("min"),
        )


@dataclass
class ProcessingResult:
    """Outcome of one schema compile.

    The achievement and stat lists are the raw extracted records (before
    icon defaulting and numeric coercion). The two flags tell the host to
    copy the fallback icons into ``img/`` of the output directory.
    """
    achievements: List[Achievement] = field(default_factory=list)
    stats: List[Stat] = field(default_factory=list)
    copy_default_unlocked_img: bool = False
    copy_default_locked_img: bool = False
    decode_stats: DecodeStats = field(default_factory=DecodeStats)

    @property
    def is_empty(self) -> bool:
        return not self.achievements and not self.stats

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "achievements": [a.to_dict() for a in self.achievements],
            "stats": [s.to_dict() for s in self.stats],
            "copy_default_unlocked_img": self.copy_default_unlocked_img,
            "copy_default_locked_img": self.copy_default_locked_img,
        }
