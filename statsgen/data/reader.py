"""
Descriptor Reader

Reads achievements.json / stats.json back from an output directory
for display.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from statsgen.data.models import Achievement, Stat
from statsgen.compiler.serialize import ACHIEVEMENTS_FILE, STATS_FILE


class DescriptorReader:
    """High-level interface to a compiled descriptor directory.

    A missing file reads as an empty list; use ``has_achievements`` /
    ``has_stats`` to tell the two apart.

    Example:
        reader = DescriptorReader("steam_settings")
        for ach in reader.achievements:
            print(ach.localized_name(), ach.icon)
        print(reader.summary())
    """

    def __init__(self, output_dir: Union[str, Path]):
        self._dir = Path(output_dir)
        if not self._dir.is_dir():
            raise FileNotFoundError(f"Descriptor directory not found: {self._dir}")

        self._achievements: Optional[List[Achievement]] = None
        self._stats: Optional[List[Stat]] = None

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def achievements_path(self) -> Path:
        return self._dir / ACHIEVEMENTS_FILE

    @property
    def stats_path(self) -> Path:
        return self._dir / STATS_FILE

    @property
    def has_achievements(self) -> bool:
        return self.achievements_path.exists()

    @property
    def has_stats(self) -> bool:
        return self.stats_path.exists()

    @staticmethod
    def _load(path: Path) -> List[Dict[str, Any]]:
        if not path.exists():
            return []
        data = json.loads(path.read_text(encoding='utf-8'))
        if not isinstance(data, list):
            raise ValueError(f"{path.name}: expected a JSON array, got {type(data).__name__}")
        return data

    @property
    def achievements(self) -> List[Achievement]:
        """Achievements from achievements.json."""
        if self._achievements is None:
            self._achievements = [
                Achievement.from_descriptor(entry) for entry in self._load(self.achievements_path)
            ]
        return self._achievements

    @property
    def stats(self) -> List[Stat]:
        """Stats from stats.json."""
        if self._stats is None:
            self._stats = [Stat.from_descriptor(entry) for entry in self._load(self.stats_path)]
        return self._stats

    def reload(self) -> None:
        """Drop cached records so the next access re-reads the files."""
        self._achievements = None
        self._stats = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "achievements": [a.to_dict() for a in self.achievements],
            "stats": [s.to_dict() for s in self.stats],
        }

    def summary(self) -> str:
        """Human-readable summary of the descriptor directory."""
        hidden = sum(1 for a in self.achievements if a.is_hidden)
        fallback = sum(1 for a in self.achievements if a.icon and a.icon.endswith("steam_default_icon_unlocked.jpg"))
        by_type: Dict[str, int] = {}
        for stat in self.stats:
            by_type[stat.type or "?"] = by_type.get(stat.type or "?", 0) + 1

        lines = [
            f"Descriptors: {self._dir}",
            f"  Achievements: {len(self.achievements)} ({hidden} hidden, {fallback} default icon)",
            f"  Stats:        {len(self.stats)}"
            + (" (" + ", ".join(f"{n} {t}" for t, n in sorted(by_type.items())) + ")" if by_type else ""),
        ]
        return "\n".join(lines)
