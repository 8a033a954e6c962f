"""
Descriptor Serialization

Writes achievements.json / stats.json with a fixed key order and a fixed
text layout. Output is byte-stable so repeated runs produce identical
files; ``json.dumps`` is not used because its key order and escaping
differ from what consumers of these files expect.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

ACHIEVEMENTS_FILE = "achievements.json"
STATS_FILE = "stats.json"

ACHIEVEMENT_KEY_ORDER = ("hidden", "displayName", "description", "icon", "icon_gray", "name")
STAT_KEY_ORDER = ("default", "global", "name", "type")

_LOCALIZED_KEYS = ("displayName", "description")


def escape_text(text: str) -> str:
    """Escape a string for the descriptor files.

    Code units outside printable ASCII (< 32 or > 126) become ``\\uxxxx``
    with lower-case hex; characters above U+FFFF are written as a
    surrogate pair. Backslash and double quote get the usual JSON escapes.
    """
    parts = []
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            parts.append("\\u%04x\\u%04x" % (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)))
        elif code < 32 or code > 126:
            parts.append("\\u%04x" % code)
        elif char == "\\":
            parts.append("\\\\")
        elif char == '"':
            parts.append('\\"')
        else:
            parts.append(char)
    return "".join(parts)


def _localized_field(key: str, value: Any) -> str:
    if not isinstance(value, dict):
        return f'    "{key}": "{escape_text(str(value))}"'
    if not value:
        return f'    "{key}": {{}}'
    lines = [
        f'      "{escape_text(str(lang))}": "{escape_text(str(text))}"'
        for lang, text in value.items()
    ]
    return f'    "{key}": {{\n' + ",\n".join(lines) + "\n    }"


def _achievement_object(entry: Dict[str, Any]) -> str:
    fields = []
    for key in ACHIEVEMENT_KEY_ORDER:
        value = entry.get(key)
        if value is None:
            continue
        if key in _LOCALIZED_KEYS:
            fields.append(_localized_field(key, value))
        elif key == "hidden":
            fields.append(f'    "{key}": {value}')
        else:
            fields.append(f'    "{key}": "{escape_text(str(value))}"')
    return "  {\n" + ",\n".join(fields) + "\n  }"


def _stat_object(entry: Dict[str, Any]) -> str:
    fields = [
        f'    "{key}": "{escape_text(str(entry[key]))}"'
        for key in STAT_KEY_ORDER
        if entry.get(key) is not None
    ]
    return "  {\n" + ",\n".join(fields) + "\n  }"


def render_achievements(entries: List[Dict[str, Any]]) -> str:
    """achievements.json text for normalized achievement entries."""
    return "[\n" + ",\n".join(_achievement_object(e) for e in entries) + "\n]"


def render_stats(entries: List[Dict[str, Any]]) -> str:
    """stats.json text for normalized stat entries."""
    return "[\n" + ",\n".join(_stat_object(e) for e in entries) + "\n]"


def _replace_file(path: Path, text: str) -> None:
    if path.exists():
        path.unlink()
    path.write_bytes(text.encode('utf-8'))


def write_descriptors(
    output_dir: Union[str, Path],
    achievements: List[Dict[str, Any]],
    stats: List[Dict[str, Any]],
) -> Dict[str, Optional[Path]]:
    """Write the descriptor files that have content.

    An empty list leaves any existing file for that kind untouched.

    Returns:
        Dict with the written path (or None) under "achievements" and "stats"
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: Dict[str, Optional[Path]] = {"achievements": None, "stats": None}

    if achievements:
        path = output_dir / ACHIEVEMENTS_FILE
        _replace_file(path, render_achievements(achievements))
        written["achievements"] = path

    if stats:
        path = output_dir / STATS_FILE
        _replace_file(path, render_stats(stats))
        written["stats"] = path

    return written
