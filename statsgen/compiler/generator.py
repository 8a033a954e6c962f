"""
Stats & Achievements Generator

Main entry point: schema bytes in, achievements.json / stats.json out.
"""

from __future__ import annotations

import asyncio
import functools
import shutil
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from statsgen.data.models import ProcessingResult
from statsgen.compiler.extract import extract_records
from statsgen.compiler.normalize import (
    DEFAULT_LOCKED_ICON,
    DEFAULT_UNLOCKED_ICON,
    IMG_DIR,
    normalize_records,
)
from statsgen.compiler.serialize import write_descriptors
from statsgen.vdf.parser import DecodeStats, binary_loads

LogCallback = Callable[[str, str], None]


def compile_schema(
    schema: bytes,
    output_dir: Union[str, Path],
    log_callback: Optional[LogCallback] = None,
) -> ProcessingResult:
    """Compile a binary stats schema into descriptor files.

    Args:
        schema: Binary KeyValues schema blob
        output_dir: Directory receiving achievements.json / stats.json
            (created if missing)
        log_callback: Optional callback for log messages (level, message)

    Returns:
        ProcessingResult with the raw records and the fallback icon flags

    Raises:
        StatCoercionError: a stat value could not be coerced; no files
            are written in that case
    """
    def log(level: str, msg: str):
        if log_callback:
            log_callback(level, msg)
        else:
            print(f"[{level}] {msg}")

    decode_stats = DecodeStats()
    tree = binary_loads(schema, decode_stats)
    if not decode_stats.clean:
        log("warning", f"Schema decode stopped early {decode_stats.premature_terminations} time(s) "
                       f"({decode_stats.unknown_tags} unknown tag(s), "
                       f"{decode_stats.bytes_consumed}/{len(schema)} bytes read)")

    achievements, stats = extract_records(tree)
    log("info", f"Found {len(achievements)} achievements, {len(stats)} stats in {len(tree)} app(s)")

    records = normalize_records(achievements, stats)

    written = write_descriptors(output_dir, records.achievements, records.stats)
    for kind, path in written.items():
        if path is not None:
            log("success", f"Wrote {kind} -> {path}")

    return ProcessingResult(
        achievements=achievements,
        stats=stats,
        copy_default_unlocked_img=records.copy_default_unlocked_img,
        copy_default_locked_img=records.copy_default_locked_img,
        decode_stats=decode_stats,
    )


async def compile_schema_async(
    schema: bytes,
    output_dir: Union[str, Path],
    log_callback: Optional[LogCallback] = None,
) -> ProcessingResult:
    """Same as compile_schema but runs in executor to not block asyncio."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        functools.partial(compile_schema, schema, output_dir, log_callback)
    )


def copy_default_images(
    result: ProcessingResult,
    output_dir: Union[str, Path],
    unlocked_src: Optional[Union[str, Path]] = None,
    locked_src: Optional[Union[str, Path]] = None,
) -> Dict[str, Path]:
    """Copy fallback icons into ``<output_dir>/img`` where the result asks for them.

    Host-side helper; compile_schema never copies images itself.

    Returns:
        Dict of "unlocked"/"locked" -> destination path for copied files
    """
    img_dir = Path(output_dir) / IMG_DIR
    copied: Dict[str, Path] = {}

    jobs = (
        ("unlocked", result.copy_default_unlocked_img, unlocked_src, DEFAULT_UNLOCKED_ICON),
        ("locked", result.copy_default_locked_img, locked_src, DEFAULT_LOCKED_ICON),
    )
    for kind, needed, src, filename in jobs:
        if not needed or src is None:
            continue
        img_dir.mkdir(parents=True, exist_ok=True)
        dest = img_dir / filename
        shutil.copyfile(src, dest)
        copied[kind] = dest

    return copied
