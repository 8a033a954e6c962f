#!/usr/bin/env python3
"""
Stats Schema CLI

Command-line interface for compiling stats schemas.

Usage:
    # Compile schema into steam_settings/
    python -m statsgen.cli UserGameStatsSchema_480.bin

    # Compile into a custom directory and copy fallback icons
    python -m statsgen.cli schema.bin -o out/ \\
        --unlocked-img icons/unlocked.jpg --locked-img icons/locked.jpg

    # Dump the decoded KeyValues tree as JSON
    python -m statsgen.cli schema.bin --dump

    # Show a compiled descriptor directory
    python -m statsgen.cli --show out/
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from statsgen.compiler import compile_schema, copy_default_images
from statsgen.data.reader import DescriptorReader
from statsgen.vdf import DecodeStats, binary_loads, tree_to_python

DEFAULT_OUTPUT_DIR = Path("steam_settings")


def _log(level: str, msg: str) -> None:
    stream = sys.stderr if level in ("warning", "error") else sys.stdout
    print(f"[{level}] {msg}", file=stream)


def dump_schema(schema_path: Path) -> int:
    """Print the decoded tree of a schema file as JSON."""
    stats = DecodeStats()
    tree = binary_loads(schema_path.read_bytes(), stats)
    print(json.dumps(tree_to_python(tree), indent=2, ensure_ascii=False))
    if not stats.clean:
        _log("warning", f"Decode stopped early {stats.premature_terminations} time(s)")
    return 0


def show_descriptors(output_dir: Path, as_json: bool = False) -> int:
    """Print the records of a compiled descriptor directory."""
    reader = DescriptorReader(output_dir)
    if as_json:
        print(json.dumps(reader.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print(reader.summary())
    for ach in reader.achievements:
        marker = " [hidden]" if ach.is_hidden else ""
        print(f"  {ach.name}: {ach.localized_name()}{marker}")
    for stat in reader.stats:
        print(f"  {stat.name} ({stat.type}) default={stat.default}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Game stats schema -> achievements.json / stats.json',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('schema', nargs='?',
                        help='Binary stats schema file')
    parser.add_argument('--output', '-o', default=str(DEFAULT_OUTPUT_DIR),
                        help=f'Output directory (default: {DEFAULT_OUTPUT_DIR})')
    parser.add_argument('--unlocked-img', metavar='PATH',
                        help='Fallback icon copied to img/ when an achievement has no icon')
    parser.add_argument('--locked-img', metavar='PATH',
                        help='Fallback icon copied to img/ when an achievement has no gray icon')

    parser.add_argument('--dump', action='store_true',
                        help='Print the decoded schema tree as JSON instead of compiling')
    parser.add_argument('--show', metavar='DIR',
                        help='Show the records of a compiled descriptor directory')
    parser.add_argument('--json', action='store_true',
                        help='With --show: print records as JSON')

    args = parser.parse_args(argv)

    try:
        if args.show:
            return show_descriptors(Path(args.show), as_json=args.json)

        if not args.schema:
            parser.print_usage(sys.stderr)
            print("Error: schema file required", file=sys.stderr)
            return 1

        schema_path = Path(args.schema)
        if not schema_path.exists():
            print(f"Error: schema file not found: {schema_path}", file=sys.stderr)
            return 1

        if args.dump:
            return dump_schema(schema_path)

        result = compile_schema(schema_path.read_bytes(), args.output, log_callback=_log)
        copied = copy_default_images(result, args.output, args.unlocked_img, args.locked_img)
        for kind, dest in copied.items():
            _log("info", f"Copied default {kind} icon -> {dest}")
        if result.copy_default_unlocked_img and "unlocked" not in copied:
            _log("warning", "Some achievements need img/steam_default_icon_unlocked.jpg (use --unlocked-img)")
        if result.copy_default_locked_img and "locked" not in copied:
            _log("warning", "Some achievements need img/steam_default_icon_locked.jpg (use --locked-img)")
        return 0

    except (OSError, ValueError) as e:  # StatCoercionError is a ValueError
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
