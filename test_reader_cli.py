#!/usr/bin/env python3
"""
test_reader_cli.py - Test suite for descriptor read-back and the CLI

Tests:
1. DescriptorReader - records, summary, missing files
2. statsgen.cli - compile, --dump, --show, error exits
"""

import contextlib
import io
import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from schema_fixtures import sample_schema_bytes, stat_schema_bytes
from statsgen import DescriptorReader, compile_schema
from statsgen.cli import main as cli_main


class TestDescriptorReader(unittest.TestCase):
    """Reading compiled descriptors back."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.out = Path(self._tmp.name)
        compile_schema(sample_schema_bytes(), self.out, log_callback=lambda level, msg: None)
        self.reader = DescriptorReader(self.out)

    def tearDown(self):
        self._tmp.cleanup()

    def test_achievements(self):
        achievements = self.reader.achievements
        self.assertEqual([a.name for a in achievements], ["ACH_WIN_ONE_GAME", "ACH_TRAVEL"])
        self.assertEqual(achievements[0].display_name, {"english": "Winner", "german": "Gewinner"})
        self.assertEqual(achievements[0].icon, "img/ach1.jpg")
        self.assertEqual(achievements[1].icon_gray, "img/steam_default_icon_locked.jpg")
        self.assertEqual(achievements[0].localized_name("german"), "Gewinner")
        self.assertEqual(achievements[1].localized_name("german"), "Interstellar")
        self.assertTrue(achievements[1].is_hidden)
        self.assertFalse(achievements[0].is_hidden)

    def test_stats(self):
        stats = self.reader.stats
        self.assertEqual([(s.name, s.type, s.default) for s in stats],
                         [("NumGames", "int", "0"), ("MaxFeet", "float", "1.5"), ("AverageSpeed", "avgrate", "0.0")])
        self.assertEqual(stats[1].global_value, "0.0")

    def test_summary_and_dict(self):
        summary = self.reader.summary()
        self.assertIn("Achievements: 2 (1 hidden, 1 default icon)", summary)
        self.assertIn("Stats:        3", summary)
        self.assertEqual(len(self.reader.to_dict()["stats"]), 3)
        self.assertEqual(self.reader.to_dict()["stats"][0]["global"], "0")

    def test_missing_files_read_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            reader = DescriptorReader(tmp)
            self.assertFalse(reader.has_achievements)
            self.assertEqual(reader.achievements, [])
            self.assertEqual(reader.stats, [])

    def test_missing_directory(self):
        with self.assertRaises(FileNotFoundError):
            DescriptorReader(self.out / "nope")

    def test_reload(self):
        self.assertEqual(len(self.reader.stats), 3)
        compile_schema(stat_schema_bytes(type="1"), self.out, log_callback=lambda level, msg: None)
        self.assertEqual(len(self.reader.stats), 3)
        self.reader.reload()
        self.assertEqual([s.name for s in self.reader.stats], ["TestStat"])


class TestCli(unittest.TestCase):
    """python -m statsgen.cli"""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.schema = self.root / "UserGameStatsSchema_480.bin"
        self.schema.write_bytes(sample_schema_bytes())
        self.out = self.root / "steam_settings"

    def tearDown(self):
        self._tmp.cleanup()

    def run_cli(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = cli_main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def test_compile(self):
        code, stdout, _ = self.run_cli(str(self.schema), "-o", str(self.out))
        self.assertEqual(code, 0)
        self.assertTrue((self.out / "achievements.json").exists())
        self.assertIn("[success]", stdout)

    def test_compile_copies_images(self):
        icon = self.root / "icon.jpg"
        icon.write_bytes(b"JPG")
        code, _, stderr = self.run_cli(str(self.schema), "-o", str(self.out),
                                       "--unlocked-img", str(icon), "--locked-img", str(icon))
        self.assertEqual(code, 0)
        self.assertTrue((self.out / "img" / "steam_default_icon_unlocked.jpg").exists())
        self.assertNotIn("use --unlocked-img", stderr)

    def test_compile_warns_without_images(self):
        code, _, stderr = self.run_cli(str(self.schema), "-o", str(self.out))
        self.assertEqual(code, 0)
        self.assertIn("use --unlocked-img", stderr)

    def test_dump(self):
        code, stdout, _ = self.run_cli(str(self.schema), "--dump")
        self.assertEqual(code, 0)
        tree = json.loads(stdout)
        self.assertEqual(tree["480"]["gamename"], "Spacewar")
        self.assertEqual(tree["480"]["stats"]["1"]["type"], 1)

    def test_show(self):
        self.run_cli(str(self.schema), "-o", str(self.out))
        code, stdout, _ = self.run_cli("--show", str(self.out))
        self.assertEqual(code, 0)
        self.assertIn("ACH_WIN_ONE_GAME: Winner", stdout)
        self.assertIn("ACH_TRAVEL: Interstellar [hidden]", stdout)

        code, stdout, _ = self.run_cli("--show", str(self.out), "--json")
        self.assertEqual(code, 0)
        self.assertEqual(len(json.loads(stdout)["achievements"]), 2)

    def test_errors(self):
        code, _, stderr = self.run_cli(str(self.root / "missing.bin"))
        self.assertEqual(code, 1)
        self.assertIn("not found", stderr)

        code, _, _ = self.run_cli()
        self.assertEqual(code, 1)

        bad = self.root / "bad.bin"
        bad.write_bytes(stat_schema_bytes(name="Broken", type="1", default="x"))
        code, _, stderr = self.run_cli(str(bad), "-o", str(self.out))
        self.assertEqual(code, 1)
        self.assertIn("Broken", stderr)

        code, _, _ = self.run_cli("--show", str(self.root / "nope"))
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
