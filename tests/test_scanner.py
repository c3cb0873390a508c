#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scanner test-suite: selection rules, recursion policy and traversal order.

The sample project is produced by ``tests/tools/build_fixtures.py`` inside a
temporary directory for every test class.
"""
from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Dict, List

from collectgen.errors import ScanError
from collectgen.io.readers import read_text_file
from collectgen.io.scanner import SourceScanner

TOOLS_DIR = Path(__file__).resolve().parent / "tools"
BUILD_SCRIPT = TOOLS_DIR / "build_fixtures.py"

EXPECTED_ORDER = [
    "src/app.ts",
    "src/controllers/user.controller.ts",
    "src/routes/controllers/nested.ts",
    "src/routes/orders.ts",
    "src/routes/users.ts",
    "src/routes.helpers.ts",
]


def _build_fixtures(root: Path) -> None:
    subprocess.check_call([sys.executable, str(BUILD_SCRIPT), str(root)], stdout=subprocess.DEVNULL)


def _rel_keys(contents: Dict[str, str], project: Path) -> List[str]:
    return [Path(k).relative_to(project).as_posix() for k in contents]


class FixtureTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = tempfile.TemporaryDirectory()
        cls.project = Path(cls._tmp.name).resolve() / "project"
        _build_fixtures(cls.project)
        cls.src = cls.project / "src"

    @classmethod
    def tearDownClass(cls) -> None:
        cls._tmp.cleanup()

    def scan(self, targets: List[str]) -> Dict[str, str]:
        return SourceScanner().scan(self.src, targets)


# --------------------------------------------------------------------------- #
#  1. Selection & order                                                       #
# --------------------------------------------------------------------------- #
class SelectionTests(FixtureTestCase):
    def test_reads_expected_files_in_order(self) -> None:
        got = self.scan(["routes", "controllers"])
        self.assertEqual(_rel_keys(got, self.project), EXPECTED_ORDER)

    def test_keys_are_full_paths_and_values_are_file_text(self) -> None:
        got = self.scan(["routes"])
        users = str(self.src / "routes" / "users.ts")
        self.assertIn(users, got)
        self.assertEqual(got[users], (self.src / "routes" / "users.ts").read_text(encoding="utf-8"))

    def test_entry_file_only_from_source_root(self) -> None:
        got = _rel_keys(self.scan([]), self.project)
        self.assertEqual(got, ["src/app.ts"])

    def test_non_target_directory_is_not_entered(self) -> None:
        got = _rel_keys(self.scan(["routes"]), self.project)
        self.assertNotIn("src/lib/routes/hidden.ts", got)
        self.assertNotIn("src/middleware/auth.ts", got)

    def test_non_target_subdirectory_of_target_is_skipped(self) -> None:
        got = _rel_keys(self.scan(["routes"]), self.project)
        self.assertNotIn("src/routes/admin/admin.ts", got)
        self.assertNotIn("src/routes/controllers/nested.ts", got)

    def test_root_file_matches_by_name_substring(self) -> None:
        got = _rel_keys(self.scan(["routes"]), self.project)
        self.assertIn("src/routes.helpers.ts", got)
        self.assertNotIn("src/server.ts", got)

    def test_order_does_not_depend_on_target_order(self) -> None:
        a = list(self.scan(["routes", "controllers"]))
        b = list(self.scan(["controllers", "routes"]))
        self.assertEqual(a, b)

    def test_empty_and_duplicate_targets_are_ignored(self) -> None:
        got = _rel_keys(self.scan(["", "routes", "routes"]), self.project)
        self.assertNotIn("src/server.ts", got)
        self.assertIn("src/routes/users.ts", got)


# --------------------------------------------------------------------------- #
#  2. Location independence                                                   #
# --------------------------------------------------------------------------- #
class RootLocationTests(unittest.TestCase):
    def test_target_name_in_root_location_does_not_select_everything(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            project = Path(td).resolve() / "routes-service"
            _build_fixtures(project)
            got = _rel_keys(SourceScanner().scan(project / "src", ["routes"]), project)
            self.assertNotIn("src/server.ts", got)

    def test_custom_entry_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "src"
            src.mkdir()
            (src / "main.ts").write_text("main", encoding="utf-8")
            (src / "app.ts").write_text("app", encoding="utf-8")
            got = SourceScanner(entry_file="main.ts").scan(src, [])
            self.assertEqual(list(got.values()), ["main"])


# --------------------------------------------------------------------------- #
#  3. Special entries & errors                                                #
# --------------------------------------------------------------------------- #
class SpecialEntryTests(unittest.TestCase):
    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unsupported")
    def test_symlinks_are_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            real = base / "elsewhere"
            real.mkdir()
            (real / "secret.ts").write_text("secret", encoding="utf-8")
            src = base / "src"
            src.mkdir()
            try:
                os.symlink(real, src / "routes", target_is_directory=True)
                os.symlink(real / "secret.ts", src / "routes.ts")
            except OSError:
                self.skipTest("cannot create symlinks here")
            self.assertEqual(SourceScanner().scan(src, ["routes"]), {})

    def test_invalid_utf8_is_replaced_not_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "src"
            (src / "routes").mkdir(parents=True)
            (src / "routes" / "bin.ts").write_bytes(b"ok \xff\xfe end")
            got = SourceScanner().scan(src, ["routes"])
            self.assertEqual(list(got.values()), ["ok \ufffd\ufffd end"])

    def test_missing_root_raises(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ScanError):
                SourceScanner().scan(Path(td) / "nope", ["routes"])

    def test_root_must_be_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            f = Path(td) / "file.ts"
            f.write_text("x", encoding="utf-8")
            with self.assertRaises(ScanError):
                SourceScanner().scan(f, [])

    def test_read_failure_raises_scan_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ScanError) as ctx:
                read_text_file(Path(td))  # a directory cannot be read as bytes
            self.assertIn(td, str(ctx.exception))

    @unittest.skipIf(not hasattr(os, "geteuid") or os.geteuid() == 0, "root ignores file permissions")
    def test_unreadable_file_in_target_dir_aborts_scan(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "src"
            (src / "routes").mkdir(parents=True)
            (src / "routes" / "open.ts").write_text("ok", encoding="utf-8")
            locked = src / "routes" / "locked.ts"
            locked.write_text("secret", encoding="utf-8")
            os.chmod(locked, 0)
            try:
                with self.assertRaises(ScanError) as ctx:
                    SourceScanner().scan(src, ["routes"])
                self.assertIn("locked.ts", str(ctx.exception))
            finally:
                os.chmod(locked, 0o644)

    @unittest.skipIf(not hasattr(os, "geteuid") or os.geteuid() == 0, "root ignores file permissions")
    def test_unlistable_target_dir_aborts_scan(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "src"
            routes = src / "routes"
            routes.mkdir(parents=True)
            (routes / "users.ts").write_text("ok", encoding="utf-8")
            os.chmod(routes, 0)
            try:
                with self.assertRaises(ScanError):
                    SourceScanner().scan(src, ["routes"])
            finally:
                os.chmod(routes, 0o755)

    def test_injected_reader_is_used(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "src"
            src.mkdir()
            (src / "app.ts").write_text("real", encoding="utf-8")
            calls: List[Path] = []

            def fake_read(p: Path) -> str:
                calls.append(p)
                return "fake"

            got = SourceScanner(read_text=fake_read).scan(src, [])
            self.assertEqual(list(got.values()), ["fake"])
            self.assertEqual(calls, [src / "app.ts"])


class LoggingTests(unittest.TestCase):
    def test_scan_logs_directories_and_files(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "src"
            (src / "routes").mkdir(parents=True)
            (src / "app.ts").write_text("a", encoding="utf-8")
            (src / "routes" / "r.ts").write_text("r", encoding="utf-8")
            with self.assertLogs("collectgen.io.scanner", level="INFO") as cm:
                SourceScanner().scan(src, ["routes"])
            joined = "\n".join(cm.output)
            self.assertIn("Scanning directory", joined)
            self.assertIn("Entering target directory", joined)
            self.assertIn("Reading main app file", joined)
            self.assertIn("Reading file", joined)


if __name__ == "__main__":
    unittest.main()
