"""Tests for the OS-backed and in-memory filesystem accessors."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from cleantree.fs import INACCESSIBLE, MemoryFileSystem, OsFileSystem, list_directory


class OsFileSystemTests(unittest.TestCase):
    def test_classify_distinguishes_files_directories_and_missing_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "docs").mkdir()
            (root / "a.txt").write_text("abc", encoding="utf-8")
            fs = OsFileSystem()

            directory = fs.classify(root / "docs")
            file_kind = fs.classify(root / "a.txt")

            self.assertTrue(directory.is_directory)
            self.assertFalse(directory.is_file)
            self.assertTrue(file_kind.is_file)
            self.assertEqual(file_kind.stat.size, 3)
            self.assertEqual(fs.classify(root / "missing"), INACCESSIBLE)

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks not supported")
    def test_broken_symlink_is_inaccessible(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            link = root / "dangling"
            try:
                os.symlink(root / "nowhere", link)
            except OSError:
                self.skipTest("cannot create symlink")

            kind = OsFileSystem().classify(link)

            self.assertFalse(kind.is_directory)
            self.assertFalse(kind.is_file)
            self.assertIsNone(kind.stat)

    def test_list_names_reports_error_instead_of_raising(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"

            names, error = OsFileSystem().list_names(missing)

            self.assertEqual(names, [])
            self.assertIsNotNone(error)
            self.assertEqual(error.code, "FILE_ACCESS_ERROR")
            self.assertTrue(error.reason)

    def test_read_text_returns_content_or_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".gitignore").write_text("*.log\n", encoding="utf-8")
            fs = OsFileSystem()

            self.assertEqual(fs.read_text(root / ".gitignore"), ("*.log\n", None))
            content, error = fs.read_text(root / ".npmignore")
            self.assertIsNone(content)
            self.assertIsNotNone(error)

    def test_list_directory_classifies_children(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pkg").mkdir()
            (root / "main.py").write_text("", encoding="utf-8")

            entries, error = list_directory(OsFileSystem(), root)

            self.assertIsNone(error)
            kinds = {entry.name: entry.is_dir for entry in entries}
            self.assertEqual(kinds, {"pkg": True, "main.py": False})
            self.assertTrue(all(entry.path.parent == root for entry in entries))
            self.assertTrue(all(not entry.is_last for entry in entries))


class MemoryFileSystemTests(unittest.TestCase):
    def test_nested_mapping_is_addressable_by_path(self) -> None:
        root = Path("/virtual/root")
        fs = MemoryFileSystem(root, {"src": {"app.py": "print()"}, "gone": None}, unreadable={root / "src"})

        self.assertTrue(fs.classify(root).is_directory)
        self.assertTrue(fs.classify(root / "src" / "app.py").is_file)
        self.assertEqual(fs.classify(root / "gone"), INACCESSIBLE)
        self.assertEqual(sorted(fs.list_names(root)[0]), ["gone", "src"])
        names, error = fs.list_names(root / "src")
        self.assertEqual(names, [])
        self.assertEqual(error.reason, "Permission denied")


if __name__ == "__main__":
    unittest.main()
