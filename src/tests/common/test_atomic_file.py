"""Tests for the atomic file writing utilities."""

import os
import shutil
import tempfile
import unittest
from pathlib import Path

from common.atomic_file import atomic_write_text
from common.errors import CannotWriteFile


class TestAtomicWriteText(unittest.TestCase):
    """Test cases for atomic_write_text function."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.test_file = os.path.join(self.temp_dir, "test.html")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_write_new_file(self):
        atomic_write_text(self.test_file, "<p>Hello</p>")
        with open(self.test_file, 'r') as f:
            self.assertEqual(f.read(), "<p>Hello</p>")

    def test_write_overwrites_existing(self):
        atomic_write_text(self.test_file, "Initial content")
        atomic_write_text(self.test_file, "New content")
        with open(self.test_file, 'r') as f:
            self.assertEqual(f.read(), "New content")

    def test_creates_parent_directories(self):
        nested = Path(self.temp_dir) / "a" / "b" / "page.html"
        atomic_write_text(nested, "x")
        self.assertEqual(nested.read_text(), "x")

    def test_no_temp_files_left_behind(self):
        atomic_write_text(self.test_file, "content")
        self.assertEqual(os.listdir(self.temp_dir), ["test.html"])

    def test_unicode_content(self):
        content = "Sveiki, pasauli! 你好"
        atomic_write_text(self.test_file, content)
        with open(self.test_file, 'r', encoding='utf-8') as f:
            self.assertEqual(f.read(), content)

    def test_unwritable_target_raises(self):
        # A regular file where a directory is expected
        blocker = Path(self.temp_dir) / "blocker"
        blocker.write_text("not a directory")
        with self.assertRaises(CannotWriteFile) as ctx:
            atomic_write_text(blocker / "page.html", "x")
        self.assertIn("page.html", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
