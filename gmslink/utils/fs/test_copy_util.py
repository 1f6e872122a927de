#!/usr/bin/env python3
"""
Tests for the recursive copier.

Run with: python3 -m pytest gmslink/utils/fs/test_copy_util.py
"""

import os
import shutil
import tempfile
import unittest

from gmslink.utils.fs.copy_util import copy_tree
from gmslink.utils.errors import FileError


def snapshot(root):
    """Relative dirs and {relative file: bytes} of a tree"""
    dirs = set()
    files = {}
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root)
        for name in dirnames:
            dirs.add(os.path.normpath(os.path.join(rel, name)))
        for name in filenames:
            with open(os.path.join(dirpath, name), "rb") as f:
                files[os.path.normpath(os.path.join(rel, name))] = f.read()
    return dirs, files


class TestCopyTree(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.src = os.path.join(self.tmp, "appcompat")
        os.makedirs(os.path.join(self.src, "res", "values"))
        os.makedirs(os.path.join(self.src, "libs"))
        os.makedirs(os.path.join(self.src, "empty"))
        files = {
            "project.properties": b"target=android-21\nandroid.library=true\n",
            "AndroidManifest.xml": b"<manifest />",
            os.path.join("res", "values", "strings.xml"): "<r>é</r>".encode("utf-8"),
            os.path.join("libs", "android-support-v7-appcompat.jar"): bytes(range(256)) * 4,
        }
        for name, data in files.items():
            with open(os.path.join(self.src, name), "wb") as f:
                f.write(data)

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_copy_is_isomorphic(self):
        dst = os.path.join(self.tmp, "platforms", "android", "AppCompatLib")
        self.assertEqual(copy_tree(self.src, dst), 4)
        self.assertEqual(snapshot(dst), snapshot(self.src))

    def test_copy_over_existing_destination(self):
        dst = os.path.join(self.tmp, "AppCompatLib")
        os.makedirs(dst)
        with open(os.path.join(dst, "project.properties"), "wb") as f:
            f.write(b"stale")
        copy_tree(self.src, dst)
        self.assertEqual(snapshot(dst), snapshot(self.src))

    def test_copy_single_file(self):
        dst = os.path.join(self.tmp, "copy.properties")
        self.assertEqual(copy_tree(os.path.join(self.src, "project.properties"), dst), 1)
        with open(dst, "rb") as f:
            self.assertEqual(f.read(), b"target=android-21\nandroid.library=true\n")

    def test_missing_source(self):
        with self.assertRaises(FileError):
            copy_tree(os.path.join(self.tmp, "nope"), os.path.join(self.tmp, "dst"))
        self.assertFalse(os.path.exists(os.path.join(self.tmp, "dst")))


if __name__ == "__main__":
    unittest.main()
