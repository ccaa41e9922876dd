"""Tests for SnapshotVersionService.

Tests cover:
- workspaces globs in array and {packages: [...]} form
- Single package repositories
- Snapshot version collection
"""

import json
import tempfile
import unittest
from pathlib import Path

from snapit.services.snapshot_versions import SnapshotVersionService


class TestSnapshotVersionService(unittest.TestCase):
    """Tests for workspace package enumeration."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.service = SnapshotVersionService(self.root)

    def tearDown(self):
        self.tmp.cleanup()

    def _write_manifest(self, relative: str, data: dict) -> None:
        path = self.root / relative / "package.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))

    def test_array_workspaces(self):
        self._write_manifest(".", {"name": "root", "private": True, "workspaces": ["packages/*"]})
        self._write_manifest("packages/a", {"name": "a", "version": "0.0.0-snapshot-release-1"})
        self._write_manifest("packages/b", {"name": "b", "version": "1.0.0"})

        self.assertEqual(self.service.find_snapshot_releases(), ["a@0.0.0-snapshot-release-1"])

    def test_object_workspaces(self):
        self._write_manifest(".", {"name": "root", "workspaces": {"packages": ["libs/*"]}})
        self._write_manifest("libs/z", {"name": "z", "version": "2.0.0-snapshot-release-2"})
        self._write_manifest("libs/y", {"name": "y", "version": "2.0.0-snapshot-release-2"})

        self.assertEqual(self.service.workspace_globs(), ["libs/*"])
        self.assertEqual(
            self.service.find_snapshot_releases(),
            ["y@2.0.0-snapshot-release-2", "z@2.0.0-snapshot-release-2"],
        )

    def test_directories_without_manifest_are_skipped(self):
        self._write_manifest(".", {"name": "root", "workspaces": ["packages/*"]})
        self._write_manifest("packages/a", {"name": "a", "version": "1.0.0"})
        (self.root / "packages" / "empty").mkdir()

        self.assertEqual([pkg.name for pkg in self.service.find_packages()], ["a"])

    def test_single_package_repository(self):
        self._write_manifest(".", {"name": "solo", "version": "0.0.0-snapshot-release-3"})

        self.assertEqual(self.service.find_snapshot_releases(), ["solo@0.0.0-snapshot-release-3"])

    def test_no_snapshots(self):
        self._write_manifest(".", {"name": "solo", "version": "1.0.0"})

        self.assertEqual(self.service.find_snapshot_releases(), [])

    def test_invalid_workspaces_shape(self):
        self._write_manifest(".", {"name": "root", "workspaces": "packages/*"})

        with self.assertRaises(ValueError):
            self.service.find_packages()

    def test_missing_root_manifest(self):
        with self.assertRaises(FileNotFoundError):
            self.service.find_packages()
