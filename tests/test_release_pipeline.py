"""Tests for ReleasePipeline.

Tests cover:
- Snapshot run: status -> classify -> compose -> reconcile
- Second run over a clean workspace is a no-op with no new commit
- Release branch run on top of the base branch tip, with pre-collected changes
- Missing base branch
"""

import unittest
from unittest.mock import MagicMock

from snapit.domain.changes import ContentChange
from snapit.domain.config import SnapitConfig
from snapit.domain.git_objects import BranchAction
from snapit.services.branch_reconciler import BranchReconciler, BranchStateIndeterminate
from snapit.services.change_classifier import ChangeClassifier
from snapit.services.commit_composer import CommitGraphComposer
from snapit.services.release_pipeline import ReleasePipeline
from snapit.services.workspace_diff import WorkspaceDiffReader, parse_status_output
from tests.fakes import FakeObjectStore


class FakeWorkspace:
    """Working tree whose status and contents are set by the test."""

    def __init__(self, status: str, files: dict[str, bytes]):
        self.status = status
        self.files = files

    def as_reader(self) -> MagicMock:
        reader = MagicMock(spec=WorkspaceDiffReader)
        reader.read_changes.side_effect = lambda: parse_status_output(self.status)
        reader.read_contents.side_effect = lambda records: [
            ContentChange(path=r.path, content=self.files[r.path]) for r in records
        ]
        return reader


class TestReleasePipeline(unittest.TestCase):
    """End-to-end runs against the in-memory object store."""

    def setUp(self):
        self.store = FakeObjectStore()
        self.head_sha = self.store.seed_commit(
            {
                "packages/foo/package.json": b'{"version": "1.0.0"}',
                ".changeset/brave-cats.md": b"---\n'foo': patch\n---\n",
                "src/index.ts": b"export {}",
            }
        )
        self.workspace = FakeWorkspace(
            status=(
                " M packages/foo/package.json\n"
                " D .changeset/brave-cats.md\n"
                " M src/index.ts\n"
            ),
            files={
                "packages/foo/package.json": b'{"version": "0.0.0-snapshot-release-20240101"}',
                "src/index.ts": b"export const x = 1",
            },
        )
        config = SnapitConfig()
        self.pipeline = ReleasePipeline(
            reader=self.workspace.as_reader(),
            classifier=ChangeClassifier(config.version_file_patterns),
            composer=CommitGraphComposer(self.store, self.workspace.as_reader(), retry_delay=0),
            reconciler=BranchReconciler(self.store),
        )

    def test_publish_snapshot_commits_version_files_only(self):
        result = self.pipeline.publish_snapshot("feature/x", self.head_sha, "Snapshot release")

        self.assertFalse(result.is_noop)
        self.assertEqual(result.branch.branch_name, "snapshot-release/feature/x")
        self.assertEqual(self.store.refs["snapshot-release/feature/x"], result.composed.commit_sha)
        self.assertEqual(
            self.store.files_at(result.composed.commit_sha),
            {
                "packages/foo/package.json": b'{"version": "0.0.0-snapshot-release-20240101"}',
                "src/index.ts": b"export {}",
            },
        )
        self.assertEqual(
            self.store.commits[result.composed.commit_sha].parent_shas, (self.head_sha,)
        )

    def test_second_run_on_clean_workspace_is_noop(self):
        first = self.pipeline.publish_snapshot("feature/x", self.head_sha, "Snapshot release")
        commits_after_first = len(self.store.commits)
        self.workspace.status = ""

        second = self.pipeline.publish_snapshot("feature/x", self.head_sha, "Snapshot release")

        self.assertTrue(second.is_noop)
        self.assertIsNone(second.branch)
        self.assertEqual(len(self.store.commits), commits_after_first)
        self.assertEqual(self.store.refs["snapshot-release/feature/x"], first.composed.commit_sha)

    def test_rerun_with_changes_recreates_branch(self):
        self.store.refs["snapshot-release/feature/x"] = self.head_sha

        result = self.pipeline.publish_snapshot("feature/x", self.head_sha, "Snapshot release")

        self.assertEqual(result.branch.action, BranchAction.RECREATED)
        self.assertEqual(result.branch.previous_sha, self.head_sha)

    def test_irrelevant_changes_only_is_noop(self):
        self.workspace.status = " M src/index.ts\n"

        result = self.pipeline.publish_snapshot("feature/x", self.head_sha, "Snapshot release")

        self.assertTrue(result.is_noop)
        self.assertEqual(self.store.count("create_blob"), 0)
        self.assertEqual(self.store.refs, {})

    def test_publish_release_branch_builds_on_base_tip(self):
        self.store.refs["main"] = self.head_sha

        result = self.pipeline.publish_release_branch(
            "refs/heads/main", "changeset-release/main", "Version Packages"
        )

        self.assertEqual(result.composed.parent_sha, self.head_sha)
        self.assertEqual(self.store.refs["changeset-release/main"], result.composed.commit_sha)
        self.assertEqual(result.branch.action, BranchAction.CREATED)

    def test_publish_release_branch_updates_existing_branch(self):
        self.store.refs["main"] = self.head_sha
        self.store.refs["changeset-release/main"] = self.head_sha

        result = self.pipeline.publish_release_branch("main", "changeset-release/main", "Version Packages")

        self.assertEqual(result.branch.action, BranchAction.UPDATED)
        self.assertEqual(self.store.count("delete_ref"), 0)

    def test_publish_release_branch_uses_collected_changes(self):
        self.store.refs["main"] = self.head_sha
        changes = self.pipeline.collect_changes()
        self.workspace.status = ""

        result = self.pipeline.publish_release_branch(
            "main", "changeset-release/main", "Version Packages", changes=changes
        )

        self.assertIs(result.changes, changes)
        self.assertEqual(self.pipeline.reader.read_changes.call_count, 1)
        self.assertIn("changeset-release/main", self.store.refs)

    def test_publish_release_branch_requires_base(self):
        with self.assertRaises(BranchStateIndeterminate):
            self.pipeline.publish_release_branch("main", "changeset-release/main", "Version Packages")


class TestCreate(unittest.TestCase):
    """Tests for wiring the pipeline from config."""

    def test_uses_config_values(self):
        config = SnapitConfig(
            version_file_patterns=[r"VERSION"],
            snapshot_branch_prefix="snap/",
            blob_workers=2,
            blob_retries=5,
            retry_delay=0.5,
        )

        pipeline = ReleasePipeline.create(FakeObjectStore(), config, "/repo")

        self.assertEqual(str(pipeline.reader.repo_path), "/repo")
        self.assertEqual(pipeline.classifier.patterns, [r"VERSION"])
        self.assertEqual(pipeline.composer.max_workers, 2)
        self.assertEqual(pipeline.composer.blob_retries, 5)
        self.assertEqual(pipeline.composer.retry_delay, 0.5)
        self.assertEqual(pipeline.reconciler.branch_prefix, "snap/")
