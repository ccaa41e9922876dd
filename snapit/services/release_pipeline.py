"""Release pipeline service.

Sequences the workspace reader, classifier, composer and reconciler for the
two kinds of synthetic commit this tool writes:

- a snapshot commit on `snapshot-release/<source>` on top of a PR head
- a Version Packages commit on `changeset-release/<base>` on top of the
  base branch tip

Every run re-reads the workspace and the remote refs; nothing is cached
between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from snapit.domain.changes import ClassifiedChanges
from snapit.domain.config import SnapitConfig
from snapit.domain.git_objects import (
    ComposedCommit,
    NoRelevantChanges,
    ReconciledBranch,
    strip_heads_prefix,
)
from snapit.infrastructure.github.client import GitHubApiClient
from snapit.services.branch_reconciler import BranchReconciler, BranchStateIndeterminate
from snapit.services.change_classifier import ChangeClassifier
from snapit.services.commit_composer import CommitGraphComposer
from snapit.services.workspace_diff import WorkspaceDiffReader


@dataclass(frozen=True)
class PipelineResult:
    """What one run wrote. `branch` is None when there was nothing to commit."""

    changes: ClassifiedChanges
    composed: ComposedCommit | NoRelevantChanges
    branch: ReconciledBranch | None = None

    @property
    def is_noop(self) -> bool:
        return isinstance(self.composed, NoRelevantChanges)


class ReleasePipeline:
    """Workspace changes -> classified changes -> commit -> branch."""

    def __init__(
        self,
        reader: WorkspaceDiffReader,
        classifier: ChangeClassifier,
        composer: CommitGraphComposer,
        reconciler: BranchReconciler,
    ):
        self.reader = reader
        self.classifier = classifier
        self.composer = composer
        self.reconciler = reconciler

    # ============================================================
    # Factory Methods
    # ============================================================

    @classmethod
    def create(
        cls,
        client: GitHubApiClient,
        config: SnapitConfig,
        workspace: str | Path = ".",
    ) -> ReleasePipeline:
        """Wire the pipeline services for one repository and working tree."""
        reader = WorkspaceDiffReader(workspace)
        return cls(
            reader=reader,
            classifier=ChangeClassifier(config.version_file_patterns),
            composer=CommitGraphComposer(
                client,
                reader,
                max_workers=config.blob_workers,
                blob_retries=config.blob_retries,
                retry_delay=config.retry_delay,
            ),
            reconciler=BranchReconciler(client, config.snapshot_branch_prefix),
        )

    # ============================================================
    # Public API
    # ============================================================

    def collect_changes(self) -> ClassifiedChanges:
        """Read the working tree and keep the version-related changes."""
        records = self.reader.read_changes()
        changes = self.classifier.classify(records)
        print(
            f"Found {len(records)} changed path(s), "
            f"{len(changes.to_upsert)} to update and {len(changes.to_delete)} to remove"
        )
        return changes

    def publish_snapshot(self, source_branch: str, source_sha: str, message: str) -> PipelineResult:
        """Commit the changes on top of `source_sha` and recreate the snapshot branch.

        Raises:
            WorkspaceQueryFailed: If the working tree cannot be read
            ChangeConflictError: If a path is both deleted and changed
            CommitCompositionFailed: If any object write fails
            BranchStateIndeterminate: If the snapshot ref lookup fails
            RefReconciliationFailed: If the ref delete or create fails
        """
        changes = self.collect_changes()
        composed = self.composer.compose(source_sha, changes, message)
        if isinstance(composed, NoRelevantChanges):
            return PipelineResult(changes=changes, composed=composed)

        branch = self.reconciler.reconcile_snapshot(source_branch, composed.commit_sha)
        return PipelineResult(changes=changes, composed=composed, branch=branch)

    def publish_release_branch(
        self,
        base_branch: str,
        release_branch: str,
        message: str,
        changes: ClassifiedChanges | None = None,
    ) -> PipelineResult:
        """Commit the changes on top of the base branch tip and move the release branch.

        The release branch is the head of the Version Packages PR, so it is
        force-updated rather than deleted. Callers that validate the changes
        before any remote write pass them in as `changes`; otherwise the
        working tree is read here.

        Raises:
            BranchStateIndeterminate: If the base branch is missing or its
                lookup fails
            (plus everything publish_snapshot raises)
        """
        base_branch = strip_heads_prefix(base_branch)
        base_ref = self.reconciler.lookup(base_branch)
        if base_ref is None:
            raise BranchStateIndeterminate(f"Base branch {base_branch} does not exist")

        if changes is None:
            changes = self.collect_changes()
        composed = self.composer.compose(base_ref.head_commit_sha, changes, message)
        if isinstance(composed, NoRelevantChanges):
            return PipelineResult(changes=changes, composed=composed)

        branch = self.reconciler.force_update(release_branch, composed.commit_sha)
        return PipelineResult(changes=changes, composed=composed, branch=branch)
