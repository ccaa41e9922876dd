"""Commit graph composer service.

Core service that writes a new commit on top of a parent commit through the
remote object store, without a local checkout:

1. Resolve the parent commit's tree
2. Upload one blob per content change (bounded worker pool, join barrier)
3. Create a tree against the parent tree with upserts and removal markers
4. Create a commit with exactly one parent

Each step depends on every object of the previous one existing, so the
steps run strictly in order. The composer never moves a ref; a failed
composition only leaves unreferenced objects behind.
"""

from __future__ import annotations

import sys
import time
from concurrent.futures import ThreadPoolExecutor, wait

from snapit import SnapitError
from snapit.domain.changes import ClassifiedChanges, ContentChange
from snapit.domain.git_objects import ComposedCommit, NoRelevantChanges, TreeEntry
from snapit.infrastructure.github.client import GitHubApiClient, GitHubApiError
from snapit.services.workspace_diff import WorkspaceDiffReader


class CommitCompositionFailed(SnapitError):
    """Raised when any blob, tree or commit write fails.

    Safe to retry the whole run: every write is content-addressed or
    additive.
    """

    pass


class CommitGraphComposer:
    """Builds a child commit whose tree is the parent tree plus classified changes.

    Blob uploads are the only concurrent writes; transient blob failures are
    retried per blob. Tree and commit writes are never retried.
    """

    def __init__(
        self,
        client: GitHubApiClient,
        reader: WorkspaceDiffReader,
        max_workers: int = 4,
        blob_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        """Initialize with dependencies.

        Args:
            client: GitHub API client for object store writes (injected)
            reader: Workspace reader used to load file contents (injected)
            max_workers: Upper bound on concurrent blob uploads
            blob_retries: Attempts per blob before giving up
            retry_delay: Base delay in seconds, multiplied by the attempt number
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if blob_retries < 1:
            raise ValueError("blob_retries must be at least 1")
        self.client = client
        self.reader = reader
        self.max_workers = max_workers
        self.blob_retries = blob_retries
        self.retry_delay = retry_delay

    # ============================================================
    # Public API - Composite Operation
    # ============================================================

    def compose(
        self,
        parent_sha: str,
        changes: ClassifiedChanges,
        message: str,
    ) -> ComposedCommit | NoRelevantChanges:
        """Write a commit applying `changes` on top of `parent_sha`.

        Args:
            parent_sha: Commit the new commit is a direct child of
            changes: Classified upserts and deletions
            message: Commit message

        Returns:
            ComposedCommit, or NoRelevantChanges when there is nothing to
            write (no remote call is made in that case)

        Raises:
            CommitCompositionFailed: If a file cannot be read or any remote
                write fails
        """
        if changes.is_empty:
            return NoRelevantChanges(parent_sha=parent_sha)

        try:
            contents = self.reader.read_contents(changes.to_upsert)
        except OSError as e:
            raise CommitCompositionFailed(f"Failed to read changed file: {e}") from e

        parent_tree_sha = self.resolve_parent_tree(parent_sha)
        entries = self.write_blobs(contents)
        tree_sha = self.build_tree(parent_tree_sha, entries, changes.delete_paths)
        commit_sha = self.create_commit(message, tree_sha, parent_sha)

        print(
            f"Composed commit {commit_sha} on {parent_sha} "
            f"({len(entries)} updated, {len(changes.to_delete)} removed)"
        )
        return ComposedCommit(
            commit_sha=commit_sha,
            tree_sha=tree_sha,
            parent_sha=parent_sha,
            upserted_paths=tuple(changes.upsert_paths),
            deleted_paths=tuple(changes.delete_paths),
        )

    # ============================================================
    # Public API - Steps
    # ============================================================

    def resolve_parent_tree(self, parent_sha: str) -> str:
        """Return the tree sha of the parent commit."""
        try:
            return self.client.get_commit(parent_sha).tree_sha
        except GitHubApiError as e:
            raise CommitCompositionFailed(f"Failed to read commit {parent_sha}: {e}") from e

    def write_blobs(self, contents: list[ContentChange]) -> list[TreeEntry]:
        """Upload every content change as a blob.

        Uploads run on a bounded pool and this method returns only after all
        of them have finished, so the returned entries (in input order) all
        reference persisted blobs.

        Raises:
            CommitCompositionFailed: If any blob fails after its retries
        """
        if not contents:
            return []

        workers = min(self.max_workers, len(contents))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._write_blob_with_retry, change) for change in contents]
            wait(futures)

        return [
            TreeEntry(path=change.path, sha=future.result())
            for change, future in zip(contents, futures)
        ]

    def build_tree(
        self,
        parent_tree_sha: str,
        entries: list[TreeEntry],
        delete_paths: list[str],
    ) -> str:
        """Create the new tree as a delta against the parent tree.

        Raises:
            ValueError: If there is nothing to apply
            CommitCompositionFailed: If the tree write fails
        """
        if not entries and not delete_paths:
            raise ValueError("build_tree requires at least one upsert or deletion")

        tree = list(entries) + [TreeEntry.removal(path) for path in delete_paths]
        try:
            return self.client.create_tree(parent_tree_sha, tree)
        except GitHubApiError as e:
            raise CommitCompositionFailed(f"Failed to create tree on {parent_tree_sha}: {e}") from e

    def create_commit(self, message: str, tree_sha: str, parent_sha: str) -> str:
        """Create a single-parent commit for the new tree."""
        try:
            return self.client.create_commit(message, tree_sha, [parent_sha])
        except GitHubApiError as e:
            raise CommitCompositionFailed(f"Failed to create commit for tree {tree_sha}: {e}") from e

    # ============================================================
    # Private Helpers
    # ============================================================

    def _write_blob_with_retry(self, change: ContentChange) -> str:
        for attempt in range(1, self.blob_retries + 1):
            try:
                return self.client.create_blob(change.content)
            except GitHubApiError as e:
                if not e.is_transient or attempt == self.blob_retries:
                    raise CommitCompositionFailed(
                        f"Failed to create blob for {change.path}: {e}"
                    ) from e
                print(
                    f"Retrying blob for {change.path} ({attempt}/{self.blob_retries}): {e}",
                    file=sys.stderr,
                )
                time.sleep(self.retry_delay * attempt)
        raise CommitCompositionFailed(f"Failed to create blob for {change.path}")
