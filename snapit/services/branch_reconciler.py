"""Branch reconciler service.

Places a branch ref exactly at a given commit:

    Absent  -> create the ref at the commit
    Present -> delete the ref, then create it at the commit

Recreating instead of fast-forwarding discards any earlier synthetic commit,
so a snapshot branch is always "source tip + one commit". Delete and create
are two separate writes; a crash in between leaves the branch absent, which
the next run handles through the Absent path.
"""

from __future__ import annotations

from snapit import SnapitError
from snapit.domain.git_objects import (
    SNAPSHOT_BRANCH_PREFIX,
    BranchAction,
    CommitRef,
    ReconciledBranch,
    snapshot_branch_name,
)
from snapit.infrastructure.github.client import GitHubApiClient, GitHubApiError


class BranchStateIndeterminate(SnapitError):
    """Raised when a ref lookup fails for a reason other than not-found."""

    pass


class RefReconciliationFailed(SnapitError):
    """Raised when deleting or creating the ref fails.

    The composed commit is still valid; a retry only needs to redo
    reconciliation with `commit_sha`.
    """

    def __init__(self, message: str, branch_name: str, commit_sha: str):
        super().__init__(message)
        self.branch_name = branch_name
        self.commit_sha = commit_sha


class BranchReconciler:
    """Ensures a branch exists and points at a given commit."""

    def __init__(self, client: GitHubApiClient, branch_prefix: str = SNAPSHOT_BRANCH_PREFIX):
        self.client = client
        self.branch_prefix = branch_prefix

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def snapshot_branch_for(self, source_branch: str) -> str:
        return snapshot_branch_name(source_branch, self.branch_prefix)

    def lookup(self, branch: str) -> CommitRef | None:
        """Read the current ref, or None if the branch does not exist.

        Raises:
            BranchStateIndeterminate: On any failure other than not-found
        """
        try:
            return self.client.get_ref(branch)
        except GitHubApiError as e:
            if e.is_not_found:
                return None
            raise BranchStateIndeterminate(f"Could not determine state of branch {branch}: {e}") from e

    def reconcile(self, branch: str, commit_sha: str) -> ReconciledBranch:
        """Point `branch` at `commit_sha`, creating or recreating the ref.

        Raises:
            BranchStateIndeterminate: If the lookup fails (nothing is written)
            RefReconciliationFailed: If the delete or create fails
        """
        existing = self.lookup(branch)

        if existing is None:
            self._create(branch, commit_sha)
            return ReconciledBranch(branch_name=branch, commit_sha=commit_sha, action=BranchAction.CREATED)

        try:
            self.client.delete_ref(branch)
        except GitHubApiError as e:
            raise RefReconciliationFailed(
                f"Failed to delete branch {branch}: {e}", branch_name=branch, commit_sha=commit_sha
            ) from e
        print(f"Deleted branch {branch} (was {existing.head_commit_sha})")

        self._create(branch, commit_sha)
        return ReconciledBranch(
            branch_name=branch,
            commit_sha=commit_sha,
            action=BranchAction.RECREATED,
            previous_sha=existing.head_commit_sha,
        )

    def force_update(self, branch: str, commit_sha: str) -> ReconciledBranch:
        """Point `branch` at `commit_sha` without deleting it.

        Used for branches that are the head of an open PR, where deleting
        the ref would close the PR. Absent branches are created.

        Raises:
            BranchStateIndeterminate: If the lookup fails (nothing is written)
            RefReconciliationFailed: If the create or update fails
        """
        existing = self.lookup(branch)

        if existing is None:
            self._create(branch, commit_sha)
            return ReconciledBranch(branch_name=branch, commit_sha=commit_sha, action=BranchAction.CREATED)

        try:
            self.client.update_ref(branch, commit_sha, force=True)
        except GitHubApiError as e:
            raise RefReconciliationFailed(
                f"Failed to update branch {branch} to {commit_sha}: {e}",
                branch_name=branch,
                commit_sha=commit_sha,
            ) from e
        print(f"Updated branch {branch} to {commit_sha}")
        return ReconciledBranch(
            branch_name=branch,
            commit_sha=commit_sha,
            action=BranchAction.UPDATED,
            previous_sha=existing.head_commit_sha,
        )

    def reconcile_snapshot(self, source_branch: str, commit_sha: str) -> ReconciledBranch:
        """Point the snapshot branch derived from `source_branch` at `commit_sha`."""
        return self.reconcile(self.snapshot_branch_for(source_branch), commit_sha)

    # --------------------------------------------------------
    # Private Helpers
    # --------------------------------------------------------

    def _create(self, branch: str, commit_sha: str) -> None:
        try:
            self.client.create_ref(branch, commit_sha)
        except GitHubApiError as e:
            raise RefReconciliationFailed(
                f"Failed to create branch {branch} at {commit_sha}: {e}",
                branch_name=branch,
                commit_sha=commit_sha,
            ) from e
        print(f"Created branch {branch} at {commit_sha}")
