"""Services for snapit.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from snapit.services.branch_reconciler import (
    BranchReconciler,
    BranchStateIndeterminate,
    RefReconciliationFailed,
)
from snapit.services.change_classifier import ChangeClassifier, ChangeConflictError
from snapit.services.commit_composer import CommitCompositionFailed, CommitGraphComposer
from snapit.services.release_pipeline import PipelineResult, ReleasePipeline
from snapit.services.release_pr import PullRequestService, ReleasePullRequestError
from snapit.services.snapshot_versions import SnapshotVersionService
from snapit.services.workspace_diff import WorkspaceDiffReader, WorkspaceQueryFailed

__all__ = [
    "BranchReconciler",
    "BranchStateIndeterminate",
    "ChangeClassifier",
    "ChangeConflictError",
    "CommitCompositionFailed",
    "CommitGraphComposer",
    "PipelineResult",
    "PullRequestService",
    "RefReconciliationFailed",
    "ReleasePipeline",
    "ReleasePullRequestError",
    "SnapshotVersionService",
    "WorkspaceDiffReader",
    "WorkspaceQueryFailed",
]
