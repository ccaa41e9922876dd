"""Domain models for snapit."""

from snapit.domain.changelog import ChangelogEntry, ChangelogFormatError
from snapit.domain.changes import (
    ChangeKind,
    ChangeRecord,
    ClassifiedChanges,
    ContentChange,
)
from snapit.domain.config import SnapitConfig
from snapit.domain.git_objects import (
    BranchAction,
    CommitRef,
    ComposedCommit,
    GitCommit,
    NoRelevantChanges,
    ReconciledBranch,
    TreeEntry,
    snapshot_branch_name,
    strip_heads_prefix,
)
from snapit.domain.github import GitHubLabel, PullRequest, RepoContext
from snapit.domain.packages import PackageManifest

__all__ = [
    "BranchAction",
    "ChangeKind",
    "ChangeRecord",
    "ChangelogEntry",
    "ChangelogFormatError",
    "ClassifiedChanges",
    "CommitRef",
    "ComposedCommit",
    "ContentChange",
    "GitCommit",
    "GitHubLabel",
    "NoRelevantChanges",
    "PackageManifest",
    "PullRequest",
    "ReconciledBranch",
    "RepoContext",
    "SnapitConfig",
    "TreeEntry",
    "snapshot_branch_name",
    "strip_heads_prefix",
]
