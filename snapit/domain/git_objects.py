"""Domain models for git objects held in the remote object store.

These models mirror the GitHub Git Data API (refs, commits, trees) and the
results produced when a snapshot commit is composed and its branch is
reconciled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

REGULAR_FILE_MODE = "100644"
BLOB_TYPE = "blob"

SNAPSHOT_BRANCH_PREFIX = "snapshot-release/"

_HEADS_PREFIX = "refs/heads/"


def strip_heads_prefix(branch: str) -> str:
    """Return the short branch name for `refs/heads/<name>` or `<name>`."""
    if branch.startswith(_HEADS_PREFIX):
        return branch[len(_HEADS_PREFIX):]
    return branch


def snapshot_branch_name(source_branch: str, prefix: str = SNAPSHOT_BRANCH_PREFIX) -> str:
    """Derive the snapshot branch for a source branch.

    A pure function of the source branch so repeated runs for the same pull
    request always target the same branch.

    Examples:
        >>> snapshot_branch_name("feature/x")
        'snapshot-release/feature/x'
        >>> snapshot_branch_name("refs/heads/feature/x")
        'snapshot-release/feature/x'
    """
    short_name = strip_heads_prefix(source_branch)
    if not short_name:
        raise ValueError("Source branch name must not be empty")
    return f"{prefix}{short_name}"


@dataclass(frozen=True)
class TreeEntry:
    """One path written into a new tree.

    A `sha` of None is an explicit removal marker: the path is dropped from
    the base tree instead of being left untouched.
    """

    path: str
    sha: str | None
    mode: str = REGULAR_FILE_MODE
    type: str = BLOB_TYPE

    @classmethod
    def removal(cls, path: str) -> TreeEntry:
        return cls(path=path, sha=None)

    @property
    def is_removal(self) -> bool:
        return self.sha is None

    def to_dict(self) -> dict:
        """Serialize to the `tree` item shape of `POST git/trees`."""
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass(frozen=True)
class CommitRef:
    """Mutable pointer to a branch tip, as read from the remote store."""

    branch_name: str
    head_commit_sha: str

    @classmethod
    def from_dict(cls, data: dict) -> CommitRef:
        """Parse a `GET git/ref/heads/{branch}` response."""
        return cls(
            branch_name=strip_heads_prefix(data.get("ref", "")),
            head_commit_sha=data.get("object", {}).get("sha", ""),
        )


@dataclass(frozen=True)
class GitCommit:
    """A commit object from `GET git/commits/{sha}`."""

    sha: str
    tree_sha: str
    parent_shas: tuple[str, ...] = field(default_factory=tuple)
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> GitCommit:
        return cls(
            sha=data.get("sha", ""),
            tree_sha=data.get("tree", {}).get("sha", ""),
            parent_shas=tuple(p.get("sha", "") for p in data.get("parents", [])),
            message=data.get("message", ""),
        )


@dataclass(frozen=True)
class ComposedCommit:
    """A commit written on top of a parent, not yet pointed to by any ref."""

    commit_sha: str
    tree_sha: str
    parent_sha: str
    upserted_paths: tuple[str, ...] = field(default_factory=tuple)
    deleted_paths: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NoRelevantChanges:
    """Outcome of a composition with nothing to write.

    Callers treat this as success with no action: no blob, tree or commit
    was created and no ref should be moved.
    """

    parent_sha: str


class BranchAction(Enum):
    """How the branch reconciler placed a ref."""

    CREATED = "created"
    RECREATED = "recreated"
    UPDATED = "updated"


@dataclass(frozen=True)
class ReconciledBranch:
    """A branch ref that now points exactly at the requested commit."""

    branch_name: str
    commit_sha: str
    action: BranchAction
    previous_sha: str | None = None

    @property
    def ref(self) -> str:
        """Ref path without the `refs/` prefix (e.g. `heads/snapshot-release/x`)."""
        return f"heads/{self.branch_name}"
