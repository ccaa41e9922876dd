"""Domain models for working tree changes.

Parse-once pattern: `git status --porcelain` lines are parsed into typed
ChangeRecord models at the boundary, then classified into the upsert and
delete sets a commit is built from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(Enum):
    """What happened to a path in the working tree.

    Only DELETED changes how a path is written to a tree; every other kind
    is a content change that requires reading the file and writing a blob.
    """

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    UNTRACKED = "untracked"

    @classmethod
    def from_status_code(cls, status: str) -> ChangeKind:
        """Derive the change kind from a two-character porcelain status.

        A `D` in either the index or the worktree column denotes deletion.

        Examples:
            >>> ChangeKind.from_status_code("M")
            <ChangeKind.MODIFIED: 'modified'>
            >>> ChangeKind.from_status_code("D")
            <ChangeKind.DELETED: 'deleted'>
            >>> ChangeKind.from_status_code("??")
            <ChangeKind.UNTRACKED: 'untracked'>
        """
        if "D" in status:
            return cls.DELETED
        if "?" in status:
            return cls.UNTRACKED
        if "R" in status:
            return cls.RENAMED
        if "A" in status:
            return cls.ADDED
        return cls.MODIFIED


@dataclass(frozen=True)
class ChangeRecord:
    """A single path reported as changed by `git status --porcelain`."""

    path: str
    kind: ChangeKind
    status: str = ""

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_status_line(cls, line: str) -> ChangeRecord:
        """Parse one `XY PATH` porcelain line.

        Leading whitespace is trimmed and the line is split on single spaces;
        the first token is the status code and the last token is the path, so
        a rename reported as `old -> new` keeps only the new path.

        Args:
            line: Raw porcelain line (e.g. " M packages/foo/package.json")

        Returns:
            Typed ChangeRecord

        Raises:
            ValueError: If the line has no status code or no path
        """
        tokens = line.lstrip().split(" ")
        if len(tokens) < 2:
            raise ValueError(f"Malformed status line: {line!r}")

        status = tokens[0]
        path = tokens[-1]
        if not status or not path:
            raise ValueError(f"Malformed status line: {line!r}")

        return cls(path=path, kind=ChangeKind.from_status_code(status), status=status)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def is_deletion(self) -> bool:
        return self.kind is ChangeKind.DELETED


@dataclass(frozen=True)
class ClassifiedChanges:
    """Version-related changes split by how they are applied to a tree."""

    to_upsert: tuple[ChangeRecord, ...] = field(default_factory=tuple)
    to_delete: tuple[ChangeRecord, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.to_upsert and not self.to_delete

    @property
    def upsert_paths(self) -> list[str]:
        return [record.path for record in self.to_upsert]

    @property
    def delete_paths(self) -> list[str]:
        return [record.path for record in self.to_delete]

    @property
    def all_paths(self) -> list[str]:
        return self.upsert_paths + self.delete_paths


@dataclass(frozen=True)
class ContentChange:
    """Full on-disk contents of a path that will be written as a blob."""

    path: str
    content: bytes

    def __repr__(self) -> str:
        return f"ContentChange(path={self.path!r}, size={len(self.content)})"
