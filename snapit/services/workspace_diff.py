"""Workspace diff service.

Core service for reading the local working tree. Encapsulates the
`git status --porcelain` subprocess call and the eager file reads that
blob creation needs, returning domain models.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from snapit import SnapitError
from snapit.domain.changes import ChangeRecord, ContentChange

_LINE_BREAK = re.compile(r"\r?\n")


class WorkspaceQueryFailed(SnapitError):
    """Raised when the working tree status cannot be read or parsed."""

    pass


class WorkspaceDiffReader:
    """Reads changed paths and their contents from a local working tree.

    Never fabricates entries: an empty status means an empty result.
    """

    def __init__(self, repo_path: str | Path = "."):
        """Initialize with repository path.

        Args:
            repo_path: Path to git working tree (default: current directory)
        """
        self.repo_path = Path(repo_path)

    def read_status(self) -> str:
        """Run `git status --porcelain` and return its raw output.

        Raises:
            WorkspaceQueryFailed: If git is missing or exits non-zero
        """
        try:
            result = subprocess.run(
                ["git", "status", "--porcelain"],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise WorkspaceQueryFailed(f"git executable not found: {e}") from e
        except subprocess.CalledProcessError as e:
            raise WorkspaceQueryFailed(
                f"git status failed in {self.repo_path} (exit {e.returncode}): {e.stderr}"
            ) from e
        return result.stdout

    def read_changes(self) -> list[ChangeRecord]:
        """Return one ChangeRecord per changed path, in status order.

        Raises:
            WorkspaceQueryFailed: If the status query fails or a line
                cannot be parsed
        """
        return parse_status_output(self.read_status())

    def read_contents(self, records: list[ChangeRecord] | tuple[ChangeRecord, ...]) -> list[ContentChange]:
        """Read the full current contents of each path.

        Raises:
            OSError: If a file cannot be read
        """
        return [
            ContentChange(path=record.path, content=(self.repo_path / record.path).read_bytes())
            for record in records
        ]


def parse_status_output(output: str) -> list[ChangeRecord]:
    """Parse porcelain status output into ChangeRecords.

    The empty entry left after the final line break, and any other blank
    line, is skipped.

    Raises:
        WorkspaceQueryFailed: If a non-blank line cannot be parsed
    """
    records = []
    for line in _LINE_BREAK.split(output):
        if not line.strip():
            continue
        try:
            records.append(ChangeRecord.from_status_line(line))
        except ValueError as e:
            raise WorkspaceQueryFailed(str(e)) from e
    return records
