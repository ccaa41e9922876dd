"""Domain model for changesets-generated CHANGELOG.md entries.

The changelog layout written by `changeset version` is treated as a strict
contract:

    # <package name>

    ## <new version>

    ### Patch Changes

    - ...

    ## <previous version>
    ...

Files that do not follow it raise ChangelogFormatError rather than yielding
a partially guessed entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from snapit import SnapitError

_TITLE_PREFIX = "# "
_VERSION_PREFIX = "## "
_SECTION_PREFIX = "### "


class ChangelogFormatError(SnapitError, ValueError):
    """Raised when a changelog does not follow the changesets layout."""

    pass


@dataclass(frozen=True)
class ChangelogEntry:
    """The newest release entry of a package changelog."""

    package_name: str
    version: str
    content: str

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_markdown(cls, text: str, source: str = "<changelog>") -> ChangelogEntry:
        """Extract the newest entry from changelog markdown.

        Args:
            text: Full CHANGELOG.md contents
            source: Name used in error messages

        Returns:
            ChangelogEntry for the first `## ` version heading

        Raises:
            ChangelogFormatError: If the title, version heading or change
                sections are missing
        """
        lines = text.splitlines()
        non_blank = [i for i, line in enumerate(lines) if line.strip()]
        if not non_blank or not lines[non_blank[0]].startswith(_TITLE_PREFIX):
            raise ChangelogFormatError(f"{source}: expected a '# <package>' title on the first line")

        package_name = lines[non_blank[0]][len(_TITLE_PREFIX):].strip()
        if not package_name:
            raise ChangelogFormatError(f"{source}: package title is empty")

        version_index = _find_heading(lines, _VERSION_PREFIX, non_blank[0] + 1)
        if version_index is None:
            raise ChangelogFormatError(f"{source}: no '## <version>' heading found")

        version = lines[version_index][len(_VERSION_PREFIX):].strip()
        if not version:
            raise ChangelogFormatError(f"{source}: version heading is empty")

        next_version_index = _find_heading(lines, _VERSION_PREFIX, version_index + 1)
        end = next_version_index if next_version_index is not None else len(lines)
        body = lines[version_index + 1:end]

        if not any(line.startswith(_SECTION_PREFIX) for line in body):
            raise ChangelogFormatError(
                f"{source}: entry {version} has no '### ' change section"
            )

        return cls(package_name=package_name, version=version, content="\n".join(body).strip())

    @classmethod
    def from_file(cls, path: Path) -> ChangelogEntry:
        return cls.from_markdown(path.read_text(encoding="utf-8"), source=str(path))

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def format_markdown(self) -> str:
        """Render the entry as a section of a release PR description."""
        return f"## {self.package_name}@{self.version}\n\n-----\n\n{self.content}\n\n"


def _find_heading(lines: list[str], prefix: str, start: int) -> int | None:
    for index in range(start, len(lines)):
        if lines[index].startswith(prefix):
            return index
    return None
