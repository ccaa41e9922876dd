"""Change classifier service.

Filters working tree changes down to the files a version bump produces and
splits them into content changes (blob writes) and removals (tree removal
markers).
"""

from __future__ import annotations

import re

from snapit import SnapitError
from snapit.domain.changes import ChangeRecord, ClassifiedChanges


class ChangeConflictError(SnapitError, ValueError):
    """Raised when one path is reported both as deleted and as changed.

    Status output is a snapshot, so this is a precondition violation of the
    input rather than something to resolve.
    """

    pass


class ChangeClassifier:
    """Partitions ChangeRecords matching inclusion patterns into upserts and deletes.

    Patterns are Python regular expressions searched anywhere in the path
    (e.g. `package\\.json`, `\\.changeset`, `CHANGELOG\\.md`).
    """

    def __init__(self, patterns: list[str]):
        if not patterns:
            raise ValueError("At least one inclusion pattern is required")
        self.patterns = list(patterns)
        self._compiled = [re.compile(pattern) for pattern in self.patterns]

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def matches(self, path: str) -> bool:
        return any(regex.search(path) for regex in self._compiled)

    def filter(self, records: list[ChangeRecord]) -> list[ChangeRecord]:
        """Return the records whose path matches at least one pattern, in order."""
        return [record for record in records if self.matches(record.path)]

    def classify(self, records: list[ChangeRecord]) -> ClassifiedChanges:
        """Split matching records into `to_upsert` and `to_delete`.

        A path repeated with the same disposition is kept once.

        Raises:
            ChangeConflictError: If a path is both deleted and changed
        """
        to_upsert: dict[str, ChangeRecord] = {}
        to_delete: dict[str, ChangeRecord] = {}

        for record in self.filter(records):
            target, other = (to_delete, to_upsert) if record.is_deletion else (to_upsert, to_delete)
            if record.path in other:
                raise ChangeConflictError(
                    f"Path {record.path} is reported as both deleted and changed"
                )
            target.setdefault(record.path, record)

        return ClassifiedChanges(
            to_upsert=tuple(to_upsert.values()),
            to_delete=tuple(to_delete.values()),
        )
