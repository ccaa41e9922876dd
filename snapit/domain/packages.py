"""Domain model for workspace package manifests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

SNAPSHOT_VERSION_MARKER = "snapshot-release"


@dataclass(frozen=True)
class PackageManifest:
    """The fields of a package.json that snapshot detection needs."""

    name: str
    version: str
    path: Path

    @classmethod
    def from_file(cls, path: Path) -> PackageManifest:
        """Parse a package.json file.

        Raises:
            ValueError: If the file is not a JSON object
        """
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path}: package.json must contain a JSON object")
        return cls(
            name=data.get("name", ""),
            version=data.get("version", ""),
            path=path,
        )

    @property
    def is_snapshot(self) -> bool:
        return SNAPSHOT_VERSION_MARKER in self.version

    @property
    def release_id(self) -> str:
        return f"{self.name}@{self.version}"
