"""Snapshot version service.

Enumerates the packages of a yarn/npm workspace and reports the ones that
`changeset version --snapshot` gave a snapshot version.
"""

from __future__ import annotations

import json
from pathlib import Path

from snapit.domain.packages import PackageManifest

ROOT_MANIFEST = "package.json"


class SnapshotVersionService:
    """Finds workspace packages with snapshot versions."""

    def __init__(self, workspace_root: str | Path = "."):
        self.workspace_root = Path(workspace_root)

    def workspace_globs(self) -> list[str]:
        """Read the `workspaces` globs from the root package.json.

        Supports both the array form and the `{"packages": [...]}` form.

        Raises:
            FileNotFoundError: If the root package.json is missing
            ValueError: If `workspaces` has an unexpected shape
        """
        data = json.loads((self.workspace_root / ROOT_MANIFEST).read_text(encoding="utf-8"))
        workspaces = data.get("workspaces", [])
        if isinstance(workspaces, dict):
            workspaces = workspaces.get("packages", [])
        if not isinstance(workspaces, list):
            raise ValueError("package.json 'workspaces' must be a list or contain 'packages'")
        return [str(glob) for glob in workspaces]

    def find_packages(self) -> list[PackageManifest]:
        """Return every workspace package, sorted by directory.

        A repository without workspaces is a single package: the root.
        """
        globs = self.workspace_globs()
        if not globs:
            return [PackageManifest.from_file(self.workspace_root / ROOT_MANIFEST)]

        manifest_paths: set[Path] = set()
        for pattern in globs:
            for directory in self.workspace_root.glob(pattern.rstrip("/")):
                manifest = directory / ROOT_MANIFEST
                if manifest.is_file():
                    manifest_paths.add(manifest)

        return [PackageManifest.from_file(path) for path in sorted(manifest_paths)]

    def find_snapshot_releases(self) -> list[str]:
        """Return `name@version` for each package with a snapshot version."""
        return [pkg.release_id for pkg in self.find_packages() if pkg.is_snapshot]
