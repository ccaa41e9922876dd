"""Domain model for snapit configuration.

Configuration is an optional YAML file (by default `.github/snapit.yml`).
Parse-once pattern: the YAML is parsed into a type-safe SnapitConfig at the
boundary using from_file(); every key has a default so an absent file means
the changesets defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from snapit.domain.git_objects import SNAPSHOT_BRANCH_PREFIX

DEFAULT_CONFIG_PATH = Path(".github/snapit.yml")

# Paths written by `changeset version`
DEFAULT_VERSION_FILE_PATTERNS = [
    r"package\.json",
    r"\.changeset",
    r"CHANGELOG\.md",
]


@dataclass
class SnapitConfig:
    """Settings shared by the snapshot and release PR commands."""

    version_file_patterns: list[str] = field(
        default_factory=lambda: list(DEFAULT_VERSION_FILE_PATTERNS)
    )
    snapshot_branch_prefix: str = SNAPSHOT_BRANCH_PREFIX
    snapshot_commit_message: str = "Snapshot release"
    release_branch_prefix: str = "changeset-release/"
    release_commit_message: str = "Version Packages"
    release_pr_title: str = "Version Packages"
    release_label: str = "Version Package"
    blob_workers: int = 4
    blob_retries: int = 3
    retry_delay: float = 1.0
    request_timeout: float = 30.0

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> SnapitConfig:
        """Build a config from parsed YAML, keeping defaults for absent keys.

        Raises:
            ValueError: On unknown keys or out of range values
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("snapit config must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown snapit config keys: {', '.join(unknown)}")

        config = cls(**data)
        config.validate()
        return config

    @classmethod
    def from_file(cls, path: Path) -> SnapitConfig:
        """Parse a YAML config file.

        Raises:
            ValueError: If the file is not valid YAML or has invalid values
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: invalid YAML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: str | None = None, workspace: str | Path | None = None) -> SnapitConfig:
        """Load an explicit config file, or the default one when present.

        Raises:
            FileNotFoundError: If an explicit path does not exist
        """
        if path is not None:
            return cls.from_file(Path(path))

        default_path = Path(workspace or Path.cwd()) / DEFAULT_CONFIG_PATH
        if default_path.is_file():
            return cls.from_file(default_path)
        return cls()

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def validate(self) -> None:
        if not self.version_file_patterns:
            raise ValueError("version_file_patterns must not be empty")
        if self.blob_workers < 1:
            raise ValueError("blob_workers must be at least 1")
        if self.blob_retries < 1:
            raise ValueError("blob_retries must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must not be negative")
        if not self.snapshot_branch_prefix or not self.release_branch_prefix:
            raise ValueError("branch prefixes must not be empty")
