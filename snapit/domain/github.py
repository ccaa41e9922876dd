"""Domain models for GitHub API responses.

These models mirror GitHub's REST JSON structure, providing type-safe
access to pull request and repository data.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RepoContext:
    """Repository coordinates every API call is scoped to."""

    owner: str
    name: str

    @classmethod
    def from_string(cls, value: str) -> RepoContext:
        """Parse `owner/name` (the GITHUB_REPOSITORY format).

        Raises:
            ValueError: If the value is not of the form owner/name
        """
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must be in owner/name format, got: {value!r}")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class GitHubLabel:
    """GitHub label."""

    name: str
    id: int = 0
    color: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> GitHubLabel:
        return cls(
            name=data.get("name", ""),
            id=data.get("id", 0),
            color=data.get("color", ""),
        )


@dataclass
class PullRequest:
    """GitHub Pull Request metadata."""

    number: int
    title: str
    body: str = ""
    state: str = ""
    head_ref: str = ""
    head_sha: str = ""
    base_ref: str = ""
    labels: list[GitHubLabel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> PullRequest:
        head = data.get("head") or {}
        base = data.get("base") or {}
        return cls(
            number=data.get("number", 0),
            title=data.get("title", ""),
            body=data.get("body") or "",
            state=data.get("state", ""),
            head_ref=head.get("ref", ""),
            head_sha=head.get("sha", ""),
            base_ref=base.get("ref", ""),
            labels=[GitHubLabel.from_dict(label) for label in data.get("labels", [])],
        )

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]
