"""GitHub REST API client.

Infrastructure component that wraps HTTP calls to the GitHub REST API with
requests. Covers the Git Data object store (refs, commits, trees, blobs)
and the pull request / issue endpoints the release commands use.
Services depend on this class so tests can substitute a MagicMock.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field

import requests

from snapit import SnapitError
from snapit.domain.git_objects import CommitRef, GitCommit, TreeEntry
from snapit.domain.github import PullRequest, RepoContext

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

_TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}


class GitHubApiError(SnapitError):
    """Raised when a GitHub API request fails.

    `status_code` is None when no HTTP response was received (connection
    error or timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_transient(self) -> bool:
        return self.status_code is None or self.status_code in _TRANSIENT_STATUS_CODES


@dataclass
class GitHubApiClient:
    """Authenticated client scoped to one repository.

    Constructed once per command and passed explicitly to every service.
    The composer calls `create_blob` from several worker threads at once, so
    the shared Session only ever carries independent POSTs concurrently;
    every other call is made from the calling thread.
    """

    token: str
    repo: RepoContext
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    def __post_init__(self):
        self.api_url = self.api_url.rstrip("/")
        self.session.headers.update(
            {
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )

    @classmethod
    def from_environment(
        cls,
        token: str | None = None,
        repo: str | None = None,
        timeout: float = 30.0,
    ) -> GitHubApiClient:
        """Build a client from explicit values, falling back to the Actions environment.

        Reads GITHUB_TOKEN, GITHUB_REPOSITORY and GITHUB_API_URL.

        Raises:
            ValueError: If no token or repository is available
        """
        token = token or os.environ.get("GITHUB_TOKEN")
        if not token:
            raise ValueError("GITHUB_TOKEN is not set")
        repo = repo or os.environ.get("GITHUB_REPOSITORY")
        if not repo:
            raise ValueError("Repository not given and GITHUB_REPOSITORY is not set")
        return cls(
            token=token,
            repo=RepoContext.from_string(repo),
            api_url=os.environ.get("GITHUB_API_URL") or DEFAULT_API_URL,
            timeout=timeout,
        )

    # --------------------------------------------------------
    # Low-level request
    # --------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        json_body: dict | None = None,
        params: dict | None = None,
    ) -> dict | list | None:
        """Make a request against `repos/{owner}/{repo}/{path}`.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: Path below the repository URL (e.g. "git/commits/abc")
            json_body: Request body
            params: Query parameters

        Returns:
            Decoded JSON response, or None for empty responses

        Raises:
            GitHubApiError: On transport failure or a non-2xx status
        """
        url = f"{self.api_url}/repos/{self.repo.full_name}/{path}"
        try:
            response = self.session.request(
                method, url, json=json_body, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise GitHubApiError(f"{method} {path} failed: {e}") from e

        if not response.ok:
            raise GitHubApiError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GitHubApiError(
                f"{method} {path} returned a non-JSON body: {e}",
                status_code=response.status_code,
            ) from e

    # --------------------------------------------------------
    # Public API - Git Data (object store)
    # --------------------------------------------------------

    def get_ref(self, branch: str) -> CommitRef:
        """Read a branch ref. Raises GitHubApiError (404) if it does not exist."""
        data = self.request("GET", f"git/ref/heads/{_quote_branch(branch)}")
        return CommitRef.from_dict(data)

    def create_ref(self, branch: str, sha: str) -> CommitRef:
        data = self.request("POST", "git/refs", {"ref": f"refs/heads/{branch}", "sha": sha})
        return CommitRef.from_dict(data)

    def update_ref(self, branch: str, sha: str, force: bool = True) -> CommitRef:
        data = self.request(
            "PATCH", f"git/refs/heads/{_quote_branch(branch)}", {"sha": sha, "force": force}
        )
        return CommitRef.from_dict(data)

    def delete_ref(self, branch: str) -> None:
        self.request("DELETE", f"git/refs/heads/{_quote_branch(branch)}")

    def get_commit(self, sha: str) -> GitCommit:
        data = self.request("GET", f"git/commits/{sha}")
        return GitCommit.from_dict(data)

    def create_blob(self, content: bytes) -> str:
        """Upload raw bytes as a blob and return its sha."""
        data = self.request(
            "POST",
            "git/blobs",
            {"content": base64.b64encode(content).decode("ascii"), "encoding": "base64"},
        )
        return _require_field(data, "sha", "POST git/blobs")

    def create_tree(self, base_tree_sha: str, entries: list[TreeEntry]) -> str:
        """Create a tree as a delta against `base_tree_sha` and return its sha."""
        data = self.request(
            "POST",
            "git/trees",
            {"base_tree": base_tree_sha, "tree": [entry.to_dict() for entry in entries]},
        )
        return _require_field(data, "sha", "POST git/trees")

    def create_commit(self, message: str, tree_sha: str, parent_shas: list[str]) -> str:
        data = self.request(
            "POST",
            "git/commits",
            {"message": message, "tree": tree_sha, "parents": list(parent_shas)},
        )
        return _require_field(data, "sha", "POST git/commits")

    # --------------------------------------------------------
    # Public API - Pull requests and issues
    # --------------------------------------------------------

    def get_pull_request(self, number: int) -> PullRequest:
        return PullRequest.from_dict(self.request("GET", f"pulls/{number}"))

    def find_open_pull_request(self, head_branch: str, base_branch: str | None = None) -> PullRequest | None:
        """Return the open PR whose head is `head_branch`, if any."""
        params = {"head": f"{self.repo.owner}:{head_branch}", "state": "open"}
        if base_branch:
            params["base"] = base_branch
        data = self.request("GET", "pulls", params=params) or []
        if not data:
            return None
        return PullRequest.from_dict(data[0])

    def create_pull_request(self, title: str, body: str, head: str, base: str) -> PullRequest:
        data = self.request("POST", "pulls", {"title": title, "body": body, "head": head, "base": base})
        return PullRequest.from_dict(data)

    def update_pull_request(self, number: int, title: str, body: str) -> PullRequest:
        data = self.request("PATCH", f"pulls/{number}", {"title": title, "body": body})
        return PullRequest.from_dict(data)

    def add_labels(self, issue_number: int, labels: list[str]) -> None:
        self.request("POST", f"issues/{issue_number}/labels", {"labels": list(labels)})

    def create_issue_comment(self, issue_number: int, body: str) -> int:
        """Post a comment on an issue or PR and return the comment id."""
        data = self.request("POST", f"issues/{issue_number}/comments", {"body": body})
        return data.get("id", 0)


# ============================================================
# Private Helpers
# ============================================================


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict):
        return data.get("message", response.text)
    return response.text


def _quote_branch(branch: str) -> str:
    """Percent-encode a branch for a URL path; `#`, `%` and `?` are valid in branch names."""
    return requests.utils.quote(branch, safe="/")


def _require_field(data: dict | list | None, key: str, operation: str) -> str:
    if not isinstance(data, dict) or not data.get(key):
        raise GitHubApiError(f"{operation} response has no '{key}'")
    return data[key]
