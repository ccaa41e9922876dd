"""GitHub API wrapper and Actions output helpers."""

from .client import GitHubApiClient, GitHubApiError
from .output import write_github_output, write_github_step_summary

__all__ = [
    "GitHubApiClient",
    "GitHubApiError",
    "write_github_output",
    "write_github_step_summary",
]
