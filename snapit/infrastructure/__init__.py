"""Infrastructure components for snapit.

This layer handles external system interactions:
- GitHub REST API via requests
- GitHub Actions outputs
"""

from .github import (
    GitHubApiClient,
    GitHubApiError,
    write_github_output,
    write_github_step_summary,
)

__all__ = [
    "GitHubApiClient",
    "GitHubApiError",
    "write_github_output",
    "write_github_step_summary",
]
