"""Create PR comment command."""

from __future__ import annotations

import sys

from snapit import SnapitError
from snapit.infrastructure import GitHubApiClient
from snapit.services import PullRequestService, WorkspaceDiffReader


def cmd_create_pr_comment(
    pr_number: int,
    message: str,
    repo: str | None = None,
) -> int:
    """Post a comment to a PR.

    Args:
        pr_number: PR to comment on
        message: Markdown comment body
        repo: Repository in owner/repo format (default: GITHUB_REPOSITORY)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if not message.strip():
        print("Comment message is empty", file=sys.stderr)
        return 1

    try:
        client = GitHubApiClient.from_environment(repo=repo)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    pr_service = PullRequestService(client=client, reader=WorkspaceDiffReader())
    try:
        pr_service.post_comment(pr_number, message)
    except SnapitError as e:
        print(f"Failed to post comment: {e}", file=sys.stderr)
        return 1
    return 0
