"""Pull request service.

Core service that handles reading the source PR, creating or updating the
Version Packages PR, and posting comments, using GitHubApiClient.
"""

from __future__ import annotations

from dataclasses import dataclass

from snapit import SnapitError
from snapit.domain.changelog import ChangelogEntry
from snapit.domain.changes import ClassifiedChanges
from snapit.domain.github import PullRequest
from snapit.infrastructure.github.client import GitHubApiClient, GitHubApiError
from snapit.services.workspace_diff import WorkspaceDiffReader

CHANGELOG_FILE_NAME = "CHANGELOG.md"

RELEASE_PR_INTRO = (
    "This PR was opened by the Version Packages workflow. When you're ready to do a "
    "release, merge this and the packages will be published to npm automatically. "
    "If you're not ready to do a release yet, that's fine: whenever more changesets "
    "land on the base branch, this PR is updated."
)


class ReleasePullRequestError(SnapitError):
    """Raised when a pull request or comment operation fails."""

    pass


@dataclass
class PullRequestService:
    """Service for the pull request side of a release.

    Uses GitHubApiClient for actual API calls (dependency injection).
    """

    client: GitHubApiClient
    reader: WorkspaceDiffReader

    # ============================================================
    # Public API - Pull Request Operations
    # ============================================================

    def get_pull_request(self, pr_number: int) -> PullRequest:
        """Fetch a PR, whose head branch and sha seed a snapshot."""
        try:
            return self.client.get_pull_request(pr_number)
        except GitHubApiError as e:
            raise ReleasePullRequestError(f"Failed to fetch PR #{pr_number}: {e}") from e

    def open_or_update(
        self,
        head_branch: str,
        base_branch: str,
        title: str,
        body: str,
        label: str | None = None,
    ) -> tuple[PullRequest, bool]:
        """Create the PR from `head_branch`, or update the open one.

        Returns:
            Tuple of (PullRequest, created)
        """
        try:
            existing = self.client.find_open_pull_request(head_branch, base_branch)
            if existing is None:
                pr = self.client.create_pull_request(title, body, head_branch, base_branch)
                created = True
            else:
                pr = self.client.update_pull_request(existing.number, title, body)
                created = False

            if label and label not in pr.label_names:
                self.client.add_labels(pr.number, [label])
        except GitHubApiError as e:
            raise ReleasePullRequestError(f"Failed to open or update PR from {head_branch}: {e}") from e

        print(f"{'Created' if created else 'Updated'} PR #{pr.number}")
        return pr, created

    def post_comment(self, pr_number: int, body: str) -> int:
        """Post a new comment to a PR and return its id."""
        try:
            comment_id = self.client.create_issue_comment(pr_number, body)
        except GitHubApiError as e:
            raise ReleasePullRequestError(f"Failed to comment on PR #{pr_number}: {e}") from e

        print(f"Posted comment to PR #{pr_number}")
        return comment_id

    # ============================================================
    # Public API - Description
    # ============================================================

    def describe_release(self, changes: ClassifiedChanges) -> str:
        """Build the release PR body from the changed changelog files.

        Raises:
            ChangelogFormatError: If a changed changelog does not follow the
                changesets layout
        """
        sections = [RELEASE_PR_INTRO, "", "-----", ""]
        for path in changes.upsert_paths:
            if path.rsplit("/", 1)[-1] != CHANGELOG_FILE_NAME:
                continue
            entry = ChangelogEntry.from_file(self.reader.repo_path / path)
            sections.append(entry.format_markdown())
        return "\n".join(sections)
