"""Tests for PullRequestService.

Tests cover:
- Fetching the source PR
- Creating vs updating the Version Packages PR and labeling it
- Posting comments
- Rendering the release description from changed changelogs
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from snapit.domain.changelog import ChangelogFormatError
from snapit.domain.changes import ChangeKind, ChangeRecord, ClassifiedChanges
from snapit.domain.github import GitHubLabel, PullRequest
from snapit.infrastructure.github.client import GitHubApiClient, GitHubApiError
from snapit.services.release_pr import RELEASE_PR_INTRO, PullRequestService, ReleasePullRequestError
from snapit.services.workspace_diff import WorkspaceDiffReader


class TestPullRequestOperations(unittest.TestCase):
    """Tests for PR API calls with a mocked client."""

    def setUp(self):
        self.client = MagicMock(spec=GitHubApiClient)
        self.service = PullRequestService(client=self.client, reader=WorkspaceDiffReader())

    def test_get_pull_request(self):
        self.client.get_pull_request.return_value = PullRequest(number=5, title="t", head_ref="feature/x")

        pr = self.service.get_pull_request(5)

        self.assertEqual(pr.head_ref, "feature/x")
        self.client.get_pull_request.assert_called_once_with(5)

    def test_get_pull_request_failure(self):
        self.client.get_pull_request.side_effect = GitHubApiError("Not Found", status_code=404)

        with self.assertRaises(ReleasePullRequestError):
            self.service.get_pull_request(5)

    def test_creates_pr_when_none_open(self):
        self.client.find_open_pull_request.return_value = None
        self.client.create_pull_request.return_value = PullRequest(number=9, title="Version Packages")

        pr, created = self.service.open_or_update(
            "changeset-release/main", "main", "Version Packages", "body", label="Version Package"
        )

        self.assertTrue(created)
        self.assertEqual(pr.number, 9)
        self.client.create_pull_request.assert_called_once_with(
            "Version Packages", "body", "changeset-release/main", "main"
        )
        self.client.add_labels.assert_called_once_with(9, ["Version Package"])

    def test_updates_open_pr(self):
        existing = PullRequest(number=3, title="Version Packages")
        self.client.find_open_pull_request.return_value = existing
        self.client.update_pull_request.return_value = PullRequest(
            number=3, title="Version Packages", labels=[GitHubLabel("Version Package")]
        )

        pr, created = self.service.open_or_update(
            "changeset-release/main", "main", "Version Packages", "new body", label="Version Package"
        )

        self.assertFalse(created)
        self.client.update_pull_request.assert_called_once_with(3, "Version Packages", "new body")
        self.client.create_pull_request.assert_not_called()
        self.client.add_labels.assert_not_called()

    def test_open_or_update_failure(self):
        self.client.find_open_pull_request.side_effect = GitHubApiError("boom", status_code=500)

        with self.assertRaises(ReleasePullRequestError):
            self.service.open_or_update("changeset-release/main", "main", "t", "b")

    def test_post_comment(self):
        self.client.create_issue_comment.return_value = 77

        self.assertEqual(self.service.post_comment(5, "hello"), 77)
        self.client.create_issue_comment.assert_called_once_with(5, "hello")

    def test_post_comment_failure(self):
        self.client.create_issue_comment.side_effect = GitHubApiError("forbidden", status_code=403)

        with self.assertRaises(ReleasePullRequestError):
            self.service.post_comment(5, "hello")


class TestDescribeRelease(unittest.TestCase):
    """Tests for rendering the release PR body."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.service = PullRequestService(
            client=MagicMock(spec=GitHubApiClient), reader=WorkspaceDiffReader(self.root)
        )

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, relative: str, text: str) -> ChangeRecord:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return ChangeRecord(relative, ChangeKind.MODIFIED, "M")

    def test_includes_changed_changelogs_only(self):
        changelog = self._write(
            "packages/a/CHANGELOG.md", "# a\n\n## 1.1.0\n\n### Minor Changes\n\n- New thing\n"
        )
        manifest = self._write("packages/a/package.json", '{"name": "a"}')
        changes = ClassifiedChanges(to_upsert=(manifest, changelog))

        body = self.service.describe_release(changes)

        self.assertTrue(body.startswith(RELEASE_PR_INTRO))
        self.assertIn("## a@1.1.0", body)
        self.assertIn("- New thing", body)
        self.assertNotIn('"name"', body)

    def test_malformed_changelog_raises(self):
        changelog = self._write("CHANGELOG.md", "just some text\n")

        with self.assertRaises(ChangelogFormatError):
            self.service.describe_release(ClassifiedChanges(to_upsert=(changelog,)))
