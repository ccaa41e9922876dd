"""Create or update the Version Packages PR command.

Thin command that orchestrates domain models and services.
No business logic - just wiring and coordination.
"""

from __future__ import annotations

import sys

from snapit import SnapitError
from snapit.domain.config import SnapitConfig
from snapit.domain.git_objects import strip_heads_prefix
from snapit.infrastructure import GitHubApiClient, write_github_output
from snapit.services import PullRequestService, ReleasePipeline


def cmd_create_release_pr(
    base_branch: str = "main",
    repo: str | None = None,
    workspace: str = ".",
    config_path: str | None = None,
) -> int:
    """Commit the `changeset version` output and open or update the release PR.

    Thin command that:
    1. Loads configuration and builds the API client
    2. Collects the version files and renders the changed changelog
       entries into the PR description, before any remote write
    3. Commits the version files on top of the base branch tip onto
       `changeset-release/<base>`
    4. Creates or updates the labeled PR from that branch
    5. Writes PR_NUMBER and returns exit code

    Args:
        base_branch: Branch the release PR targets
        repo: Repository in owner/repo format (default: GITHUB_REPOSITORY)
        workspace: Working tree `changeset version` ran in
        config_path: Path to a snapit YAML config file

    Returns:
        Exit code (0 for success or no version files, 1 for failure)
    """
    # --------------------------------------------------------
    # 1. Configuration and client
    # --------------------------------------------------------
    try:
        config = SnapitConfig.load(config_path, workspace=workspace)
        client = GitHubApiClient.from_environment(repo=repo, timeout=config.request_timeout)
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    pipeline = ReleasePipeline.create(client, config, workspace)
    pr_service = PullRequestService(client=client, reader=pipeline.reader)

    base_branch = strip_heads_prefix(base_branch)
    release_branch = f"{config.release_branch_prefix}{base_branch}"

    # --------------------------------------------------------
    # 2. Collect version files and render the PR description
    # --------------------------------------------------------
    print("Checking for version files")
    try:
        changes = pipeline.collect_changes()
    except SnapitError as e:
        print(f"Failed to read version files: {e}", file=sys.stderr)
        return 1

    if changes.is_empty:
        print("No version files found. Exiting without creating a Version Packages PR.")
        return 0

    try:
        body = pr_service.describe_release(changes)
    except (SnapitError, OSError) as e:
        print(f"Failed to render release PR description: {e}", file=sys.stderr)
        return 1

    # --------------------------------------------------------
    # 3. Commit version files onto the release branch
    # --------------------------------------------------------
    try:
        result = pipeline.publish_release_branch(
            base_branch, release_branch, config.release_commit_message, changes=changes
        )
    except SnapitError as e:
        print(f"Failed to update {release_branch}: {e}", file=sys.stderr)
        return 1

    if result.is_noop:
        print("No version files found. Exiting without creating a Version Packages PR.")
        return 0

    # --------------------------------------------------------
    # 4. Open or update the PR
    # --------------------------------------------------------
    try:
        pr, created = pr_service.open_or_update(
            head_branch=release_branch,
            base_branch=base_branch,
            title=config.release_pr_title,
            body=body,
            label=config.release_label,
        )
    except SnapitError as e:
        print(f"Failed to create or update release PR: {e}", file=sys.stderr)
        return 1

    # --------------------------------------------------------
    # 5. Outputs
    # --------------------------------------------------------
    write_github_output("PR_NUMBER", str(pr.number))
    print(f"Successfully {'created' if created else 'updated'} PR #{pr.number}")
    return 0
