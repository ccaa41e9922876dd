"""Create snapshot branch command.

Thin command that orchestrates domain models and services.
No business logic - just wiring and coordination.
"""

from __future__ import annotations

import sys

from snapit import SnapitError
from snapit.domain.config import SnapitConfig
from snapit.domain.git_objects import strip_heads_prefix
from snapit.infrastructure import (
    GitHubApiClient,
    write_github_output,
    write_github_step_summary,
)
from snapit.services import (
    PipelineResult,
    PullRequestService,
    RefReconciliationFailed,
    ReleasePipeline,
)


def cmd_create_snapshot_branch(
    pr_number: int,
    repo: str | None = None,
    workspace: str = ".",
    config_path: str | None = None,
    message: str | None = None,
) -> int:
    """Commit the version bump of a PR onto its snapshot branch.

    Thin command that:
    1. Loads configuration and builds the API client
    2. Reads the source PR head branch and sha
    3. Runs the pipeline (status -> classify -> compose -> reconcile)
    4. Writes SNAPSHOT_BRANCH_REF and returns exit code

    Args:
        pr_number: Source PR number
        repo: Repository in owner/repo format (default: GITHUB_REPOSITORY)
        workspace: Working tree the version bump ran in
        config_path: Path to a snapit YAML config file
        message: Commit message override

    Returns:
        Exit code (0 for success or nothing to snapshot, 1 for failure)
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

    # --------------------------------------------------------
    # 2. Source PR
    # --------------------------------------------------------
    try:
        pr = pr_service.get_pull_request(pr_number)
    except SnapitError as e:
        print(f"Failed to create snapshot branch: {e}", file=sys.stderr)
        return 1

    source_branch = strip_heads_prefix(pr.head_ref)
    print(f"Source branch {source_branch} at {pr.head_sha}")

    # --------------------------------------------------------
    # 3. Compose and reconcile
    # --------------------------------------------------------
    try:
        result = pipeline.publish_snapshot(
            source_branch,
            pr.head_sha,
            message or config.snapshot_commit_message,
        )
    except RefReconciliationFailed as e:
        print(f"Failed to create snapshot branch: {e}", file=sys.stderr)
        print(f"Composed commit {e.commit_sha} is intact; rerun to retry", file=sys.stderr)
        return 1
    except SnapitError as e:
        print(f"Failed to create snapshot branch: {e}", file=sys.stderr)
        return 1

    if result.is_noop:
        print("No version files found. Nothing to snapshot.")
        return 0

    # --------------------------------------------------------
    # 4. Outputs
    # --------------------------------------------------------
    write_github_output("SNAPSHOT_BRANCH_REF", result.branch.ref)
    write_github_output("SNAPSHOT_COMMIT_SHA", result.composed.commit_sha)
    write_github_step_summary(_format_summary(result))

    print(f"Snapshot branch {result.branch.branch_name} {result.branch.action.value}")
    return 0


def _format_summary(result: PipelineResult) -> str:
    lines = [
        "## Snapshot release",
        "",
        f"- Branch: `{result.branch.branch_name}`",
        f"- Commit: `{result.composed.commit_sha}`",
        "",
    ]
    for path in result.composed.upserted_paths:
        lines.append(f"- updated `{path}`")
    for path in result.composed.deleted_paths:
        lines.append(f"- removed `{path}`")
    return "\n".join(lines) + "\n"
