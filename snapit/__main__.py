#!/usr/bin/env python3
"""CLI entry point for snapit GitHub Actions tools.

Usage:
    python -m snapit <command> [options]

Commands:
    create-snapshot-branch   Commit a PR's snapshot version bump onto snapshot-release/<branch>
    create-release-pr        Create or update the Version Packages PR
    check-snapshot-versions  List workspace packages with snapshot versions
    create-pr-comment        Post a comment to a PR
"""

import argparse
import sys

from snapit.commands import (
    cmd_check_snapshot_versions,
    cmd_create_pr_comment,
    cmd_create_release_pr,
    cmd_create_snapshot_branch,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapit",
        description="snapit GitHub Actions release tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  create-snapshot-branch   Commit a PR's snapshot version bump onto snapshot-release/<branch>
  create-release-pr        Create or update the Version Packages PR
  check-snapshot-versions  List workspace packages with snapshot versions
  create-pr-comment        Post a comment to a PR

Examples (run from the repo root after `changeset version`):
  snapit create-snapshot-branch --pr-number 123
  snapit create-release-pr --base-branch main
  snapit check-snapshot-versions
  snapit create-pr-comment --pr-number 123 --message "Snapshot published"

GITHUB_TOKEN must be set; --repo defaults to GITHUB_REPOSITORY.
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # create-snapshot-branch command
    parser_snapshot = subparsers.add_parser(
        "create-snapshot-branch",
        help="Commit a PR's snapshot version bump onto its snapshot branch",
    )
    parser_snapshot.add_argument(
        "--pr-number",
        required=True,
        type=int,
        help="Source PR number",
    )
    _add_repo_arguments(parser_snapshot)
    parser_snapshot.add_argument(
        "--message",
        help="Commit message (default: from config, 'Snapshot release')",
    )

    # create-release-pr command
    parser_release = subparsers.add_parser(
        "create-release-pr",
        help="Create or update the Version Packages PR",
    )
    parser_release.add_argument(
        "--base-branch",
        default="main",
        help="Branch the release PR targets (default: main)",
    )
    _add_repo_arguments(parser_release)

    # check-snapshot-versions command
    parser_check = subparsers.add_parser(
        "check-snapshot-versions",
        help="List workspace packages with snapshot versions",
    )
    parser_check.add_argument(
        "--workspace",
        default=".",
        help="Workspace root containing package.json (default: current directory)",
    )

    # create-pr-comment command
    parser_comment = subparsers.add_parser(
        "create-pr-comment",
        help="Post a comment to a PR",
    )
    parser_comment.add_argument(
        "--pr-number",
        required=True,
        type=int,
        help="PR number to comment on",
    )
    parser_comment.add_argument(
        "--message",
        required=True,
        help="Comment body (markdown)",
    )
    parser_comment.add_argument(
        "--repo",
        help="Repository in owner/repo format (default: GITHUB_REPOSITORY)",
    )

    return parser


def _add_repo_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo",
        help="Repository in owner/repo format (default: GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--workspace",
        default=".",
        help="Git working tree the version bump ran in (default: current directory)",
    )
    parser.add_argument(
        "--config",
        help="Path to snapit YAML config (default: .github/snapit.yml if present)",
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "create-snapshot-branch":
        return cmd_create_snapshot_branch(
            pr_number=args.pr_number,
            repo=args.repo,
            workspace=args.workspace,
            config_path=args.config,
            message=args.message,
        )

    elif args.command == "create-release-pr":
        return cmd_create_release_pr(
            base_branch=args.base_branch,
            repo=args.repo,
            workspace=args.workspace,
            config_path=args.config,
        )

    elif args.command == "check-snapshot-versions":
        return cmd_check_snapshot_versions(workspace=args.workspace)

    elif args.command == "create-pr-comment":
        return cmd_create_pr_comment(
            pr_number=args.pr_number,
            message=args.message,
            repo=args.repo,
        )

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
