"""CLI command implementations."""

from snapit.commands.check_snapshot_versions import cmd_check_snapshot_versions
from snapit.commands.create_pr_comment import cmd_create_pr_comment
from snapit.commands.create_release_pr import cmd_create_release_pr
from snapit.commands.create_snapshot_branch import cmd_create_snapshot_branch

__all__ = [
    "cmd_check_snapshot_versions",
    "cmd_create_pr_comment",
    "cmd_create_release_pr",
    "cmd_create_snapshot_branch",
]
