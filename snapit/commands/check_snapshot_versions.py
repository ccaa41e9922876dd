"""Check snapshot versions command."""

from __future__ import annotations

import sys

from snapit.infrastructure import write_github_output
from snapit.services import SnapshotVersionService


def cmd_check_snapshot_versions(workspace: str = ".") -> int:
    """Report the workspace packages that have a snapshot version.

    Writes SNAPSHOT_RELEASES (JSON array of `name@version`) and
    HAS_SNAPSHOTS. Fails when no package has a snapshot version, since the
    snapshot bump produced nothing to publish.

    Args:
        workspace: Root of the yarn/npm workspace

    Returns:
        Exit code (0 if snapshots exist, 1 otherwise)
    """
    service = SnapshotVersionService(workspace)
    try:
        releases = service.find_snapshot_releases()
    except (OSError, ValueError) as e:
        print(f"Failed to read workspace packages: {e}", file=sys.stderr)
        return 1

    write_github_output("SNAPSHOT_RELEASES", releases)
    write_github_output("HAS_SNAPSHOTS", bool(releases))

    if not releases:
        print(
            "No snapshot releases found. Please run `yarn changeset` to add a changeset.",
            file=sys.stderr,
        )
        return 1

    for release in releases:
        print(f"Snapshot release: {release}")
    return 0
