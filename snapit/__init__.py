"""snapit GitHub Actions release tools.

Publishes snapshot pre-release commits from an open pull request and keeps
the Version Packages PR up to date, writing commits through the GitHub Git
Data API instead of pushing from a local checkout.

A CLI package following:
- CLI Architecture: Single entry point dispatcher with explicit parameters
- Domain Modeling: Parse-once pattern with type-safe models
- Services Pattern: Core services with dependency injection

Usage:
    python -m snapit <command> [options]
    snapit <command> [options]

Structure:
    snapit/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── changes.py       # ChangeRecord, ClassifiedChanges, ContentChange
    │   ├── git_objects.py   # TreeEntry, CommitRef, ComposedCommit, ...
    │   ├── github.py        # PullRequest, RepoContext
    │   ├── changelog.py     # ChangelogEntry
    │   ├── packages.py      # PackageManifest
    │   └── config.py        # SnapitConfig
    ├── services/            # Business logic services
    │   ├── workspace_diff.py
    │   ├── change_classifier.py
    │   ├── commit_composer.py
    │   ├── branch_reconciler.py
    │   ├── release_pipeline.py  # status -> classify -> compose -> reconcile
    │   ├── release_pr.py
    │   └── snapshot_versions.py
    ├── infrastructure/      # External system interactions
    │   └── github/
    │       ├── client.py    # GitHub REST API via requests
    │       └── output.py    # GITHUB_OUTPUT / GITHUB_STEP_SUMMARY
    └── commands/            # Thin command orchestrators
        ├── create_snapshot_branch.py
        ├── create_release_pr.py
        ├── check_snapshot_versions.py
        └── create_pr_comment.py
"""

__version__ = "0.1.0"


class SnapitError(Exception):
    """Base class for every failure the release pipeline surfaces to callers."""

    pass
