"""Dry-run wrapper for GitHub operations."""

import click

from depot_sync.cli.output import user_output
from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.types import (
    CommitInfo,
    FileContent,
    Release,
    Repository,
    RepositoryId,
)


class DryRunGitHub(GitHub):
    """Dry-run wrapper for GitHub operations.

    Read operations are delegated to the wrapped implementation.
    Write operations print what would happen and return placeholder values.

    This wrapper prevents commits and branch creation in dry-run mode, while
    still allowing the reads needed to decide what would change.
    """

    def __init__(self, wrapped: GitHub) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The real GitHub implementation to wrap
        """
        self._wrapped = wrapped

    def list_releases(self, repo: RepositoryId) -> list[Release]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.list_releases(repo)

    def download_asset(self, repo: RepositoryId, asset_id: int) -> bytes:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.download_asset(repo, asset_id)

    def get_file_content(self, repo: RepositoryId, branch: str, path: str) -> FileContent:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_file_content(repo, branch, path)

    def get_repository(self, repo: RepositoryId) -> Repository:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_repository(repo)

    def create_or_update_file(
        self,
        repo: RepositoryId,
        branch: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> CommitInfo:
        """Print the intended commit instead of writing it."""
        verb = "update" if sha is not None else "create"
        user_output(
            click.style("[DRY RUN] ", fg="yellow")
            + f"Would {verb} {path} on {repo}@{branch} ({len(content)} bytes)"
        )
        return CommitInfo(sha="dry-run", url=None)

    def create_branch_ref(self, repo: RepositoryId, branch: str, object_sha: str) -> str:
        """Print the intended branch creation instead of creating it."""
        user_output(
            click.style("[DRY RUN] ", fg="yellow")
            + f"Would create branch {branch} on {repo} at {object_sha[:12]}"
        )
        return f"refs/heads/{branch}"
