"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod

from depot_sync.core.github.types import (
    CommitInfo,
    FileContent,
    Release,
    Repository,
    RepositoryId,
)


class GitHub(ABC):
    """Abstract interface for the GitHub operations depot-sync needs.

    All implementations (real, dry-run and fake) must implement this interface.
    Failed requests raise GitHubApiError.
    """

    @abstractmethod
    def list_releases(self, repo: RepositoryId) -> list[Release]:
        """List all releases of a repository, newest first.

        Args:
            repo: Repository to list releases for

        Returns:
            Releases with their assets, in GitHub's listing order

        Raises:
            GitHubApiError: If the request fails
        """
        ...

    @abstractmethod
    def download_asset(self, repo: RepositoryId, asset_id: int) -> bytes:
        """Download the raw bytes of a release asset.

        Raises:
            GitHubApiError: On a non-2xx response or transport failure
        """
        ...

    @abstractmethod
    def get_file_content(self, repo: RepositoryId, branch: str, path: str) -> FileContent:
        """Get a file's base64 content and blob sha at a branch.

        Args:
            repo: Repository to read from
            branch: Ref to read at
            path: File path within the repository

        Returns:
            FileContent with base64 content and blob sha

        Raises:
            GitHubApiError: 404 when the ref or the path cannot be resolved,
                other statuses for anything else
        """
        ...

    @abstractmethod
    def create_or_update_file(
        self,
        repo: RepositoryId,
        branch: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> CommitInfo:
        """Create or update a file with a single commit.

        Args:
            repo: Destination repository
            branch: Branch to commit to
            path: File path within the repository
            content: New file content (plain text, encoded by the implementation)
            message: Commit message
            sha: Blob sha of the file being replaced. Must be given when the file
                exists and omitted when it does not.

        Raises:
            GitHubApiError: If the write is rejected
        """
        ...

    @abstractmethod
    def create_branch_ref(self, repo: RepositoryId, branch: str, object_sha: str) -> str:
        """Create ``refs/heads/<branch>`` pointing at an object.

        Returns:
            The full ref name that was created

        Raises:
            GitHubApiError: 422 when the ref already exists, other statuses otherwise
        """
        ...

    @abstractmethod
    def get_repository(self, repo: RepositoryId) -> Repository:
        """Get repository metadata.

        Raises:
            GitHubApiError: 404 when the repository does not exist or is not visible
        """
        ...
