"""Fake GitHub operations for testing.

FakeGitHub is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

import base64
import hashlib
import threading
from typing import NamedTuple

from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.types import (
    CommitInfo,
    FileContent,
    GitHubApiError,
    Release,
    Repository,
    RepositoryId,
)


class FileWrite(NamedTuple):
    """A recorded create_or_update_file() call."""

    repo: RepositoryId
    branch: str
    path: str
    content: str
    message: str
    sha: str | None


def _blob_sha(content: str) -> str:
    return hashlib.sha1(content.encode("utf-8")).hexdigest()


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults. Writes mutate the in-memory
    file tree, so a second run observes the first run's commits.
    """

    def __init__(
        self,
        *,
        releases: list[Release] | None = None,
        assets: dict[int, bytes] | None = None,
        files: dict[tuple[str, str], str] | None = None,
        branches: set[str] | None = None,
        repository_exists: bool = True,
        list_releases_error: GitHubApiError | None = None,
        file_errors: dict[tuple[str, str], GitHubApiError] | None = None,
        write_errors: dict[tuple[str, str], GitHubApiError] | None = None,
        create_branch_error: GitHubApiError | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            releases: Releases returned by list_releases() for any repository
            assets: Mapping of asset id -> archive bytes. Unknown ids fail with 404.
            files: Mapping of (branch, path) -> file text
            branches: Existing branches. Defaults to the branches named in files.
            repository_exists: If False, get_repository() fails with 404
            list_releases_error: Error raised by list_releases()
            file_errors: Mapping of (branch, path) -> error raised when reading it
            write_errors: Mapping of (branch, path) -> error raised when writing it
            create_branch_error: Error raised by create_branch_ref()
        """
        self._releases = releases or []
        self._assets = assets or {}
        self._files = dict(files or {})
        if branches is None:
            branches = {branch for branch, _ in self._files}
        self._branches = set(branches)
        self._repository_exists = repository_exists
        self._list_releases_error = list_releases_error
        self._file_errors = file_errors or {}
        self._write_errors = write_errors or {}
        self._create_branch_error = create_branch_error

        self._lock = threading.Lock()
        self._download_calls: list[int] = []
        self._file_reads: list[tuple[str, str]] = []
        self._file_writes: list[FileWrite] = []
        self._created_branches: list[tuple[str, str]] = []
        self._repository_lookups: list[RepositoryId] = []

    @property
    def download_calls(self) -> list[int]:
        """Asset ids passed to download_asset(), in call order."""
        return self._download_calls

    @property
    def file_reads(self) -> list[tuple[str, str]]:
        """(branch, path) pairs passed to get_file_content()."""
        return self._file_reads

    @property
    def file_writes(self) -> list[FileWrite]:
        """Recorded create_or_update_file() calls."""
        return self._file_writes

    @property
    def created_branches(self) -> list[tuple[str, str]]:
        """(branch, object_sha) pairs passed to create_branch_ref()."""
        return self._created_branches

    @property
    def repository_lookups(self) -> list[RepositoryId]:
        """Repositories passed to get_repository()."""
        return self._repository_lookups

    @property
    def files(self) -> dict[tuple[str, str], str]:
        """Current in-memory file tree."""
        return self._files

    def list_releases(self, repo: RepositoryId) -> list[Release]:
        if self._list_releases_error is not None:
            raise self._list_releases_error
        return list(self._releases)

    def download_asset(self, repo: RepositoryId, asset_id: int) -> bytes:
        with self._lock:
            self._download_calls.append(asset_id)
        if asset_id not in self._assets:
            raise GitHubApiError(f"Failed to download asset {asset_id}: Not Found", status=404)
        return self._assets[asset_id]

    def get_file_content(self, repo: RepositoryId, branch: str, path: str) -> FileContent:
        with self._lock:
            self._file_reads.append((branch, path))
            if (branch, path) in self._file_errors:
                raise self._file_errors[(branch, path)]
            if branch not in self._branches:
                raise GitHubApiError(f"No commit found for the ref {branch}", status=404)
            if (branch, path) not in self._files:
                raise GitHubApiError("Not Found", status=404)
            content = self._files[(branch, path)]
        encoded = base64.encodebytes(content.encode("utf-8")).decode("ascii")
        return FileContent(content_base64=encoded, sha=_blob_sha(content))

    def create_or_update_file(
        self,
        repo: RepositoryId,
        branch: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> CommitInfo:
        with self._lock:
            self._file_writes.append(FileWrite(repo, branch, path, content, message, sha))
            if (branch, path) in self._write_errors:
                raise self._write_errors[(branch, path)]
            if branch not in self._branches:
                raise GitHubApiError(f"Branch {branch} not found", status=404)
            existing = self._files.get((branch, path))
            if existing is not None and sha is None:
                raise GitHubApiError('Invalid request. "sha" wasn\'t supplied.', status=422)
            if existing is not None and sha != _blob_sha(existing):
                raise GitHubApiError(f"{path} does not match {sha}", status=409)
            self._files[(branch, path)] = content
            commit_sha = hashlib.sha1(f"{branch}:{path}:{content}".encode()).hexdigest()
        return CommitInfo(sha=commit_sha, url=f"https://github.com/{repo}/commit/{commit_sha}")

    def create_branch_ref(self, repo: RepositoryId, branch: str, object_sha: str) -> str:
        with self._lock:
            self._created_branches.append((branch, object_sha))
            if self._create_branch_error is not None:
                raise self._create_branch_error
            if branch in self._branches:
                raise GitHubApiError("Reference already exists", status=422)
            self._branches.add(branch)
        return f"refs/heads/{branch}"

    def get_repository(self, repo: RepositoryId) -> Repository:
        with self._lock:
            self._repository_lookups.append(repo)
        if not self._repository_exists:
            raise GitHubApiError("Not Found", status=404)
        return Repository(owner=repo.owner, name=repo.repo, default_branch="main")
