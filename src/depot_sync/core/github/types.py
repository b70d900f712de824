"""Type definitions for GitHub operations."""

import re
from dataclasses import dataclass

_REPO_ID_PATTERN = re.compile(r"^[^/\s]+/[^/\s]+$")


@dataclass(frozen=True)
class RepositoryId:
    """Owner/name pair identifying a GitHub repository."""

    owner: str
    repo: str

    @staticmethod
    def parse(value: str) -> "RepositoryId":
        """Parse an ``owner/repo`` identifier.

        Raises:
            ValueError: If the value is not of the form ``owner/repo``
        """
        stripped = value.strip()
        if not _REPO_ID_PATTERN.match(stripped):
            raise ValueError(f"Invalid repository input: {value!r}")
        owner, repo = stripped.split("/")
        return RepositoryId(owner=owner, repo=repo)

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class ReleaseAsset:
    """A downloadable file attached to a release."""

    id: int
    name: str
    download_url: str


@dataclass(frozen=True)
class Release:
    """A GitHub release and its assets, in the order GitHub lists them."""

    id: int
    tag_name: str
    assets: tuple[ReleaseAsset, ...]


@dataclass(frozen=True)
class FileContent:
    """Contents of a file as returned by the contents API."""

    content_base64: str
    sha: str  # blob sha, required to overwrite the file


@dataclass(frozen=True)
class Repository:
    """Minimal repository metadata."""

    owner: str
    name: str
    default_branch: str


@dataclass(frozen=True)
class CommitInfo:
    """Commit produced by a contents write."""

    sha: str
    url: str | None


class GitHubApiError(Exception):
    """A GitHub API request failed.

    ``status`` is the HTTP status when one could be determined, otherwise None
    (for example when gh itself failed to run).
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_conflict(self) -> bool:
        # GitHub answers 422 for "Reference already exists", 409 for sha mismatches
        return self.status in (409, 422)

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status})"
