"""GitHub operations subpackage.

This subpackage provides abstractions over the GitHub REST API with support for
testing via fakes and dry-run via wrappers.
"""

from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.dry_run import DryRunGitHub
from depot_sync.core.github.real import RealGitHub
from depot_sync.core.github.types import (
    CommitInfo,
    FileContent,
    GitHubApiError,
    Release,
    ReleaseAsset,
    Repository,
    RepositoryId,
)

__all__ = [
    "GitHub",
    "RealGitHub",
    "DryRunGitHub",
    "GitHubApiError",
    "CommitInfo",
    "FileContent",
    "Release",
    "ReleaseAsset",
    "Repository",
    "RepositoryId",
]
