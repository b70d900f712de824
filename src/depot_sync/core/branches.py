"""Provision destination branches that do not exist yet."""

import logging
import re
from dataclasses import dataclass
from typing import Literal

from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.types import GitHubApiError, RepositoryId

logger = logging.getLogger(__name__)

# git's well-known hash of the tree with no entries
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

_ALREADY_EXISTS_PATTERN = re.compile(r"reference already exists", re.IGNORECASE)


@dataclass(frozen=True)
class BranchProvision:
    """Outcome of ensure_branch(). ``error`` is set only when kind is "failed"."""

    kind: Literal["created", "already_exists", "failed"]
    branch: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind != "failed"


def ensure_branch(github: GitHub, repo: RepositoryId, branch: str) -> BranchProvision:
    """Create an empty branch pointing at the empty tree.

    A branch that already exists (another writer got there first) counts as
    success.
    """
    try:
        github.create_branch_ref(repo, branch, EMPTY_TREE_SHA)
    except GitHubApiError as e:
        if e.is_conflict and _ALREADY_EXISTS_PATTERN.search(e.message):
            logger.debug("Branch %s already exists in %s", branch, repo)
            return BranchProvision(kind="already_exists", branch=branch)
        return BranchProvision(kind="failed", branch=branch, error=str(e))

    logger.debug("Created branch %s in %s", branch, repo)
    return BranchProvision(kind="created", branch=branch)
