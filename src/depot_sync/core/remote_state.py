"""Read the currently published depot file and classify why it may be absent."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Literal

from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.types import GitHubApiError, RepositoryId
from depot_sync.core.types import DestinationRoute

logger = logging.getLogger(__name__)

# GitHub's 404 body when the ?ref= branch itself can't be resolved
_MISSING_REF_PATTERN = re.compile(r"no commit found for the ref", re.IGNORECASE)

AbsenceReason = Literal["file_not_found", "branch_not_found"]


@dataclass(frozen=True)
class RemoteFile:
    """The destination file exists."""

    content: str
    sha: str
    kind: Literal["file"] = "file"


@dataclass(frozen=True)
class RemoteAbsent:
    """The destination file or its branch does not exist yet."""

    reason: AbsenceReason
    kind: Literal["absent"] = "absent"


@dataclass(frozen=True)
class RemoteUnexpected:
    """Reading failed for a reason that must not be mistaken for absence."""

    error: str
    kind: Literal["unexpected"] = "unexpected"


RemoteState = RemoteFile | RemoteAbsent | RemoteUnexpected


def classify_read_error(error: GitHubApiError) -> RemoteAbsent | RemoteUnexpected:
    """Map a failed contents request onto a RemoteState."""
    if not error.is_not_found:
        return RemoteUnexpected(error=str(error))
    if _MISSING_REF_PATTERN.search(error.message):
        return RemoteAbsent(reason="branch_not_found")
    return RemoteAbsent(reason="file_not_found")


def decode_content(content_base64: str) -> str:
    """Decode contents API base64 (which wraps lines) into text."""
    return base64.b64decode(content_base64).decode("utf-8")


def read_remote_state(github: GitHub, repo: RepositoryId, route: DestinationRoute) -> RemoteState:
    """Fetch the current content and blob sha of a route's file with a single request."""
    try:
        file_content = github.get_file_content(repo, route.branch, route.path)
    except GitHubApiError as e:
        state = classify_read_error(e)
        logger.debug("Reading %s failed (%s): %s", route, state.kind, e)
        return state

    try:
        content = decode_content(file_content.content_base64)
    except (binascii.Error, UnicodeDecodeError) as e:
        return RemoteUnexpected(error=f"could not decode {route.path}: {e}")
    return RemoteFile(content=content, sha=file_content.sha)
