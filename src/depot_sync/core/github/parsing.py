"""Parsing helpers for gh api output."""

import json
import re
from typing import Any

from depot_sync.core.github.types import (
    FileContent,
    GitHubApiError,
    Release,
    ReleaseAsset,
    Repository,
)

# gh prints e.g. "gh: Not Found (HTTP 404)" on stderr for failed requests
_HTTP_STATUS_PATTERN = re.compile(r"\(HTTP (\d{3})\)")


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def parse_gh_api_error(
    stdout: str | bytes | None, stderr: str | bytes | None, operation: str
) -> GitHubApiError:
    """Build a GitHubApiError from the output of a failed ``gh api`` call.

    The HTTP status comes from gh's stderr; the API message from the JSON body gh
    writes to stdout. Falls back to stderr text when there is no JSON body.
    """
    stdout_text = _as_text(stdout).strip()
    stderr_text = _as_text(stderr).strip()

    status: int | None = None
    status_match = _HTTP_STATUS_PATTERN.search(stderr_text)
    if status_match is not None:
        status = int(status_match.group(1))

    message = ""
    if stdout_text.startswith("{"):
        try:
            body = json.loads(stdout_text)
        except json.JSONDecodeError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            message = body["message"]

    if not message:
        message = stderr_text.removeprefix("gh: ") or "unknown error"

    return GitHubApiError(f"Failed to {operation}: {message}", status=status)


def parse_release_lines(stdout: str) -> list[Release]:
    """Parse the one-release-per-line output of the paginated releases query."""
    releases: list[Release] = []
    for line in stdout.splitlines():
        if not line.strip():
            continue
        data = json.loads(line)
        assets = tuple(
            ReleaseAsset(
                id=int(asset["id"]),
                name=asset["name"],
                download_url=asset["browser_download_url"],
            )
            for asset in data.get("assets") or []
        )
        releases.append(Release(id=int(data["id"]), tag_name=data["tag_name"], assets=assets))
    return releases


def parse_file_content(data: Any, path: str) -> FileContent:
    """Parse a contents API response for a single file.

    Raises:
        GitHubApiError: If the path resolves to something other than a file
    """
    if not isinstance(data, dict) or data.get("type") != "file":
        raise GitHubApiError(f"Path {path!r} is not a file")
    return FileContent(content_base64=data.get("content") or "", sha=data["sha"])


def parse_repository(data: dict[str, Any]) -> Repository:
    """Parse a repository API response."""
    return Repository(
        owner=data["owner"]["login"],
        name=data["name"],
        default_branch=data.get("default_branch") or "",
    )
