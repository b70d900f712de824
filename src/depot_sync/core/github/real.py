"""Production implementation of GitHub operations."""

import base64
import json
import logging
import os
from typing import Any
from urllib.parse import quote

from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.parsing import (
    parse_file_content,
    parse_gh_api_error,
    parse_release_lines,
    parse_repository,
)
from depot_sync.core.github.types import (
    CommitInfo,
    FileContent,
    GitHubApiError,
    Release,
    Repository,
    RepositoryId,
)
from depot_sync.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)

_API_HEADERS = [
    "-H",
    "Accept: application/vnd.github+json",
    "-H",
    "X-GitHub-Api-Version: 2022-11-28",
]

# One compact JSON object per release, so pages concatenate cleanly
_RELEASES_JQ = ".[] | {id, tag_name, assets: [.assets[] | {id, name, browser_download_url}]}"


class RealGitHub(GitHub):
    """Production implementation using the gh CLI.

    All operations execute ``gh api`` via subprocess. The token is handed to gh
    through ``GH_TOKEN`` in the child environment only.
    """

    def __init__(self, token: str | None) -> None:
        """Initialize RealGitHub.

        Args:
            token: GitHub token used to authenticate every request, or None to
                use whatever gh is already authenticated with
        """
        self._env = dict(os.environ)
        if token is not None:
            self._env["GH_TOKEN"] = token

    def _gh_api(
        self,
        args: list[str],
        *,
        operation: str,
        body: dict[str, Any] | None = None,
        binary: bool = False,
    ) -> Any:
        """Run ``gh api`` and return stdout, raising GitHubApiError on failure."""
        cmd = ["gh", "api", *args]
        if body is not None:
            cmd += ["--input", "-"]
        logger.debug("$ %s", " ".join(cmd))

        payload: str | bytes | None = None
        if body is not None:
            payload = json.dumps(body)
            if binary:
                payload = payload.encode("utf-8")

        try:
            result = run_subprocess_with_context(
                cmd,
                operation_context=operation,
                text=not binary,
                check=False,
                input=payload,
                env=self._env,
            )
        except RuntimeError as e:
            # gh itself could not be started
            raise GitHubApiError(str(e)) from e
        if result.returncode != 0:
            raise parse_gh_api_error(result.stdout, result.stderr, operation)
        return result.stdout

    def list_releases(self, repo: RepositoryId) -> list[Release]:
        stdout = self._gh_api(
            [
                "--paginate",
                *_API_HEADERS,
                f"/repos/{repo.owner}/{repo.repo}/releases?per_page=100",
                "--jq",
                _RELEASES_JQ,
            ],
            operation=f"list releases of {repo}",
        )
        return parse_release_lines(stdout)

    def download_asset(self, repo: RepositoryId, asset_id: int) -> bytes:
        return self._gh_api(
            [
                "-H",
                "Accept: application/octet-stream",
                f"/repos/{repo.owner}/{repo.repo}/releases/assets/{asset_id}",
            ],
            operation=f"download asset {asset_id} of {repo}",
            binary=True,
        )

    def get_file_content(self, repo: RepositoryId, branch: str, path: str) -> FileContent:
        endpoint = (
            f"/repos/{repo.owner}/{repo.repo}/contents/{quote(path.lstrip('/'))}"
            f"?ref={quote(branch, safe='')}"
        )
        stdout = self._gh_api(
            [*_API_HEADERS, endpoint],
            operation=f"read {path} at {branch} in {repo}",
        )
        return parse_file_content(json.loads(stdout), path)

    def create_or_update_file(
        self,
        repo: RepositoryId,
        branch: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> CommitInfo:
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha is not None:
            body["sha"] = sha

        stdout = self._gh_api(
            [
                "--method",
                "PUT",
                *_API_HEADERS,
                f"/repos/{repo.owner}/{repo.repo}/contents/{quote(path.lstrip('/'))}",
            ],
            operation=f"write {path} on {branch} in {repo}",
            body=body,
        )
        commit = json.loads(stdout).get("commit") or {}
        return CommitInfo(sha=commit.get("sha", ""), url=commit.get("html_url"))

    def create_branch_ref(self, repo: RepositoryId, branch: str, object_sha: str) -> str:
        stdout = self._gh_api(
            ["--method", "POST", *_API_HEADERS, f"/repos/{repo.owner}/{repo.repo}/git/refs"],
            operation=f"create branch {branch} in {repo}",
            body={"ref": f"refs/heads/{branch}", "sha": object_sha},
        )
        return json.loads(stdout)["ref"]

    def get_repository(self, repo: RepositoryId) -> Repository:
        stdout = self._gh_api(
            [*_API_HEADERS, f"/repos/{repo.owner}/{repo.repo}"],
            operation=f"get repository {repo}",
        )
        return parse_repository(json.loads(stdout))
