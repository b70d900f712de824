"""Publish depot JSON to destination routes, writing only when content changed.

Each route runs probe -> (provision branch) -> compare -> (publish) strictly in
that order. Different routes touch different files and may run concurrently.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from depot_sync.core.branches import ensure_branch
from depot_sync.core.commit_message import create_commit_message
from depot_sync.core.depot import DepotJsons
from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.types import GitHubApiError, RepositoryId
from depot_sync.core.parallel import map_bounded
from depot_sync.core.remote_state import RemoteAbsent, RemoteUnexpected, read_remote_state
from depot_sync.core.types import DestinationRoute

logger = logging.getLogger(__name__)

RouteStatus = Literal["up_to_date", "published", "failed"]


class DestinationRepositoryMissing(Exception):
    """The destination repository does not exist; no route can be published."""

    def __init__(self, repo: RepositoryId) -> None:
        super().__init__(f"Destination repository {repo} does not exist or is not accessible")
        self.repo = repo


@dataclass(frozen=True)
class DepotTarget:
    """Desired content for one route."""

    route: DestinationRoute
    content: str


@dataclass(frozen=True)
class RouteOutcome:
    """Terminal state of reconciling one route."""

    route: DestinationRoute
    status: RouteStatus
    detail: str | None = None
    commit_sha: str | None = None
    created_branch: bool = False


def build_targets(routes: Sequence[DestinationRoute], depots: DepotJsons) -> list[DepotTarget]:
    """Pair routes with their track's JSON.

    Routes with an empty branch or path, and routes whose track was not
    assembled (beta in unified mode), are dropped.
    """
    targets: list[DepotTarget] = []
    for route in routes:
        content = depots.for_track(route.track)
        if route.is_complete and content is not None:
            targets.append(DepotTarget(route=route, content=content))
    return targets


def _check_repository(github: GitHub, repo: RepositoryId) -> str | None:
    """Confirm the destination repository exists.

    Returns:
        None when it exists, an error description when the lookup failed for
        another reason

    Raises:
        DestinationRepositoryMissing: If GitHub reports the repository as not found
    """
    try:
        github.get_repository(repo)
    except GitHubApiError as e:
        if e.is_not_found:
            raise DestinationRepositoryMissing(repo) from e
        return str(e)
    return None


def reconcile_route(
    github: GitHub,
    repo: RepositoryId,
    target: DepotTarget,
    *,
    message_override: str | None,
) -> RouteOutcome:
    """Bring one route's file in line with the desired content."""
    route = target.route
    state = read_remote_state(github, repo, route)

    remote_content = ""
    sha: str | None = None
    created_branch = False

    if isinstance(state, RemoteUnexpected):
        logger.debug("Unexpected read failure for %s: %s", route, state.error)
        return RouteOutcome(route=route, status="failed", detail=state.error)

    if isinstance(state, RemoteAbsent) and state.reason == "branch_not_found":
        provision = ensure_branch(github, repo, route.branch)
        if not provision.ok:
            return RouteOutcome(
                route=route,
                status="failed",
                detail=f"could not create branch {route.branch}: {provision.error}",
            )
        created_branch = provision.kind == "created"
    elif isinstance(state, RemoteAbsent):
        lookup_error = _check_repository(github, repo)
        if lookup_error is not None:
            return RouteOutcome(route=route, status="failed", detail=lookup_error)
    else:
        remote_content = state.content
        sha = state.sha

    if target.content == remote_content:
        logger.debug("%s is up to date", route)
        return RouteOutcome(route=route, status="up_to_date", created_branch=created_branch)

    message = message_override or create_commit_message(
        target.content, remote_content, track=route.track
    )
    try:
        commit = github.create_or_update_file(
            repo, route.branch, route.path, target.content, message, sha=sha
        )
    except GitHubApiError as e:
        return RouteOutcome(
            route=route, status="failed", detail=str(e), created_branch=created_branch
        )

    logger.debug("Published %s as %s", route, commit.sha)
    return RouteOutcome(
        route=route,
        status="published",
        commit_sha=commit.sha,
        created_branch=created_branch,
    )


def reconcile_routes(
    github: GitHub,
    repo: RepositoryId,
    targets: Sequence[DepotTarget],
    *,
    message_override: str | None,
    max_workers: int,
) -> list[RouteOutcome]:
    """Reconcile every target; one route failing never stops the others.

    Returns:
        One outcome per target, in input order

    Raises:
        ValueError: If two targets share a (branch, path)
        DestinationRepositoryMissing: If the destination repository is absent
    """
    locations = [target.route.location for target in targets]
    if len(set(locations)) != len(locations):
        raise ValueError("Two depot routes resolve to the same branch and path")

    return map_bounded(
        lambda target: reconcile_route(github, repo, target, message_override=message_override),
        targets,
        max_workers=max_workers,
    )
