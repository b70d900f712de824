"""End-to-end depot update: releases -> templates -> depots -> published files."""

import logging
from dataclasses import dataclass

from depot_sync.core.context import DepotContext
from depot_sync.core.depot import assemble_depots
from depot_sync.core.extraction import collect_release_assets, extract_templates
from depot_sync.core.github.types import RepositoryId
from depot_sync.core.reconcile import RouteOutcome, build_targets, reconcile_routes
from depot_sync.core.types import (
    NON_TEMPLATE_KINDS,
    DestinationRoute,
    ExtractionError,
    routes_are_unified,
)
from depot_sync.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateOptions:
    """Resolved settings for one update run."""

    source_repo: RepositoryId
    dest_repo: RepositoryId
    stable_route: DestinationRoute
    beta_route: DestinationRoute
    readable: bool
    message: str | None
    silent_non_templates: bool
    max_workers: int


@dataclass(frozen=True)
class UpdateResult:
    """What an update run did."""

    unified: bool
    template_count: int
    extraction_errors: list[ExtractionError]
    outcomes: list[RouteOutcome]

    @property
    def failed(self) -> bool:
        return any(outcome.status == "failed" for outcome in self.outcomes)


def report_extraction_errors(
    feedback: UserFeedback, errors: list[ExtractionError], *, silent_non_templates: bool
) -> None:
    """Surface skipped assets as warnings."""
    for error in errors:
        if silent_non_templates and error.kind in NON_TEMPLATE_KINDS:
            continue
        feedback.warning(f"Skipped asset: {error.describe()}")


def update_depots(ctx: DepotContext, options: UpdateOptions) -> UpdateResult:
    """Rebuild the depots from the source repository and publish any changes.

    Raises:
        GitHubApiError: If the source releases cannot be listed
        DestinationRepositoryMissing: If the destination repository is absent
    """
    unified = routes_are_unified(options.stable_route, options.beta_route)
    logger.debug(
        "Routes: stable=%s beta=%s unified=%s",
        options.stable_route,
        options.beta_route,
        unified,
    )

    releases = ctx.github.list_releases(options.source_repo)
    assets = collect_release_assets(releases)
    ctx.feedback.info(
        f"Found {len(assets)} assets in {len(releases)} releases of {options.source_repo}"
    )

    report = extract_templates(
        ctx.github, options.source_repo, assets, max_workers=options.max_workers
    )
    report_extraction_errors(
        ctx.feedback, report.errors, silent_non_templates=options.silent_non_templates
    )

    depots = assemble_depots(report.descriptors, unified=unified, readable=options.readable)
    for warning in depots.warnings:
        ctx.feedback.warning(warning)

    routes = [options.stable_route] if unified else [options.stable_route, options.beta_route]
    targets = build_targets(routes, depots)
    outcomes = reconcile_routes(
        ctx.github,
        options.dest_repo,
        targets,
        message_override=options.message,
        max_workers=options.max_workers,
    )

    return UpdateResult(
        unified=unified,
        template_count=len(report.descriptors),
        extraction_errors=report.errors,
        outcomes=outcomes,
    )
