"""Print a depot built from release assets without publishing it."""

import click

from depot_sync.cli.ensure import Ensure
from depot_sync.cli.options import obtain_context, parse_repository_option, source_options
from depot_sync.cli.output import machine_output
from depot_sync.core.context import DepotContext
from depot_sync.core.depot import assemble_depots
from depot_sync.core.extraction import (
    collect_release_assets,
    extract_templates,
    extract_templates_from_urls,
)
from depot_sync.core.github.types import GitHubApiError, RepositoryId
from depot_sync.core.types import ExtractionReport
from depot_sync.core.update import report_extraction_errors


def _extract_from_releases(
    ctx: DepotContext, source_repo: RepositoryId, max_workers: int
) -> ExtractionReport:
    try:
        releases = ctx.github.list_releases(source_repo)
    except GitHubApiError as e:
        Ensure.fail(f"Could not list releases of {source_repo}: {e}")

    return extract_templates(
        ctx.github, source_repo, collect_release_assets(releases), max_workers=max_workers
    )


@click.command("build")
@source_options
@click.option(
    "--url",
    "urls",
    multiple=True,
    help="Build from this template archive URL instead of --repo releases. Repeatable.",
)
@click.option(
    "--track",
    type=click.Choice(["stable", "beta", "all"]),
    default="all",
    show_default=True,
    help="Which templates to include. 'all' builds a single unified depot.",
)
@click.pass_context
def build_cmd(
    click_ctx: click.Context,
    repo: str | None,
    readable: bool,
    quiet_warnings: bool,
    silent_non_templates: bool,
    max_workers: int,
    token: str | None,
    urls: tuple[str, ...],
    track: str,
) -> None:
    """Build a depot from release assets and print it to stdout.

    With --url, the archives are fetched directly from the given URLs and no
    GitHub token is needed.
    """
    if urls:
        ctx = obtain_context(
            click_ctx, token=token, dry_run=True, quiet=quiet_warnings, require_token=False
        )
        report = extract_templates_from_urls(ctx.downloader, urls, max_workers=max_workers)
    else:
        source_repo = parse_repository_option(repo, "--repo")
        ctx = obtain_context(click_ctx, token=token, dry_run=True, quiet=quiet_warnings)
        report = _extract_from_releases(ctx, source_repo, max_workers)

    report_extraction_errors(
        ctx.feedback, report.errors, silent_non_templates=silent_non_templates
    )

    depots = assemble_depots(report.descriptors, unified=track == "all", readable=readable)
    for warning in depots.warnings:
        ctx.feedback.warning(warning)

    selected = depots.for_track("beta") if track == "beta" else depots.stable
    machine_output(selected or "[]")
