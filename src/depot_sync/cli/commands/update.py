"""Rebuild the template depots and publish them."""

import click

from depot_sync.cli.ensure import Ensure
from depot_sync.cli.options import (
    obtain_context,
    parse_repository_option,
    route_options,
    source_options,
)
from depot_sync.cli.rendering import render_outcomes
from depot_sync.core.github.types import GitHubApiError
from depot_sync.core.reconcile import DestinationRepositoryMissing
from depot_sync.core.types import DestinationRoute
from depot_sync.core.update import UpdateOptions, update_depots


@click.command("update")
@source_options
@route_options
@click.option("--message", help="Commit message to use instead of the generated summary.")
@click.option("--dry-run", is_flag=True, help="Show what would be published without writing.")
@click.pass_context
def update_cmd(
    click_ctx: click.Context,
    repo: str | None,
    readable: bool,
    quiet_warnings: bool,
    silent_non_templates: bool,
    max_workers: int,
    token: str | None,
    dest_repo: str | None,
    branch: str,
    path: str,
    pre_release_branch: str | None,
    pre_release_path: str,
    message: str | None,
    dry_run: bool,
) -> None:
    """Rebuild depots from release assets and publish changed files.

    Every release asset of the source repository is inspected for a PROS
    template. Stable and pre-release templates go to separate depot files
    unless both routes point at the same file. A file is only committed when
    its content changed.
    """
    source_repo = parse_repository_option(repo, "--repo")
    target_repo = parse_repository_option(dest_repo, "--dest-repo") if dest_repo else source_repo

    options = UpdateOptions(
        source_repo=source_repo,
        dest_repo=target_repo,
        stable_route=DestinationRoute(track="stable", branch=branch, path=path),
        beta_route=DestinationRoute(
            track="beta", branch=pre_release_branch or branch, path=pre_release_path
        ),
        readable=readable,
        message=message or None,
        silent_non_templates=silent_non_templates,
        max_workers=max_workers,
    )
    ctx = obtain_context(click_ctx, token=token, dry_run=dry_run, quiet=quiet_warnings)

    try:
        result = update_depots(ctx, options)
    except GitHubApiError as e:
        Ensure.fail(f"Could not list releases of {source_repo}: {e}")
    except DestinationRepositoryMissing as e:
        Ensure.fail(str(e))

    for outcome in result.outcomes:
        if outcome.status == "failed":
            ctx.feedback.error(f"Failed to publish {outcome.route}: {outcome.detail}")

    render_outcomes(result.outcomes)

    if result.failed:
        raise SystemExit(1)

    published = sum(1 for outcome in result.outcomes if outcome.status == "published")
    total = len(result.outcomes)
    ctx.feedback.success(
        f"✓ {result.template_count} templates, {published} of {total} depots updated"
    )
