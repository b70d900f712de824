"""Options shared by depot-sync commands and their resolution into domain values."""

from collections.abc import Callable
from typing import Any, TypeVar

import click

from depot_sync.cli.config import (
    DEFAULT_BETA_PATH,
    DEFAULT_BRANCH,
    DEFAULT_MAX_WORKERS,
    DEFAULT_STABLE_PATH,
    apply_config_file,
)
from depot_sync.cli.ensure import Ensure
from depot_sync.core.context import DepotContext, create_context
from depot_sync.core.github.types import RepositoryId

F = TypeVar("F", bound=Callable[..., Any])


def source_options(fn: F) -> F:
    """Options describing where templates come from and how depots are built."""
    decorators = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(dir_okay=False),
            is_eager=True,
            expose_value=False,
            callback=apply_config_file,
            help="TOML config file (default: ./depot-sync.toml if present).",
        ),
        click.option(
            "--repo",
            envvar=["DEPOT_SYNC_REPO", "GITHUB_REPOSITORY"],
            help="Source repository (owner/repo) whose releases hold the templates.",
        ),
        click.option(
            "--readable/--compact",
            default=True,
            help="Write indented JSON (default) or single-line JSON.",
        ),
        click.option(
            "--quiet-warnings",
            is_flag=True,
            help="Do not report skipped assets or other warnings.",
        ),
        click.option(
            "--silent-non-templates",
            is_flag=True,
            help="Do not report assets that are not templates (e.g. projects).",
        ),
        click.option(
            "--max-workers",
            type=click.IntRange(min=1),
            default=DEFAULT_MAX_WORKERS,
            show_default=True,
            help="Maximum concurrent GitHub requests.",
        ),
        click.option(
            "--token",
            envvar=["GH_TOKEN", "GITHUB_TOKEN"],
            help="GitHub token (default: $GH_TOKEN or $GITHUB_TOKEN).",
        ),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def route_options(fn: F) -> F:
    """Options describing where depots are published."""
    decorators = [
        click.option(
            "--dest-repo",
            help="Repository the depots are published to (default: --repo).",
        ),
        click.option(
            "--branch",
            default=DEFAULT_BRANCH,
            show_default=True,
            help="Branch holding the stable depot.",
        ),
        click.option(
            "--path",
            default=DEFAULT_STABLE_PATH,
            show_default=True,
            help="Path of the stable depot file.",
        ),
        click.option(
            "--pre-release-branch",
            help="Branch holding the beta depot (default: --branch).",
        ),
        click.option(
            "--pre-release-path",
            default=DEFAULT_BETA_PATH,
            show_default=True,
            help="Path of the beta depot file. Use the stable path to publish a single depot.",
        ),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def parse_repository_option(value: str | None, option_name: str) -> RepositoryId:
    """Parse an owner/repo option, exiting with a styled error when invalid."""
    value = Ensure.truthy(value, f"{option_name} is required (owner/repo)")
    try:
        return RepositoryId.parse(value)
    except ValueError as e:
        Ensure.fail(f"{option_name}: {e}")


def obtain_context(
    click_ctx: click.Context,
    *,
    token: str | None,
    dry_run: bool,
    quiet: bool,
    require_token: bool = True,
) -> DepotContext:
    """Return the injected context (tests) or build the production one.

    Unless ``require_token`` is False, a production context requires a token;
    its absence ends the run before any network request.
    """
    if click_ctx.obj is not None:
        return click_ctx.obj
    if require_token:
        token = Ensure.truthy(token, "No GitHub token provided. Pass --token or set GH_TOKEN.")
    click_ctx.obj = create_context(token=token, dry_run=dry_run, quiet=quiet)
    return click_ctx.obj
