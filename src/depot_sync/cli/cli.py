import logging
import os

import click

from depot_sync.cli.commands.build import build_cmd
from depot_sync.cli.commands.update import update_cmd

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def _configure_logging(debug: bool) -> None:
    if debug or os.environ.get("DEPOT_SYNC_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="depot-sync")
@click.option("--debug", is_flag=True, help="Log every GitHub request and pipeline step.")
def cli(debug: bool) -> None:
    """Maintain PROS template depots generated from GitHub release assets."""
    _configure_logging(debug)


cli.add_command(build_cmd)
cli.add_command(update_cmd)


def main() -> None:
    """CLI entry point used by the `depot-sync` console script."""
    cli()
