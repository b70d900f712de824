"""Output utilities for CLI commands with clear intent.

user_output() is for human-facing messages and always goes to stderr, so
stdout stays free for machine-readable data written by machine_output().
"""

import click


def user_output(message: str = "") -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str = "") -> None:
    """Print machine-readable data to stdout."""
    click.echo(message)
