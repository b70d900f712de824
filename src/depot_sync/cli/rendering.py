"""Rich rendering of update results."""

from rich.console import Console
from rich.table import Table

from depot_sync.core.reconcile import RouteOutcome

_STATUS_CELLS = {
    "up_to_date": "[dim]up to date[/dim]",
    "published": "[green]published[/green]",
    "failed": "[red]failed[/red]",
}


def build_outcome_table(outcomes: list[RouteOutcome]) -> Table:
    """Build a table with one row per route."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("track", style="cyan", no_wrap=True)
    table.add_column("branch", no_wrap=True)
    table.add_column("path", no_wrap=True)
    table.add_column("status", no_wrap=True)
    table.add_column("details")

    for outcome in outcomes:
        details: list[str] = []
        if outcome.created_branch:
            details.append("created branch")
        if outcome.commit_sha:
            details.append(f"commit {outcome.commit_sha[:7]}")
        if outcome.detail:
            details.append(outcome.detail)
        table.add_row(
            outcome.route.track,
            outcome.route.branch,
            outcome.route.path,
            _STATUS_CELLS[outcome.status],
            "; ".join(details) or "-",
        )
    return table


def render_outcomes(outcomes: list[RouteOutcome]) -> None:
    """Print the outcome table to stderr (consistent with user_output convention)."""
    console = Console(stderr=True, width=200)
    console.print(build_outcome_table(outcomes))
