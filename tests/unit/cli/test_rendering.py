"""Tests for the update outcome table."""

from rich.console import Console

from depot_sync.cli.rendering import build_outcome_table
from depot_sync.core.reconcile import RouteOutcome
from depot_sync.core.types import DestinationRoute

STABLE = DestinationRoute(track="stable", branch="depot", path="stable.json")
BETA = DestinationRoute(track="beta", branch="depot", path="beta.json")


def _render(outcomes: list[RouteOutcome]) -> str:
    console = Console(width=200, record=True, force_terminal=False)
    console.print(build_outcome_table(outcomes))
    return console.export_text()


def test_one_row_per_route() -> None:
    table = build_outcome_table(
        [
            RouteOutcome(route=STABLE, status="up_to_date"),
            RouteOutcome(route=BETA, status="published", commit_sha="c0ffee1234"),
        ]
    )

    assert table.row_count == 2


def test_details_column() -> None:
    text = _render(
        [
            RouteOutcome(
                route=STABLE, status="published", commit_sha="c0ffee1234", created_branch=True
            ),
            RouteOutcome(route=BETA, status="failed", detail="Conflict (HTTP 409)"),
        ]
    )

    assert "created branch; commit c0ffee1" in text
    assert "Conflict (HTTP 409)" in text
    assert "failed" in text
