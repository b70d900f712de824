"""CLI tests for the depot-sync update command.

Pipeline behavior is covered in tests/unit/core/test_update.py; these tests
focus on option resolution, exit codes and output.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from depot_sync.cli.cli import cli
from depot_sync.core.context import DepotContext
from depot_sync.core.github.fake import FakeGitHub
from depot_sync.core.github.types import GitHubApiError, RepositoryId
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.archives import make_release, make_template_archive

CLEAN_ENV = {
    "DEPOT_SYNC_REPO": None,
    "GITHUB_REPOSITORY": None,
    "GH_TOKEN": None,
    "GITHUB_TOKEN": None,
}


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep a developer's depot-sync.toml out of the tests
    monkeypatch.chdir(tmp_path)


def _github(**kwargs) -> FakeGitHub:  # type: ignore[no-untyped-def]
    return FakeGitHub(
        releases=[make_release(1, 1, 2)],
        assets={
            1: make_template_archive(name="kernel", version="3.8.0"),
            2: make_template_archive(name="kernel", version="4.0.0-beta.1"),
        },
        **kwargs,
    )


def _invoke(ctx: DepotContext | None, *args: str, env: dict[str, str | None] | None = None):
    runner = CliRunner()
    return runner.invoke(cli, ["update", *args], obj=ctx, env={**CLEAN_ENV, **(env or {})})


def test_update_publishes_both_tracks() -> None:
    github = _github(branches={"main"})
    feedback = FakeUserFeedback()
    ctx = DepotContext.for_test(github=github, feedback=feedback)

    result = _invoke(ctx, "--repo", "owner/templates")

    assert result.exit_code == 0, result.output
    assert set(github.files) == {("depot", "stable.json"), ("depot", "beta.json")}
    assert feedback.successes == ["✓ 2 templates, 2 of 2 depots updated"]
    assert "published" in result.output
    assert "created branch" in result.output


def test_update_reads_repo_from_environment() -> None:
    github = _github(branches={"depot"})
    ctx = DepotContext.for_test(github=github)

    result = _invoke(ctx, env={"GITHUB_REPOSITORY": "owner/templates"})

    assert result.exit_code == 0, result.output
    assert github.file_writes[0].repo == RepositoryId(owner="owner", repo="templates")


def test_update_publishes_to_dest_repo() -> None:
    github = _github(branches={"depot"})
    ctx = DepotContext.for_test(github=github)

    result = _invoke(ctx, "--repo", "owner/templates", "--dest-repo", "owner/depots")

    assert result.exit_code == 0, result.output
    assert {write.repo for write in github.file_writes} == {
        RepositoryId(owner="owner", repo="depots")
    }


def test_same_path_for_both_tracks_publishes_one_file() -> None:
    github = _github(branches={"depot"})
    ctx = DepotContext.for_test(github=github)

    result = _invoke(
        ctx,
        "--repo",
        "owner/templates",
        "--path",
        "depot.json",
        "--pre-release-path",
        "depot.json",
        "--compact",
    )

    assert result.exit_code == 0, result.output
    assert list(github.files) == [("depot", "depot.json")]
    content = github.files[("depot", "depot.json")]
    assert "\n" not in content
    assert len(json.loads(content)) == 2


def test_pre_release_branch_routes_beta_elsewhere() -> None:
    github = _github(branches={"depot", "depot-beta"})
    ctx = DepotContext.for_test(github=github)

    result = _invoke(ctx, "--repo", "owner/templates", "--pre-release-branch", "depot-beta")

    assert result.exit_code == 0, result.output
    assert set(github.files) == {("depot", "stable.json"), ("depot-beta", "beta.json")}


def test_second_run_reports_up_to_date() -> None:
    github = _github(branches={"depot"})
    feedback = FakeUserFeedback()
    ctx = DepotContext.for_test(github=github, feedback=feedback)

    _invoke(ctx, "--repo", "owner/templates")
    result = _invoke(ctx, "--repo", "owner/templates")

    assert result.exit_code == 0, result.output
    assert "up to date" in result.output
    assert feedback.successes[-1] == "✓ 2 templates, 0 of 2 depots updated"
    assert len(github.file_writes) == 2


def test_failed_route_exits_nonzero_after_publishing_the_other() -> None:
    github = _github(
        branches={"depot"},
        write_errors={("depot", "beta.json"): GitHubApiError("Conflict", status=409)},
    )
    feedback = FakeUserFeedback()
    ctx = DepotContext.for_test(github=github, feedback=feedback)

    result = _invoke(ctx, "--repo", "owner/templates")

    assert result.exit_code == 1
    assert ("depot", "stable.json") in github.files
    assert len(feedback.errors) == 1
    assert feedback.errors[0].startswith("Failed to publish beta -> depot:beta.json")
    assert feedback.successes == []


def test_invalid_repository_is_rejected() -> None:
    result = _invoke(DepotContext.for_test(), "--repo", "not-a-repo")

    assert result.exit_code == 1
    assert "Invalid repository input" in result.output


def test_missing_repository_is_rejected() -> None:
    result = _invoke(DepotContext.for_test())

    assert result.exit_code == 1
    assert "--repo is required" in result.output


def test_missing_token_exits_before_any_request() -> None:
    result = _invoke(None, "--repo", "owner/templates")

    assert result.exit_code == 1
    assert "No GitHub token provided" in result.output


def test_release_listing_failure() -> None:
    github = FakeGitHub(list_releases_error=GitHubApiError("Not Found", status=404))

    result = _invoke(DepotContext.for_test(github=github), "--repo", "owner/templates")

    assert result.exit_code == 1
    assert "Could not list releases of owner/templates" in result.output


def test_missing_destination_repository() -> None:
    github = _github(branches={"depot"}, repository_exists=False)

    result = _invoke(DepotContext.for_test(github=github), "--repo", "owner/templates")

    assert result.exit_code == 1
    assert "does not exist" in result.output
    assert github.file_writes == []


def test_config_file_supplies_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        'repo = "owner/templates"\nbranch = "gh-pages"\nmessage = "Refresh depots"\n',
        encoding="utf-8",
    )
    github = _github(branches={"gh-pages"})
    ctx = DepotContext.for_test(github=github)

    result = _invoke(ctx, "--config", str(config_path))

    assert result.exit_code == 0, result.output
    assert {write.branch for write in github.file_writes} == {"gh-pages"}
    assert {write.message for write in github.file_writes} == {"Refresh depots"}


def test_explicit_option_overrides_config(tmp_path: Path) -> None:
    (tmp_path / "depot-sync.toml").write_text('repo = "owner/elsewhere"\n', encoding="utf-8")
    github = _github(branches={"depot"})
    ctx = DepotContext.for_test(github=github)

    result = _invoke(ctx, "--repo", "owner/templates")

    assert result.exit_code == 0, result.output
    assert github.file_writes[0].repo == RepositoryId(owner="owner", repo="templates")


def test_invalid_config_file_is_a_usage_error(tmp_path: Path) -> None:
    (tmp_path / "depot-sync.toml").write_text('max_workers = "lots"\n', encoding="utf-8")

    result = _invoke(DepotContext.for_test(), "--repo", "owner/templates")

    assert result.exit_code == 2
    assert "max_workers" in result.output
