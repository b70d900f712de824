"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from depot_sync.core.downloader.abc import Downloader
from depot_sync.core.downloader.real import RealDownloader
from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.dry_run import DryRunGitHub
from depot_sync.core.github.real import RealGitHub
from depot_sync.core.user_feedback import InteractiveFeedback, QuietFeedback, UserFeedback


@dataclass(frozen=True)
class DepotContext:
    """Immutable context holding all dependencies for depot-sync operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    github: GitHub
    downloader: Downloader
    feedback: UserFeedback
    cwd: Path  # Current working directory at CLI invocation
    dry_run: bool

    @staticmethod
    def for_test(
        github: GitHub | None = None,
        downloader: Downloader | None = None,
        feedback: UserFeedback | None = None,
        cwd: Path | None = None,
        dry_run: bool = False,
    ) -> "DepotContext":
        """Create a context for tests with fake defaults.

        Args:
            github: GitHub implementation (defaults to an empty FakeGitHub)
            downloader: URL downloader (defaults to an empty FakeDownloader)
            feedback: Feedback implementation (defaults to FakeUserFeedback)
            cwd: Working directory (defaults to a fixed sentinel path so tests
                never read the real Path.cwd())
            dry_run: Whether to enable dry-run mode

        Example:
            >>> github = FakeGitHub(files={("depot", "stable.json"): "[]"})
            >>> ctx = DepotContext.for_test(github=github)
        """
        from tests.fakes.user_feedback import FakeUserFeedback

        from depot_sync.core.downloader.fake import FakeDownloader
        from depot_sync.core.github.fake import FakeGitHub

        return DepotContext(
            github=github if github is not None else FakeGitHub(),
            downloader=downloader if downloader is not None else FakeDownloader(),
            feedback=feedback if feedback is not None else FakeUserFeedback(),
            cwd=cwd if cwd is not None else Path("/test/default/cwd"),
            dry_run=dry_run,
        )


def create_context(*, token: str | None, dry_run: bool, quiet: bool) -> DepotContext:
    """Create production context with real implementations.

    Args:
        token: GitHub token handed to gh for every request. None leaves gh to its
            own authentication, which is enough for commands that never call GitHub.
        dry_run: If True, wrap GitHub so writes are printed instead of executed
        quiet: If True, suppress informational output and warnings

    Returns:
        DepotContext with real implementations
    """
    github: GitHub = RealGitHub(token)
    if dry_run:
        github = DryRunGitHub(github)

    feedback: UserFeedback = QuietFeedback() if quiet else InteractiveFeedback()

    return DepotContext(
        github=github,
        downloader=RealDownloader(),
        feedback=feedback,
        cwd=Path.cwd(),
        dry_run=dry_run,
    )
