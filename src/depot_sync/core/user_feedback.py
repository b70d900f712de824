"""User-facing diagnostic output with mode awareness."""

from abc import ABC, abstractmethod

import click

from depot_sync.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing diagnostic output that's mode-aware.

    Pipeline code calls ctx.feedback instead of threading "quiet" booleans
    through function signatures.

    Two modes:
    - Interactive: Show all diagnostics (info, warnings, success, errors)
    - Quiet: Suppress info and warnings, still show success and errors
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message (suppressed in quiet mode)."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Show warning (suppressed in quiet mode)."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message (always shown)."""


class InteractiveFeedback(UserFeedback):
    """Feedback shown in interactive mode (all messages)."""

    def info(self, message: str) -> None:
        user_output(message)

    def warning(self, message: str) -> None:
        user_output(click.style("Warning: ", fg="yellow") + message)

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))


class QuietFeedback(UserFeedback):
    """Feedback for --quiet-warnings runs (info and warnings dropped)."""

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))
