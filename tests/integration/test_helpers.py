"""Shared helpers for tests that replace subprocess.run."""

import subprocess
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from pytest import MonkeyPatch

MockRun = Callable[..., subprocess.CompletedProcess]


@contextmanager
def mock_subprocess_run(monkeypatch: MonkeyPatch, mock_run: MockRun) -> Iterator[None]:
    """Route every subprocess.run() call to mock_run for the duration of the block."""
    with monkeypatch.context() as patch:
        patch.setattr(subprocess, "run", mock_run)
        yield


class RecordingRun:
    """subprocess.run replacement that records calls and replays canned results.

    ``responses`` are returned in order; each is (returncode, stdout, stderr).
    """

    def __init__(self, *responses: tuple[int, str | bytes, str | bytes]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
        self.calls.append((list(cmd), kwargs))
        returncode, stdout, stderr = self._responses.pop(0)
        return subprocess.CompletedProcess(
            args=cmd, returncode=returncode, stdout=stdout, stderr=stderr
        )
