"""Fake downloader for testing."""

import threading

from depot_sync.core.downloader.abc import Downloader
from depot_sync.core.downloader.types import DownloadError


class FakeDownloader(Downloader):
    """In-memory downloader configured entirely through its constructor.

    URLs missing from ``files`` answer 404 Not Found.
    """

    def __init__(
        self,
        *,
        files: dict[str, bytes] | None = None,
        errors: dict[str, DownloadError] | None = None,
    ) -> None:
        """Create FakeDownloader.

        Args:
            files: Mapping of URL -> response body
            errors: Mapping of URL -> error raised when it is requested
        """
        self._files = files or {}
        self._errors = errors or {}
        self._requested_urls: list[str] = []
        self._lock = threading.Lock()

    def download(self, url: str) -> bytes:
        with self._lock:
            self._requested_urls.append(url)
        if url in self._errors:
            raise self._errors[url]
        if url not in self._files:
            raise DownloadError(f"Failed to download {url}", status=404, reason="Not Found")
        return self._files[url]

    @property
    def requested_urls(self) -> list[str]:
        """URLs passed to download(), in call order."""
        with self._lock:
            return list(self._requested_urls)
