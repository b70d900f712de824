"""Abstract base class for URL downloads."""

from abc import ABC, abstractmethod


class Downloader(ABC):
    """Fetches template archives from arbitrary download URLs."""

    @abstractmethod
    def download(self, url: str) -> bytes:
        """Return the body of a successful (HTTP 200) GET of ``url``.

        Raises:
            DownloadError: If the request fails or answers with any other status
        """
        ...
