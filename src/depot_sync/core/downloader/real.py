"""Production downloader backed by requests."""

import logging

import requests

from depot_sync.core.downloader.abc import Downloader
from depot_sync.core.downloader.types import DownloadError

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 60
USER_AGENT = "depot-sync"


class RealDownloader(Downloader):
    """Downloads over HTTP(S) with a shared, connection-pooling session."""

    def __init__(self, session: requests.Session | None = None) -> None:
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": USER_AGENT})
        self._session = session

    def download(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=DOWNLOAD_TIMEOUT, allow_redirects=True)
        except requests.RequestException as e:
            raise DownloadError(f"Failed to download {url}: {e}") from e

        if response.status_code != 200:
            raise DownloadError(
                f"Failed to download {url}",
                status=response.status_code,
                reason=response.reason,
            )
        return response.content
