"""Plain HTTP downloads of template archives by URL."""

from depot_sync.core.downloader.abc import Downloader
from depot_sync.core.downloader.real import RealDownloader
from depot_sync.core.downloader.types import DownloadError

__all__ = ["Downloader", "RealDownloader", "DownloadError"]
