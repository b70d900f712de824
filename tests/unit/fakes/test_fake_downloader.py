"""Tests for FakeDownloader test infrastructure."""

import pytest

from depot_sync.core.downloader.fake import FakeDownloader
from depot_sync.core.downloader.types import DownloadError


def test_unknown_url_is_not_found() -> None:
    with pytest.raises(DownloadError) as exc_info:
        FakeDownloader().download("https://example.com/missing.zip")

    assert exc_info.value.status == 404
    assert exc_info.value.reason == "Not Found"


def test_configured_error_wins_over_file() -> None:
    url = "https://example.com/kernel.zip"
    error = DownloadError("timed out")
    downloader = FakeDownloader(files={url: b"PK"}, errors={url: error})

    with pytest.raises(DownloadError) as exc_info:
        downloader.download(url)

    assert exc_info.value is error


def test_requested_urls_are_tracked_in_order() -> None:
    downloader = FakeDownloader(files={"https://a/1.zip": b"1", "https://a/2.zip": b"2"})

    assert downloader.download("https://a/2.zip") == b"2"
    assert downloader.download("https://a/1.zip") == b"1"

    assert downloader.requested_urls == ["https://a/2.zip", "https://a/1.zip"]
