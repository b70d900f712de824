"""Turn release assets into template descriptors."""

import logging
from collections.abc import Sequence

from depot_sync.core.downloader.abc import Downloader
from depot_sync.core.downloader.types import DownloadError
from depot_sync.core.github.abc import GitHub
from depot_sync.core.github.types import GitHubApiError, Release, ReleaseAsset, RepositoryId
from depot_sync.core.manifest import parse_template_archive
from depot_sync.core.parallel import map_bounded
from depot_sync.core.types import ExtractionError, ExtractionReport, TemplateDescriptor

logger = logging.getLogger(__name__)


def collect_release_assets(releases: Sequence[Release]) -> list[ReleaseAsset]:
    """Flatten release assets, keeping release-listing order."""
    return [asset for release in releases for asset in release.assets]


def extract_template(
    github: GitHub, repo: RepositoryId, asset: ReleaseAsset
) -> TemplateDescriptor | ExtractionError:
    """Download one asset and parse its template manifest.

    Never raises for per-asset problems; a failed download is reported as a
    ``download_failed`` error without retrying.
    """
    try:
        archive_bytes = github.download_asset(repo, asset.id)
    except GitHubApiError as e:
        return ExtractionError(
            kind="download_failed",
            message="failed to download the asset",
            source_url=asset.download_url,
            detail=str(e),
        )
    return parse_template_archive(archive_bytes, asset.download_url)


def extract_templates(
    github: GitHub,
    repo: RepositoryId,
    assets: Sequence[ReleaseAsset],
    *,
    max_workers: int,
) -> ExtractionReport:
    """Extract every asset concurrently and split results into descriptors and errors.

    Both lists keep the order of ``assets``.
    """
    logger.debug("Extracting %d assets from %s (max_workers=%d)", len(assets), repo, max_workers)
    results = map_bounded(
        lambda asset: extract_template(github, repo, asset), assets, max_workers=max_workers
    )

    return _build_report(results)


def extract_template_from_url(
    downloader: Downloader, url: str
) -> TemplateDescriptor | ExtractionError:
    """Download an archive from a plain URL and parse its template manifest.

    Any response other than HTTP 200 is a ``download_failed`` error.
    """
    try:
        archive_bytes = downloader.download(url)
    except DownloadError as e:
        return ExtractionError(
            kind="download_failed",
            message="failed to download the asset",
            source_url=url,
            detail=str(e),
        )
    return parse_template_archive(archive_bytes, url)


def extract_templates_from_urls(
    downloader: Downloader, urls: Sequence[str], *, max_workers: int
) -> ExtractionReport:
    """Extract templates from download URLs, keeping the order of ``urls``."""
    logger.debug("Extracting %d download URLs (max_workers=%d)", len(urls), max_workers)
    results = map_bounded(
        lambda url: extract_template_from_url(downloader, url), urls, max_workers=max_workers
    )
    return _build_report(results)


def _build_report(results: Sequence[TemplateDescriptor | ExtractionError]) -> ExtractionReport:
    descriptors: list[TemplateDescriptor] = []
    errors: list[ExtractionError] = []
    for result in results:
        if isinstance(result, ExtractionError):
            logger.debug("Skipping %s: %s", result.source_url, result.kind)
            errors.append(result)
        else:
            descriptors.append(result)
    return ExtractionReport(descriptors=descriptors, errors=errors)
