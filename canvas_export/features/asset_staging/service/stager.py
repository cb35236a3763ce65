import logging
from pathlib import Path

from canvas_export.core.common.errors import AssetDownloadError
from canvas_export.features.scene.domain.models import SceneDescription
from ..data.asset_cache import AssetCache
from ..data.hasher import MD5UrlHasher
from ..data.http_downloader import RequestsDownloader
from ..domain.interfaces import IAssetDownloader, IUrlHasher
from ..domain.models import StagedScene, StagingReport

logger = logging.getLogger(__name__)


class AssetStager:
    """
    Pulls every remote element source into the job's assets/ directory.

    A failed download is not fatal: the element keeps its remote URL and
    the surface gets a chance to fetch it itself.
    """

    def __init__(self, downloader: IAssetDownloader = None, hasher: IUrlHasher = None):
        self.downloader = downloader or RequestsDownloader()
        self.hasher = hasher or MD5UrlHasher()

    def stage(self, scene: SceneDescription, assets_dir: Path) -> StagedScene:
        assets_dir.mkdir(parents=True, exist_ok=True)
        cache = AssetCache(assets_dir, self.hasher)
        report = StagingReport()

        staged_elements = []
        for element in scene.elements:
            if not element.is_remote:
                staged_elements.append(element)
                continue

            url = element.source
            if url in report.failures:
                # Already failed in this pass; don't hammer the host again
                staged_elements.append(element)
                continue

            entry = cache.lookup(url)
            if entry is not None:
                report.cache_hits += 1
            else:
                entry = cache.entry_for(url)
                try:
                    self.downloader.download(url, entry.local_path)
                    report.downloads += 1
                except AssetDownloadError as e:
                    logger.error(f"⚠️ {e}. Using original URL.")
                    report.failures[url] = e.reason
                    staged_elements.append(element)
                    continue

            report.entries.append(entry)
            staged_elements.append(element.with_source(str(entry.local_path), original_source=url))

        logger.info(
            f"Staged assets: {report.downloads} downloaded, {report.cache_hits} cached, "
            f"{len(report.failures)} left remote"
        )
        return StagedScene(scene=scene.with_elements(staged_elements), report=report)
