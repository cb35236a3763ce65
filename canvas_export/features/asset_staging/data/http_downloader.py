import logging
import os
from pathlib import Path

import requests

from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import AssetDownloadError
from ..domain.interfaces import IAssetDownloader

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536


class RequestsDownloader(IAssetDownloader):
    """
    Streams remote assets to disk in 64kb chunks so large videos
    never sit in memory.
    """

    def __init__(self, timeout: float = None, session: requests.Session = None):
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def download(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")

        logger.info(f"⬇️ Downloading remote asset: {url}")
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                if not response.ok:
                    raise AssetDownloadError(url, f"HTTP {response.status_code} {response.reason}")

                with open(partial, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except requests.RequestException as e:
            self._discard(partial)
            raise AssetDownloadError(url, str(e)) from e
        except AssetDownloadError:
            self._discard(partial)
            raise

        # Atomic within the assets dir: a half-written file is never a cache hit
        os.replace(partial, destination)
        logger.info(f"✅ Asset downloaded to: {destination}")

    @staticmethod
    def _discard(path: Path) -> None:
        if path.exists():
            path.unlink()
