from abc import ABC, abstractmethod
from pathlib import Path

class IUrlHasher(ABC):
    @abstractmethod
    def digest(self, url: str) -> str:
        """Stable hex digest naming the cached copy of a URL."""
        pass

class IAssetDownloader(ABC):
    @abstractmethod
    def download(self, url: str, destination: Path) -> None:
        """
        Fetches `url` into `destination`.
        The destination only appears once the body was written completely.

        Raises:
            AssetDownloadError: On any transport or HTTP failure.
        """
        pass
