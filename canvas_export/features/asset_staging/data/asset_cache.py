from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse, unquote

from ..domain.interfaces import IUrlHasher
from ..domain.models import AssetCacheEntry

DEFAULT_EXTENSION = ".bin"
# Longest extension (dot included) still treated as a real one
MAX_EXTENSION_LENGTH = 5


class AssetCache:
    """
    Content-addressed view over a job's assets/ directory.
    Layout: assets/{md5(url)}{ext}
    """

    def __init__(self, assets_dir: Path, hasher: IUrlHasher):
        self.assets_dir = assets_dir
        self.hasher = hasher

    def entry_for(self, url: str) -> AssetCacheEntry:
        digest = self.hasher.digest(url)
        local_path = self.assets_dir / f"{digest}{self.extension_for(url)}"
        return AssetCacheEntry(url=url, digest=digest, local_path=local_path)

    def lookup(self, url: str) -> Optional[AssetCacheEntry]:
        entry = self.entry_for(url)
        return entry if entry.local_path.exists() else None

    @staticmethod
    def extension_for(url: str) -> str:
        """
        Keeps a recognizable extension from the URL path (query and fragment
        ignored); anything missing or implausibly long becomes .bin.
        """
        path = unquote(urlparse(url).path)
        ext = PurePosixPath(path).suffix.lower()
        if not ext or len(ext) > MAX_EXTENSION_LENGTH:
            return DEFAULT_EXTENSION
        return ext
