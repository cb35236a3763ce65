from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from canvas_export.features.scene.domain.models import SceneDescription


@dataclass(frozen=True)
class AssetCacheEntry:
    """
    A remote URL and the file it was (or will be) stored at inside the job.
    """
    url: str
    digest: str
    local_path: Path


@dataclass
class StagingReport:
    """
    What happened while staging one scene.
    """
    entries: List[AssetCacheEntry] = field(default_factory=list)
    # url -> reason, for every asset that stayed remote
    failures: Dict[str, str] = field(default_factory=dict)
    downloads: int = 0
    cache_hits: int = 0

    @property
    def staged_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class StagedScene:
    scene: SceneDescription
    report: StagingReport
