import logging
from typing import List, Optional

from canvas_export.core.common.enums import ElementKind
from canvas_export.features.scene.domain.models import SceneDescription
from ..domain.models import CaptureConfig, SeekAccuracyStat

logger = logging.getLogger(__name__)


class SeekAccuracyMonitor:
    """
    Samples how closely the player follows the requested timeline.

    Only the first `seek_sample_frames` frames are compared, and the success
    ratio is computed over exactly that window.
    """

    def __init__(self, config: CaptureConfig):
        self.config = config
        self.stats: List[SeekAccuracyStat] = []

    def wants_sample(self, index: int) -> bool:
        return index < self.config.seek_sample_frames

    def record(self, index: int, target_seconds: float, position_seconds: Optional[float]) -> SeekAccuracyStat:
        # No video in the page means there is nothing to drift
        difference = 0.0 if position_seconds is None else abs(position_seconds - target_seconds)
        stat = SeekAccuracyStat(
            index=index,
            target_seconds=target_seconds,
            position_seconds=position_seconds,
            difference=difference,
            success=difference < self.config.accuracy_tolerance_seconds,
        )
        self.stats.append(stat)
        if not stat.success:
            logger.debug(f"Frame {index}: player at {position_seconds}s, wanted {target_seconds:.3f}s")
        return stat

    @property
    def successes(self) -> int:
        return sum(1 for s in self.stats if s.success)

    @property
    def failures(self) -> int:
        return sum(1 for s in self.stats if not s.success)

    @property
    def success_ratio(self) -> float:
        if not self.stats:
            return 1.0
        return self.successes / (self.successes + self.failures)

    def is_out_of_sync(self) -> bool:
        return self.success_ratio < self.config.min_success_ratio

    @staticmethod
    def is_fallback_eligible(scene: SceneDescription) -> bool:
        """
        Direct extraction drops every overlay, so it is only safe when the
        scene is nothing but a single video.
        """
        return len(scene.elements) == 1 and scene.elements[0].kind == ElementKind.VIDEO

    def should_fallback(self, scene: SceneDescription) -> bool:
        if not self.is_out_of_sync():
            return False
        logger.warning(
            f"⚠️ High seek failure rate ({self.failures}/{len(self.stats)} sampled frames). "
            f"Checking for single video fallback..."
        )
        return self.is_fallback_eligible(scene)
