from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from canvas_export.core.config.settings import settings


@dataclass(frozen=True)
class CaptureConfig:
    """
    Every threshold the capture loop and the fallback decision use.
    """
    fps: int = field(default_factory=lambda: settings.EXPORT_FPS)
    # Pause after each seek so decode and redraw can settle
    settle_delay_seconds: float = 0.05
    progress_every: int = 5
    # Only the first N frames are compared against the player position
    seek_sample_frames: int = 5
    # A sampled frame counts as in sync below this difference
    accuracy_tolerance_seconds: float = 0.5
    # Below this success ratio the scene is considered out of sync
    min_success_ratio: float = 0.5

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.progress_every <= 0:
            raise ValueError("progress_every must be positive")
        if not 0.0 <= self.min_success_ratio <= 1.0:
            raise ValueError("min_success_ratio must be within 0-1")


@dataclass(frozen=True)
class FrameRecord:
    index: int
    timestamp: float
    path: Path


@dataclass(frozen=True)
class SeekAccuracyStat:
    index: int
    target_seconds: float
    # None when the surface has no video to compare against
    position_seconds: Optional[float]
    difference: float
    success: bool


@dataclass
class CaptureResult:
    total_frames: int
    frames: List[FrameRecord] = field(default_factory=list)
    stats: List[SeekAccuracyStat] = field(default_factory=list)
    seek_timeouts: int = 0

    @property
    def indices(self) -> List[int]:
        return [f.index for f in self.frames]
