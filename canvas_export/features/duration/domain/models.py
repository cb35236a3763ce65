import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Shortest export we ever produce, even for static or silent scenes
MIN_EXPORT_DURATION = 5.0


@dataclass(frozen=True)
class DurationEstimate:
    audio_seconds: float = 0.0
    max_video_seconds: float = 0.0
    minimum_seconds: float = MIN_EXPORT_DURATION

    @property
    def final_seconds(self) -> float:
        return max(self.max_video_seconds, self.audio_seconds, self.minimum_seconds)

    def total_frames(self, fps: int) -> int:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        return math.floor(self.final_seconds * fps)


@dataclass(frozen=True)
class DurationResolution:
    estimate: DurationEstimate
    # Extracted soundtrack, if any; reused by the merge step
    audio_path: Optional[Path] = None
