from dataclasses import dataclass
from pathlib import Path
from canvas_export.core.shared_types import MediaFile

@dataclass(frozen=True)
class FrameExtractionRequest:
    """
    Decode `total_frames` frames at `fps` straight from one video file.
    """
    source_video: MediaFile
    output_dir: Path
    fps: int
    duration_seconds: float
    total_frames: int

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.duration_seconds <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration_seconds}")
