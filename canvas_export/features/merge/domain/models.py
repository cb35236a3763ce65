from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from canvas_export.core.shared_types import MediaFile

@dataclass(frozen=True)
class MergeRequest:
    """
    Frames (an ffmpeg image2 pattern) plus optional audio into one video.
    """
    frame_pattern: Path
    fps: int
    output_video: MediaFile
    audio: Optional[MediaFile] = None
    video_codec: str = "libx264"
    pixel_format: str = "yuv420p"

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
