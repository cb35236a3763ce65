from dataclasses import dataclass
from pathlib import Path

FRAME_FILENAME = "frame_{index}.png"
# Same naming in ffmpeg's image2 pattern syntax
FRAME_PATTERN = "frame_%d.png"


@dataclass(frozen=True)
class JobWorkspace:
    """
    The private directory tree of one export:

        <root>/<export_id>/
            assets/            staged remote media
            frames/            frame_0.png ... frame_N-1.png
            fallback_frames/   scratch space for direct extraction
            audio.aac          audio pulled from the first video
            <export_id>.mp4    merged output
    """
    export_id: str
    root: Path

    @property
    def job_dir(self) -> Path:
        return self.root / self.export_id

    @property
    def assets_dir(self) -> Path:
        return self.job_dir / "assets"

    @property
    def frames_dir(self) -> Path:
        return self.job_dir / "frames"

    @property
    def fallback_frames_dir(self) -> Path:
        return self.job_dir / "fallback_frames"

    @property
    def audio_path(self) -> Path:
        return self.job_dir / "audio.aac"

    @property
    def output_path(self) -> Path:
        return self.job_dir / f"{self.export_id}.mp4"

    def frame_path(self, index: int) -> Path:
        return self.frames_dir / FRAME_FILENAME.format(index=index)

    @property
    def frame_pattern(self) -> Path:
        return self.frames_dir / FRAME_PATTERN
