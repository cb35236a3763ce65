from pathlib import Path
from typing import Optional

from canvas_export.core.shared_types import MediaFile
from canvas_export.features.workspace.domain.models import JobWorkspace
from ..data.ffmpeg_adapter import FFmpegMergeAdapter
from ..domain.interfaces import IVideoMerger
from ..domain.models import MergeRequest


def merge_workspace(workspace: JobWorkspace, fps: int, audio_path: Optional[Path] = None,
                    merger: IVideoMerger = None) -> Path:
    """
    Public Service API: encode a job's frames/ (and audio) into <export_id>.mp4.
    """
    audio = None
    if audio_path is not None and audio_path.exists():
        audio = MediaFile(audio_path, validate_exists=True)

    request = MergeRequest(
        frame_pattern=workspace.frame_pattern,
        fps=fps,
        output_video=MediaFile(workspace.output_path),
        audio=audio,
    )
    return (merger or FFmpegMergeAdapter()).merge(request)
