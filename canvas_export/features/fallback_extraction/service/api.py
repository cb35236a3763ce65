import logging
import os
import shutil
from pathlib import Path

from canvas_export.core.common.errors import EncodeError
from canvas_export.core.shared_types import MediaFile
from canvas_export.features.scene.domain.models import SceneDescription
from canvas_export.features.workspace.domain.models import FRAME_FILENAME, JobWorkspace
from ..data.ffmpeg_adapter import FFmpegFrameExtractor
from ..domain.interfaces import IFrameExtractor
from ..domain.models import FrameExtractionRequest

logger = logging.getLogger(__name__)


class FallbackExtractor:
    """
    Replaces the captured frames with frames decoded from the scene's only
    video. Extraction goes to a scratch directory first so the captured
    frames survive a failed attempt, and only the indices the source
    actually covers are replaced.
    """

    def __init__(self, extractor: IFrameExtractor = None):
        self.extractor = extractor or FFmpegFrameExtractor()

    def replace_frames(self, scene: SceneDescription, workspace: JobWorkspace,
                       fps: int, duration_seconds: float, total_frames: int) -> bool:
        videos = scene.video_elements
        if len(videos) != 1 or not videos[0].source:
            logger.warning("Fallback needs exactly one video with a source; keeping captured frames")
            return False

        source = Path(videos[0].source)
        if not source.is_file():
            logger.error(f"❌ Video file not found for FFmpeg extraction: {source}")
            return False

        scratch = workspace.fallback_frames_dir
        if scratch.exists():
            shutil.rmtree(scratch)

        request = FrameExtractionRequest(
            source_video=MediaFile(source, validate_exists=True),
            output_dir=scratch,
            fps=fps,
            duration_seconds=duration_seconds,
            total_frames=total_frames,
        )

        try:
            written = self.extractor.extract_frames(request)
        except EncodeError as e:
            logger.error(f"❌ FFmpeg frame extraction failed, keeping captured frames: {e}")
            return False

        if written == 0:
            logger.error("❌ FFmpeg frame extraction produced no frames, keeping captured frames")
            return False
        if written < total_frames:
            # Source shorter than the export: captured frames keep the tail
            logger.warning(
                f"Fallback produced {written}/{total_frames} frames (source shorter than export); "
                f"keeping captured frames {written}..{total_frames - 1}"
            )

        # Overwrite captured frames index by index; each index keeps exactly one file
        replaced = 0
        for index in range(min(written, total_frames)):
            extracted = scratch / FRAME_FILENAME.format(index=index)
            if not extracted.exists():
                continue
            os.replace(extracted, workspace.frame_path(index))
            replaced += 1

        shutil.rmtree(scratch, ignore_errors=True)
        logger.info(f"✅ FFmpeg frame extraction completed ({replaced} frames replaced)")
        return replaced > 0
