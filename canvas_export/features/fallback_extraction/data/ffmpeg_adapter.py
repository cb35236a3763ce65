import subprocess
import logging
from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import EncodeError
from canvas_export.features.workspace.domain.models import FRAME_PATTERN
from ..domain.interfaces import IFrameExtractor
from ..domain.models import FrameExtractionRequest

logger = logging.getLogger(__name__)

class FFmpegFrameExtractor(IFrameExtractor):
    """
    Decodes frames directly from the source, bypassing the render page.
    """

    def extract_frames(self, request: FrameExtractionRequest) -> int:
        request.output_dir.mkdir(parents=True, exist_ok=True)

        # -vf fps: resample to the export rate
        # -t / -frames:v: stop at the export duration and frame count
        # -start_number 0: same numbering as the capture loop
        cmd = [
            settings.FFMPEG_BINARY,
            "-y",
            "-i", str(request.source_video.path),
            "-vf", f"fps={request.fps}",
            "-t", str(request.duration_seconds),
            "-frames:v", str(request.total_frames),
            "-start_number", "0",
            str(request.output_dir / FRAME_PATTERN)
        ]

        logger.info(f"🎬 Running FFmpeg frame extraction: {' '.join(cmd)}")

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            error_message = e.stderr if e.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg frame extraction failed. STDERR: {error_message}")
            raise EncodeError(f"Frame extraction failed: {error_message}", stderr=e.stderr or "") from e
        except OSError as e:
            raise EncodeError(f"Could not run ffmpeg: {e}") from e

        return len(list(request.output_dir.glob("frame_*.png")))
