import subprocess
import logging
from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import EncodeError
from ..domain.interfaces import IDirectRenderer
from ..domain.models import DirectRenderRequest

logger = logging.getLogger(__name__)

class FFmpegDirectRenderer(IDirectRenderer):
    """
    Renders without a browser: the primary video scaled to the canvas,
    audio copied through. Overlays are not drawn.
    """

    def render(self, request: DirectRenderRequest) -> None:
        request.output_video.ensure_parent_dir()

        cmd = [
            settings.FFMPEG_BINARY,
            "-y",
            "-i", request.source,
            "-vf", f"scale={request.width}:{request.height}",
            "-c:v", "libx264",
            "-c:a", "copy",
            "-pix_fmt", "yuv420p",
            str(request.output_video.path)
        ]

        logger.info(f"🔧 FFmpeg command: {' '.join(cmd)}")

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            error_message = e.stderr if e.stderr else "Unknown FFmpeg error"
            logger.error(f"❌ FFmpeg export failed. STDERR: {error_message}")
            raise EncodeError(
                f"FFmpeg failed with code {e.returncode}: {error_message}",
                stderr=e.stderr or "",
            ) from e
        except OSError as e:
            raise EncodeError(f"Could not run ffmpeg: {e}") from e
