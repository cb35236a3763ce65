import subprocess
import logging
from pathlib import Path
from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import EncodeError
from ..domain.interfaces import IVideoMerger
from ..domain.models import MergeRequest

logger = logging.getLogger(__name__)

class FFmpegMergeAdapter(IVideoMerger):

    def merge(self, request: MergeRequest) -> Path:
        request.output_video.ensure_parent_dir()

        # -framerate: input rate of the image sequence
        # -start_number 0: frames are numbered from zero
        # -pix_fmt yuv420p: what every player can decode
        # -r: output rate, same as input
        cmd = [
            settings.FFMPEG_BINARY,
            "-y",
            "-framerate", str(request.fps),
            "-start_number", "0",
            "-i", str(request.frame_pattern),
        ]
        if request.audio is not None:
            cmd += ["-i", str(request.audio.path)]
        cmd += [
            "-c:v", request.video_codec,
            "-pix_fmt", request.pixel_format,
            "-r", str(request.fps),
            str(request.output_video.path)
        ]

        logger.info(f"Merging video: {' '.join(cmd)}")

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            error_message = e.stderr if e.stderr else "Unknown FFmpeg error"
            logger.error(f"❌ FFmpeg failed with code {e.returncode}. STDERR: {error_message}")
            raise EncodeError(
                f"FFmpeg failed with code {e.returncode}: {error_message}",
                stderr=e.stderr or "",
            ) from e
        except OSError as e:
            raise EncodeError(f"Could not run ffmpeg: {e}") from e

        if not request.output_video.exists():
            raise EncodeError(f"FFmpeg reported success but {request.output_video.path} is missing")

        logger.info(f"Video export completed: {request.output_video.path}")
        return request.output_video.path
