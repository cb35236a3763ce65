import logging
from pathlib import Path

from canvas_export.core.common.errors import EncodeError
from canvas_export.core.shared_types import MediaFile
from canvas_export.features.scene.domain.models import SceneDescription
from ..data.ffmpeg_adapter import FFmpegDirectRenderer
from ..domain.interfaces import IDirectRenderer
from ..domain.models import DirectRenderRequest

logger = logging.getLogger(__name__)


class DirectRenderer:
    """
    The browserless renderer: first video of the scene, scaled to the canvas.
    """

    def __init__(self, renderer: IDirectRenderer = None):
        self.renderer = renderer or FFmpegDirectRenderer()

    def render(self, scene: SceneDescription, output_path: Path) -> Path:
        videos = [e for e in scene.video_elements if e.source]
        if not videos:
            raise EncodeError("No video elements found in design")

        primary = videos[0]
        logger.info(
            f"🎬 Starting FFmpeg-based video export "
            f"({len(scene.elements)} elements, canvas {scene.canvas.width}x{scene.canvas.height})"
        )
        if len(scene.elements) > 1:
            logger.warning("Direct render draws only the primary video; other elements are dropped")

        output = MediaFile(output_path)
        self.renderer.render(DirectRenderRequest(
            source=primary.source,
            output_video=output,
            width=scene.canvas.width,
            height=scene.canvas.height,
        ))
        if not output.exists():
            raise EncodeError(f"FFmpeg reported success but {output_path} is missing")

        logger.info(f"✅ Video export completed: {output_path}")
        return output_path
