import logging
from pathlib import Path
from typing import Optional

from canvas_export.core.common.errors import AudioExtractError
from canvas_export.features.scene.domain.models import MediaElement, SceneDescription
from ..domain.interfaces import IAudioExtractor
from ..domain.models import ExtractionConfig, ExtractionResult
from ..data.ffmpeg_adapter import FFmpegAudioAdapter

logger = logging.getLogger(__name__)


class AudioExtractor:
    """
    Pulls the soundtrack for an export out of the scene's first playable video.
    """

    def __init__(self, adapter: IAudioExtractor = None, config: ExtractionConfig = None):
        self.adapter = adapter or FFmpegAudioAdapter()
        self.config = config or ExtractionConfig()

    def extract_for_scene(self, scene: SceneDescription, output_path: Path) -> Optional[Path]:
        """
        Returns the extracted audio file, or None when the export goes silent.
        Never raises for extraction problems.
        """
        element = self.find_audio_source(scene)
        if element is None:
            logger.info("No video with a playable source; exporting without audio")
            return None

        if element.muted:
            # The mute flag only affects the editor preview
            logger.info("Video is muted in design, but extracting audio anyway for export")

        try:
            result = self.adapter.extract_audio(element.source, output_path, self.config)
        except AudioExtractError as e:
            logger.warning(f"Failed to extract audio, continuing without it: {e}")
            return None

        logger.info(f"Audio extracted to: {result.output_path}")
        return result.output_path

    @staticmethod
    def find_audio_source(scene: SceneDescription) -> Optional[MediaElement]:
        for element in scene.video_elements:
            if not element.source:
                continue
            if element.is_remote or Path(element.source).is_file():
                return element
        return None


def run_extraction(video_path: str, output_path: str) -> ExtractionResult:
    """
    Standalone API: Extracts audio from a video file.
    """
    adapter = FFmpegAudioAdapter()
    return adapter.extract_audio(video_path, Path(output_path), ExtractionConfig())
