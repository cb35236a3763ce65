import logging
from pathlib import Path

from canvas_export.core.common.errors import DurationProbeError
from canvas_export.features.audio_extraction.service.api import AudioExtractor
from canvas_export.features.scene.domain.models import SceneDescription
from ..data.ffprobe_adapter import FFprobeAdapter
from ..domain.interfaces import IDurationProber
from ..domain.models import DurationEstimate, DurationResolution, MIN_EXPORT_DURATION

logger = logging.getLogger(__name__)


class DurationResolver:
    """
    Decides how long the export runs:
    max(longest local video, extracted audio, 5s floor).
    """

    def __init__(self, prober: IDurationProber = None, audio_extractor: AudioExtractor = None,
                 minimum_seconds: float = MIN_EXPORT_DURATION):
        self.prober = prober or FFprobeAdapter()
        self.audio_extractor = audio_extractor or AudioExtractor()
        self.minimum_seconds = minimum_seconds

    def resolve(self, scene: SceneDescription, audio_output: Path) -> DurationResolution:
        # 1. Audio first: its length can outlast every video
        audio_path = self.audio_extractor.extract_for_scene(scene, audio_output)
        audio_seconds = 0.0
        if audio_path is not None and audio_path.exists():
            audio_seconds = self.safe_probe(audio_path)
            logger.info(f"Extracted audio duration: {audio_seconds}")

        # 2. Longest locally staged video
        max_video = 0.0
        for element in scene.video_elements:
            if not element.source or element.is_remote:
                continue
            path = Path(element.source)
            if not path.is_file():
                continue
            seconds = self.safe_probe(path)
            logger.info(f"Local video duration ({path}): {seconds}")
            max_video = max(max_video, seconds)

        estimate = DurationEstimate(
            audio_seconds=audio_seconds,
            max_video_seconds=max_video,
            minimum_seconds=self.minimum_seconds,
        )
        logger.info(
            f"Final Export Duration: {estimate.final_seconds}s "
            f"(Audio: {audio_seconds}s, Video: {max_video}s)"
        )
        return DurationResolution(estimate=estimate, audio_path=audio_path)

    def safe_probe(self, path: Path) -> float:
        """Probe failures contribute nothing instead of failing the export."""
        try:
            return max(self.prober.probe_duration(path), 0.0)
        except DurationProbeError as e:
            logger.error(f"Failed to get duration for {path}: {e}")
            return 0.0
