from abc import ABC, abstractmethod
from pathlib import Path
from .models import ExtractionConfig, ExtractionResult

class IAudioExtractor(ABC):
    """
    Contract for extracting audio from video files.
    """
    @abstractmethod
    def extract_audio(self, source: str, output_path: Path, config: ExtractionConfig) -> ExtractionResult:
        """
        Extracts the audio track of the given video.

        Args:
            source: Local path or remote URL of the source video.
            output_path: Where the audio file should be written.
            config: Audio encoding parameters.

        Raises:
            AudioExtractError: If the source has no usable audio track.
        """
        pass
