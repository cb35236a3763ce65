from abc import ABC, abstractmethod
from pathlib import Path
from .models import MergeRequest

class IVideoMerger(ABC):
    """
    Contract for the encoder that muxes the final container.
    """

    @abstractmethod
    def merge(self, request: MergeRequest) -> Path:
        """
        Encodes the frame sequence (and audio, if any) into request.output_video.

        Raises:
            EncodeError: If the encoder exits non-zero or writes nothing.
        """
        pass
