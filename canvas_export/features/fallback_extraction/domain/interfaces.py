from abc import ABC, abstractmethod
from .models import FrameExtractionRequest

class IFrameExtractor(ABC):
    @abstractmethod
    def extract_frames(self, request: FrameExtractionRequest) -> int:
        """
        Writes frame_0.png ... into request.output_dir.
        Returns the number of frames written.

        Raises:
            EncodeError: If the decoder fails.
        """
        pass
