from abc import ABC, abstractmethod
from .models import DirectRenderRequest

class IDirectRenderer(ABC):
    @abstractmethod
    def render(self, request: DirectRenderRequest) -> None:
        """
        Raises:
            EncodeError: If the encoder fails.
        """
        pass
