from abc import ABC, abstractmethod
from typing import Optional

from canvas_export.features.scene.domain.models import SceneDescription
from .models import FetchRequest, FetchResponse, SeekOutcome


class IRenderSurface(ABC):
    """
    Contract with the external page that draws a scene.
    Implementations are context managers owning whatever process backs them.
    """

    @abstractmethod
    def load(self, scene: SceneDescription) -> None:
        """
        Pushes the scene and blocks until the page reports it is ready.

        Raises:
            RenderSurfaceTimeoutError: If the page never becomes ready.
        """
        pass

    @abstractmethod
    def intercept_fetch(self, request: FetchRequest) -> Optional[FetchResponse]:
        """
        Serves requests for staged assets from disk.
        Returns None for requests that should go to the network untouched.
        """
        pass

    @abstractmethod
    def seek_to(self, time_seconds: float) -> SeekOutcome:
        """
        Moves every playable media element to `time_seconds`.
        Bounded wait; never raises for slow or stuck players.
        """
        pass

    @abstractmethod
    def capture_frame(self) -> bytes:
        """Redraws and returns the composited frame as PNG bytes."""
        pass

    @abstractmethod
    def playback_position(self) -> Optional[float]:
        """Current time of the first video element, None without one."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False
