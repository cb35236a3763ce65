from abc import ABC, abstractmethod
from pathlib import Path

class IFrameStore(ABC):
    @abstractmethod
    def write(self, index: int, image: bytes) -> Path:
        """Persists frame `index` and returns where it went."""
        pass
