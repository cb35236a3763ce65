from abc import ABC, abstractmethod
from pathlib import Path

class IDurationProber(ABC):
    @abstractmethod
    def probe_duration(self, file_path: Path) -> float:
        """
        Returns the container duration in seconds.

        Raises:
            DurationProbeError: If the file is missing or unreadable.
        """
        pass
