from abc import ABC, abstractmethod
from pathlib import Path

from canvas_export.core.common.enums import ProgressStatus
from .models import UploadReceipt


class IProgressReporter(ABC):
    """
    Where progress events go. Reporting is fire-and-forget: `report` returns
    immediately and delivery problems never reach the caller.
    """

    @property
    @abstractmethod
    def last_progress(self) -> int:
        """The most recent progress value handed to `report`."""
        pass

    @abstractmethod
    def report(self, progress: int, status: ProgressStatus) -> None:
        pass

    def flush(self, timeout: float = None) -> None:
        """Waits for events already handed over to be delivered (or to fail)."""
        pass

    def close(self) -> None:
        pass


class IArtifactUploader(ABC):
    @abstractmethod
    def upload(self, export_id: str, video_path: Path) -> UploadReceipt:
        """
        Sends the finished video to the storage backend.

        Raises:
            UploadError: On transport failure or a non-2xx answer.
        """
        pass
