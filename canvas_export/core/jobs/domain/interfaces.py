from abc import ABC, abstractmethod
from typing import Optional

from ..models import ExportJobModel
from ..types import ExportState
from .models import JobSubmission

class IJobRepository(ABC):
    """
    Contract for export job persistence.
    """

    @abstractmethod
    def create_job(self, submission: JobSubmission) -> ExportJobModel:
        """
        Creates a PENDING record for the submission.
        Re-submitting a finished export id resets its existing row.
        """
        pass

    @abstractmethod
    def get_job(self, export_id: str) -> Optional[ExportJobModel]:
        pass

    @abstractmethod
    def update_state(self, export_id: str, state: ExportState) -> None:
        """
        Moves the job along its lifecycle. Terminal states only stamp
        finished_at here; the outcome itself is written by mark_*.
        """
        pass

    @abstractmethod
    def mark_completed(self, export_id: str, result_meta: dict) -> None:
        pass

    @abstractmethod
    def mark_failed(self, export_id: str, error_message: str) -> None:
        pass
