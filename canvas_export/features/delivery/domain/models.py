from dataclasses import dataclass
from typing import Any, Dict

from canvas_export.core.common.enums import ProgressStatus


@dataclass(frozen=True)
class ProgressEvent:
    export_id: str
    progress: int
    status: ProgressStatus

    def __post_init__(self):
        if not 0 <= self.progress <= 100:
            raise ValueError(f"Progress must be within 0-100, got {self.progress}")

    def to_json(self) -> Dict[str, Any]:
        return {
            "export_id": self.export_id,
            "progress": self.progress,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class UploadReceipt:
    url: str
    status_code: int
    bytes_sent: int
