from enum import Enum

class ExportState(str, Enum):
    PENDING = "pending"
    STAGING = "staging"
    RESOLVING_DURATION = "resolving_duration"
    RENDERING = "rendering"
    MERGING = "merging"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExportState.COMPLETED, ExportState.FAILED)
