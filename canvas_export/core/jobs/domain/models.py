import re
import threading
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from canvas_export.core.common.enums import RendererType
from canvas_export.core.common.errors import ExportCancelledError

# Export ids become directory names under the temp root
EXPORT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")

@dataclass(frozen=True)
class JobSubmission:
    """
    DTO for requesting a new export.
    """
    export_id: str
    design: Dict[str, Any] = field(default_factory=dict)
    webhook_url: Optional[str] = None
    renderer: RendererType = RendererType.SURFACE

    def __post_init__(self):
        if not EXPORT_ID_PATTERN.match(self.export_id or ""):
            raise ValueError(f"Invalid export id: {self.export_id!r}")
        if not isinstance(self.design, dict):
            raise ValueError("Design must be a JSON object.")


class CancellationToken:
    """
    Cooperative cancellation flag shared between the dispatcher and a running job.
    The pipeline polls it at its suspension points.
    """

    def __init__(self, export_id: str):
        self.export_id = export_id
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ExportCancelledError(self.export_id)
