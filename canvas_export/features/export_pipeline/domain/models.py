from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from canvas_export.core.common.enums import RendererType
from canvas_export.core.jobs.types import ExportState
from canvas_export.features.scene.domain.models import SceneDescription
from canvas_export.features.workspace.domain.models import JobWorkspace


@dataclass
class ExportJob:
    """
    One orchestration run. The only mutable part is its lifecycle state.
    """
    export_id: str
    scene: SceneDescription
    workspace: JobWorkspace
    renderer: RendererType = RendererType.SURFACE
    state: ExportState = ExportState.PENDING


@dataclass
class ExportResult:
    export_id: str
    renderer: RendererType
    output_path: Optional[Path] = None
    duration_seconds: Optional[float] = None
    total_frames: int = 0
    used_fallback: bool = False
    seek_success_ratio: Optional[float] = None
    staging_failures: List[str] = field(default_factory=list)

    def to_meta(self) -> Dict[str, Any]:
        """JSON-safe summary stored on the job record."""
        return {
            "renderer": self.renderer.value,
            "duration_seconds": self.duration_seconds,
            "total_frames": self.total_frames,
            "used_fallback": self.used_fallback,
            "seek_success_ratio": self.seek_success_ratio,
            "staging_failures": list(self.staging_failures),
        }
