from pathlib import Path
from canvas_export.features.workspace.domain.models import JobWorkspace
from ..domain.interfaces import IFrameStore

class LocalFrameStore(IFrameStore):
    """Writes frames as frames/frame_{index}.png inside the job workspace."""

    def __init__(self, workspace: JobWorkspace):
        self.workspace = workspace

    def write(self, index: int, image: bytes) -> Path:
        path = self.workspace.frame_path(index)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(image)
        return path
