from dataclasses import dataclass
from canvas_export.core.shared_types import MediaFile

@dataclass(frozen=True)
class DirectRenderRequest:
    """
    Scale one source video to the canvas and encode it as the export.
    """
    source: str
    output_video: MediaFile
    width: int
    height: int
