# File: canvas_export/core/common/enums.py

from enum import Enum, unique

@unique
class ElementKind(str, Enum):
    VIDEO = "video"
    IMAGE = "image"
    TEXT = "text"
    # Shapes and anything else the surface draws but the exporter never fetches
    OTHER = "other"

@unique
class ProgressStatus(str, Enum):
    """Status values understood by the progress webhook."""
    RENDERING_FRAMES = "rendering_frames"
    MERGING_VIDEO = "merging_video"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"

@unique
class RendererType(str, Enum):
    SURFACE = "surface"
    FFMPEG = "ffmpeg"
