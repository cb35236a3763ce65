from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration parameters for audio extraction.
    Defaults to a lossless stream copy: the export muxes the audio
    back untouched. Sources whose codec the container can't hold are
    re-encoded with `fallback_codec` instead.
    """
    codec: str = "copy"
    format: str = "aac"
    fallback_codec: str = "aac"

@dataclass
class ExtractionResult:
    """
    The result of a successful extraction.
    """
    output_path: Path
    source: str
    format: str
