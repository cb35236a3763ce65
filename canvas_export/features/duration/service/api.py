from pathlib import Path
from ..data.ffprobe_adapter import FFprobeAdapter
from .resolver import DurationResolver

def probe_duration(file_path: str) -> float:
    """
    Public Service API: duration of a media file in seconds, 0 when unreadable.
    """
    return DurationResolver(prober=FFprobeAdapter()).safe_probe(Path(file_path))
