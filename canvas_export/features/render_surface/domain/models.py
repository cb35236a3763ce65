from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from canvas_export.core.config.settings import settings

# Positions closer than this to the target count as already there
SEEK_SNAP_TOLERANCE = 0.05
# Longest wait for a seek to confirm; the loop moves on regardless afterwards
SEEK_TIMEOUT_SECONDS = 2.0


def needs_seek(current: float, target: float, tolerance: float = SEEK_SNAP_TOLERANCE) -> bool:
    return abs(current - target) >= tolerance


@dataclass(frozen=True)
class SurfaceConfig:
    render_url: str = field(default_factory=lambda: settings.RENDER_PAGE_URL)
    pixel_ratio: int = field(default_factory=lambda: settings.EXPORT_PIXEL_RATIO)
    seek_snap_tolerance: float = SEEK_SNAP_TOLERANCE
    seek_timeout_seconds: float = SEEK_TIMEOUT_SECONDS
    navigation_timeout_seconds: float = 60.0
    hook_timeout_seconds: float = 10.0
    ready_timeout_seconds: float = field(default_factory=lambda: settings.SURFACE_LOAD_TIMEOUT_SECONDS)
    headless: bool = field(default_factory=lambda: settings.SURFACE_HEADLESS)


@dataclass(frozen=True)
class FetchRequest:
    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def range_header(self) -> Optional[str]:
        for key, value in self.headers.items():
            if key.lower() == "range":
                return value
        return None


@dataclass
class FetchResponse:
    status: int
    headers: Dict[str, str]
    body: bytes = b""

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")


@dataclass(frozen=True)
class SeekOutcome:
    """
    How a seek went. `waited` is False when every element was already
    within the snap tolerance.
    """
    time_seconds: float
    waited: bool = False
    timed_out: bool = False
    stale_elements: int = 0
