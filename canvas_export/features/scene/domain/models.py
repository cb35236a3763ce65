import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from canvas_export.core.common.enums import ElementKind

DEFAULT_CANVAS_WIDTH = 1920
DEFAULT_CANVAS_HEIGHT = 1080
DEFAULT_BACKGROUND = "#ffffff"


@dataclass(frozen=True)
class Canvas:
    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT
    background_color: str = DEFAULT_BACKGROUND

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class Geometry:
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0


@dataclass(frozen=True)
class TimingWindow:
    """
    When an element is on screen. Either bound may be open.
    """
    start_seconds: Optional[float] = None
    end_seconds: Optional[float] = None

    def __post_init__(self):
        if self.start_seconds is not None and self.start_seconds < 0:
            raise ValueError("Timestamps cannot be negative.")
        if (self.start_seconds is not None and self.end_seconds is not None
                and self.end_seconds < self.start_seconds):
            raise ValueError(
                f"End time ({self.end_seconds}) must not be before start time ({self.start_seconds})."
            )


@dataclass(frozen=True)
class MediaElement:
    """
    One drawable item of a scene.

    `attributes` carries every raw field the exporter does not model
    (rotation, opacity, ids...) so the render page receives the element as
    it was designed.
    """
    kind: ElementKind
    source: Optional[str] = None
    geometry: Geometry = field(default_factory=Geometry)
    timing: Optional[TimingWindow] = None
    text: Optional[str] = None
    font_size: Optional[float] = None
    fill: Optional[str] = None
    muted: bool = False
    visible: bool = True
    # Remote reference an element was staged from
    original_source: Optional[str] = None
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # Freeze the passthrough bag so no copy can be mutated through another
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def is_remote(self) -> bool:
        return bool(self.source) and self.source.startswith("http")

    def with_source(self, source: str, original_source: Optional[str] = None) -> "MediaElement":
        return dataclasses.replace(
            self,
            source=source,
            original_source=original_source if original_source is not None else self.original_source,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.attributes)
        payload.setdefault("type", self.kind.value)
        payload.update({
            "x": self.geometry.x,
            "y": self.geometry.y,
            "width": self.geometry.width,
            "height": self.geometry.height,
            "muted": self.muted,
            "visible": self.visible,
        })
        if self.source is not None:
            payload["src"] = self.source
        if self.original_source is not None:
            payload["originalSrc"] = self.original_source
        if self.timing is not None:
            if self.timing.start_seconds is not None:
                payload["startTime"] = self.timing.start_seconds
            if self.timing.end_seconds is not None:
                payload["endTime"] = self.timing.end_seconds
        if self.text is not None:
            payload["text"] = self.text
        if self.font_size is not None:
            payload["fontSize"] = self.font_size
        if self.fill is not None:
            payload["fill"] = self.fill
        return payload


@dataclass(frozen=True)
class SceneDescription:
    """
    Immutable scene. Staging and path rewriting build new instances.
    """
    elements: Tuple[MediaElement, ...] = ()
    canvas: Canvas = field(default_factory=Canvas)

    def __post_init__(self):
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    @property
    def video_elements(self) -> Tuple[MediaElement, ...]:
        return tuple(e for e in self.elements if e.kind == ElementKind.VIDEO)

    def with_elements(self, elements) -> "SceneDescription":
        return dataclasses.replace(self, elements=tuple(elements))

    def to_payload(self) -> Dict[str, Any]:
        """JSON shape pushed to the render page."""
        return {
            "canvas": {
                "width": self.canvas.width,
                "height": self.canvas.height,
                "backgroundColor": self.canvas.background_color,
            },
            "objects": [e.to_payload() for e in self.elements],
        }
