import copy
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from canvas_export.core.common.enums import ElementKind
from ..domain.models import (
    Canvas,
    Geometry,
    MediaElement,
    SceneDescription,
    TimingWindow,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_BACKGROUND,
)

logger = logging.getLogger(__name__)

# Keys mapped onto MediaElement fields; everything else rides along in `attributes`
MODELLED_KEYS = {
    "src", "originalSrc", "x", "y", "width", "height", "startTime", "endTime",
    "text", "fontSize", "fill", "muted", "visible",
}


class DesignParser:
    """
    Turns the editor's design JSON into a SceneDescription.

    Two shapes are accepted:
      {"objects": [...], "canvas": {...}}
      {"layers": {"objects": [...], "canvas": {...}}}   (layers may be a JSON string)
    """

    def parse(self, design: Dict[str, Any]) -> SceneDescription:
        if not isinstance(design, dict):
            raise ValueError("Design must be a JSON object.")

        # Never hold references into the caller's structure
        design = copy.deepcopy(design)
        objects, raw_canvas = self._unwrap(design)

        elements = []
        for obj in objects:
            if not isinstance(obj, dict):
                logger.warning(f"Skipping non-object design entry: {obj!r}")
                continue
            elements.append(self._parse_element(obj))

        canvas = self._parse_canvas(raw_canvas)
        logger.info(f"Parsed design: {len(elements)} elements on {canvas.width}x{canvas.height} canvas")
        return SceneDescription(elements=tuple(elements), canvas=canvas)

    def _unwrap(self, design: Dict[str, Any]) -> Tuple[List[Any], Optional[Dict[str, Any]]]:
        if design.get("layers"):
            layers = self._load_json_field(design["layers"], "layers")
            objects = layers.get("objects") or []
            raw_canvas = layers.get("canvas")
        else:
            objects = design.get("objects") or []
            raw_canvas = design.get("canvas")

        if raw_canvas is None and design.get("canvas_config"):
            raw_canvas = self._load_json_field(design["canvas_config"], "canvas_config")

        if not isinstance(objects, list):
            raise ValueError("Design objects must be a list.")
        return objects, raw_canvas

    @staticmethod
    def _load_json_field(value: Any, name: str) -> Dict[str, Any]:
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"Design {name} is not valid JSON: {e}") from e
        if not isinstance(value, dict):
            raise ValueError(f"Design {name} must be an object.")
        return value

    @staticmethod
    def _number(value: Any, default: float) -> float:
        # Falsy values (missing, 0, "") fall back, matching how the editor stores them
        try:
            return float(value) if value else default
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _optional_number(value: Any) -> Optional[float]:
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def _parse_element(self, obj: Dict[str, Any]) -> MediaElement:
        raw_kind = str(obj.get("customType") or obj.get("type") or "").lower()
        try:
            kind = ElementKind(raw_kind)
        except ValueError:
            kind = ElementKind.OTHER

        start = self._optional_number(obj.get("startTime"))
        end = self._optional_number(obj.get("endTime"))
        timing = TimingWindow(start, end) if (start is not None or end is not None) else None

        src = obj.get("src")
        original = obj.get("originalSrc")
        text = obj.get("text")

        return MediaElement(
            kind=kind,
            source=src if isinstance(src, str) and src else None,
            geometry=Geometry(
                x=self._number(obj.get("x"), 0.0),
                y=self._number(obj.get("y"), 0.0),
                width=self._number(obj.get("width"), 100.0),
                height=self._number(obj.get("height"), 100.0),
            ),
            timing=timing,
            text=str(text) if text is not None else None,
            font_size=self._optional_number(obj.get("fontSize")),
            fill=obj.get("fill"),
            muted=bool(obj.get("muted", False)),
            visible=obj.get("visible", True) is not False,
            original_source=original if isinstance(original, str) else None,
            attributes={k: v for k, v in obj.items() if k not in MODELLED_KEYS},
        )

    def _parse_canvas(self, raw: Optional[Dict[str, Any]]) -> Canvas:
        raw = raw or {}
        return Canvas(
            width=int(self._number(raw.get("width"), DEFAULT_CANVAS_WIDTH)),
            height=int(self._number(raw.get("height"), DEFAULT_CANVAS_HEIGHT)),
            background_color=raw.get("backgroundColor") or DEFAULT_BACKGROUND,
        )
