from typing import Any, Dict
from ..domain.models import SceneDescription
from ..data.design_parser import DesignParser

def load_scene(design: Dict[str, Any]) -> SceneDescription:
    """
    Public Service API: parse an editor design payload into an immutable scene.

    Raises:
        ValueError: If the payload is not a design object.
    """
    return DesignParser().parse(design)
