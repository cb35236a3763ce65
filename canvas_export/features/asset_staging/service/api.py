from pathlib import Path
from canvas_export.features.scene.domain.models import SceneDescription
from ..domain.models import StagedScene
from .stager import AssetStager

def stage_scene_assets(scene: SceneDescription, assets_dir: str) -> StagedScene:
    """
    Standalone API: downloads the scene's remote media into `assets_dir`.
    Returns the rewritten scene; the input scene is left untouched.
    """
    return AssetStager().stage(scene, Path(assets_dir))
