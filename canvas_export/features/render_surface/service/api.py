from canvas_export.core.config.settings import settings
from ..domain.interfaces import IRenderSurface
from ..domain.models import SurfaceConfig
from ..data.playwright_surface import PlaywrightRenderSurface

def open_render_surface(render_url: str = None) -> IRenderSurface:
    """
    Public Service API: a not-yet-entered render surface.
    Use as a context manager; the browser lives for the `with` block.
    """
    config = SurfaceConfig(render_url=render_url or settings.RENDER_PAGE_URL)
    return PlaywrightRenderSurface(config=config)
