import base64
import binascii
import logging
from typing import Optional

from playwright.sync_api import sync_playwright
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from canvas_export.core.common.errors import (
    RenderSurfaceError,
    RenderSurfaceTimeoutError,
    SeekTimeoutError,
)
from canvas_export.features.scene.domain.models import SceneDescription
from ..domain.interfaces import IRenderSurface
from ..domain.models import FetchRequest, FetchResponse, SeekOutcome, SurfaceConfig, needs_seek
from . import page_scripts
from .asset_router import AssetRouter
from .local_asset_server import serve_file

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--disable-web-security",
    "--no-sandbox",  # Often required in containerized/server environments
    "--disable-setuid-sandbox",
]


class PlaywrightRenderSurface(IRenderSurface):
    """
    Drives the render page in headless Chromium through Playwright's sync API.

    All calls must come from the thread that entered the context manager;
    each export job runs on its own worker thread, so it gets its own browser.
    """

    def __init__(self, config: SurfaceConfig = None, router: AssetRouter = None, page=None):
        self.config = config or SurfaceConfig()
        self.router = router or AssetRouter(self.config.render_url)
        self._page = page
        self._playwright = None
        self._browser = None

    # --- Lifecycle ---

    def __enter__(self):
        if self._page is None:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.config.headless,
                args=CHROMIUM_ARGS,
            )
            self._page = self._browser.new_page()
        # Route everything; unmatched requests are continued untouched
        self._page.route("**/*", self._handle_route)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self) -> None:
        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Browser did not close cleanly: {e}")
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    @property
    def page(self):
        if self._page is None:
            raise RenderSurfaceError("Render surface used before it was opened")
        return self._page

    # --- IRenderSurface ---

    def load(self, scene: SceneDescription) -> None:
        surface_scene = self.router.rewrite_scene(scene)
        page = self.page

        logger.info(f"Navigating to render page {self.config.render_url}...")
        try:
            response = page.goto(
                self.config.render_url,
                wait_until="networkidle",
                timeout=self.config.navigation_timeout_seconds * 1000,
            )
            logger.info(f"Page loaded with status: {response.status if response else 'n/a'}")

            page.wait_for_function(
                page_scripts.LOAD_HOOK_READY,
                timeout=self.config.hook_timeout_seconds * 1000,
            )
            page.evaluate(page_scripts.LOAD_DESIGN, surface_scene.to_payload())
            page.wait_for_function(
                page_scripts.DESIGN_READY,
                timeout=self.config.ready_timeout_seconds * 1000,
            )
        except PlaywrightTimeoutError as e:
            raise RenderSurfaceTimeoutError(f"Render page never became ready: {e}") from e
        except PlaywrightError as e:
            raise RenderSurfaceError(f"Render page failed to load the design: {e}") from e

        logger.info(f"Design loaded into render surface ({len(scene.elements)} elements)")

    def intercept_fetch(self, request: FetchRequest) -> Optional[FetchResponse]:
        path = self.router.resolve(request.url)
        if path is None:
            return None
        try:
            return serve_file(path, request.range_header)
        except OSError as e:
            logger.error(f"Error serving local file {path}: {e}")
            return None

    def seek_to(self, time_seconds: float) -> SeekOutcome:
        page = self.page
        tolerance = self.config.seek_snap_tolerance

        positions = page.evaluate(page_scripts.MEDIA_POSITIONS) or []
        stale = [i for i, current in enumerate(positions) if needs_seek(current, time_seconds, tolerance)]

        if not stale:
            page.evaluate(page_scripts.REDRAW)
            return SeekOutcome(time_seconds=time_seconds)

        page.evaluate(page_scripts.START_SEEK, {"indices": stale, "time": time_seconds})

        timed_out = False
        try:
            page.wait_for_function(
                page_scripts.SEEK_SETTLED,
                timeout=self.config.seek_timeout_seconds * 1000,
            )
        except PlaywrightTimeoutError:
            # Some players never fire 'seeked' for certain positions; carry on
            timed_out = True
            logger.warning(str(SeekTimeoutError(time_seconds, self.config.seek_timeout_seconds)))
            page.evaluate(page_scripts.CLEAR_SEEK_FLAGS)

        page.evaluate(page_scripts.REDRAW)
        return SeekOutcome(
            time_seconds=time_seconds,
            waited=True,
            timed_out=timed_out,
            stale_elements=len(stale),
        )

    def capture_frame(self) -> bytes:
        data_url = self.page.evaluate(page_scripts.CAPTURE_FRAME, {"pixelRatio": self.config.pixel_ratio})
        if not data_url or "," not in data_url:
            raise RenderSurfaceError("Render page has no stage to capture")
        try:
            return base64.b64decode(data_url.split(",", 1)[1])
        except (binascii.Error, ValueError) as e:
            raise RenderSurfaceError(f"Stage returned an undecodable frame: {e}") from e

    def playback_position(self) -> Optional[float]:
        return self.page.evaluate(page_scripts.FIRST_VIDEO_POSITION)

    # --- Playwright glue ---

    def _handle_route(self, route, request) -> None:
        response = self.intercept_fetch(FetchRequest(
            url=request.url,
            method=request.method,
            headers=request.headers,
        ))
        if response is None:
            route.continue_()
            return
        route.fulfill(status=response.status, headers=response.headers, body=response.body)
