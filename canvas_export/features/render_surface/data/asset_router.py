import hashlib
import logging
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlparse, urlsplit, urlunsplit, unquote
from urllib.request import url2pathname

from canvas_export.features.scene.domain.models import SceneDescription

logger = logging.getLogger(__name__)

# Virtual path on the render page's own origin that maps to local files.
# Same-origin keeps the stage canvas untainted, so it can still be exported.
ASSET_ROUTE_PREFIX = "/__export_assets__/"

PASSTHROUGH_SCHEMES = ("data:", "blob:")


class AssetRouter:
    """
    Addressing scheme between the exporter's files and the render page.

    Local element sources are published under
    {render origin}/__export_assets__/{name} and resolved back to disk when
    the page fetches them. Only registered files are ever served.
    """

    def __init__(self, render_url: str):
        parts = urlsplit(render_url)
        self.base_url = urlunsplit((parts.scheme, parts.netloc, ASSET_ROUTE_PREFIX, "", ""))
        self._by_name: Dict[str, Path] = {}
        self._by_path: Dict[Path, str] = {}

    def register(self, path: Path) -> str:
        path = path.resolve()
        if path in self._by_path:
            return self._by_path[path]

        digest = hashlib.md5(str(path).encode("utf-8")).hexdigest()
        name = f"{digest}{path.suffix.lower()}"
        url = self.base_url + name
        self._by_name[name] = path
        self._by_path[path] = url
        return url

    def rewrite_scene(self, scene: SceneDescription) -> SceneDescription:
        """
        New scene whose local sources point at virtual URLs.
        Remote and inline sources are kept as they are.
        """
        rewritten = []
        for element in scene.elements:
            local = self._as_local_file(element.source)
            if local is None:
                rewritten.append(element)
                continue
            rewritten.append(element.with_source(self.register(local)))
        return scene.with_elements(rewritten)

    def resolve(self, url: str) -> Optional[Path]:
        if not url or url.startswith(PASSTHROUGH_SCHEMES):
            return None

        if url.startswith(self.base_url):
            name = urlparse(url).path[len(ASSET_ROUTE_PREFIX):]
            return self._by_name.get(unquote(name))

        # Direct file references are only honoured for files this job published
        local = self._as_local_file(url)
        if local is not None and local.resolve() in self._by_path:
            return local
        return None

    @staticmethod
    def _as_local_file(source: Optional[str]) -> Optional[Path]:
        if not source or source.startswith(("http:", "https:") + PASSTHROUGH_SCHEMES):
            return None
        if source.startswith("file:"):
            path = Path(url2pathname(urlparse(source).path))
        else:
            path = Path(source)
        try:
            return path if path.is_file() else None
        except (OSError, ValueError):
            # Not a usable path at all (too long, NUL bytes)
            return None
