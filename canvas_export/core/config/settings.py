# File: canvas_export/core/config/settings.py

import os
import shutil
import tempfile
from pathlib import Path


class Settings:
    # --- Paths ---
    # canvas_export/core/config/settings.py -> config -> core -> canvas_export -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    # Every export gets <EXPORT_TMP_DIR>/<export_id>/ as its private workspace
    EXPORT_TMP_DIR: Path = Path(os.getenv("EXPORT_TMP_DIR", tempfile.gettempdir()))

    # --- Database ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "canvas_export_db")

    @property
    def DATABASE_URL(self) -> str:
        # Only fallback to SQLite if explicitly requested.
        if os.getenv("USE_SQLITE", "false").lower() == "true":
            return "sqlite:///./test_canvas_export.db"

        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # --- External Services ---
    # The page that hosts the scene renderer (loadDesign / designReady / stage)
    RENDER_PAGE_URL: str = os.getenv("RENDER_PAGE_URL", "http://localhost:8000/render")
    # Backend that stores finished exports (POST /export/webhook/store)
    STORAGE_BACKEND_URL: str = os.getenv("STORAGE_BACKEND_URL", "http://localhost:8000")

    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
    UPLOAD_TIMEOUT_SECONDS: float = float(os.getenv("UPLOAD_TIMEOUT_SECONDS", "300"))

    # --- Rendering ---
    EXPORT_FPS: int = int(os.getenv("EXPORT_FPS", "24"))
    EXPORT_PIXEL_RATIO: int = int(os.getenv("EXPORT_PIXEL_RATIO", "2"))
    SURFACE_LOAD_TIMEOUT_SECONDS: float = float(os.getenv("SURFACE_LOAD_TIMEOUT_SECONDS", "60"))
    SURFACE_HEADLESS: bool = os.getenv("SURFACE_HEADLESS", "true").lower() == "true"

    def ensure_dirs(self):
        """Creates the export temp root if it doesn't exist."""
        self.EXPORT_TMP_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
