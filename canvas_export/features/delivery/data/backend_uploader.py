import logging
from pathlib import Path

import requests

from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import UploadError
from ..domain.interfaces import IArtifactUploader
from ..domain.models import UploadReceipt

logger = logging.getLogger(__name__)

STORE_PATH = "/export/webhook/store"


class BackendUploader(IArtifactUploader):
    """
    Multipart upload of the merged video: fields `export_id` and `video`.
    """

    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        trimmed = (base_url or settings.STORAGE_BACKEND_URL).strip().rstrip("/")
        if not trimmed:
            raise ValueError("BackendUploader base_url cannot be empty")
        self.store_url = trimmed + STORE_PATH
        self.timeout = timeout or settings.UPLOAD_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def upload(self, export_id: str, video_path: Path) -> UploadReceipt:
        if not video_path.is_file():
            raise UploadError(f"Video file missing: {video_path}")

        size = video_path.stat().st_size
        logger.info(f"Uploading {video_path.name} ({size} bytes) to {self.store_url}...")

        try:
            with open(video_path, "rb") as fh:
                response = self.session.post(
                    self.store_url,
                    data={"export_id": export_id},
                    files={"video": (f"{export_id}.mp4", fh, "video/mp4")},
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            raise UploadError(f"Upload request failed: {e}") from e

        if not response.ok:
            raise UploadError(f"Upload failed: {response.text}", status_code=response.status_code)

        logger.info("✅ Upload successful")
        return UploadReceipt(url=self.store_url, status_code=response.status_code, bytes_sent=size)
