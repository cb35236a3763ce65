import logging
from typing import Any, Dict

from canvas_export.core.common.enums import RendererType
from canvas_export.core.jobs.domain.models import JobSubmission
from canvas_export.core.jobs.manager import JobManager
from canvas_export.features.scene.service.api import load_scene

logger = logging.getLogger(__name__)

_job_manager = None


def get_job_manager() -> JobManager:
    """Process-wide dispatcher, created (and the job table with it) on first use."""
    global _job_manager
    if _job_manager is None:
        from canvas_export.core.config.settings import settings
        from canvas_export.core.database.connection import init_db
        settings.ensure_dirs()
        init_db()
        _job_manager = JobManager()
    return _job_manager


def parse_submission(request: Dict[str, Any]) -> JobSubmission:
    """
    Accepts both the camelCase keys the editor sends and snake_case ones.
    `renderer` may be "surface" / "ffmpeg"; a truthy `ffmpeg` flag also
    selects the direct renderer.
    """
    if not isinstance(request, dict):
        raise ValueError("Export request must be a JSON object.")

    design = request.get("design", request.get("scene"))
    if design is None:
        raise ValueError("Export request is missing 'design'.")

    export_id = request.get("exportId", request.get("export_id"))
    webhook_url = request.get("webhook_url", request.get("webhookUrl"))

    raw_renderer = request.get("renderer")
    if raw_renderer is None:
        renderer = RendererType.FFMPEG if request.get("ffmpeg") else RendererType.SURFACE
    else:
        try:
            renderer = RendererType(str(raw_renderer).lower())
        except ValueError:
            raise ValueError(f"Unknown renderer: {raw_renderer!r}")

    submission = JobSubmission(
        export_id=str(export_id) if export_id is not None else "",
        design=design,
        webhook_url=webhook_url,
        renderer=renderer,
    )

    # Reject unusable designs now, not in the worker
    load_scene(submission.design)
    return submission


def submit_export(request: Dict[str, Any], manager: JobManager = None) -> Dict[str, Any]:
    """
    Public Service API: validate, persist, and start an export in the background.
    Returns at once; pipeline failures only show up on the job record and webhook.

    Raises:
        ValueError: Malformed request, or the export id is already running.
    """
    submission = parse_submission(request)
    manager = manager or get_job_manager()

    manager.submit_job(submission)
    manager.start_job(submission.export_id)
    logger.info(f"📥 Export {submission.export_id} accepted ({submission.renderer.value})")

    return {
        "status": "started",
        "export_id": submission.export_id,
        "renderer": submission.renderer.value,
    }
