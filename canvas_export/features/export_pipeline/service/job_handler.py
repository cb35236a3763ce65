import logging
from typing import Dict, Any

from canvas_export.core.common.enums import ProgressStatus
from canvas_export.core.config.settings import settings
from canvas_export.core.jobs.data.repository import SqlExportJobRepo
from canvas_export.core.jobs.domain.interfaces import IJobRepository
from canvas_export.core.jobs.domain.models import CancellationToken
from canvas_export.core.jobs.models import ExportJobModel
from canvas_export.features.delivery.service.api import build_progress_reporter
from canvas_export.features.scene.service.api import load_scene
from canvas_export.features.workspace.domain.models import JobWorkspace
from ..domain.models import ExportJob
from .orchestrator import ExportOrchestrator

logger = logging.getLogger(__name__)


class ExportHandler:
    """
    Adapter between the Job Manager and the export pipeline.
    Turns a persisted job record into a running ExportJob.
    """

    def __init__(self, orchestrator: ExportOrchestrator = None, repo: IJobRepository = None,
                 reporter_factory=build_progress_reporter):
        self.orchestrator = orchestrator or ExportOrchestrator()
        self.repo = repo or SqlExportJobRepo()
        self.reporter_factory = reporter_factory

    def handle(self, record: ExportJobModel, cancel_token: CancellationToken = None) -> Dict[str, Any]:
        logger.info(f"🎬 Export handler starting for {record.export_id} ({record.renderer.value})")

        reporter = self.reporter_factory(record.export_id, record.webhook_url)
        try:
            try:
                scene = load_scene(record.payload or {})
            except ValueError as e:
                logger.error(f"❌ Export {record.export_id} has an unusable design: {e}")
                reporter.report(0, ProgressStatus.FAILED)
                raise

            job = ExportJob(
                export_id=record.export_id,
                scene=scene,
                workspace=JobWorkspace(export_id=record.export_id, root=settings.EXPORT_TMP_DIR),
                renderer=record.renderer,
            )
            result = self.orchestrator.run(
                job,
                reporter,
                cancel_token=cancel_token,
                on_state=self.repo.update_state,
            )
        finally:
            reporter.close()

        return result.to_meta()
