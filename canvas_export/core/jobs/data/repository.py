from datetime import datetime, timezone
from typing import Optional

from canvas_export.core.database.connection import SessionLocal
from ..models import ExportJobModel
from ..types import ExportState
from ..domain.interfaces import IJobRepository
from ..domain.models import JobSubmission


class SqlExportJobRepo(IJobRepository):

    def create_job(self, submission: JobSubmission) -> ExportJobModel:
        with SessionLocal() as db:
            job = db.query(ExportJobModel).filter(
                ExportJobModel.export_id == submission.export_id
            ).first()

            if job is None:
                job = ExportJobModel(export_id=submission.export_id)
                db.add(job)

            job.state = ExportState.PENDING
            job.renderer = submission.renderer
            job.webhook_url = submission.webhook_url
            job.payload = submission.design
            job.result_meta = {}
            job.error_message = None
            job.started_at = None
            job.finished_at = None

            db.commit()
            db.refresh(job)
            db.expunge(job)
            return job

    def get_job(self, export_id: str) -> Optional[ExportJobModel]:
        with SessionLocal() as db:
            job = db.query(ExportJobModel).filter(ExportJobModel.export_id == export_id).first()
            if job is not None:
                db.expunge(job)
            return job

    def update_state(self, export_id: str, state: ExportState) -> None:
        with SessionLocal() as db:
            job = self._require(db, export_id)
            job.state = state
            if state == ExportState.STAGING and job.started_at is None:
                job.started_at = datetime.now(timezone.utc)
            if state.is_terminal:
                job.finished_at = datetime.now(timezone.utc)
            db.commit()

    def mark_completed(self, export_id: str, result_meta: dict) -> None:
        with SessionLocal() as db:
            job = self._require(db, export_id)
            job.state = ExportState.COMPLETED
            job.result_meta = result_meta
            job.finished_at = datetime.now(timezone.utc)
            db.commit()

    def mark_failed(self, export_id: str, error_message: str) -> None:
        with SessionLocal() as db:
            job = self._require(db, export_id)
            job.state = ExportState.FAILED
            job.error_message = error_message
            job.finished_at = datetime.now(timezone.utc)
            db.commit()

    @staticmethod
    def _require(db, export_id: str) -> ExportJobModel:
        job = db.query(ExportJobModel).filter(ExportJobModel.export_id == export_id).first()
        if job is None:
            raise ValueError(f"Export job {export_id} not found.")
        return job
