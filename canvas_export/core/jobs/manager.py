# File: canvas_export/core/jobs/manager.py

import logging
import threading
from typing import Dict, Optional

from .data.repository import SqlExportJobRepo
from .domain.interfaces import IJobRepository
from .domain.models import CancellationToken, JobSubmission
from .models import ExportJobModel

logger = logging.getLogger(__name__)


class JobManager:
    """
    The Central Dispatcher.
    It doesn't know *how* to export, but it knows *who* can, and it gives
    every running export its own thread and cancellation token.
    """

    def __init__(self, repo: IJobRepository = None, handler=None):
        self.repo = repo or SqlExportJobRepo()
        self._handler = handler
        self._lock = threading.Lock()
        self._threads: Dict[str, threading.Thread] = {}
        self._tokens: Dict[str, CancellationToken] = {}

    def submit_job(self, submission: JobSubmission) -> ExportJobModel:
        """Create (or reset) the job record in PENDING state."""
        if self.is_running(submission.export_id):
            raise ValueError(f"Export {submission.export_id} is already running.")

        job = self.repo.create_job(submission)
        logger.info(f"Job Submitted: {job.export_id} [{job.renderer.value}]")
        return job

    def start_job(self, export_id: str) -> threading.Thread:
        """Runs the job on a dedicated background thread."""
        with self._lock:
            running = self._threads.get(export_id)
            if running is not None and running.is_alive():
                raise ValueError(f"Export {export_id} is already running.")

            token = CancellationToken(export_id)
            thread = threading.Thread(
                target=self.run_job,
                args=(export_id, token),
                name=f"export-{export_id}",
                daemon=True,
            )
            self._threads[export_id] = thread
            self._tokens[export_id] = token

        thread.start()
        return thread

    def run_job(self, export_id: str, cancel_token: CancellationToken = None):
        """
        Executes a job by routing it to the export handler.
        Never raises: the outcome is recorded on the job row.
        """
        job = self.repo.get_job(export_id)
        if job is None:
            logger.error(f"Job {export_id} not found.")
            return

        cancel_token = cancel_token or CancellationToken(export_id)

        try:
            logger.info(f"Starting Job {export_id} ({job.renderer.value})...")
            result = self._route_to_feature(job, cancel_token)
            self.repo.mark_completed(export_id, result)
            logger.info(f"Job {export_id} Completed successfully.")

        except Exception as e:
            logger.exception(f"Job {export_id} Failed: {e}")
            self.repo.mark_failed(export_id, str(e))

        finally:
            with self._lock:
                self._tokens.pop(export_id, None)
                # Only forget the thread if it is this one (run_job may also be called inline)
                if self._threads.get(export_id) is threading.current_thread():
                    del self._threads[export_id]

    def cancel_job(self, export_id: str) -> bool:
        """Signals a running job to stop at its next checkpoint."""
        with self._lock:
            token = self._tokens.get(export_id)
        if token is None:
            return False
        logger.info(f"Cancelling Job {export_id}")
        token.cancel()
        return True

    def is_running(self, export_id: str) -> bool:
        with self._lock:
            thread = self._threads.get(export_id)
            return thread is not None and thread.is_alive()

    def wait(self, export_id: str, timeout: Optional[float] = None) -> bool:
        """Blocks until the job's thread finishes. True if it did."""
        with self._lock:
            thread = self._threads.get(export_id)
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _route_to_feature(self, job: ExportJobModel, cancel_token: CancellationToken) -> dict:
        """
        Routes the job to the export handler.
        Uses lazy imports to prevent circular dependencies.
        """
        handler = self._handler
        if handler is None:
            from canvas_export.features.export_pipeline.service.job_handler import ExportHandler
            handler = ExportHandler(repo=self.repo)
        return handler.handle(job, cancel_token)
