import logging
import shutil
from canvas_export.core.common.errors import CleanupError
from ..domain.interfaces import IWorkspaceFileSystem
from ..domain.models import JobWorkspace

logger = logging.getLogger(__name__)


class LocalWorkspaceFileSystem(IWorkspaceFileSystem):

    def prepare(self, workspace: JobWorkspace) -> None:
        workspace.assets_dir.mkdir(parents=True, exist_ok=True)
        workspace.frames_dir.mkdir(parents=True, exist_ok=True)

    def cleanup(self, workspace: JobWorkspace) -> bool:
        job_dir = workspace.job_dir
        if not job_dir.exists():
            return True

        logger.info(f"🧹 Cleaning up export directory: {job_dir}")
        try:
            self._remove(job_dir)
        except CleanupError as e:
            # The job outcome is already decided; a stale temp dir must not change it
            logger.error(str(e))
            return False

        logger.info("✨ Cleanup successful")
        return True

    @staticmethod
    def _remove(path) -> None:
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise CleanupError(f"Failed to cleanup directory {path}: {e}") from e
