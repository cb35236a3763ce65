import logging
import time
from typing import Callable, Optional

from canvas_export.core.common.enums import ProgressStatus, RendererType
from canvas_export.core.jobs.domain.models import CancellationToken
from canvas_export.core.jobs.types import ExportState
from canvas_export.features.asset_staging.service.stager import AssetStager
from canvas_export.features.delivery.data.backend_uploader import BackendUploader
from canvas_export.features.delivery.domain.interfaces import IArtifactUploader, IProgressReporter
from canvas_export.features.direct_render.service.api import DirectRenderer
from canvas_export.features.duration.service.resolver import DurationResolver
from canvas_export.features.fallback_extraction.service.api import FallbackExtractor
from canvas_export.features.frame_capture.data.frame_store import LocalFrameStore
from canvas_export.features.frame_capture.domain.models import CaptureConfig
from canvas_export.features.frame_capture.service.capture_loop import FrameCaptureLoop
from canvas_export.features.frame_capture.service.seek_monitor import SeekAccuracyMonitor
from canvas_export.features.merge.domain.interfaces import IVideoMerger
from canvas_export.features.merge.service.api import merge_workspace
from canvas_export.features.render_surface.domain.interfaces import IRenderSurface
from canvas_export.features.render_surface.service.api import open_render_surface
from canvas_export.features.workspace.data.local_fs import LocalWorkspaceFileSystem
from canvas_export.features.workspace.domain.interfaces import IWorkspaceFileSystem
from ..domain.models import ExportJob, ExportResult

logger = logging.getLogger(__name__)

StateListener = Callable[[str, ExportState], None]

MERGING_PROGRESS = 90
UPLOADING_PROGRESS = 95
COMPLETED_PROGRESS = 100


class ExportOrchestrator:
    """
    The export pipeline:
    stage -> resolve duration -> render -> merge -> upload -> cleanup.

    Element- and frame-level problems degrade inside their stage. Stage
    failures report `failed` to the webhook and propagate. The workspace is
    removed whatever happens.
    """

    def __init__(self,
                 stager: AssetStager = None,
                 duration_resolver: DurationResolver = None,
                 surface_factory: Callable[[], IRenderSurface] = None,
                 fallback: FallbackExtractor = None,
                 merger: IVideoMerger = None,
                 uploader: IArtifactUploader = None,
                 workspace_fs: IWorkspaceFileSystem = None,
                 direct_renderer: DirectRenderer = None,
                 capture_config: CaptureConfig = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.stager = stager or AssetStager()
        self.duration_resolver = duration_resolver or DurationResolver()
        self.surface_factory = surface_factory or open_render_surface
        self.fallback = fallback or FallbackExtractor()
        self.merger = merger
        self.uploader = uploader or BackendUploader()
        self.workspace_fs = workspace_fs or LocalWorkspaceFileSystem()
        self.direct_renderer = direct_renderer or DirectRenderer()
        self.capture_config = capture_config or CaptureConfig()
        self.sleep = sleep

    def run(self,
            job: ExportJob,
            reporter: IProgressReporter,
            cancel_token: Optional[CancellationToken] = None,
            on_state: Optional[StateListener] = None) -> ExportResult:

        def advance(state: ExportState) -> None:
            job.state = state
            logger.info(f"Export {job.export_id}: {state.value}")
            if on_state is not None:
                on_state(job.export_id, state)

        def checkpoint() -> None:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

        result = ExportResult(export_id=job.export_id, renderer=job.renderer)
        workspace = job.workspace

        try:
            self.workspace_fs.prepare(workspace)

            # 1. Stage remote assets
            advance(ExportState.STAGING)
            staged = self.stager.stage(job.scene, workspace.assets_dir)
            result.staging_failures = sorted(staged.report.failures)
            scene = staged.scene
            checkpoint()

            if job.renderer == RendererType.FFMPEG:
                # Browserless path: one encoder pass replaces render + merge
                advance(ExportState.RENDERING)
                reporter.report(MERGING_PROGRESS, ProgressStatus.MERGING_VIDEO)
                result.output_path = self.direct_renderer.render(scene, workspace.output_path)
            else:
                # 2. Duration (extracts the soundtrack on the way)
                advance(ExportState.RESOLVING_DURATION)
                resolution = self.duration_resolver.resolve(scene, workspace.audio_path)
                fps = self.capture_config.fps
                total_frames = resolution.estimate.total_frames(fps)
                result.duration_seconds = resolution.estimate.final_seconds
                result.total_frames = total_frames
                checkpoint()

                # 3. Render frame by frame
                advance(ExportState.RENDERING)
                monitor = SeekAccuracyMonitor(self.capture_config)
                with self.surface_factory() as surface:
                    surface.load(scene)
                    FrameCaptureLoop(
                        surface=surface,
                        frame_store=LocalFrameStore(workspace),
                        reporter=reporter,
                        config=self.capture_config,
                        monitor=monitor,
                        cancel_token=cancel_token,
                        sleep=self.sleep,
                    ).run(total_frames)
                result.seek_success_ratio = monitor.success_ratio

                if monitor.should_fallback(scene):
                    result.used_fallback = self.fallback.replace_frames(
                        scene, workspace, fps, resolution.estimate.final_seconds, total_frames
                    )
                checkpoint()

                # 4. Merge
                reporter.report(MERGING_PROGRESS, ProgressStatus.MERGING_VIDEO)
                advance(ExportState.MERGING)
                result.output_path = merge_workspace(workspace, fps, resolution.audio_path, self.merger)

            checkpoint()

            # 5. Upload
            reporter.report(UPLOADING_PROGRESS, ProgressStatus.UPLOADING)
            advance(ExportState.UPLOADING)
            self.uploader.upload(job.export_id, result.output_path)

            reporter.report(COMPLETED_PROGRESS, ProgressStatus.COMPLETED)
            advance(ExportState.COMPLETED)
            return result

        except Exception as e:
            logger.error(f"❌ Export {job.export_id} failed during {job.state.value}: {e}")
            reporter.report(reporter.last_progress, ProgressStatus.FAILED)
            advance(ExportState.FAILED)
            raise

        finally:
            reporter.flush()
            # STRICT CLEANUP
            self.workspace_fs.cleanup(workspace)
