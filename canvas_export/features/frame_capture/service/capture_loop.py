import logging
import time
from typing import Callable, Optional

from canvas_export.core.common.enums import ProgressStatus
from canvas_export.core.jobs.domain.models import CancellationToken
from canvas_export.features.delivery.domain.interfaces import IProgressReporter
from canvas_export.features.render_surface.domain.interfaces import IRenderSurface
from ..domain.interfaces import IFrameStore
from ..domain.models import CaptureConfig, CaptureResult, FrameRecord
from .seek_monitor import SeekAccuracyMonitor

logger = logging.getLogger(__name__)


class FrameCaptureLoop:
    """
    Steps the surface through the timeline one frame at a time:
    seek, settle, (sample accuracy), capture, persist.
    """

    def __init__(self,
                 surface: IRenderSurface,
                 frame_store: IFrameStore,
                 reporter: IProgressReporter,
                 config: CaptureConfig = None,
                 monitor: SeekAccuracyMonitor = None,
                 cancel_token: Optional[CancellationToken] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.surface = surface
        self.frame_store = frame_store
        self.reporter = reporter
        self.config = config or CaptureConfig()
        self.monitor = monitor or SeekAccuracyMonitor(self.config)
        self.cancel_token = cancel_token
        self.sleep = sleep

    def run(self, total_frames: int) -> CaptureResult:
        fps = self.config.fps
        result = CaptureResult(total_frames=total_frames)
        logger.info(f"Capturing {total_frames} frames at {fps}fps...")

        for i in range(total_frames):
            if self.cancel_token is not None:
                self.cancel_token.raise_if_cancelled()

            time_seconds = i / fps
            if i % self.config.progress_every == 0:
                self._report(round(i / total_frames * 100))

            outcome = self.surface.seek_to(time_seconds)
            if outcome.timed_out:
                result.seek_timeouts += 1
            self.sleep(self.config.settle_delay_seconds)

            if self.monitor.wants_sample(i):
                self.monitor.record(i, time_seconds, self.surface.playback_position())

            image = self.surface.capture_frame()
            path = self.frame_store.write(i, image)
            result.frames.append(FrameRecord(index=i, timestamp=time_seconds, path=path))

            if i % 30 == 0:
                logger.info(f"Saved frame {i}/{total_frames}")

        result.stats = list(self.monitor.stats)
        logger.info(
            f"Captured {len(result.frames)} frames "
            f"(seek accuracy {self.monitor.success_ratio:.0%}, {result.seek_timeouts} seek timeouts)"
        )
        return result

    def _report(self, percent: int) -> None:
        try:
            self.reporter.report(percent, ProgressStatus.RENDERING_FRAMES)
        except Exception as e:
            # Progress is advisory; a broken reporter must not stop the render
            logger.error(f"Failed to report progress: {e}")
