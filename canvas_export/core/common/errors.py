"""
Export error taxonomy.

Everything inherits from ExportError so the job dispatcher can catch the whole
family. Recoverable kinds (downloads, probes, audio, per-frame seeks) are
caught where they happen and only logged; the rest abort the job.
"""


class ExportError(Exception):
    """Base exception for all export failures."""
    pass


class AssetDownloadError(ExportError):
    """A remote asset could not be fetched. The element keeps its URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class DurationProbeError(ExportError):
    """ffprobe could not report a duration. Counts as 0 seconds."""
    pass


class AudioExtractError(ExportError):
    """No audio could be pulled from the source video. Export goes on silent."""
    pass


class RenderSurfaceError(ExportError):
    """The render page is unusable (missing hooks, broken stage)."""
    pass


class RenderSurfaceTimeoutError(RenderSurfaceError):
    """The render page never became ready."""
    pass


class SeekTimeoutError(ExportError):
    """Media elements did not confirm a seek within the timeout."""

    def __init__(self, time_seconds: float, timeout_seconds: float):
        self.time_seconds = time_seconds
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Seek to {time_seconds:.3f}s not confirmed after {timeout_seconds}s")


class EncodeError(ExportError):
    """The encoder exited non-zero or produced nothing."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        super().__init__(message)


class UploadError(ExportError):
    """The storage backend rejected (or never received) the artifact."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class CleanupError(ExportError):
    """The job workspace could not be removed. Logged, never raised out of a job."""
    pass


class ExportCancelledError(ExportError):
    """The job was cancelled while it was running."""

    def __init__(self, export_id: str):
        self.export_id = export_id
        super().__init__(f"Export {export_id} was cancelled")
