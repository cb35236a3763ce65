import subprocess
import logging
from pathlib import Path
from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import DurationProbeError
from ..domain.interfaces import IDurationProber

logger = logging.getLogger(__name__)

class FFprobeAdapter(IDurationProber):
    def probe_duration(self, file_path: Path) -> float:
        if not file_path.exists():
            raise DurationProbeError(f"File not found: {file_path}")

        cmd = [
            settings.FFPROBE_BINARY,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(file_path)
        ]

        try:
            result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            raise DurationProbeError(f"ffprobe failed for {file_path}: {e.stderr}") from e
        except OSError as e:
            raise DurationProbeError(f"Could not run ffprobe: {e}") from e

        output = result.stdout.strip()
        try:
            return float(output)
        except ValueError as e:
            # ffprobe prints "N/A" for streams without a container duration
            raise DurationProbeError(f"Unreadable duration {output!r} for {file_path}") from e
