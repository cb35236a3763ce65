import subprocess
import logging
from pathlib import Path
from canvas_export.core.config.settings import settings
from canvas_export.core.common.errors import AudioExtractError
from ..domain.interfaces import IAudioExtractor
from ..domain.models import ExtractionConfig, ExtractionResult

logger = logging.getLogger(__name__)

class FFmpegAudioAdapter(IAudioExtractor):
    def extract_audio(self, source: str, output_path: Path, config: ExtractionConfig) -> ExtractionResult:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._run(self._build_cmd(source, output_path, config.codec))
        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.decode(errors="replace") if e.stderr else str(e)
            if config.codec != "copy" or not config.fallback_codec:
                logger.error(f"FFmpeg failed: {error_msg}")
                raise AudioExtractError(f"Audio extraction failed: {error_msg}") from e

            # Opus/Vorbis (WebM) streams can't be copied into an ADTS .aac container
            logger.warning(f"⚠️ Stream copy failed for {source}, re-encoding to {config.fallback_codec}")
            try:
                self._run(self._build_cmd(source, output_path, config.fallback_codec))
            except subprocess.CalledProcessError as retry_error:
                retry_msg = retry_error.stderr.decode(errors="replace") if retry_error.stderr else str(retry_error)
                logger.error(f"FFmpeg failed: {retry_msg}")
                raise AudioExtractError(f"Audio extraction failed: {retry_msg}") from retry_error

        if not output_path.exists() or output_path.stat().st_size == 0:
            raise AudioExtractError(f"FFmpeg produced no audio for {source}")

        return ExtractionResult(
            output_path=output_path,
            source=source,
            format=config.format
        )

    def _build_cmd(self, source: str, output_path: Path, codec: str) -> list:
        # FFmpeg command
        # -vn: Disable video
        # -y: Overwrite output
        # -acodec copy: Keep the original stream, no re-encode
        return [
            settings.FFMPEG_BINARY,
            "-y",
            "-i", source,
            "-vn",
            "-acodec", codec,
            str(output_path)
        ]

    def _run(self, cmd: list):
        logger.info(f"Extracting audio: {' '.join(cmd)}")
        try:
            subprocess.run(
                cmd,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE
            )
        except OSError as e:
            raise AudioExtractError(f"Could not run ffmpeg: {e}") from e
