import shutil
import subprocess
from pathlib import Path

import pytest

from canvas_export.core.common.errors import AudioExtractError
from canvas_export.features.audio_extraction.data.ffmpeg_adapter import FFmpegAudioAdapter
from canvas_export.features.audio_extraction.domain.models import ExtractionConfig, ExtractionResult
from canvas_export.features.audio_extraction.service.api import AudioExtractor, run_extraction
from canvas_export.features.scene.service.api import load_scene


class RecordingAdapter:
    def __init__(self, error=None):
        self.error = error
        self.sources = []

    def extract_audio(self, source, output_path: Path, config):
        self.sources.append(source)
        if self.error:
            raise self.error
        output_path.write_bytes(b"aac")
        return ExtractionResult(output_path=output_path, source=source, format=config.format)


def test_first_playable_video_is_used(tmp_path):
    local = tmp_path / "local.mp4"
    local.write_bytes(b"v")
    scene = load_scene({"objects": [
        {"type": "image", "src": "https://cdn.local/a.png"},
        {"type": "video", "src": str(tmp_path / "missing.mp4")},
        {"type": "video", "src": str(local), "muted": True},
        {"type": "video", "src": "https://cdn.local/b.mp4"},
    ]})
    adapter = RecordingAdapter()

    out = AudioExtractor(adapter=adapter).extract_for_scene(scene, tmp_path / "audio.aac")

    # Muted only affects the editor preview; audio is still pulled
    assert adapter.sources == [str(local)]
    assert out == tmp_path / "audio.aac"


def test_extraction_failure_continues_silently(tmp_path):
    scene = load_scene({"objects": [{"type": "video", "src": "https://cdn.local/b.mp4"}]})
    adapter = RecordingAdapter(error=AudioExtractError("no audio stream"))

    assert AudioExtractor(adapter=adapter).extract_for_scene(scene, tmp_path / "audio.aac") is None


def test_adapter_builds_copy_command(tmp_path, monkeypatch):
    calls = []
    out = tmp_path / "audio.aac"

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        out.write_bytes(b"aac")
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    FFmpegAudioAdapter().extract_audio("https://cdn.local/v.mp4", out, ExtractionConfig())

    cmd = calls[0]
    assert cmd[cmd.index("-i") + 1] == "https://cdn.local/v.mp4"
    assert "-vn" in cmd
    assert cmd[cmd.index("-acodec") + 1] == "copy"
    assert cmd[-1] == str(out)


def test_adapter_raises_on_ffmpeg_error(tmp_path, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr=b"Output file #0 does not contain any stream")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(AudioExtractError, match="does not contain any stream"):
        FFmpegAudioAdapter().extract_audio("in.mp4", tmp_path / "audio.aac", ExtractionConfig())


def test_uncopyable_stream_is_reencoded_to_aac(tmp_path, monkeypatch):
    """WebM sources carry Opus, which an .aac file can't hold as-is."""
    calls = []
    out = tmp_path / "audio.aac"

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        if cmd[cmd.index("-acodec") + 1] == "copy":
            raise subprocess.CalledProcessError(1, cmd, stderr=b"opus in ADTS not supported")
        out.write_bytes(b"aac")
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = FFmpegAudioAdapter().extract_audio("clip.webm", out, ExtractionConfig())

    assert [cmd[cmd.index("-acodec") + 1] for cmd in calls] == ["copy", "aac"]
    assert result.output_path == out
    assert out.read_bytes() == b"aac"


def test_explicit_codec_is_not_retried(tmp_path, monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        raise subprocess.CalledProcessError(1, cmd, stderr=b"Unknown encoder")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(AudioExtractError, match="Unknown encoder"):
        FFmpegAudioAdapter().extract_audio("in.mp4", tmp_path / "audio.mp3", ExtractionConfig(codec="libmp3lame", format="mp3"))

    assert len(calls) == 1


@pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not on PATH")
def test_audio_extraction_flow(tmp_path, make_video):
    """
    Integration Test:
    Verifies that run_extraction copies the AAC track out of a real MP4.
    """
    video = make_video(tmp_path / "src_audio_test.mp4", 2, with_audio=True)
    out = tmp_path / "audio.aac"

    result = run_extraction(str(video), str(out))

    assert result.output_path == out
    assert out.stat().st_size > 0
    print(f"✅ Created audio file: {out}")
