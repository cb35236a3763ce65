import shutil
from pathlib import Path

import pytest

from canvas_export.core.common.errors import DurationProbeError
from canvas_export.features.audio_extraction.service.api import AudioExtractor
from canvas_export.features.duration.domain.models import DurationEstimate
from canvas_export.features.duration.service.api import probe_duration
from canvas_export.features.duration.service.resolver import DurationResolver
from canvas_export.features.scene.service.api import load_scene


class FakeProber:
    def __init__(self, durations):
        self.durations = durations

    def probe_duration(self, path: Path) -> float:
        value = self.durations.get(path.name)
        if value is None:
            raise DurationProbeError(f"no duration for {path}")
        return value


class FakeAudioExtractor:
    """Writes a placeholder file instead of running ffmpeg."""

    def __init__(self, produce=True):
        self.produce = produce

    def extract_for_scene(self, scene, output_path: Path):
        if not self.produce or not scene.video_elements:
            return None
        output_path.write_bytes(b"aac")
        return output_path


def _video(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"video")
    return str(path)


def test_eight_second_video_without_audio(tmp_path):
    scene = load_scene({"objects": [{"type": "video", "src": _video(tmp_path, "clip.mp4")}]})
    resolver = DurationResolver(FakeProber({"clip.mp4": 8.0}), FakeAudioExtractor(produce=False))

    resolution = resolver.resolve(scene, tmp_path / "audio.aac")

    assert resolution.estimate.final_seconds == 8.0
    assert resolution.estimate.total_frames(24) == 192
    assert resolution.audio_path is None


def test_audio_longer_than_video_wins(tmp_path):
    scene = load_scene({"objects": [{"type": "video", "src": _video(tmp_path, "short.mp4")}]})
    resolver = DurationResolver(
        FakeProber({"short.mp4": 3.0, "audio.aac": 10.0}),
        FakeAudioExtractor(),
    )

    resolution = resolver.resolve(scene, tmp_path / "audio.aac")

    assert resolution.estimate.final_seconds == 10.0
    assert resolution.audio_path == tmp_path / "audio.aac"


def test_no_media_uses_minimum(tmp_path):
    scene = load_scene({"objects": [{"type": "text", "text": "static"}]})
    resolver = DurationResolver(FakeProber({}), FakeAudioExtractor())

    estimate = resolver.resolve(scene, tmp_path / "audio.aac").estimate

    assert estimate.final_seconds == 5.0
    assert estimate.total_frames(24) == 120


def test_longest_of_several_local_videos(tmp_path):
    scene = load_scene({"objects": [
        {"type": "video", "src": _video(tmp_path, "a.mp4")},
        {"type": "video", "src": _video(tmp_path, "b.mp4")},
        {"type": "video", "src": "https://cdn.local/remote.mp4"},
    ]})
    resolver = DurationResolver(FakeProber({"a.mp4": 6.5, "b.mp4": 12.25}), FakeAudioExtractor(produce=False))

    assert resolver.resolve(scene, tmp_path / "audio.aac").estimate.final_seconds == 12.25


def test_probe_failures_count_as_zero(tmp_path):
    scene = load_scene({"objects": [{"type": "video", "src": _video(tmp_path, "broken.mp4")}]})
    resolver = DurationResolver(FakeProber({}), FakeAudioExtractor(produce=False))

    assert resolver.resolve(scene, tmp_path / "audio.aac").estimate.final_seconds == 5.0


@pytest.mark.parametrize("video, audio, fps, frames", [
    (8.0, 0.0, 24, 192),
    (0.0, 0.0, 30, 150),
    (7.99, 0.0, 24, 191),
    (2.0, 4.0, 24, 120),
])
def test_frame_count_is_floored(video, audio, fps, frames):
    estimate = DurationEstimate(audio_seconds=audio, max_video_seconds=video)
    assert estimate.final_seconds >= 5.0
    assert estimate.total_frames(fps) == frames


def test_audio_extractor_is_skipped_without_video(tmp_path):
    scene = load_scene({"objects": [{"type": "image", "src": "https://cdn.local/a.png"}]})
    assert AudioExtractor().extract_for_scene(scene, tmp_path / "audio.aac") is None


@pytest.mark.skipif(shutil.which("ffprobe") is None or shutil.which("ffmpeg") is None,
                    reason="ffmpeg/ffprobe not on PATH")
def test_ffprobe_reports_real_duration(tmp_path, make_video):
    clip = make_video(tmp_path / "real.mp4", 3)
    assert probe_duration(str(clip)) == pytest.approx(3.0, abs=0.1)
