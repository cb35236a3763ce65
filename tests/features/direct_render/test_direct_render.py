import shutil
import subprocess

import pytest

from canvas_export.core.common.errors import EncodeError
from canvas_export.features.direct_render.service.api import DirectRenderer
from canvas_export.features.scene.service.api import load_scene


def test_scales_first_video_to_canvas(tmp_path, monkeypatch):
    calls = []
    out = tmp_path / "job" / "job.mp4"

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        out.write_bytes(b"mp4")

    monkeypatch.setattr(subprocess, "run", fake_run)
    scene = load_scene({
        "canvas": {"width": 1280, "height": 720},
        "objects": [
            {"type": "text", "text": "dropped"},
            {"type": "video", "src": "/assets/first.mp4"},
            {"type": "video", "src": "/assets/second.mp4"},
        ],
    })

    assert DirectRenderer().render(scene, out) == out

    cmd = calls[0]
    assert cmd[cmd.index("-i") + 1] == "/assets/first.mp4"
    assert cmd[cmd.index("-vf") + 1] == "scale=1280:720"
    assert cmd[cmd.index("-c:a") + 1] == "copy"
    assert cmd[-1] == str(out)


def test_scene_without_video_fails():
    scene = load_scene({"objects": [{"type": "image", "src": "/assets/a.png"}]})
    with pytest.raises(EncodeError, match="No video elements found in design"):
        DirectRenderer().render(scene, None)


@pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not on PATH")
def test_real_direct_render(tmp_path, make_video):
    clip = make_video(tmp_path / "src.mp4", 1, with_audio=True)
    scene = load_scene({"canvas": {"width": 160, "height": 120},
                        "objects": [{"type": "video", "src": str(clip)}]})
    out = tmp_path / "out.mp4"

    assert DirectRenderer().render(scene, out).stat().st_size > 0
