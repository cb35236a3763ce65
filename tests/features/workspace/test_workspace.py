import shutil

from canvas_export.features.workspace.data.local_fs import LocalWorkspaceFileSystem
from canvas_export.features.workspace.domain.models import JobWorkspace


def test_layout(tmp_path):
    ws = JobWorkspace(export_id="abc", root=tmp_path)

    assert ws.job_dir == tmp_path / "abc"
    assert ws.assets_dir == tmp_path / "abc" / "assets"
    assert ws.frame_path(7) == tmp_path / "abc" / "frames" / "frame_7.png"
    assert ws.frame_pattern == tmp_path / "abc" / "frames" / "frame_%d.png"
    assert ws.audio_path.name == "audio.aac"
    assert ws.output_path.name == "abc.mp4"


def test_prepare_and_cleanup(tmp_path):
    fs = LocalWorkspaceFileSystem()
    ws = JobWorkspace(export_id="job", root=tmp_path)

    fs.prepare(ws)
    ws.frame_path(0).write_bytes(b"png")

    assert fs.cleanup(ws) is True
    assert not ws.job_dir.exists()
    # Idempotent
    assert fs.cleanup(ws) is True


def test_cleanup_failure_is_reported_not_raised(tmp_path, monkeypatch):
    fs = LocalWorkspaceFileSystem()
    ws = JobWorkspace(export_id="stuck", root=tmp_path)
    fs.prepare(ws)

    def failing_rmtree(path, *args, **kwargs):
        raise PermissionError("busy")

    monkeypatch.setattr(shutil, "rmtree", failing_rmtree)

    assert fs.cleanup(ws) is False
