import pytest

from canvas_export.features.render_surface.data.asset_router import AssetRouter, ASSET_ROUTE_PREFIX
from canvas_export.features.render_surface.data.local_asset_server import (
    UnsatisfiableRange,
    parse_range,
    serve_file,
)
from canvas_export.features.scene.service.api import load_scene

RENDER_URL = "http://render.local:8000/editor/render?mode=export"


@pytest.mark.parametrize("header, size, expected", [
    (None, 100, None),
    ("bytes=0-9", 100, (0, 9)),
    ("bytes=90-", 100, (90, 99)),
    ("bytes=50-500", 100, (50, 99)),
    ("bytes=-10", 100, (90, 99)),
    ("bytes=-500", 100, (0, 99)),
    ("items=0-1", 100, None),
    ("bytes=0-1,5-6", 100, None),
])
def test_parse_range(header, size, expected):
    assert parse_range(header, size) == expected


@pytest.mark.parametrize("header", ["bytes=100-", "bytes=10-5", "bytes=-0"])
def test_unsatisfiable_ranges(header):
    with pytest.raises(UnsatisfiableRange):
        parse_range(header, 100)


def test_video_range_is_partial_content(tmp_path):
    video = tmp_path / "clip.mp4"
    video.write_bytes(bytes(range(100)))

    response = serve_file(video, "bytes=10-19")

    assert response.status == 206
    assert response.body == bytes(range(10, 20))
    assert response.headers["Content-Range"] == "bytes 10-19/100"
    assert response.headers["Content-Length"] == "10"
    assert response.content_type == "video/mp4"


def test_out_of_bounds_range_is_416(tmp_path):
    video = tmp_path / "clip.webm"
    video.write_bytes(b"x" * 10)

    response = serve_file(video, "bytes=50-")

    assert response.status == 416
    assert response.headers["Content-Range"] == "bytes */10"


def test_images_are_served_whole(tmp_path):
    image = tmp_path / "logo.png"
    image.write_bytes(b"png-bytes")

    response = serve_file(image, "bytes=0-1")

    assert response.status == 200
    assert response.body == b"png-bytes"
    assert response.content_type == "image/png"


def test_router_publishes_local_files_on_render_origin(tmp_path):
    clip = tmp_path / "clip.mp4"
    clip.write_bytes(b"v")
    scene = load_scene({"objects": [
        {"type": "video", "src": str(clip)},
        {"type": "image", "src": "https://cdn.local/remote.png"},
        {"type": "image", "src": "data:image/png;base64,AAAA"},
    ]})
    router = AssetRouter(RENDER_URL)

    rewritten = router.rewrite_scene(scene)

    local, remote, inline = rewritten.elements
    assert local.source.startswith("http://render.local:8000" + ASSET_ROUTE_PREFIX)
    assert local.source.endswith(".mp4")
    assert remote.source == "https://cdn.local/remote.png"
    assert inline.source.startswith("data:")
    assert router.resolve(local.source) == clip.resolve()
    # Original scene keeps its paths
    assert scene.elements[0].source == str(clip)


def test_router_only_serves_registered_files(tmp_path):
    registered = tmp_path / "a.png"
    other = tmp_path / "b.png"
    registered.write_bytes(b"a")
    other.write_bytes(b"b")
    router = AssetRouter(RENDER_URL)
    router.register(registered)

    assert router.resolve(registered.as_uri()) == registered
    assert router.resolve(other.as_uri()) is None
    assert router.resolve(str(other)) is None
    assert router.resolve(router.base_url + "unknown.png") is None
    assert router.resolve("https://cdn.local/a.png") is None
