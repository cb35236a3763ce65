import json

import pytest

from canvas_export.core.common.enums import ElementKind
from canvas_export.features.scene.service.api import load_scene


def test_parses_flat_design():
    design = {
        "canvas": {"width": 1280, "height": 720, "backgroundColor": "#000000"},
        "objects": [
            {"type": "video", "src": "https://cdn.local/clip.mp4", "x": 10, "y": 20,
             "width": 640, "height": 360, "startTime": 0, "endTime": 8, "rotation": 15},
            {"type": "text", "text": "Title", "fontSize": 48, "fill": "#ff0000"},
        ],
    }

    scene = load_scene(design)

    assert scene.canvas.width == 1280
    assert scene.canvas.height == 720
    assert scene.canvas.background_color == "#000000"

    video, text = scene.elements
    assert video.kind == ElementKind.VIDEO
    assert video.is_remote
    assert video.geometry.width == 640
    assert video.timing.end_seconds == 8
    # Unmodelled fields pass through untouched
    assert video.attributes["rotation"] == 15

    assert text.kind == ElementKind.TEXT
    assert text.text == "Title"
    assert text.font_size == 48
    assert text.fill == "#ff0000"


def test_layers_as_json_string_and_custom_type():
    layers = {
        "objects": [{"type": "image", "customType": "Video", "src": "a.mp4"}],
        "canvas": {"width": 800, "height": 600},
    }
    scene = load_scene({"layers": json.dumps(layers)})

    assert scene.elements[0].kind == ElementKind.VIDEO
    assert scene.canvas.width == 800
    assert scene.canvas.background_color == "#ffffff"


def test_canvas_config_fallback_and_defaults():
    scene = load_scene({"objects": [], "canvas_config": '{"width": 1080, "height": 1920}'})
    assert (scene.canvas.width, scene.canvas.height) == (1080, 1920)

    empty = load_scene({})
    assert empty.elements == ()
    assert (empty.canvas.width, empty.canvas.height) == (1920, 1080)


def test_unknown_types_and_missing_geometry():
    scene = load_scene({"objects": [{"type": "rect", "width": 0}]})
    element = scene.elements[0]

    assert element.kind == ElementKind.OTHER
    assert element.geometry.width == 100.0
    assert element.geometry.x == 0.0
    assert element.timing is None
    assert element.visible is True


def test_parsing_does_not_alias_caller_design():
    design = {"objects": [{"type": "image", "src": "https://cdn.local/a.png", "meta": {"tag": "x"}}]}
    scene = load_scene(design)

    design["objects"][0]["meta"]["tag"] = "changed"
    assert scene.elements[0].attributes["meta"]["tag"] == "x"


def test_payload_shape():
    scene = load_scene({
        "canvas": {"width": 100, "height": 50, "backgroundColor": "#123456"},
        "objects": [{"type": "image", "src": "/tmp/a.png", "id": "img-1", "startTime": 1}],
    })

    payload = scene.to_payload()

    assert payload["canvas"] == {"width": 100, "height": 50, "backgroundColor": "#123456"}
    obj = payload["objects"][0]
    assert obj["type"] == "image"
    assert obj["id"] == "img-1"
    assert obj["src"] == "/tmp/a.png"
    assert obj["startTime"] == 1.0
    assert "endTime" not in obj


@pytest.mark.parametrize("design", [
    [],
    {"objects": "nope"},
    {"layers": "{not json"},
])
def test_rejects_malformed_designs(design):
    with pytest.raises(ValueError):
        load_scene(design)


def test_rejects_inverted_timing():
    with pytest.raises(ValueError):
        load_scene({"objects": [{"type": "video", "startTime": 5, "endTime": 2}]})
