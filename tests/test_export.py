import json

import pytest

from heart_layout.export import (
    css_size_variables,
    generate_svg_document,
    layout_to_dicts,
    layout_to_json,
    render_layout_plot,
)
from heart_layout.scaler import recompute


def test_layout_to_dicts_uses_front_end_keys():
    result = recompute(1024, 3, strategy="template")
    records = layout_to_dicts(result)
    assert len(records) == 3
    assert set(records[0]) == {"x", "y", "width", "height", "size", "index", "zIndex"}
    assert records[0]["zIndex"] == 10
    assert records[1]["zIndex"] == 1
    assert records[2]["index"] == 2
    assert records[0]["size"] == "medium"


def test_layout_to_json_round_trips_summary():
    result = recompute(600, 25, strategy="template")
    document = json.loads(layout_to_json(result))
    assert document["container_size"] == 400.0
    assert document["requested"] == 25
    assert document["placed"] == 20
    assert document["strategy"] == "template"
    assert len(document["positions"]) == 20
    assert document["warnings"]


def test_css_size_variables_full_size():
    assert css_size_variables(600) == {
        "--heart-size": "600px",
        "--photo-small": "80px",
        "--photo-medium": "120px",
        "--photo-large": "150px",
    }


def test_svg_document_contains_outline_and_slots():
    result = recompute(1024, 20, strategy="template")
    svg = generate_svg_document(result, outline_points=48)
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'viewBox="0 0 600 600"' in svg
    assert 'class="heart-outline"' in svg
    assert svg.count("<rect ") == 20
    # Highest stack order paints last.
    rect_lines = [line for line in svg.splitlines() if "<rect " in line]
    assert 'data-index="0"' in rect_lines[-1]
    assert svg.rstrip().endswith("</svg>")


def test_svg_title_is_escaped():
    result = recompute(1024, 1, strategy="template")
    svg = generate_svg_document(result, title="A & B")
    assert "<title>A &amp; B</title>" in svg


def test_render_layout_plot_writes_png(tmp_path):
    result = recompute(1024, 8, strategy="grid", seed=4)
    path = render_layout_plot(tmp_path / "layout.png", result)
    assert path.exists()
    assert path.read_bytes().startswith(b"\x89PNG")


@pytest.mark.parametrize("size, small", [(320, "42.667px"), (400, "53.333px")])
def test_css_size_variables_scale(size, small):
    assert css_size_variables(size)["--photo-small"] == small
