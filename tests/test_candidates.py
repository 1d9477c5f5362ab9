import numpy as np
import pytest

from heart_layout.boundary import HeartBoundary
from heart_layout.candidates import (
    HEART_TEMPLATE,
    GridScanGenerator,
    SobolGenerator,
    TemplateGenerator,
    make_generator,
)
from heart_layout.config import LayoutOptions
from heart_layout.types import ConfigurationError, SizeClass


def test_grid_scan_keeps_only_inside_points():
    boundary = HeartBoundary.scale(600)
    generator = GridScanGenerator(20)
    candidates = generator.generate(boundary, np.random.default_rng(0))

    xs, ys = generator.grid(600)
    expected = {
        (float(x), float(y)) for x, y in zip(xs, ys) if boundary.contains((float(x), float(y)))
    }
    assert {c.as_tuple() for c in candidates} == expected
    assert len(candidates) == len(expected)
    assert 0 < len(candidates) < 400


def test_grid_uses_cell_centers():
    xs, ys = GridScanGenerator(20).grid(600)
    assert xs.size == 400
    assert xs.min() == pytest.approx(15.0)
    assert ys.max() == pytest.approx(585.0)


def test_grid_scan_order_is_seeded_shuffle():
    boundary = HeartBoundary.scale(600)
    generator = GridScanGenerator(20)
    a = generator.generate(boundary, np.random.default_rng(5))
    b = generator.generate(boundary, np.random.default_rng(5))
    c = generator.generate(boundary, np.random.default_rng(6))
    assert a == b
    assert a != c
    assert sorted(a, key=lambda p: (p.y, p.x)) == sorted(c, key=lambda p: (p.y, p.x))


def test_grid_resolution_must_be_positive():
    with pytest.raises(ConfigurationError):
        GridScanGenerator(0)


def test_sobol_candidates_inside_and_reproducible():
    boundary = HeartBoundary.scale(400)
    generator = SobolGenerator(points_log2=8)
    first = generator.generate(boundary, np.random.default_rng(1))
    second = generator.generate(boundary, np.random.default_rng(1))
    assert first == second
    assert 0 < len(first) <= 256
    assert all(boundary.contains(c.as_tuple()) for c in first)


def test_sobol_exponent_must_be_positive():
    with pytest.raises(ConfigurationError):
        SobolGenerator(0)


def test_template_has_twenty_anchors():
    assert len(HEART_TEMPLATE) == 20
    assert TemplateGenerator().capacity == 20


def test_template_maps_anchors_by_scalar_multiplication():
    placed = TemplateGenerator().layout(600, 20)
    first = placed[0]
    assert first.center == pytest.approx((300.0, 270.0))
    assert first.width == pytest.approx(132.0)
    assert first.stack_order == 10
    assert all(p.stack_order == 1 for p in placed[1:])
    assert [p.item_index for p in placed] == list(range(20))
    tip = placed[19]
    assert (tip.x, tip.y) == pytest.approx((255.0, 495.0))


def test_template_truncates_to_request_and_capacity():
    generator = TemplateGenerator()
    assert len(generator.layout(600, 5)) == 5
    assert len(generator.layout(600, 25)) == 20
    assert generator.layout(600, 0) == []
    with pytest.raises(ValueError):
        generator.layout(600, -1)


def test_template_size_classes_are_nearest_table_class():
    placed = TemplateGenerator().layout(600, 20)
    assert placed[0].size_class is SizeClass.MEDIUM
    assert placed[17].size_class is SizeClass.SMALL


@pytest.mark.parametrize("size", [320, 400, 600])
def test_template_slots_lie_inside_heart(size):
    boundary = HeartBoundary.scale(size)
    for placed in TemplateGenerator().layout(size, 20):
        assert placed.rect.within(size, size)
        assert boundary.rect_fully_inside(placed.rect)


def test_make_generator_by_name():
    options = LayoutOptions(grid_resolution=12, sobol_points_log2=6)
    assert isinstance(make_generator("template", options), TemplateGenerator)
    grid = make_generator("grid", options)
    assert isinstance(grid, GridScanGenerator)
    assert grid.resolution == 12
    sobol = make_generator("sobol", options)
    assert isinstance(sobol, SobolGenerator)
    assert sobol.points_log2 == 6
    with pytest.raises(ConfigurationError):
        make_generator("spiral", options)
