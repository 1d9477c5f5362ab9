import numpy as np
import pytest

from heart_layout.sizing import DEFAULT_SIZE_TABLE, SizeClassifier, SizeClassSpec, SizeTable, classify
from heart_layout.types import ConfigurationError, SizeClass


def test_default_table_weights_and_edges():
    table = DEFAULT_SIZE_TABLE
    assert table.classes == (SizeClass.SMALL, SizeClass.MEDIUM, SizeClass.LARGE)
    assert sum(table.weights) == pytest.approx(1.0)
    assert table.cumulative[-1] == pytest.approx(1.0)
    assert table.edge_length(SizeClass.SMALL, 600) == pytest.approx(80.0)
    assert table.edge_length(SizeClass.MEDIUM, 600) == pytest.approx(120.0)
    assert table.edge_length(SizeClass.LARGE, 600) == pytest.approx(150.0)
    assert table.edge_lengths(320)[SizeClass.SMALL] == pytest.approx(80.0 * 320 / 600)


@pytest.mark.parametrize(
    "draw, expected",
    [
        (0.0, SizeClass.SMALL),
        (0.39, SizeClass.SMALL),
        (0.41, SizeClass.MEDIUM),
        (0.74, SizeClass.MEDIUM),
        (0.76, SizeClass.LARGE),
        (0.999999, SizeClass.LARGE),
        (1.0, SizeClass.LARGE),
    ],
)
def test_pick_uses_cumulative_brackets(draw, expected):
    assert DEFAULT_SIZE_TABLE.pick(draw) is expected


def test_nearest_class():
    assert DEFAULT_SIZE_TABLE.nearest(0.22) is SizeClass.MEDIUM
    assert DEFAULT_SIZE_TABLE.nearest(0.12) is SizeClass.SMALL
    assert DEFAULT_SIZE_TABLE.nearest(0.25) is SizeClass.LARGE


def test_classify_zero_and_negative():
    classifier = SizeClassifier(rng=np.random.default_rng(0))
    assert classifier.classify(0) == []
    with pytest.raises(ValueError):
        classifier.classify(-1)


def test_classify_is_reproducible_with_seed():
    first = classify(50, np.random.default_rng(42))
    second = classify(50, np.random.default_rng(42))
    assert first == second
    assert len(first) == 50


def test_classify_follows_weights():
    classes = SizeClassifier(rng=np.random.default_rng(2024)).classify(5000)
    assert classes.count(SizeClass.SMALL) / 5000 == pytest.approx(0.40, abs=0.04)
    assert classes.count(SizeClass.MEDIUM) / 5000 == pytest.approx(0.35, abs=0.04)
    assert classes.count(SizeClass.LARGE) / 5000 == pytest.approx(0.25, abs=0.04)


def test_relative_weights_are_normalized():
    table = SizeTable(
        [
            SizeClassSpec(SizeClass.SMALL, 0.1, 2.0),
            SizeClassSpec(SizeClass.LARGE, 0.2, 2.0),
        ]
    )
    assert table.weights == pytest.approx((0.5, 0.5))
    assert table.pick(0.6) is SizeClass.LARGE


def test_zero_weight_class_is_never_drawn():
    table = SizeTable(
        [
            SizeClassSpec(SizeClass.SMALL, 0.1, 1.0),
            SizeClassSpec(SizeClass.MEDIUM, 0.2, 0.0),
        ]
    )
    classes = SizeClassifier(table, np.random.default_rng(3)).classify(200)
    assert set(classes) == {SizeClass.SMALL}


@pytest.mark.parametrize(
    "entries",
    [
        [],
        [SizeClassSpec(SizeClass.SMALL, 0.1, 0.0)],
        [SizeClassSpec(SizeClass.SMALL, 0.1, -1.0), SizeClassSpec(SizeClass.LARGE, 0.2, 2.0)],
        [SizeClassSpec(SizeClass.SMALL, 0.0, 1.0)],
        [SizeClassSpec(SizeClass.SMALL, 0.1, 1.0), SizeClassSpec(SizeClass.SMALL, 0.2, 1.0)],
        [SizeClassSpec(SizeClass.SMALL, 0.1, float("nan"))],
    ],
)
def test_invalid_tables_rejected_at_construction(entries):
    with pytest.raises(ConfigurationError):
        SizeTable(entries)


def test_unknown_class_lookup():
    table = SizeTable([SizeClassSpec(SizeClass.SMALL, 0.1, 1.0)])
    with pytest.raises(ConfigurationError):
        table.edge_length(SizeClass.LARGE, 600)
