from __future__ import annotations

import pytest

from dose_explorer import config
from dose_explorer.graph_engine import (
    build_prediction_figure,
    build_training_figure,
    evaluate,
    evaluate_curve,
    generate_x_grid,
    generate_x_samples,
    vertex,
)
from dose_explorer.models import BASELINE, Coefficients


def test_evaluate_quadratic() -> None:
    assert evaluate(Coefficients(2.0, -3.0, 5.0), 4) == 25


def test_evaluate_does_not_clamp_input() -> None:
    coeffs = Coefficients(1.0, 0.0, 0.0)
    assert evaluate(coeffs, -100.0) == 10000.0
    assert evaluate_curve(coeffs, [0.0, 2.0, 3.0]) == [0.0, 4.0, 9.0]


def test_sampling_grid_matches_chart_domain() -> None:
    xs = generate_x_grid()
    assert len(xs) == config.NUM_SAMPLES
    assert xs[0] == config.X_MIN
    assert xs[-1] == pytest.approx(config.X_MAX)
    assert xs[1] - xs[0] == pytest.approx(1.0)
    assert generate_x_samples(3.0, 9.0, 1) == [3.0]


def test_vertex() -> None:
    xv, yv = vertex(Coefficients(1.0, -4.0, 7.0))
    assert xv == pytest.approx(2.0)
    assert yv == pytest.approx(3.0)
    assert vertex(BASELINE) == (None, None)


def test_training_figure_contains_curve_and_points(seed_points) -> None:
    fig = build_training_figure(seed_points, BASELINE, curve_name="curve", points_name="data")
    curve, scatter = fig.data
    assert curve.name == "curve"
    assert list(curve.y) == [160.0] * config.NUM_SAMPLES
    assert list(scatter.x) == [p.x for p in seed_points]
    assert list(scatter.y) == [p.y for p in seed_points]
    assert list(fig.layout.yaxis.range) == config.CHART_Y_RANGE


def test_prediction_figure_marks_predicted_value() -> None:
    coeffs = Coefficients(0.1, -5.0, 180.0)
    fig = build_prediction_figure(coeffs, 20.0)
    marker = fig.data[1]
    assert list(marker.x) == [20.0]
    assert list(marker.y) == [pytest.approx(evaluate(coeffs, 20.0))]
    assert len(fig.layout.shapes) == 2
    assert fig.layout.shapes[0].x0 == 20.0
