from __future__ import annotations

import random

import pytest

from dose_explorer.graph_engine import evaluate, generate_x_samples, vertex
from dose_explorer.models import ZERO, Coefficients, DataPoint
from dose_explorer.regression import determinant3, fit, normal_equations, replace_column


def _points(pairs) -> list:
    return [DataPoint(id=f"p{i}", x=float(x), y=float(y)) for i, (x, y) in enumerate(pairs)]


def _on_curve(coeffs: Coefficients, xs) -> list:
    return _points([(x, evaluate(coeffs, x)) for x in xs])


@pytest.mark.parametrize(
    "coeffs, xs",
    [
        (Coefficients(2.0, -3.0, 5.0), [1, 2, 3]),
        (Coefficients(0.1, -5.0, 180.0), [10, 25, 50]),
        (Coefficients(-1.5, 0.0, 0.0), [-2, 0, 4]),
    ],
)
def test_exact_fit_recovers_coefficients(coeffs, xs) -> None:
    """Three points on a parabola give back that parabola."""
    result = fit(_on_curve(coeffs, xs))
    assert result.a == pytest.approx(coeffs.a, rel=1e-7, abs=1e-6)
    assert result.b == pytest.approx(coeffs.b, rel=1e-7, abs=1e-6)
    assert result.c == pytest.approx(coeffs.c, rel=1e-7, abs=1e-6)


def test_exact_fit_with_more_points() -> None:
    coeffs = Coefficients(0.5, 2.0, -7.0)
    result = fit(_on_curve(coeffs, [0, 1, 2, 3, 4, 5, 6]))
    assert result.a == pytest.approx(0.5, abs=1e-6)
    assert result.b == pytest.approx(2.0, abs=1e-6)
    assert result.c == pytest.approx(-7.0, abs=1e-6)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_too_few_points_returns_zero(count) -> None:
    pts = _points([(1, 2), (3, 4)][:count])
    assert fit(pts) == ZERO


@pytest.mark.parametrize("x", [0.0, 5.0, 42.5])
def test_shared_dose_is_singular(x) -> None:
    """All points at one dose make the normal matrix singular."""
    pts = _points([(x, 100), (x, 120), (x, 140), (x, 90)])
    assert fit(pts) == ZERO


def test_duplicates_are_not_special_cased() -> None:
    coeffs = Coefficients(1.0, 0.0, 1.0)
    pts = _on_curve(coeffs, [0, 1, 2]) + _on_curve(coeffs, [1, 2])
    result = fit(pts)
    assert result.a == pytest.approx(1.0, abs=1e-6)
    assert result.c == pytest.approx(1.0, abs=1e-6)


def test_negative_doses_are_accepted() -> None:
    result = fit(_on_curve(Coefficients(1.0, 1.0, 1.0), [-3, -1, 2]))
    assert result.a == pytest.approx(1.0, abs=1e-6)


def test_fit_is_deterministic(seed_points) -> None:
    assert fit(seed_points) == fit(list(seed_points))


def test_permutation_does_not_change_result(seed_points) -> None:
    shuffled = list(seed_points)
    random.Random(7).shuffle(shuffled)
    base = fit(seed_points)
    other = fit(shuffled)
    assert other.a == pytest.approx(base.a, rel=1e-9)
    assert other.b == pytest.approx(base.b, rel=1e-9)
    assert other.c == pytest.approx(base.c, rel=1e-9)


def test_seed_data_trough_between_26_and_32(seed_points) -> None:
    """The seed set is built around a minimum response at 26-32 mg."""
    coeffs = fit(seed_points)
    assert coeffs.a > 0
    xs = generate_x_samples(20.0, 40.0, 201)
    ys = [evaluate(coeffs, x) for x in xs]
    x_min = xs[ys.index(min(ys))]
    assert 26.0 <= x_min <= 32.0
    xv, _ = vertex(coeffs)
    assert 26.0 <= xv <= 32.0


def test_normal_equations_layout() -> None:
    matrix, rhs = normal_equations(_points([(1, 2), (2, 3)]))
    assert matrix == [[17.0, 9.0, 5.0], [9.0, 5.0, 3.0], [5.0, 3.0, 2.0]]
    assert rhs == [14.0, 8.0, 5.0]


def test_determinant_and_replace_column() -> None:
    m = [[2.0, 0.0, 0.0], [0.0, 3.0, 0.0], [0.0, 0.0, 4.0]]
    assert determinant3(m) == 24.0
    replaced = replace_column(m, [1.0, 1.0, 1.0], 1)
    assert replaced == [[2.0, 1.0, 0.0], [0.0, 1.0, 0.0], [0.0, 1.0, 4.0]]
    assert m[0][1] == 0.0
