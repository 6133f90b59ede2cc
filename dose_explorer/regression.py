"""Closed-form quadratic least squares (normal equations solved by Cramer's rule)."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from . import config
from .models import Coefficients, DataPoint, ZERO

Matrix = List[List[float]]


def determinant3(m: Sequence[Sequence[float]]) -> float:
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
        - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
        + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0])
    )


def replace_column(m: Sequence[Sequence[float]], col: Sequence[float], index: int) -> Matrix:
    return [[col[i] if j == index else val for j, val in enumerate(row)] for i, row in enumerate(m)]


def normal_equations(points: Sequence[DataPoint]) -> Tuple[Matrix, List[float]]:
    n = len(points)
    sx = sx2 = sx3 = sx4 = 0.0
    sy = sxy = sx2y = 0.0
    # Summation order is the input order so repeated fits are bit-identical.
    for p in points:
        x2 = p.x * p.x
        sx += p.x
        sx2 += x2
        sx3 += x2 * p.x
        sx4 += x2 * p.x * p.x
        sy += p.y
        sxy += p.x * p.y
        sx2y += x2 * p.y

    matrix = [
        [sx4, sx3, sx2],
        [sx3, sx2, sx],
        [sx2, sx, float(n)],
    ]
    return matrix, [sx2y, sxy, sy]


def fit(points: Sequence[DataPoint], *, eps: float = config.SINGULAR_EPS) -> Coefficients:
    """Best-fit quadratic through ``points``.

    Returns the zero coefficients instead of raising when there are fewer than
    three points or the normal-equations matrix is singular (for example when
    every point shares the same dose).
    """
    if len(points) < config.MIN_POINTS_FOR_FIT:
        return ZERO

    matrix, rhs = normal_equations(points)
    d = determinant3(matrix)
    if abs(d) < eps:
        return ZERO

    da = determinant3(replace_column(matrix, rhs, 0))
    db = determinant3(replace_column(matrix, rhs, 1))
    dc = determinant3(replace_column(matrix, rhs, 2))
    return Coefficients(a=da / d, b=db / d, c=dc / d)
