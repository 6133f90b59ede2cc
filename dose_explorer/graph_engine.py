from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import plotly.graph_objects as go

from . import config
from .models import Coefficients, DataPoint


def generate_x_samples(x_min: float, x_max: float, count: int) -> List[float]:
    if count < 2:
        return [x_min]
    step = (x_max - x_min) / (count - 1)
    return [x_min + i * step for i in range(count)]


def generate_x_grid() -> List[float]:
    return generate_x_samples(config.X_MIN, config.X_MAX, config.NUM_SAMPLES)


def evaluate(coeffs: Coefficients, x: float) -> float:
    return coeffs.a * x * x + coeffs.b * x + coeffs.c


def evaluate_curve(coeffs: Coefficients, xs: Sequence[float]) -> List[float]:
    return [evaluate(coeffs, x) for x in xs]


def vertex(coeffs: Coefficients, *, eps: float = config.EPS_ZERO) -> Tuple[Optional[float], Optional[float]]:
    if abs(coeffs.a) < eps:
        return None, None
    xv = -coeffs.b / (2 * coeffs.a)
    yv = evaluate(coeffs, xv)
    if not (math.isfinite(xv) and math.isfinite(yv)):
        return None, None
    return xv, yv


def curve_trace(coeffs: Coefficients, xs: Sequence[float], *, name: str) -> go.Scatter:
    return go.Scatter(
        x=list(xs),
        y=evaluate_curve(coeffs, xs),
        mode="lines",
        name=name,
        line=dict(config.CURVE_LINE_STYLE),
        hovertemplate="x=%{x:.1f}<br>y=%{y:.1f}<extra></extra>",
    )


def _apply_axes(fig: go.Figure, *, x_title: str, y_title: str, uirevision: str, height: int) -> None:
    fig.update_layout(
        height=height,
        margin=dict(l=48, r=16, t=24, b=40),
        xaxis=dict(
            title=x_title,
            range=list(config.CHART_X_RANGE),
            showgrid=True,
            gridcolor=config.FIGURE_COLORS["grid"],
            zeroline=False,
        ),
        yaxis=dict(
            title=y_title,
            range=list(config.CHART_Y_RANGE),
            showgrid=True,
            gridcolor=config.FIGURE_COLORS["grid"],
            zeroline=False,
        ),
        plot_bgcolor="#ffffff",
        showlegend=True,
        legend=dict(orientation="h", y=1.08, x=0),
        uirevision=uirevision,
    )


def build_training_figure(
    points: Sequence[DataPoint],
    coeffs: Coefficients,
    *,
    x_title: str = "Dose (mg)",
    y_title: str = "Blood pressure (mmHg)",
    curve_name: str = "Model curve",
    points_name: str = "Observed data",
    uirevision: str = "training",
) -> go.Figure:
    xs = generate_x_grid()
    fig = go.Figure(
        data=[
            curve_trace(coeffs, xs, name=curve_name),
            go.Scatter(
                x=[p.x for p in points],
                y=[p.y for p in points],
                mode="markers",
                name=points_name,
                marker=dict(config.POINT_MARKER_STYLE),
                hovertemplate="x=%{x}<br>y=%{y}<extra></extra>",
            ),
        ]
    )
    _apply_axes(fig, x_title=x_title, y_title=y_title, uirevision=uirevision, height=400)
    return fig


def build_prediction_figure(
    coeffs: Coefficients,
    dose: float,
    *,
    x_title: str = "Input dose (mg)",
    y_title: str = "Predicted pressure (mmHg)",
    curve_name: str = "Model curve",
    uirevision: str = "prediction",
) -> go.Figure:
    xs = generate_x_grid()
    predicted = evaluate(coeffs, dose)
    fig = go.Figure(
        data=[
            curve_trace(coeffs, xs, name=curve_name),
            go.Scatter(
                x=[dose],
                y=[predicted],
                mode="markers",
                name="Prediction",
                marker=dict(config.PREDICTION_MARKER_STYLE),
                hovertemplate="x=%{x:.1f}<br>y=%{y:.1f}<extra></extra>",
                showlegend=False,
            ),
        ]
    )
    _apply_axes(fig, x_title=x_title, y_title=y_title, uirevision=uirevision, height=300)
    fig.update_layout(
        showlegend=False,
        shapes=[
            dict(type="line", x0=dose, x1=dose, y0=config.CHART_Y_RANGE[0], y1=predicted, line=dict(config.GUIDE_LINE_STYLE)),
            dict(type="line", x0=config.CHART_X_RANGE[0], x1=dose, y0=predicted, y1=predicted, line=dict(config.GUIDE_LINE_STYLE)),
        ],
    )
    return fig
