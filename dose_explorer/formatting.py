"""Display strings for the formula panel, the prediction readout and the status line."""

from __future__ import annotations

from typing import Optional

from .graph_engine import vertex
from .models import Coefficients, TrainingState
from .translations import get_text


def format_coefficient(value: float) -> str:
    magnitude = abs(value)
    if magnitude < 0.001:
        return f"{magnitude:.2e}"
    return f"{magnitude:.3f}"


def coefficient_signs(coeffs: Coefficients):
    a_sign = "-" if coeffs.a < 0 else ""
    b_sign = "-" if coeffs.b < 0 else "+"
    c_sign = "-" if coeffs.c < 0 else "+"
    return a_sign, b_sign, c_sign


def format_equation(coeffs: Coefficients) -> str:
    a_sign, b_sign, c_sign = coefficient_signs(coeffs)
    return (
        f"y = {a_sign}{format_coefficient(coeffs.a)}x² "
        f"{b_sign} {format_coefficient(coeffs.b)}x "
        f"{c_sign} {format_coefficient(coeffs.c)}"
    )


def format_prediction(value: float) -> str:
    # Negative pressures are shown as zero.
    return f"{max(0.0, value):.1f}"


def describe_training(
    state: TrainingState,
    coeffs: Coefficients,
    *,
    ticks: int = 0,
    language: Optional[str] = None,
) -> str:
    if state is TrainingState.IDLE:
        return get_text(language, "describe_idle")
    if state is TrainingState.RUNNING:
        return get_text(language, "describe_running").format(ticks=ticks)
    xv, _ = vertex(coeffs)
    if xv is None or coeffs.a <= 0:
        return get_text(language, "describe_converged_flat").format(ticks=ticks)
    return get_text(language, "describe_converged").format(ticks=ticks, dose=f"{xv:.1f}")
