from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from . import config


def _coerce_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def parse_point(raw_x: Any, raw_y: Any) -> Tuple[Optional[Tuple[float, float]], Optional[str]]:
    """Validate a user-entered (dose, response) pair.

    Returns ``((x, y), None)`` on success, or ``(None, error_key)`` where the
    key names a translation string.
    """
    x = _coerce_float(raw_x)
    y = _coerce_float(raw_y)
    if x is None or y is None:
        return None, "validation_number"
    if x < config.DOSE_MIN or x > config.DOSE_MAX:
        return None, "validation_dose"
    if y < config.RESPONSE_MIN or y > config.RESPONSE_MAX:
        return None, "validation_bp"
    return (x, y), None


def clamp_prediction_input(value: Any) -> float:
    num = _coerce_float(value)
    if num is None:
        num = 0.0
    return max(config.PREDICTION_MIN, min(config.PREDICTION_MAX, num))
