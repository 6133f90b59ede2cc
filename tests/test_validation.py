from __future__ import annotations

import pytest

from dose_explorer.validation import clamp_prediction_input, parse_point


@pytest.mark.parametrize(
    "raw_x, raw_y, expected",
    [
        ("12.5", "130", ((12.5, 130.0), None)),
        (0, 0, ((0.0, 0.0), None)),
        (60, 250, ((60.0, 250.0), None)),
        ("abc", "130", (None, "validation_number")),
        (None, 120, (None, "validation_number")),
        ("nan", 120, (None, "validation_number")),
        (True, 120, (None, "validation_number")),
        (-1, 120, (None, "validation_dose")),
        (60.1, 120, (None, "validation_dose")),
        (10, 251, (None, "validation_bp")),
        (10, -0.5, (None, "validation_bp")),
    ],
)
def test_parse_point(raw_x, raw_y, expected) -> None:
    assert parse_point(raw_x, raw_y) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [(20, 20.0), ("35.5", 35.5), (-4, 0.0), (75, 50.0), ("", 0.0), (None, 0.0)],
)
def test_clamp_prediction_input(raw, expected) -> None:
    assert clamp_prediction_input(raw) == expected
