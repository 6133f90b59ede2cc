from __future__ import annotations

import pytest

from dose_explorer.formatting import (
    coefficient_signs,
    describe_training,
    format_coefficient,
    format_equation,
    format_prediction,
)
from dose_explorer.models import BASELINE, Coefficients, TrainingState
from dose_explorer.regression import fit
from dose_explorer.translations import TRANSLATIONS, get_text, toggle_language


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, "0.00e+00"),
        (0.0005, "5.00e-04"),
        (-0.0857, "0.086"),
        (-4.844654, "4.845"),
        (178.122285, "178.122"),
    ],
)
def test_format_coefficient(value, expected) -> None:
    assert format_coefficient(value) == expected


def test_format_equation_signs() -> None:
    coeffs = Coefficients(-0.5, -2.0, 3.0)
    assert coefficient_signs(coeffs) == ("-", "-", "+")
    assert format_equation(coeffs) == "y = -0.500x² - 2.000x + 3.000"
    assert format_equation(BASELINE) == "y = 0.00e+00x² + 0.00e+00x + 160.000"


def test_format_prediction_floors_at_zero() -> None:
    assert format_prediction(115.52) == "115.5"
    assert format_prediction(-12.0) == "0.0"


def test_describe_training_states(seed_points) -> None:
    assert describe_training(TrainingState.IDLE, BASELINE) == get_text("en", "describe_idle")
    assert describe_training(TrainingState.RUNNING, BASELINE, ticks=7) == "Training: tick 7."
    text = describe_training(TrainingState.CONVERGED, fit(seed_points), ticks=166)
    assert "166" in text
    assert "28.3" in text
    assert describe_training(TrainingState.CONVERGED, BASELINE, ticks=1, language="zh") == "经过 1 步后收敛。"


def test_translations_share_keys() -> None:
    assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["zh"])


def test_get_text_falls_back_to_english() -> None:
    assert get_text("fr", "btn_train") == "Train model"
    assert get_text("zh", "missing-key") == "missing-key"
    assert toggle_language("en") == "zh"
    assert toggle_language("zh") == "en"
    assert toggle_language(None) == "zh"
