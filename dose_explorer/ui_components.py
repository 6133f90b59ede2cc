"""Streamlit UI components."""

from functools import partial
from typing import Any, Optional, Tuple

import streamlit as st
import streamlit_shadcn_ui as ui

from . import config
from .session import TrainerSession
from .translations import get_text


def point_form(trainer: TrainerSession) -> Tuple[Optional[Any], Optional[Any], bool]:
    t = partial(get_text, trainer.language)
    with st.form("add-point", clear_on_submit=True):
        col_x, col_y = st.columns(2)
        raw_x = col_x.text_input(t("col_dose"), placeholder=t("placeholder_dose"))
        raw_y = col_y.text_input(t("col_bp"), placeholder=t("placeholder_bp"))
        submitted = st.form_submit_button(t("col_action"), disabled=not trainer.is_editable)
    return raw_x, raw_y, submitted


def points_table(trainer: TrainerSession) -> Optional[str]:
    """Render the point list; returns the id whose delete button was pressed."""
    t = partial(get_text, trainer.language)
    if not trainer.points:
        st.caption(t("no_data"))
        return None
    deleted = None
    for index, point in enumerate(trainer.points):
        c_id, c_x, c_y, c_del = st.columns([1, 3, 3, 2])
        c_id.write(f"#{index + 1}")
        c_x.write(f"{point.x:g} {t('dose_unit')}")
        c_y.write(f"{point.y:g} {t('bp_unit')}")
        if c_del.button("✕", key=f"delete-{point.id}", disabled=not trainer.is_editable, help=t("col_delete")):
            deleted = point.id
    return deleted


def prediction_slider(trainer: TrainerSession, *, disabled: bool) -> float:
    slider_value = ui.slider(
        label=get_text(trainer.language, "input_label"),
        min_value=config.PREDICTION_MIN,
        max_value=config.PREDICTION_MAX,
        step=1.0,
        default_value=[trainer.prediction_input],
        key="prediction-slider",
    )
    if disabled:
        return trainer.prediction_input
    raw_value = None
    if isinstance(slider_value, (list, tuple)):
        if slider_value:
            raw_value = slider_value[0]
    elif isinstance(slider_value, (int, float, str)):
        raw_value = slider_value
    if raw_value is None:
        return trainer.prediction_input
    return trainer.set_prediction_input(raw_value)
