import time

import streamlit as st

from dose_explorer import config
from dose_explorer.formatting import describe_training, format_equation, format_prediction
from dose_explorer.graph_engine import build_prediction_figure, build_training_figure
from dose_explorer.models import TrainingState
from dose_explorer.session import TrainerSession
from dose_explorer.translations import get_text
from dose_explorer.ui_components import point_form, points_table, prediction_slider

st.set_page_config(page_title="Dose-Response Curve Model Demo", layout="wide")

# One trainer per browser session
if "trainer" not in st.session_state:
    st.session_state["trainer"] = TrainerSession()
if "form_error" not in st.session_state:
    st.session_state["form_error"] = None

trainer: TrainerSession = st.session_state["trainer"]


def t(key: str) -> str:
    return get_text(trainer.language, key)


def _training_figure():
    return build_training_figure(
        trainer.points,
        trainer.current,
        x_title=t("chart_x"),
        y_title=t("chart_y"),
        curve_name=t("series_model"),
        points_name=t("series_data"),
    )


def _rerun():
    rerun_fn = getattr(st, "rerun", getattr(st, "experimental_rerun", None))
    if rerun_fn is not None:
        rerun_fn()


header_col, lang_col, status_col = st.columns([4, 1, 1])
with header_col:
    st.title(t("title"))
    st.caption(t("subtitle"))
with lang_col:
    if st.button(t("language_btn"), use_container_width=True):
        trainer.toggle_language()
        _rerun()
with status_col:
    is_trained = trainer.state is TrainingState.CONVERGED
    st.markdown(f"**{t('status_ready') if is_trained else t('status_waiting')}**")

st.header(t("section_training"))
left_col, right_col = st.columns([1, 2], gap="large")

with left_col:
    st.subheader(f"{t('table_title')} ({len(trainer.points)})")
    st.caption(t("editable") if trainer.is_editable else t("locked"))
    raw_x, raw_y, submitted = point_form(trainer)
    if submitted:
        st.session_state["form_error"] = trainer.add_point(raw_x, raw_y)
        _rerun()
    if st.session_state["form_error"]:
        st.error(t(st.session_state["form_error"]))
    deleted_id = points_table(trainer)
    if deleted_id is not None:
        trainer.delete_point(deleted_id)
        _rerun()

    st.info(t("info_text"))
    if st.button(t("btn_reset"), use_container_width=True):
        trainer.reset()
        st.session_state["form_error"] = None
        _rerun()
    train_label = {
        TrainingState.IDLE: t("btn_train"),
        TrainingState.RUNNING: t("btn_training"),
        TrainingState.CONVERGED: t("btn_trained"),
    }[trainer.state]
    train_clicked = st.button(train_label, type="primary", disabled=not trainer.can_train, use_container_width=True)

with right_col:
    formula_slot = st.empty()
    chart_slot = st.empty()
    status_slot = st.empty()
    formula_slot.code(format_equation(trainer.current), language=None)
    chart_slot.plotly_chart(_training_figure(), use_container_width=True, config={"displaylogo": False})
    status_slot.caption(describe_training(trainer.state, trainer.current, ticks=trainer.driver.ticks, language=trainer.language))

if train_clicked and trainer.train() is not None:
    # Animate in place; every few ticks redraw to keep the page responsive.
    while trainer.driver.is_running and trainer.driver.ticks < config.MAX_TRAINING_TICKS:
        result = trainer.tick()
        if result.done or trainer.driver.ticks % 4 == 0:
            formula_slot.code(format_equation(trainer.current), language=None)
            chart_slot.plotly_chart(_training_figure(), use_container_width=True, config={"displaylogo": False})
            status_slot.caption(describe_training(trainer.state, trainer.current, ticks=trainer.driver.ticks, language=trainer.language))
        time.sleep(config.TICK_INTERVAL_MS / 1000.0)
    _rerun()

st.divider()
st.header(t("section_prediction"))
is_trained = trainer.state is TrainingState.CONVERGED
pred_chart_col, pred_ctrl_col = st.columns(2, gap="large")

with pred_ctrl_col:
    dose = prediction_slider(trainer, disabled=not is_trained)
    st.metric(
        t("output_label"),
        f"{format_prediction(trainer.predict(dose))} {t('bp_unit')}",
        help=f"{t('input_label')}: {dose:g} {t('dose_unit')}",
    )

with pred_chart_col:
    st.caption(t("pred_chart_title"))
    if not is_trained:
        st.warning(t("pred_need_train"))
    st.plotly_chart(
        build_prediction_figure(
            trainer.current,
            dose,
            x_title=t("pred_x"),
            y_title=t("pred_y"),
            curve_name=t("series_model"),
        ),
        use_container_width=True,
        config={"displaylogo": False},
    )
