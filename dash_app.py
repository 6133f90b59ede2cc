"""Dash front end for the dose-response training demo."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import dash
from dash import ALL, Input, Output, State, dcc, html

from dose_explorer import config
from dose_explorer.formatting import (
    coefficient_signs,
    describe_training,
    format_coefficient,
    format_prediction,
)
from dose_explorer.graph_engine import build_prediction_figure, build_training_figure
from dose_explorer.logger import build_csv_content, log_event, read_session_records, safe_session_id
from dose_explorer.logging_config import setup_logging
from dose_explorer.models import TrainingState
from dose_explorer.session import TrainerSession
from dose_explorer.translations import get_text
from dose_explorer.validation import clamp_prediction_input

log = logging.getLogger("dose_explorer.dash_app")

_CARD_STYLE: Dict[str, Any] = {
    "backgroundColor": "#ffffff",
    "border": "1px solid #e2e8f0",
    "borderRadius": "12px",
    "boxShadow": "0 1px 2px rgba(0,0,0,0.05)",
    "padding": "16px",
}
_FORMULA_STYLE: Dict[str, Any] = {
    "backgroundColor": "#0f172a",
    "color": "#ffffff",
    "borderRadius": "12px",
    "padding": "24px",
    "textAlign": "center",
    "fontFamily": "monospace",
}
_BADGE_BASE_STYLE: Dict[str, Any] = {
    "padding": "4px 12px",
    "borderRadius": "999px",
    "fontSize": "12px",
    "fontWeight": 600,
    "border": "1px solid",
}
_BADGE_READY = {"backgroundColor": "#f0fdf4", "color": "#15803d", "borderColor": "#bbf7d0"}
_BADGE_WAITING = {"backgroundColor": "#fffbeb", "color": "#b45309", "borderColor": "#fde68a"}
_BUTTON_STYLE: Dict[str, Any] = {"width": "100%", "padding": "10px 16px", "marginTop": "8px", "fontWeight": 600}
_COEFF_COLORS = {"a": "#ec4899", "b": "#38bdf8", "c": "#fbbf24"}
_SECTION_FADED = {"opacity": 0.5, "filter": "grayscale(100%)", "transition": "all 0.7s"}
_SECTION_ACTIVE = {"opacity": 1.0, "transition": "all 0.7s"}


def _load_trainer(store_data: Any) -> TrainerSession:
    return TrainerSession.from_store(store_data)


def _badge_style(ready: bool) -> Dict[str, Any]:
    style = dict(_BADGE_BASE_STYLE)
    style.update(_BADGE_READY if ready else _BADGE_WAITING)
    return style


def _formula_children(trainer: TrainerSession) -> List[Any]:
    coeffs = trainer.current
    a_sign, b_sign, c_sign = coefficient_signs(coeffs)
    t = trainer.language
    return [
        html.Div(get_text(t, "formula_title"), style={"color": "#94a3b8", "fontSize": "12px", "textTransform": "uppercase"}),
        html.Div(
            [
                html.Span("y", style={"color": "#818cf8"}),
                html.Span(" = "),
                html.Span(f"{a_sign}{format_coefficient(coeffs.a)}", style={"color": _COEFF_COLORS["a"]}),
                html.Span("x"),
                html.Sup("2"),
                html.Span(f" {b_sign} ", style={"color": _COEFF_COLORS["b"]}),
                html.Span(format_coefficient(coeffs.b), style={"color": _COEFF_COLORS["b"]}),
                html.Span("x"),
                html.Span(f" {c_sign} ", style={"color": _COEFF_COLORS["c"]}),
                html.Span(format_coefficient(coeffs.c), style={"color": _COEFF_COLORS["c"]}),
            ],
            style={"fontSize": "24px", "fontWeight": 700, "marginTop": "8px"},
        ),
        html.Div(
            [
                html.Span(get_text(t, "legend_curvature"), style={"color": _COEFF_COLORS["a"], "marginRight": "16px"}),
                html.Span(get_text(t, "legend_linear"), style={"color": _COEFF_COLORS["b"], "marginRight": "16px"}),
                html.Span(get_text(t, "legend_intercept"), style={"color": _COEFF_COLORS["c"]}),
            ],
            style={"marginTop": "16px", "fontSize": "12px"},
        ),
    ]


def _table_rows(trainer: TrainerSession) -> List[Any]:
    t = trainer.language
    if not trainer.points:
        return [html.Tr(html.Td(get_text(t, "no_data"), colSpan=4, style={"textAlign": "center", "padding": "32px", "color": "#94a3b8"}))]
    rows = []
    for index, point in enumerate(trainer.points):
        rows.append(
            html.Tr(
                [
                    html.Td(f"#{index + 1}", style={"color": "#94a3b8", "fontFamily": "monospace"}),
                    html.Td(f"{point.x:g} {get_text(t, 'dose_unit')}"),
                    html.Td(f"{point.y:g} {get_text(t, 'bp_unit')}"),
                    html.Td(
                        html.Button(
                            "✕",
                            id={"type": "btn-delete", "index": point.id},
                            n_clicks=0,
                            type="button",
                            disabled=not trainer.is_editable,
                            title=get_text(t, "col_delete"),
                        ),
                        style={"textAlign": "right"},
                    ),
                ]
            )
        )
    return rows


def _serve_layout() -> html.Div:
    trainer = TrainerSession()
    return html.Div(
        [
            dcc.Store(id="store-trainer", storage_type="session", data=trainer.to_store()),
            dcc.Store(id="store-prediction", storage_type="session", data={"value": config.DEFAULT_PREDICTION_INPUT}),
            dcc.Interval(id="interval-train", interval=config.TICK_INTERVAL_MS, n_intervals=0, disabled=True),
            dcc.Download(id="download-log"),
            html.Header(
                [
                    html.Div(
                        [html.H1(id="title", style={"margin": 0, "fontSize": "22px"}), html.P(id="subtitle", style={"margin": 0, "color": "#64748b"})],
                        style={"flex": "1"},
                    ),
                    html.Button(id="btn-language", n_clicks=0, type="button", style={"padding": "6px 12px"}),
                    html.Div(html.Span(id="status-badge"), style={"flex": "1", "textAlign": "right"}),
                ],
                style={"display": "flex", "alignItems": "center", "gap": "16px", "padding": "16px 24px", "borderBottom": "1px solid #e2e8f0"},
            ),
            html.Section(
                [
                    html.H2(id="section-training"),
                    html.Div(
                        [
                            html.Div(
                                [
                                    html.Div(
                                        [
                                            html.Div(
                                                [html.Strong(id="table-title"), html.Span(id="table-editable", style={"fontSize": "12px", "color": "#6366f1"})],
                                                style={"display": "flex", "justifyContent": "space-between"},
                                            ),
                                            html.Div(
                                                [
                                                    dcc.Input(id="input-dose", type="number", step=0.1, debounce=True, style={"width": "40%"}),
                                                    dcc.Input(id="input-bp", type="number", step=0.1, debounce=True, style={"width": "40%", "marginLeft": "8px"}),
                                                    html.Button("+", id="btn-add", n_clicks=0, type="button", style={"marginLeft": "8px", "width": "44px"}),
                                                ],
                                                id="add-form",
                                                style={"display": "flex", "marginTop": "12px"},
                                            ),
                                            html.Div(id="form-error", style={"color": "#ef4444", "fontSize": "12px", "marginTop": "6px"}),
                                            html.Div(
                                                html.Table(html.Tbody(id="table-body"), style={"width": "100%", "fontSize": "14px"}),
                                                style={"maxHeight": "300px", "overflowY": "auto", "marginTop": "12px"},
                                            ),
                                        ],
                                        style=_CARD_STYLE,
                                    ),
                                    html.Div(
                                        [
                                            html.P(id="info-text", style={"fontSize": "14px", "color": "#475569"}),
                                            html.Button(id="btn-reset", n_clicks=0, type="button", style=_BUTTON_STYLE),
                                            html.Button(id="btn-train", n_clicks=0, type="button", style=_BUTTON_STYLE),
                                            html.Button(id="btn-export", n_clicks=0, type="button", style=_BUTTON_STYLE),
                                        ],
                                        style={**_CARD_STYLE, "marginTop": "16px"},
                                    ),
                                ],
                                style={"flex": "1", "minWidth": "280px"},
                            ),
                            html.Div(
                                [
                                    html.Div(id="formula", style=_FORMULA_STYLE),
                                    html.Div(
                                        [
                                            dcc.Graph(id="graph-training", config={"displaylogo": False}),
                                            html.Div(id="training-status", style={"fontSize": "13px", "color": "#64748b"}),
                                        ],
                                        style={**_CARD_STYLE, "marginTop": "16px"},
                                    ),
                                ],
                                style={"flex": "2", "minWidth": "360px"},
                            ),
                        ],
                        style={"display": "flex", "gap": "24px", "flexWrap": "wrap"},
                    ),
                ],
                style={"padding": "24px", "backgroundColor": "#f8fafc"},
            ),
            html.Section(
                [
                    html.H2(id="section-prediction"),
                    html.Div(
                        [
                            html.Div(
                                [
                                    html.Div(id="pred-chart-title", style={"fontSize": "12px", "color": "#94a3b8", "textTransform": "uppercase"}),
                                    html.Div(id="pred-need-train", style={"fontSize": "12px", "color": "#f59e0b"}),
                                    dcc.Graph(id="graph-prediction", config={"displaylogo": False}),
                                ],
                                style={"flex": "1", "minWidth": "320px"},
                            ),
                            html.Div(
                                [
                                    html.Label(id="input-label", htmlFor="slider-dose", style={"fontWeight": 600}),
                                    dcc.Input(
                                        id="input-prediction",
                                        type="number",
                                        min=config.PREDICTION_MIN,
                                        max=config.PREDICTION_MAX,
                                        value=config.DEFAULT_PREDICTION_INPUT,
                                        style={"width": "96px", "marginLeft": "12px"},
                                    ),
                                    dcc.Slider(
                                        id="slider-dose",
                                        min=config.PREDICTION_MIN,
                                        max=config.PREDICTION_MAX,
                                        step=1,
                                        value=config.DEFAULT_PREDICTION_INPUT,
                                        marks={0: "0", 50: "50"},
                                        updatemode="drag",
                                    ),
                                    html.Label(id="output-label", style={"fontWeight": 600, "display": "block", "marginTop": "24px"}),
                                    html.Div(id="output-prediction", style={**_CARD_STYLE, "fontSize": "36px", "fontWeight": 700, "textAlign": "center"}),
                                ],
                                style={"flex": "1", "minWidth": "280px", "padding": "16px"},
                            ),
                        ],
                        style={**_CARD_STYLE, "display": "flex", "gap": "24px", "flexWrap": "wrap"},
                    ),
                ],
                id="section-prediction-wrapper",
                style={"padding": "24px"},
            ),
        ],
        style={"fontFamily": "sans-serif", "color": "#1e293b"},
    )


setup_logging()
app = dash.Dash(__name__, title="Dose-Response Curve Model Demo")
server = app.server
app.layout = _serve_layout


@app.callback(
    Output("store-trainer", "data"),
    Output("interval-train", "disabled"),
    Output("form-error", "children"),
    Output("input-dose", "value"),
    Output("input-bp", "value"),
    Input("btn-add", "n_clicks"),
    Input("btn-reset", "n_clicks"),
    Input("btn-train", "n_clicks"),
    Input("btn-language", "n_clicks"),
    Input({"type": "btn-delete", "index": ALL}, "n_clicks"),
    Input("interval-train", "n_intervals"),
    State("input-dose", "value"),
    State("input-bp", "value"),
    State("store-trainer", "data"),
    prevent_initial_call=True,
)
def _dispatch(add_clicks, reset_clicks, train_clicks, lang_clicks, delete_clicks, n_intervals, raw_dose, raw_bp, store_data):
    # Every state change goes through this callback so a reset and a pending
    # tick can never be applied out of order to the same store.
    ctx = dash.callback_context
    if not ctx.triggered:
        return (dash.no_update,) * 5
    trigger = ctx.triggered_id
    trigger_value = ctx.triggered[0].get("value")
    trainer = _load_trainer(store_data)
    error = ""
    clear_form = False

    if isinstance(trigger, dict) and trigger.get("type") == "btn-delete":
        # Freshly rendered delete buttons report n_clicks=0
        if not trigger_value:
            return (dash.no_update,) * 5
        trainer.delete_point(trigger["index"])
    elif trigger == "btn-add":
        error_key = trainer.add_point(raw_dose, raw_bp)
        if error_key is not None:
            error = get_text(trainer.language, error_key)
        else:
            clear_form = True
    elif trigger == "btn-reset":
        trainer.reset()
    elif trigger == "btn-train":
        if trainer.train() is None:
            log.debug("train ignored in state %s with %d points", trainer.state.value, len(trainer.points))
    elif trigger == "btn-language":
        trainer.toggle_language()
    elif trigger == "interval-train":
        if not trainer.driver.is_running:
            return dash.no_update, True, dash.no_update, dash.no_update, dash.no_update
        trainer.tick()

    return (
        trainer.to_store(),
        not trainer.driver.is_running,
        error,
        None if clear_form else dash.no_update,
        None if clear_form else dash.no_update,
    )


@app.callback(
    Output("slider-dose", "value"),
    Output("input-prediction", "value"),
    Output("store-prediction", "data"),
    Input("slider-dose", "value"),
    Input("input-prediction", "value"),
    prevent_initial_call=True,
)
def _sync_prediction_input(slider_value, input_value):
    ctx = dash.callback_context
    trigger = ctx.triggered_id
    raw = slider_value if trigger == "slider-dose" else input_value
    value = clamp_prediction_input(raw)
    return value, value, {"value": value}


@app.callback(
    Output("title", "children"),
    Output("subtitle", "children"),
    Output("btn-language", "children"),
    Output("status-badge", "children"),
    Output("status-badge", "style"),
    Output("section-training", "children"),
    Output("table-title", "children"),
    Output("table-editable", "children"),
    Output("add-form", "style"),
    Output("input-dose", "placeholder"),
    Output("input-bp", "placeholder"),
    Output("table-body", "children"),
    Output("info-text", "children"),
    Output("btn-reset", "children"),
    Output("btn-train", "children"),
    Output("btn-train", "disabled"),
    Output("btn-export", "children"),
    Output("formula", "children"),
    Output("graph-training", "figure"),
    Output("training-status", "children"),
    Input("store-trainer", "data"),
)
def _render_training(store_data):
    trainer = _load_trainer(store_data)
    lang = trainer.language
    ready = trainer.state is TrainingState.CONVERGED
    train_label = {
        TrainingState.IDLE: "btn_train",
        TrainingState.RUNNING: "btn_training",
        TrainingState.CONVERGED: "btn_trained",
    }[trainer.state]
    form_style = {"display": "flex" if trainer.is_editable else "none", "marginTop": "12px"}
    figure = build_training_figure(
        trainer.points,
        trainer.current,
        x_title=get_text(lang, "chart_x"),
        y_title=get_text(lang, "chart_y"),
        curve_name=get_text(lang, "series_model"),
        points_name=get_text(lang, "series_data"),
    )
    return (
        get_text(lang, "title"),
        get_text(lang, "subtitle"),
        get_text(lang, "language_btn"),
        get_text(lang, "status_ready" if ready else "status_waiting"),
        _badge_style(ready),
        get_text(lang, "section_training"),
        f"{get_text(lang, 'table_title')} ({len(trainer.points)})",
        get_text(lang, "editable" if trainer.is_editable else "locked"),
        form_style,
        get_text(lang, "placeholder_dose"),
        get_text(lang, "placeholder_bp"),
        _table_rows(trainer),
        get_text(lang, "info_text"),
        get_text(lang, "btn_reset"),
        get_text(lang, train_label),
        not trainer.can_train,
        get_text(lang, "btn_export"),
        _formula_children(trainer),
        figure,
        describe_training(trainer.state, trainer.current, ticks=trainer.driver.ticks, language=lang),
    )


@app.callback(
    Output("section-prediction", "children"),
    Output("section-prediction-wrapper", "style"),
    Output("pred-chart-title", "children"),
    Output("pred-need-train", "children"),
    Output("input-label", "children"),
    Output("output-label", "children"),
    Output("output-prediction", "children"),
    Output("graph-prediction", "figure"),
    Output("slider-dose", "disabled"),
    Output("input-prediction", "disabled"),
    Input("store-trainer", "data"),
    Input("store-prediction", "data"),
)
def _render_prediction(store_data, prediction_data):
    trainer = _load_trainer(store_data)
    lang = trainer.language
    dose = clamp_prediction_input((prediction_data or {}).get("value", config.DEFAULT_PREDICTION_INPUT))
    ready = trainer.state is TrainingState.CONVERGED
    section_style = dict(_SECTION_ACTIVE if ready else _SECTION_FADED)
    section_style["padding"] = "24px"
    figure = build_prediction_figure(
        trainer.current,
        dose,
        x_title=get_text(lang, "pred_x"),
        y_title=get_text(lang, "pred_y"),
        curve_name=get_text(lang, "series_model"),
    )
    return (
        get_text(lang, "section_prediction"),
        section_style,
        get_text(lang, "pred_chart_title"),
        "" if ready else get_text(lang, "pred_need_train"),
        f"{get_text(lang, 'input_label')} ({get_text(lang, 'dose_unit')})",
        get_text(lang, "output_label"),
        f"{format_prediction(trainer.predict(dose))} {get_text(lang, 'bp_unit')}",
        figure,
        not ready,
        not ready,
    )


@app.callback(
    Output("download-log", "data"),
    Input("btn-export", "n_clicks"),
    State("store-trainer", "data"),
    prevent_initial_call=True,
)
def _handle_download_csv(n_clicks, store_data):
    if not n_clicks:
        return dash.no_update
    session_id = safe_session_id((store_data or {}).get("session_id"))
    records = read_session_records(session_id)
    csv_content: Optional[str] = build_csv_content(records)
    if csv_content is None:
        return dash.no_update
    log_event(session_id, "export", export_type="csv")
    return dcc.send_string(csv_content, filename=f"session_{session_id}.csv")


if __name__ == "__main__":
    app.run(debug=True)
