"""English and Chinese UI text."""

from __future__ import annotations

from typing import Dict

from . import config

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Dose-Response Curve Model Demo",
        "subtitle": "Watch a quadratic model learn how blood pressure responds to dosage",
        "language_btn": "中文",
        "status_ready": "Model ready",
        "status_waiting": "Waiting for training",
        "section_training": "1. Training the model",
        "info_text": (
            "Add or delete points, then press Train. The curve starts flat and "
            "moves step by step towards the least-squares fit."
        ),
        "btn_reset": "Reset data",
        "btn_train": "Train model",
        "btn_training": "Training...",
        "btn_trained": "Trained",
        "section_prediction": "2. Making predictions",
        "pred_chart_title": "Prediction on the learned curve",
        "pred_need_train": "Train the model first",
        "input_label": "Dosage",
        "output_label": "Predicted blood pressure",
        "dose_unit": "mg",
        "bp_unit": "mmHg",
        "table_title": "Training data",
        "editable": "Editable",
        "locked": "Locked",
        "placeholder_dose": "Dose (0-60)",
        "placeholder_bp": "BP (0-250)",
        "col_id": "#",
        "col_dose": "Dose",
        "col_bp": "Blood pressure",
        "col_action": "Add",
        "col_delete": "Delete",
        "no_data": "No data points yet",
        "validation_number": "Please enter valid numbers.",
        "validation_dose": "Dose must be between 0 and 60.",
        "validation_bp": "Blood pressure must be between 0 and 250.",
        "validation_locked": "Reset the data before editing points.",
        "formula_title": "Current model formula",
        "legend_curvature": "a: curvature",
        "legend_linear": "b: linear slope",
        "legend_intercept": "c: intercept",
        "chart_x": "Dose (mg)",
        "chart_y": "Blood pressure (mmHg)",
        "series_model": "Model curve",
        "series_data": "Observed data",
        "pred_x": "Input dose (mg)",
        "pred_y": "Predicted pressure (mmHg)",
        "describe_idle": "The model is untrained. It predicts a flat line.",
        "describe_running": "Training: tick {ticks}.",
        "describe_converged": "Converged after {ticks} ticks. Lowest pressure near {dose} mg.",
        "describe_converged_flat": "Converged after {ticks} ticks.",
        "btn_export": "Download log (CSV)",
    },
    "zh": {
        "title": "剂量-反应曲线模型演示",
        "subtitle": "观察二次模型如何学习血压随剂量的变化",
        "language_btn": "English",
        "status_ready": "模型已就绪",
        "status_waiting": "等待训练",
        "section_training": "1. 训练模型",
        "info_text": "添加或删除数据点，然后点击训练。曲线从水平线开始，逐步逼近最小二乘拟合结果。",
        "btn_reset": "重置数据",
        "btn_train": "训练模型",
        "btn_training": "训练中...",
        "btn_trained": "已训练",
        "section_prediction": "2. 进行预测",
        "pred_chart_title": "在学到的曲线上预测",
        "pred_need_train": "请先训练模型",
        "input_label": "剂量",
        "output_label": "预测血压",
        "dose_unit": "mg",
        "bp_unit": "mmHg",
        "table_title": "训练数据",
        "editable": "可编辑",
        "locked": "已锁定",
        "placeholder_dose": "剂量 (0-60)",
        "placeholder_bp": "血压 (0-250)",
        "col_id": "#",
        "col_dose": "剂量",
        "col_bp": "血压",
        "col_action": "添加",
        "col_delete": "删除",
        "no_data": "暂无数据点",
        "validation_number": "请输入有效的数字。",
        "validation_dose": "剂量必须在 0 到 60 之间。",
        "validation_bp": "血压必须在 0 到 250 之间。",
        "validation_locked": "请先重置数据再编辑数据点。",
        "formula_title": "当前模型公式",
        "legend_curvature": "a：曲率",
        "legend_linear": "b：线性斜率",
        "legend_intercept": "c：截距",
        "chart_x": "剂量 (mg)",
        "chart_y": "血压 (mmHg)",
        "series_model": "模型曲线",
        "series_data": "观测数据",
        "pred_x": "输入剂量 (mg)",
        "pred_y": "预测血压 (mmHg)",
        "describe_idle": "模型尚未训练，目前预测为一条水平线。",
        "describe_running": "训练中：第 {ticks} 步。",
        "describe_converged": "经过 {ticks} 步后收敛。血压最低点约在 {dose} mg。",
        "describe_converged_flat": "经过 {ticks} 步后收敛。",
        "btn_export": "下载日志 (CSV)",
    },
}


def normalize_language(language: object) -> str:
    return language if language in TRANSLATIONS else config.DEFAULT_LANGUAGE


def get_text(language: object, key: str) -> str:
    resource = TRANSLATIONS[normalize_language(language)]
    if key in resource:
        return resource[key]
    return TRANSLATIONS[config.DEFAULT_LANGUAGE].get(key, key)


def toggle_language(language: object) -> str:
    return "en" if normalize_language(language) == "zh" else "zh"
