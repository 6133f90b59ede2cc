from __future__ import annotations

from pathlib import Path

# Paths and filenames
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "dose_explorer" / "data"

# Input domains (dose in mg, response in mmHg)
DOSE_MIN = 0.0
DOSE_MAX = 60.0
RESPONSE_MIN = 0.0
RESPONSE_MAX = 250.0
PREDICTION_MIN = 0.0
PREDICTION_MAX = 50.0
DEFAULT_PREDICTION_INPUT = 20.0
MIN_POINTS_FOR_FIT = 3

# Curve sampling grid (one sample per dose unit)
X_MIN = 0.0
X_MAX = 55.0
NUM_SAMPLES = 56

# Coefficients
BASELINE_COEFFS = {"a": 0.0, "b": 0.0, "c": 160.0}
ZERO_COEFFS = {"a": 0.0, "b": 0.0, "c": 0.0}

# Solver / convergence tuning
SINGULAR_EPS = 1e-9
EPS_ZERO = 1e-6
INTERPOLATION_RATE = 0.05
CONVERGENCE_THRESHOLDS = {"a": 1e-4, "b": 1e-3, "c": 1e-2}
MAX_TRAINING_TICKS = 2000
TICK_INTERVAL_MS = 16

# UI, language, schema
DEFAULT_LANGUAGE = "en"
LANGUAGES = ("en", "zh")
SCHEMA_VERSION = 1
APP_MODE = "dash"
POINT_ID_LENGTH = 9

# Logging
LOG_EVENTS = True

SCHEMA_COLUMNS = [
    "schema_version",
    "session_id",
    "t_server_iso",
    "seq",
    "event",
    "state",
    "point_id",
    "x",
    "y",
    "points",
    "a",
    "b",
    "c",
    "ticks",
    "elapsed_time_ms",
    "mode",
    "language",
    "export_type",
]

# Plot palette and styles
FIGURE_COLORS = {
    "curve": "#ef4444",
    "points": "#3b82f6",
    "prediction": "#10b981",
    "grid": "#e2e8f0",
    "axis": "#64748b",
}
CURVE_LINE_STYLE = {"color": FIGURE_COLORS["curve"], "width": 3}
POINT_MARKER_STYLE = {
    "color": FIGURE_COLORS["points"],
    "size": 9,
    "symbol": "circle",
    "line": {"color": "#ffffff", "width": 1},
}
PREDICTION_MARKER_STYLE = {
    "color": FIGURE_COLORS["prediction"],
    "size": 12,
    "symbol": "circle",
    "line": {"color": "#ffffff", "width": 2},
}
GUIDE_LINE_STYLE = {"color": FIGURE_COLORS["prediction"], "width": 1.5, "dash": "dash"}
CHART_X_RANGE = [X_MIN, X_MAX]
CHART_Y_RANGE = [60.0, 200.0]
