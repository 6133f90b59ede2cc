"""Caller-side state for one user: the editable point set, the training run and the
prediction input. Both front ends drive the core through this class."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .convergence import ConvergenceDriver, StepResult
from .graph_engine import evaluate
from .logger import log_event
from .models import (
    Coefficients,
    DataPoint,
    TrainingState,
    generate_fixed_data,
    new_point,
    points_from_records,
    points_to_records,
)
from .regression import fit
from .translations import normalize_language, toggle_language
from .validation import clamp_prediction_input, parse_point

log = logging.getLogger(__name__)


class TrainerSession:
    def __init__(
        self,
        session_id: Optional[str] = None,
        *,
        points: Optional[List[DataPoint]] = None,
        driver: Optional[ConvergenceDriver] = None,
        language: str = config.DEFAULT_LANGUAGE,
        prediction_input: float = config.DEFAULT_PREDICTION_INPUT,
        log_events: bool = True,
        data_dir: Optional[Path] = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.points: List[DataPoint] = list(points) if points is not None else generate_fixed_data()
        self.driver = driver if driver is not None else ConvergenceDriver()
        self.language = normalize_language(language)
        self.prediction_input = clamp_prediction_input(prediction_input)
        self.log_events = log_events
        self.data_dir = data_dir

    # -- state ---------------------------------------------------------------

    @property
    def state(self) -> TrainingState:
        return self.driver.state

    @property
    def current(self) -> Coefficients:
        return self.driver.current

    @property
    def target(self) -> Optional[Coefficients]:
        return self.driver.target

    @property
    def is_editable(self) -> bool:
        return self.state is TrainingState.IDLE

    @property
    def can_train(self) -> bool:
        return self.is_editable and len(self.points) >= config.MIN_POINTS_FOR_FIT

    def _emit(self, event: str, **fields: Any) -> None:
        if not self.log_events:
            return
        log_event(
            self.session_id,
            event,
            data_dir=self.data_dir,
            state=self.state.value,
            points=len(self.points),
            language=self.language,
            **fields,
        )

    # -- point set -----------------------------------------------------------

    def reset(self) -> None:
        """Restore the seed data and return the model to the flat baseline."""
        self.points = generate_fixed_data()
        self.driver.reset()
        self._emit("reset", **self.current.to_dict())

    def add_point(self, raw_x: Any, raw_y: Any) -> Optional[str]:
        """Add a point, keeping the list sorted by dose. Returns an error key or None."""
        if not self.is_editable:
            return "validation_locked"
        parsed, error = parse_point(raw_x, raw_y)
        if error is not None:
            return error
        x, y = parsed
        point = new_point(x, y)
        self.points = sorted([*self.points, point], key=lambda p: p.x)
        self._emit("point_add", point_id=point.id, x=point.x, y=point.y)
        return None

    def delete_point(self, point_id: str) -> bool:
        if not self.is_editable:
            return False
        remaining = [p for p in self.points if p.id != point_id]
        if len(remaining) == len(self.points):
            return False
        self.points = remaining
        self._emit("point_delete", point_id=point_id)
        return True

    # -- training ------------------------------------------------------------

    def train(self) -> Optional[int]:
        """Solve once and start a run. Returns the run id, or None when training is not allowed."""
        if not self.can_train:
            return None
        target = fit(self.points)
        run_id = self.driver.start(target)
        self._emit("train_start", **target.to_dict())
        return run_id

    def tick(self, run_id: Optional[int] = None) -> StepResult:
        was_running = self.driver.is_running
        result = self.driver.tick(run_id)
        if was_running and self.state is TrainingState.CONVERGED:
            self._emit("train_converged", ticks=self.driver.ticks, **self.current.to_dict())
        return result

    def run_to_convergence(self, max_ticks: int = config.MAX_TRAINING_TICKS) -> int:
        ticks = 0
        while self.driver.is_running and ticks < max_ticks:
            self.tick()
            ticks += 1
        if self.driver.is_running:
            log.warning("training did not converge within %d ticks", max_ticks)
        return ticks

    # -- prediction / ui -----------------------------------------------------

    def set_prediction_input(self, raw: Any) -> float:
        self.prediction_input = clamp_prediction_input(raw)
        return self.prediction_input

    def predict(self, dose: Optional[float] = None) -> float:
        x = self.prediction_input if dose is None else dose
        return evaluate(self.current, x)

    def toggle_language(self) -> str:
        self.language = toggle_language(self.language)
        self._emit("language")
        return self.language

    # -- store round trip ----------------------------------------------------

    def to_store(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "points": points_to_records(self.points),
            "driver": self.driver.snapshot(),
            "language": self.language,
            "prediction_input": self.prediction_input,
        }

    @classmethod
    def from_store(cls, data: Any, **kwargs: Any) -> "TrainerSession":
        if not isinstance(data, dict):
            return cls(**kwargs)
        raw_points = data.get("points")
        return cls(
            data.get("session_id"),
            points=points_from_records(raw_points) if raw_points is not None else None,
            driver=ConvergenceDriver.restore(data.get("driver")),
            language=data.get("language", config.DEFAULT_LANGUAGE),
            prediction_input=data.get("prediction_input", config.DEFAULT_PREDICTION_INPUT),
            **kwargs,
        )
