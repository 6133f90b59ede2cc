"""Training animation: exponential approach from the current curve to the fitted one.

``step`` is the pure transition. ``ConvergenceDriver`` wraps it in the
IDLE -> RUNNING -> CONVERGED state machine; the caller owns the tick source
and decides whether to tick again after each call.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, NamedTuple, Optional

from . import config
from .models import BASELINE, ZERO, Coefficients, TrainingState

log = logging.getLogger(__name__)


class StepResult(NamedTuple):
    next: Coefficients
    done: bool


def _thresholds(raw: Optional[Mapping[str, float]]) -> Mapping[str, float]:
    return raw if raw is not None else config.CONVERGENCE_THRESHOLDS


def step(
    current: Coefficients,
    target: Coefficients,
    *,
    rate: float = config.INTERPOLATION_RATE,
    thresholds: Optional[Mapping[str, float]] = None,
) -> StepResult:
    limits = _thresholds(thresholds)
    next_a = current.a + (target.a - current.a) * rate
    next_b = current.b + (target.b - current.b) * rate
    next_c = current.c + (target.c - current.c) * rate
    done = (
        abs(target.a - next_a) < limits["a"]
        and abs(target.b - next_b) < limits["b"]
        and abs(target.c - next_c) < limits["c"]
    )
    return StepResult(Coefficients(next_a, next_b, next_c), done)


def ticks_to_converge(
    current: Coefficients,
    target: Coefficients,
    *,
    rate: float = config.INTERPOLATION_RATE,
    thresholds: Optional[Mapping[str, float]] = None,
) -> int:
    """Number of ``step`` calls until ``done``, from the geometric decay of each gap."""
    limits = _thresholds(thresholds)
    shrink = math.log(1.0 - rate)
    ticks = 1
    for name in ("a", "b", "c"):
        gap = abs(getattr(target, name) - getattr(current, name))
        limit = limits[name]
        if gap * (1.0 - rate) < limit:
            continue
        ticks = max(ticks, int(math.floor(math.log(limit / gap) / shrink)) + 1)
    return ticks


class ConvergenceDriver:
    def __init__(
        self,
        current: Coefficients = BASELINE,
        *,
        rate: float = config.INTERPOLATION_RATE,
        thresholds: Optional[Mapping[str, float]] = None,
    ) -> None:
        self.rate = rate
        self.thresholds = dict(_thresholds(thresholds))
        self.current = current
        self.target: Optional[Coefficients] = None
        self.state = TrainingState.IDLE
        self.run_id = 0
        self.ticks = 0

    def start(self, target: Coefficients) -> int:
        self.target = target
        self.state = TrainingState.RUNNING
        self.run_id += 1
        self.ticks = 0
        log.debug("run %d started towards %s", self.run_id, target)
        return self.run_id

    def tick(self, run_id: Optional[int] = None) -> StepResult:
        # A tick scheduled for an earlier run, or arriving after convergence, changes nothing.
        if self.state is not TrainingState.RUNNING or self.target is None:
            return StepResult(self.current, self.state is TrainingState.CONVERGED)
        if run_id is not None and run_id != self.run_id:
            log.debug("dropping tick for stale run %s (active %d)", run_id, self.run_id)
            return StepResult(self.current, False)

        result = step(self.current, self.target, rate=self.rate, thresholds=self.thresholds)
        self.current = result.next
        self.ticks += 1
        if result.done:
            self.state = TrainingState.CONVERGED
            log.info("run %d converged after %d ticks", self.run_id, self.ticks)
        return result

    def reset(self) -> None:
        self.current = BASELINE
        self.target = None
        self.state = TrainingState.IDLE
        self.run_id += 1
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self.state is TrainingState.RUNNING

    def snapshot(self) -> Dict[str, Any]:
        return {
            "current": self.current.to_dict(),
            "target": self.target.to_dict() if self.target is not None else None,
            "state": self.state.value,
            "run_id": self.run_id,
            "ticks": self.ticks,
        }

    @classmethod
    def restore(cls, data: Optional[Mapping[str, Any]], **kwargs: Any) -> "ConvergenceDriver":
        driver = cls(**kwargs)
        if not isinstance(data, Mapping):
            return driver
        driver.current = Coefficients.from_dict(data.get("current"))
        raw_target = data.get("target")
        driver.target = Coefficients.from_dict(raw_target, ZERO) if raw_target is not None else None
        try:
            driver.state = TrainingState(data.get("state", TrainingState.IDLE.value))
        except ValueError:
            driver.state = TrainingState.IDLE
        if driver.state is TrainingState.RUNNING and driver.target is None:
            driver.state = TrainingState.IDLE
        driver.run_id = int(data.get("run_id") or 0)
        driver.ticks = int(data.get("ticks") or 0)
        return driver
