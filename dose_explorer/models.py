"""Value types shared by the solver, the convergence driver and the front ends."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from . import config


@dataclass(frozen=True)
class DataPoint:
    id: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class Coefficients:
    """Quadratic coefficients for ``y = a*x^2 + b*x + c``."""

    a: float
    b: float
    c: float

    def to_dict(self) -> Dict[str, float]:
        return {"a": self.a, "b": self.b, "c": self.c}

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]], default: Optional["Coefficients"] = None) -> "Coefficients":
        fallback = default if default is not None else BASELINE
        if not isinstance(raw, Mapping):
            return fallback
        try:
            return cls(float(raw["a"]), float(raw["b"]), float(raw["c"]))
        except (KeyError, TypeError, ValueError):
            return fallback


class TrainingState(str, enum.Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    CONVERGED = "CONVERGED"


BASELINE = Coefficients(**config.BASELINE_COEFFS)
ZERO = Coefficients(**config.ZERO_COEFFS)

# Roughly follows a parabola with its trough between 26 and 32 mg.
_FIXED_POINTS = [
    (4, 158),
    (9, 142),
    (14, 128),
    (20, 118),
    (26, 112),
    (32, 109),
    (37, 115),
    (43, 126),
    (48, 142),
    (53, 165),
]


def generate_fixed_data() -> List[DataPoint]:
    return [DataPoint(id=f"fixed-{x}", x=float(x), y=float(y)) for x, y in _FIXED_POINTS]


def new_point_id() -> str:
    return uuid.uuid4().hex[: config.POINT_ID_LENGTH]


def new_point(x: float, y: float) -> DataPoint:
    return DataPoint(id=new_point_id(), x=float(x), y=float(y))


def points_to_records(points: Iterable[DataPoint]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in points]


def points_from_records(records: Any) -> List[DataPoint]:
    if not isinstance(records, list):
        return []
    points: List[DataPoint] = []
    for rec in records:
        if not isinstance(rec, Mapping):
            continue
        try:
            points.append(DataPoint(id=str(rec["id"]), x=float(rec["x"]), y=float(rec["y"])))
        except (KeyError, TypeError, ValueError):
            continue
    return points
