from __future__ import annotations

import pytest

from dose_explorer import config
from dose_explorer.convergence import ConvergenceDriver, StepResult, step, ticks_to_converge
from dose_explorer.graph_engine import evaluate
from dose_explorer.models import BASELINE, Coefficients, TrainingState
from dose_explorer.regression import fit


def _gaps(current: Coefficients, target: Coefficients) -> tuple:
    return (abs(target.a - current.a), abs(target.b - current.b), abs(target.c - current.c))


def _run(current: Coefficients, target: Coefficients, limit: int = 10_000) -> tuple:
    ticks = 0
    while True:
        current, done = step(current, target)
        ticks += 1
        if done or ticks >= limit:
            return current, ticks


def test_step_closes_five_percent_of_gap() -> None:
    result = step(Coefficients(0.0, 0.0, 160.0), Coefficients(1.0, -10.0, 180.0))
    assert isinstance(result, StepResult)
    assert result.next.a == pytest.approx(0.05)
    assert result.next.b == pytest.approx(-0.5)
    assert result.next.c == pytest.approx(161.0)
    assert result.done is False


def test_step_at_target_is_done_immediately() -> None:
    target = Coefficients(0.3, -2.0, 150.0)
    result = step(target, target)
    assert result.next == target
    assert result.done is True


def test_done_uses_per_coefficient_thresholds() -> None:
    target = Coefficients(0.0, 0.0, 0.0)
    # c gap below its 1e-2 threshold, but a gap above 1e-4
    _, done = step(Coefficients(0.001, 0.0, 0.005), target)
    assert done is False
    _, done = step(Coefficients(0.0001, 0.001, 0.01), target)
    assert done is True


def test_gaps_shrink_every_tick(seed_points) -> None:
    target = fit(seed_points)
    current = BASELINE
    previous = _gaps(current, target)
    done = False
    while not done:
        current, done = step(current, target)
        gaps = _gaps(current, target)
        for before, after in zip(previous, gaps):
            if before > 0:
                assert after < before
        previous = gaps


def test_converges_within_analytic_bound(seed_points) -> None:
    target = fit(seed_points)
    bound = ticks_to_converge(BASELINE, target)
    _, ticks = _run(BASELINE, target)
    assert abs(ticks - bound) <= 1


def test_residual_keeps_shrinking_after_done(seed_points) -> None:
    target = fit(seed_points)
    current, _ = _run(BASELINE, target)
    assert current != target
    residual = _gaps(current, target)
    assert residual[0] < config.CONVERGENCE_THRESHOLDS["a"]
    assert residual[1] < config.CONVERGENCE_THRESHOLDS["b"]
    assert residual[2] < config.CONVERGENCE_THRESHOLDS["c"]
    assert abs(evaluate(current, 0.0) - evaluate(target, 0.0)) < config.CONVERGENCE_THRESHOLDS["c"]
    for _ in range(20):
        current, done = step(current, target)
        assert done is True
        gaps = _gaps(current, target)
        assert all(after < before for before, after in zip(residual, gaps) if before > 0)
        residual = gaps


def test_ticks_to_converge_minimum_is_one() -> None:
    assert ticks_to_converge(BASELINE, BASELINE) == 1


def test_custom_rate_and_thresholds() -> None:
    target = Coefficients(0.0, 0.0, 100.0)
    loose = {"a": 1.0, "b": 1.0, "c": 60.0}
    result = step(Coefficients(0.0, 0.0, 0.0), target, rate=0.5, thresholds=loose)
    assert result.next.c == pytest.approx(50.0)
    assert result.done is True


def test_driver_runs_until_converged(seed_points) -> None:
    driver = ConvergenceDriver()
    assert driver.state is TrainingState.IDLE
    target = fit(seed_points)
    driver.start(target)
    assert driver.current == BASELINE
    assert driver.state is TrainingState.RUNNING
    while driver.is_running:
        driver.tick()
    assert driver.state is TrainingState.CONVERGED
    assert abs(driver.ticks - ticks_to_converge(BASELINE, target)) <= 1
    frozen = driver.current
    result = driver.tick()
    assert result.done is True
    assert driver.current == frozen


def test_driver_idle_tick_is_noop() -> None:
    driver = ConvergenceDriver()
    result = driver.tick()
    assert result == StepResult(BASELINE, False)
    assert driver.ticks == 0


def test_reset_discards_run_and_stale_ticks() -> None:
    driver = ConvergenceDriver()
    stale_run = driver.start(Coefficients(1.0, 1.0, 1.0))
    driver.tick(stale_run)
    driver.reset()
    assert driver.state is TrainingState.IDLE
    assert driver.current == BASELINE
    assert driver.target is None

    fresh_run = driver.start(Coefficients(0.0, 0.0, 200.0))
    assert fresh_run != stale_run
    before = driver.current
    driver.tick(stale_run)
    assert driver.current == before
    driver.tick(fresh_run)
    assert driver.current.c == pytest.approx(162.0)


def test_snapshot_restore_round_trip() -> None:
    driver = ConvergenceDriver()
    driver.start(Coefficients(0.1, -4.0, 170.0))
    for _ in range(3):
        driver.tick()
    restored = ConvergenceDriver.restore(driver.snapshot())
    assert restored.current == driver.current
    assert restored.target == driver.target
    assert restored.state is TrainingState.RUNNING
    assert restored.run_id == driver.run_id
    assert restored.ticks == 3


def test_restore_rejects_running_without_target() -> None:
    restored = ConvergenceDriver.restore({"state": "RUNNING", "target": None})
    assert restored.state is TrainingState.IDLE
    assert ConvergenceDriver.restore(None).current == BASELINE
