# MIT License (see LICENSE)
import logging

import pytest
from pid_sim.core.body import PhysicsBody
from pid_sim.core.pid import PIDController
from pid_sim.core.scheduler import FixedStepScheduler, MIN_TIMESTEP


def _make_sim():
    pid = PIDController(kp=40.0, ki=2.0, kd=6.0)
    body = PhysicsBody()

    def step(dt):
        body.update(pid.calculate(600.0, body.center, dt), dt)

    return pid, body, step


def test_one_big_frame_equals_many_small_frames():
    """A single 100 ms frame and ten 10 ms frames give the same trajectory."""
    pid_a, body_a, step_a = _make_sim()
    pid_b, body_b, step_b = _make_sim()
    sched_a = FixedStepScheduler(timestep=0.01)
    sched_b = FixedStepScheduler(timestep=0.01)

    assert sched_a.advance(0.1, step_a) == 10
    assert sum(sched_b.advance(0.01, step_b) for _ in range(10)) == 10

    assert body_a.position == body_b.position
    assert body_a.velocity == body_b.velocity
    assert pid_a.integral == pid_b.integral
    assert sched_a.accumulated == sched_b.accumulated == 0.0


def test_residual_is_carried():
    sched = FixedStepScheduler(timestep=0.01)
    calls = []
    assert sched.advance(0.025, calls.append) == 2
    assert sched.accumulated == pytest.approx(0.005)
    assert 0.0 <= sched.accumulated < sched.timestep
    assert sched.advance(0.005, calls.append) == 1
    assert sched.accumulated == 0.0
    assert calls == [0.01, 0.01, 0.01]
    assert sched.steps_taken == 3
    assert sched.sim_time == pytest.approx(0.03)


def test_large_stall_is_capped(caplog):
    sched = FixedStepScheduler(timestep=0.01, max_frame_time=0.25)
    calls = []
    with caplog.at_level(logging.WARNING, logger="pid_sim.core.scheduler"):
        n = sched.advance(30.0, calls.append)
    assert n == 25
    assert n <= sched.max_steps_per_frame
    assert "dropping" in caplog.text


def test_max_steps_bound_holds_with_residual():
    sched = FixedStepScheduler(timestep=1 / 60, max_frame_time=0.25)
    worst = 0
    for frame_time in [0.0166, 0.0, 10.0, 0.0333, 5.0, 0.249]:
        worst = max(worst, sched.advance(frame_time, lambda dt: None))
    assert worst <= sched.max_steps_per_frame == 15


def test_tick_from_millisecond_clock():
    sched = FixedStepScheduler(timestep=0.01)
    assert sched.tick(1000.0) == 0.0
    assert sched.tick(1016.0) == pytest.approx(0.016)
    assert sched.tick(1010.0) == 0.0  # clock went backwards
    assert sched.last_tick == 1010.0


def test_step_exception_propagates():
    sched = FixedStepScheduler(timestep=0.01)

    def boom(dt):
        raise RuntimeError("step failed")

    with pytest.raises(RuntimeError):
        sched.advance(0.05, boom)


def test_reset():
    sched = FixedStepScheduler(timestep=0.01)
    sched.tick(5.0)
    sched.advance(0.037, lambda dt: None)
    sched.reset()
    assert sched.accumulated == 0.0
    assert sched.last_tick is None
    assert sched.steps_taken == 0


@pytest.mark.parametrize("kwargs", [
    {"timestep": 0.0},
    {"timestep": -0.01},
    {"timestep": 0.1, "max_frame_time": 0.05},
    {"timestep": 0.01, "max_frame_time": float("inf")},
])
def test_constructor_validation(kwargs):
    with pytest.raises(ValueError):
        FixedStepScheduler(**kwargs)


def test_negative_frame_time_rejected():
    sched = FixedStepScheduler(timestep=0.01)
    with pytest.raises(ValueError):
        sched.advance(-0.01, lambda dt: None)


@pytest.mark.parametrize("timestep", [1e-10, 4e-10, 1e-300])
def test_sub_nanosecond_timestep_rejected(timestep):
    """Steps shorter than the nanosecond accumulator resolution are refused."""
    with pytest.raises(ValueError):
        FixedStepScheduler(timestep=timestep, max_frame_time=0.25)


def test_smallest_timestep_still_capped():
    sched = FixedStepScheduler(timestep=MIN_TIMESTEP, max_frame_time=1e-6)
    assert sched.max_steps_per_frame == 1000
    assert sched.advance(1.0, lambda dt: None) == 1000
