# MIT License (see LICENSE)
import logging
import math

import pytest
from pid_sim.core.invariants import integral_within_limit
from pid_sim.core.pid import PIDController
from pid_sim.tuning import TuningMapper, Quit, SetpointRequest, GainAdjust, ResetRequest


def _mapper(**kwargs):
    pid = PIDController(kp=80.0, ki=1.0, kd=5.0)
    return pid, TuningMapper(pid, 400.0, **kwargs)


def test_gain_adjust_clamps_to_zero():
    """GainAdjust(kp, -1000) on kp=80 leaves kp at 0."""
    pid, mapper = _mapper()
    mapper.apply(GainAdjust("kp", -1000.0))
    assert pid.kp == 0.0
    mapper.apply(GainAdjust("kd", 5.0))
    mapper.apply(GainAdjust("ki", -0.1))
    assert pid.kd == pytest.approx(10.0)
    assert pid.ki == pytest.approx(0.9)


def test_setpoint_request_clears_integral_only():
    pid, mapper = _mapper()
    pid.calculate(500.0, 400.0, 0.1)
    assert pid.integral != 0.0
    mapper.apply(SetpointRequest(650.0))
    assert mapper.setpoint == 650.0
    assert pid.integral == 0.0
    assert pid.prev_error == pytest.approx(100.0)
    assert pid.gains == (80.0, 1.0, 5.0)


def test_setpoint_clamped_to_range():
    pid, mapper = _mapper(setpoint_range=(15.0, 785.0))
    mapper.apply(SetpointRequest(-50.0))
    assert mapper.setpoint == 15.0
    mapper.apply(SetpointRequest(10_000.0))
    assert mapper.setpoint == 785.0


def test_reset_request_keeps_gains(caplog):
    pid, mapper = _mapper()
    pid.calculate(500.0, 400.0, 0.1)
    with caplog.at_level(logging.INFO, logger="pid_sim.tuning"):
        mapper.apply(ResetRequest())
    assert pid.integral == 0.0
    assert pid.prev_error == 0.0
    assert pid.gains == (80.0, 1.0, 5.0)
    assert mapper.setpoint == 400.0
    assert "reset" in caplog.text


def test_quit_mutates_nothing():
    pid, mapper = _mapper()
    mapper.apply(Quit())
    assert mapper.setpoint == 400.0
    assert pid.gains == (80.0, 1.0, 5.0)


def test_unknown_event_rejected():
    _, mapper = _mapper()
    with pytest.raises(TypeError):
        mapper.apply("kp+")


def test_gain_adjust_validates_gain_name():
    with pytest.raises(ValueError):
        GainAdjust("kq", 1.0)


@pytest.mark.parametrize("y", [math.nan, math.inf, -math.inf])
def test_non_finite_setpoint_rejected(y):
    with pytest.raises(ValueError):
        SetpointRequest(y)
    with pytest.raises(ValueError):
        TuningMapper(PIDController(), y)


@pytest.mark.parametrize("delta", [math.nan, math.inf, -math.inf])
def test_non_finite_gain_delta_rejected(delta):
    with pytest.raises(ValueError):
        GainAdjust("kp", delta)


def test_integral_stays_bounded_after_setpoint_requests():
    """Finite setpoints keep the integral finite and within its limit."""
    pid, mapper = _mapper()
    for y in [800.0, -5.0, 1e12, 400.0]:
        mapper.apply(SetpointRequest(y))
        pid.calculate(mapper.setpoint, 385.0, 0.5)
        assert integral_within_limit(pid)
        assert math.isfinite(pid.integral)
