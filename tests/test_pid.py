# MIT License (see LICENSE)
import math

import numpy as np
import pytest
from pid_sim.core.pid import PIDController, saturate
from pid_sim.core.invariants import integral_within_limit


def test_proportional_example():
    """kp=80, setpoint 400, measured 350 -> error 50 -> output 4000."""
    pid = PIDController(kp=80.0, ki=0.0, kd=0.0)
    out = pid.calculate(400.0, 350.0, 1 / 60)
    assert out == pytest.approx(4000.0)
    assert pid.prev_error == pytest.approx(50.0)
    assert pid.integral == pytest.approx(50.0 / 60)


def test_calculate_is_stateful():
    """Same arguments twice give different outputs: the integral grows."""
    pid = PIDController(kp=1.0, ki=2.0, kd=0.5)
    a = pid.calculate(10.0, 0.0, 0.1)
    b = pid.calculate(10.0, 0.0, 0.1)
    assert a != b
    # First call: 10 + 2*1 + 0.5*100; second: 10 + 2*2 + 0.5*0
    assert a == pytest.approx(62.0)
    assert b == pytest.approx(14.0)


def test_deterministic_given_same_state():
    p1 = PIDController(kp=3.0, ki=0.7, kd=0.2)
    p2 = PIDController(kp=3.0, ki=0.7, kd=0.2)
    rng = np.random.default_rng(7)
    for _ in range(200):
        sp, y = rng.uniform(-500, 500, size=2)
        dt = float(rng.uniform(1e-3, 0.1))
        assert p1.calculate(sp, y, dt) == p2.calculate(sp, y, dt)
        assert p1.integral == p2.integral
        assert p1.prev_error == p2.prev_error


def test_integral_clamped_every_call():
    pid = PIDController(kp=0.0, ki=1.0, kd=0.0, integral_limit=100.0)
    rng = np.random.default_rng(3)
    for _ in range(1000):
        pid.calculate(float(rng.normal(0, 1e4)), 0.0, 0.05)
        assert integral_within_limit(pid)

    for _ in range(100):
        pid.calculate(1e6, 0.0, 1.0)
    assert pid.integral == 100.0
    for _ in range(100):
        pid.calculate(-1e6, 0.0, 1.0)
    assert pid.integral == -100.0


def test_reset_semantics():
    """After reset the derivative is computed against zero prior error."""
    pid = PIDController(kp=2.0, ki=0.5, kd=0.1)
    for _ in range(10):
        pid.calculate(100.0, 20.0, 0.02)
    gains = pid.gains
    pid.reset()
    assert pid.integral == 0.0
    assert pid.prev_error == 0.0
    assert pid.gains == gains

    pid.reset()  # idempotent
    E, D = 30.0, 0.02
    out = pid.calculate(E, 0.0, D)
    assert out == pytest.approx(2.0 * E + 0.5 * (E * D) + 0.1 * E / D)


def test_clear_integral_keeps_prev_error():
    pid = PIDController(kp=1.0, ki=1.0, kd=1.0)
    pid.calculate(10.0, 0.0, 0.1)
    pid.clear_integral()
    assert pid.integral == 0.0
    assert pid.prev_error == 10.0


@pytest.mark.parametrize("dt", [0.0, -0.01, math.nan, math.inf])
def test_degenerate_dt_rejected(dt):
    pid = PIDController()
    with pytest.raises(ValueError):
        pid.calculate(1.0, 0.0, dt)
    assert pid.integral == 0.0


def test_adjust_gain_clamps_at_zero():
    pid = PIDController(kp=80.0)
    assert pid.adjust_gain("kp", -1000.0) == 0.0
    assert pid.kp == 0.0
    assert pid.adjust_gain("ki", 0.1) == pytest.approx(0.1)
    with pytest.raises(ValueError):
        pid.adjust_gain("kx", 1.0)


@pytest.mark.parametrize("delta", [math.nan, math.inf, -math.inf])
def test_adjust_gain_rejects_non_finite_delta(delta):
    pid = PIDController(kp=80.0)
    with pytest.raises(ValueError):
        pid.adjust_gain("kp", delta)
    assert pid.kp == 80.0


def test_constructor_validation():
    with pytest.raises(ValueError):
        PIDController(kp=-1.0)
    with pytest.raises(ValueError):
        PIDController(integral_limit=0.0)


def test_saturate():
    assert saturate(5.0, 10.0) == 5.0
    assert saturate(50.0, 10.0) == 10.0
    assert saturate(-50.0, 10.0) == -10.0
    assert saturate(math.inf, 10.0) == 10.0
    assert saturate(-math.inf, 10.0) == -10.0
    assert saturate(math.nan, 10.0) == 0.0
