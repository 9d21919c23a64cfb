# MIT License (see LICENSE)
import pytest
from pid_sim.config import SimConfig


def test_defaults_match_reference_program():
    config = SimConfig()
    assert (config.kp, config.ki, config.kd) == (80.0, 0.0, 0.0)
    assert config.gravity == 98.0
    assert config.timestep == pytest.approx(1 / 60)
    assert config.integral_limit == 1000.0
    assert config.boundary == "reflective"
    assert config.initial_setpoint == 400.0


def test_builders_carry_parameters():
    config = SimConfig(kp=10.0, ki=1.0, kd=2.0, integral_limit=100.0, boundary="absorptive",
                       damping=0.99, timestep=0.01, max_frame_time=0.1)
    pid = config.build_controller()
    body = config.build_body()
    sched = config.build_scheduler()
    assert pid.gains == (10.0, 1.0, 2.0)
    assert pid.integral_limit == 100.0
    assert body.boundary == "absorptive"
    assert body.damping == 0.99
    assert sched.timestep == 0.01
    assert sched.max_steps_per_frame == 10


def test_initial_setpoint_clamped():
    assert SimConfig(setpoint=5000.0).initial_setpoint == 785.0
    assert SimConfig(setpoint=0.0).initial_setpoint == 15.0


def test_replace_revalidates():
    config = SimConfig()
    assert config.replace(kp=5.0).kp == 5.0
    with pytest.raises(ValueError):
        config.replace(kp=-5.0)


@pytest.mark.parametrize("kwargs", [
    {"size": 900.0},
    {"mass": -1.0},
    {"damping": 0.0},
    {"boundary": "wrap"},
    {"restitution": 2.0},
    {"ki": -0.1},
    {"integral_limit": 0.0},
    {"output_limit": float("inf")},
    {"timestep": 0.0},
    {"timestep": 1e-10},
    {"max_frame_time": 0.001},
    {"setpoint": float("nan")},
])
def test_validation(kwargs):
    with pytest.raises(ValueError):
        SimConfig(**kwargs)
