import pytest
import numpy as np

import pendulum_sim.physics as phys
from pendulum_sim.configs import PendulumParameters, SimulationConfig

# --- Fixtures ---


@pytest.fixture
def default_params():
    return {"L": 1.0, "m": 1.0, "g": 9.81}


# --- 1. Math Utilities ---


def test_wrap_angle():
    """Test angle wrapping to [-pi, pi)."""
    assert np.isclose(phys.wrap_angle(0.1), 0.1)
    assert np.isclose(phys.wrap_angle(np.pi + 0.1), -np.pi + 0.1)
    # Boundary case: 3*pi maps to -pi
    assert np.isclose(phys.wrap_angle(3 * np.pi), -np.pi)


def test_normalised_angle():
    assert np.isclose(phys.normalised_angle(-np.pi / 2), 1.5 * np.pi)
    assert np.isclose(phys.normalised_angle(5 * np.pi), np.pi)


def test_easing_curves():
    assert phys.lerp(2.0, 4.0, 0.25) == 2.5
    assert phys.ease_in_out_cubic(0.0) == 0.0
    assert phys.ease_in_out_cubic(1.0) == 1.0
    assert np.isclose(phys.ease_in_out_cubic(0.5), 0.5)


# --- 2. Dynamics & Energies ---


def test_acceleration_scalar_and_array_agree(default_params):
    theta = np.array([0.0, 0.3, -1.2])
    omega = np.array([0.5, -0.2, 2.0])
    vec = phys.angular_acceleration(theta, omega, L=1.5, g=9.81, b=0.1)
    for i in range(3):
        scalar = phys.angular_acceleration(theta[i], omega[i], L=1.5, g=9.81, b=0.1)
        assert isinstance(scalar, float)
        assert np.isclose(scalar, vec[i])


def test_damping_opposes_motion():
    assert phys.angular_acceleration(0.0, 1.0, b=0.5) < 0
    assert phys.angular_acceleration(0.0, -1.0, b=0.5) > 0


def test_energy_functions(default_params):
    L, m, g = default_params["L"], default_params["m"], default_params["g"]
    assert phys.potential_energy(0.0, L, m, g) == 0.0
    assert np.isclose(phys.potential_energy(np.pi, L, m, g), 2 * m * g * L)
    assert np.isclose(phys.kinetic_energy(2.0, L, m), 2.0)
    assert np.isclose(
        phys.total_energy(np.pi / 2, 1.0, L, m, g), m * g * L + 0.5 * m * L**2
    )


def test_reference_energy_conservation(default_params):
    """scipy reference solution conserves energy without damping."""
    L, m, g = default_params["L"], default_params["m"], default_params["g"]
    t_points = np.linspace(0, 10, 200)
    sol = phys.solve_trajectory([np.pi / 2, 0.0], t_points, L=L, g=g)
    E = phys.total_energy(sol[0], sol[1], L, m, g)
    assert np.std(E) < 1e-6


# --- 3. Coordinates ---


def test_get_coords():
    x, y = phys.get_coords(0.0, 2.0)
    assert np.isclose(x, 0.0) and np.isclose(y, -2.0)
    x, y = phys.get_coords(np.pi / 2, 2.0)
    assert np.isclose(x, 2.0) and np.isclose(y, 0.0)


def test_angle_from_point_inverts_screen_position():
    for theta in (-2.5, -0.4, 0.0, 1.0, 3.0):
        dx, dy = np.sin(theta), np.cos(theta)
        assert np.isclose(phys.angle_from_point(dx, dy), theta)


# --- 4. Period Analysis ---


def test_estimate_period_on_sine():
    t = np.linspace(0, 10, 2001)
    samples = np.column_stack([t, np.sin(2 * np.pi * t / 2.5)])
    assert np.isclose(phys.estimate_period(samples), 2.5, rtol=1e-4)


def test_estimate_period_needs_two_crossings():
    assert np.isnan(phys.estimate_period([]))
    assert np.isnan(phys.estimate_period([(0.0, -1.0), (1.0, 1.0)]))


def test_small_angle_period():
    assert np.isclose(phys.small_angle_period(1.5, 9.81), 2 * np.pi * np.sqrt(1.5 / 9.81))


# --- 5. Configuration ---


def test_parameters_copy_and_presets():
    base = PendulumParameters.default()
    assert base.as_tuple() == (1.5, 1.0, 9.81, 0.05)
    longer = base.copy(length=2.5)
    assert longer.length == 2.5 and base.length == 1.5
    assert np.isclose(longer.natural_frequency, np.sqrt(9.81 / 2.5))
    assert PendulumParameters.undamped().damping == 0.0

    with pytest.raises(ValueError):
        base.copy(colour="red")
    with pytest.raises(ValueError):
        base.copy(mass=-1.0)


def test_simulation_config_validation():
    config = SimulationConfig()
    assert config.max_delta == 0.1
    assert (config.series_capacity, config.phase_capacity) == (200, 400)
    assert config.copy(time_scale=2.0).time_scale == 2.0

    for bad in ({"max_delta": 0.0}, {"time_scale": -1.0}, {"series_capacity": 0},
                {"phase_capacity": 1.5}, {"initial_angle": np.nan}):
        with pytest.raises(ValueError):
            SimulationConfig(**bad)
