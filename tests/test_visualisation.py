"""
Tests for the visualisation module.
"""

import pytest
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.backend_bases import KeyEvent
from unittest.mock import patch

from pendulum_sim import visualisation as vis
from pendulum_sim.configs import PendulumParameters, SimulationConfig
from pendulum_sim.controller import SimulationController

# Use a non-interactive backend for testing
matplotlib.use("Agg")


@pytest.fixture
def controller():
    ticks = iter(np.arange(0.0, 100.0, 0.02))
    return SimulationController(
        PendulumParameters.default(), SimulationConfig(), clock=lambda: next(ticks)
    )


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


# --- Axis Ranges ---


def test_time_window():
    assert vis.time_window([], 3.0) == (0.0, 10.0)
    assert vis.time_window([(0.1, 0.0)], 3.0) == (0.0, 4.0)
    assert vis.time_window([(0.1, 0.0)], 25.0) == (15.0, 26.0)


def test_velocity_range():
    assert vis.velocity_range([]) == (-5.0, 5.0)
    assert vis.velocity_range([(0.0, 1.0), (0.1, -2.0)]) == (-5.0, 5.0)
    assert vis.velocity_range([(0.0, 1.0), (0.1, -7.5)]) == (-7.5, 7.5)


def test_energy_range():
    assert vis.energy_range([], [(0.0, 1.0)]) is None

    # Narrow spread: padded by 2 J, clamped at zero.
    low, high = vis.energy_range([(0, 0.5)], [(0, 0.2)], [(0, 0.7)])
    assert (low, high) == (0.0, pytest.approx(2.7))

    # Wide spread: padded by 10%.
    low, high = vis.energy_range([(0, 10.0)], [(0, 20.0)], [(0, 30.0)])
    assert low == pytest.approx(8.0)
    assert high == pytest.approx(32.0)


def test_phase_space_scale():
    assert vis.phase_space_scale([], 100.0) == pytest.approx(1000.0)
    assert vis.phase_space_scale([(0.5, -2.0), (0.1, 1.0)], 100.0) == pytest.approx(50.0)


def test_trail_colors_fade_in():
    colors = vis.trail_colors(10)
    assert colors.shape == (10, 4)
    assert np.all(np.diff(colors[:, 3]) >= 0)
    assert colors[-1, 3] == pytest.approx(0.6)
    assert vis.trail_colors(0).shape == (0, 4)


# --- Plot Smoke Tests ---


@patch("matplotlib.pyplot.show")
def test_plot_graph_data_smoke(mock_show, controller):
    controller.start()
    for _ in range(50):
        controller.step()
    fig = vis.plot_graph_data(controller.get_graph_data(), title="Snapshot")
    assert fig is not None
    mock_show.assert_called_once()


@patch("matplotlib.pyplot.show")
def test_plot_graph_data_empty(mock_show, controller):
    assert vis.plot_graph_data(controller.get_graph_data()) is not None


def test_animation_smoke(controller):
    anim = vis.animate_simulation(controller)
    assert anim is not None

    fig = plt.gcf()
    fig.canvas.callbacks.process(
        "key_press_event", KeyEvent("key_press_event", fig.canvas, " ")
    )
    assert controller.is_running

    fig.canvas.callbacks.process(
        "key_press_event", KeyEvent("key_press_event", fig.canvas, "4")
    )
    assert controller.time_scale == 2.0

    fig.canvas.callbacks.process(
        "key_press_event", KeyEvent("key_press_event", fig.canvas, " ")
    )
    assert not controller.is_running
    assert controller.primary_action == "Resume"
