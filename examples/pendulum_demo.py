"""
Interactive damped pendulum.

Space starts/pauses, 'r' resets, '1'-'4' pick 0.25x/0.5x/1x/2x speed.
Drag the bob while paused to choose a new starting angle.
"""

import logging

import numpy as np
import matplotlib.pyplot as plt

from pendulum_sim import PendulumParameters, SimulationConfig, SimulationController
from pendulum_sim.visualisation import animate_simulation, plot_graph_data


logging.basicConfig(level=logging.INFO)

# Set the physical parameters.
params = PendulumParameters(length=1.5, mass=1.0, gravity=9.81, damping=0.05)

# Start 45 degrees out, keeping 200 samples per chart and 400 in phase space.
config = SimulationConfig(initial_angle=np.pi / 4)

controller = SimulationController(params, config)

anim = animate_simulation(controller)
plt.show()

# Once the window closes, show what the buffers held last.
plot_graph_data(controller.get_graph_data(), title="Last recorded window")
