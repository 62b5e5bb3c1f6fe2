"""
Damped Pendulum Simulation Package.

A deterministic RK4 core for a single damped pendulum, bounded sample
buffers for live charts, and a wall-clock driven controller, with an
optional matplotlib front-end.

Modules:
    configs       - Physical parameters and controller settings.
    physics       - Equations of motion, energies and coordinates.
    integrator    - The RK4 integrator owning the pendulum state.
    buffer        - Fixed-capacity FIFO of (x, y) samples.
    controller    - Run/pause/reset/time-scale scheduling.
    visualisation - Axis ranges, snapshot plots and live animation.
"""

from .configs import (
    PendulumParameters,
    SimulationConfig,
    PARAMETER_BOUNDS,
    TIME_SCALE_PRESETS,
)

from .physics import (
    eom,
    angular_acceleration,
    potential_energy,
    kinetic_energy,
    total_energy,
    get_coords,
    angle_from_point,
    wrap_angle,
    normalised_angle,
    small_angle_period,
    solve_trajectory,
    estimate_period,
)

from .integrator import PendulumIntegrator, PendulumState

from .buffer import SeriesBuffer

from .controller import SimulationController, StepResult

__all__ = [
    # Configuration
    "PendulumParameters",
    "SimulationConfig",
    "PARAMETER_BOUNDS",
    "TIME_SCALE_PRESETS",
    # Physics
    "eom",
    "angular_acceleration",
    "potential_energy",
    "kinetic_energy",
    "total_energy",
    "get_coords",
    "angle_from_point",
    "wrap_angle",
    "normalised_angle",
    "small_angle_period",
    "solve_trajectory",
    "estimate_period",
    # Core
    "PendulumIntegrator",
    "PendulumState",
    "SeriesBuffer",
    "SimulationController",
    "StepResult",
]
