"""
integrator.py

Fixed-step classical Runge-Kutta (RK4) integrator owning the state and
parameters of a single damped pendulum.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Tuple

from .configs import PendulumParameters
from . import physics as phys


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendulumState:
    """
    Read-only snapshot of the integrator state.

    Attributes:
        angle: Displacement from the downward vertical in radians (unwrapped).
        angular_velocity: d(angle)/dt in rad/s.
        time: Elapsed simulation time in seconds.
        potential_energy, kinetic_energy, energy: Derived energies in joules.
    """

    angle: float
    angular_velocity: float
    time: float
    potential_energy: float
    kinetic_energy: float
    energy: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class PendulumIntegrator:
    """
    Advances a damped pendulum with classical fourth-order Runge-Kutta.

    The ODE system integrated is

        theta' = omega
        omega' = -(g/L) sin(theta) - b omega

    Derived energies are recomputed after every change of state or
    parameters, so they always describe the current (angle, angular
    velocity, parameters) triple.
    """

    def __init__(
        self,
        length: float = 1.0,
        mass: float = 1.0,
        gravity: float = 9.81,
        damping: float = 0.0,
    ):
        """
        Args:
            length: Rod length in metres (> 0).
            mass: Bob mass in kilograms (> 0).
            gravity: Gravitational acceleration in m/s^2 (> 0).
            damping: Viscous damping coefficient in 1/s (>= 0).

        Raises:
            ValueError: If any parameter is non-finite or out of range.
        """
        self._params = PendulumParameters(length, mass, gravity, damping)
        self.angle = 0.0
        self.angular_velocity = 0.0
        self.time = 0.0
        self.potential_energy = 0.0
        self.kinetic_energy = 0.0
        self.energy = 0.0
        self.update_energy()

        logger.info(
            "PendulumIntegrator initialized: L=%s, m=%s, g=%s, b=%s",
            length,
            mass,
            gravity,
            damping,
        )

    @classmethod
    def from_parameters(cls, params: PendulumParameters) -> "PendulumIntegrator":
        return cls(*params.as_tuple())

    # --- Parameters ---

    @property
    def params(self) -> PendulumParameters:
        """A copy of the current physical parameters."""
        return self._params.copy()

    @property
    def length(self) -> float:
        return self._params.length

    @property
    def mass(self) -> float:
        return self._params.mass

    @property
    def gravity(self) -> float:
        return self._params.gravity

    @property
    def damping(self) -> float:
        return self._params.damping

    def set_params(
        self, length: float, mass: float, gravity: float, damping: float
    ) -> None:
        """
        Replaces the physical parameters without touching angle, angular
        velocity or time. Energies are recomputed with the new parameters.

        Raises:
            ValueError: If any parameter is invalid. The previous parameters
                are kept in that case.
        """
        self._params = PendulumParameters(length, mass, gravity, damping)
        self.update_energy()
        logger.debug(
            "Parameters updated: L=%s, m=%s, g=%s, b=%s", length, mass, gravity, damping
        )

    # --- State edits ---

    def set_angle(self, angle: float) -> None:
        """Places the bob at `angle` (not normalised) and holds it at rest."""
        self.angle = self._check_angle(angle)
        self.angular_velocity = 0.0
        self.update_energy()

    def reset(self, angle: float = 0.0) -> None:
        """Like set_angle, and also rewinds simulation time to zero."""
        self.angle = self._check_angle(angle)
        self.angular_velocity = 0.0
        self.time = 0.0
        self.update_energy()

    @staticmethod
    def _check_angle(angle: float) -> float:
        angle = float(angle)
        if not math.isfinite(angle):
            raise ValueError(f"angle must be finite, got {angle}")
        return angle

    # --- Dynamics ---

    def update_energy(self) -> None:
        """
        Recomputes potential, kinetic and total energy from the current state.
        Potential energy is zero at the lowest point of the swing (angle = 0).
        """
        L, m, g, _ = self._params.as_tuple()
        self.potential_energy = float(phys.potential_energy(self.angle, L, m, g))
        self.kinetic_energy = float(phys.kinetic_energy(self.angular_velocity, L, m))
        self.energy = self.potential_energy + self.kinetic_energy

    def get_angular_acceleration(self, angle: float, angular_velocity: float) -> float:
        L, _, g, b = self._params.as_tuple()
        return phys.angular_acceleration(angle, angular_velocity, L, g, b)

    def step(self, dt: float) -> None:
        """
        Advances the state by `dt` seconds of simulation time with one RK4 step.

        Args:
            dt: Non-negative, finite time step in seconds. A zero step leaves
                the state unchanged and only refreshes the energies.

        Raises:
            ValueError: If dt is negative or non-finite. State is unchanged.
        """
        dt = float(dt)
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite, non-negative number, got {dt}")

        if dt == 0:
            self.update_energy()
            return

        theta, omega = self.angle, self.angular_velocity
        accel = self.get_angular_acceleration

        # Stage derivatives: k*_theta is d(theta)/dt, k*_omega is d(omega)/dt
        k1_theta = omega
        k1_omega = accel(theta, omega)

        k2_theta = omega + 0.5 * dt * k1_omega
        k2_omega = accel(theta + 0.5 * dt * k1_theta, k2_theta)

        k3_theta = omega + 0.5 * dt * k2_omega
        k3_omega = accel(theta + 0.5 * dt * k2_theta, k3_theta)

        k4_theta = omega + dt * k3_omega
        k4_omega = accel(theta + dt * k3_theta, k4_theta)

        self.angle = theta + (dt / 6) * (k1_theta + 2 * k2_theta + 2 * k3_theta + k4_theta)
        self.angular_velocity = omega + (dt / 6) * (
            k1_omega + 2 * k2_omega + 2 * k3_omega + k4_omega
        )
        self.time += dt

        self.update_energy()

    # --- Read access ---

    def get_state(self) -> PendulumState:
        return PendulumState(
            angle=self.angle,
            angular_velocity=self.angular_velocity,
            time=self.time,
            potential_energy=self.potential_energy,
            kinetic_energy=self.kinetic_energy,
            energy=self.energy,
        )

    def get_bob_position(self, pivot_x: float, pivot_y: float) -> Tuple[float, float]:
        """Bob position in screen coordinates (y grows downwards)."""
        return (
            pivot_x + self.length * math.sin(self.angle),
            pivot_y + self.length * math.cos(self.angle),
        )
