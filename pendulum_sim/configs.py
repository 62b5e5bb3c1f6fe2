"""
Configuration objects for the pendulum simulation.

Physical parameters and the tick-scheduling settings of the controller are
kept in small dataclasses so they can be validated once, copied with
overrides and passed around without long __init__ signatures.
"""

import math
from dataclasses import dataclass, fields
from typing import Dict, Tuple


# Slider bounds used by the interactive front-ends (min, max, step).
PARAMETER_BOUNDS: Dict[str, Tuple[float, float, float]] = {
    "length": (0.5, 3.0, 0.1),
    "gravity": (1.0, 20.0, 0.5),
    "mass": (0.5, 5.0, 0.1),
    "damping": (0.0, 0.5, 0.01),
    "initial_angle": (-math.pi, math.pi, math.pi / 180),
}

TIME_SCALE_PRESETS: Tuple[float, ...] = (0.25, 0.5, 1.0, 2.0)


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


@dataclass
class PendulumParameters:
    """
    Physical parameters of a damped simple pendulum.

    Attributes:
        length: Rod length in metres (> 0).
        mass: Bob mass in kilograms (> 0).
        gravity: Gravitational acceleration in m/s^2 (> 0).
        damping: Viscous damping coefficient in 1/s (>= 0).

    Example:
        >>> params = PendulumParameters.default()
        >>> heavy = params.copy(mass=4.0)
    """

    length: float = 1.0
    mass: float = 1.0
    gravity: float = 9.81
    damping: float = 0.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raises ValueError if any parameter is non-finite or out of range."""
        for f in fields(self):
            setattr(self, f.name, _require_finite(f.name, getattr(self, f.name)))
        if self.length <= 0:
            raise ValueError(f"length must be positive, got {self.length}")
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if self.gravity <= 0:
            raise ValueError(f"gravity must be positive, got {self.gravity}")
        if self.damping < 0:
            raise ValueError(f"damping must be non-negative, got {self.damping}")

    def copy(self, **overrides) -> "PendulumParameters":
        """
        Create a validated copy with optional parameter overrides.

        Example:
            >>> base = PendulumParameters(length=1.0)
            >>> longer = base.copy(length=2.5)
        """
        values = self.as_tuple()
        names = [f.name for f in fields(self)]
        kwargs = dict(zip(names, values))
        for key, value in overrides.items():
            if key not in kwargs:
                raise ValueError(f"Unknown parameter: {key}")
            kwargs[key] = value
        return PendulumParameters(**kwargs)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Returns (length, mass, gravity, damping)."""
        return (self.length, self.mass, self.gravity, self.damping)

    @property
    def natural_frequency(self) -> float:
        """Small-angle angular frequency sqrt(g / L) in rad/s."""
        return math.sqrt(self.gravity / self.length)

    @classmethod
    def default(cls) -> "PendulumParameters":
        """Preset matching the interactive simulator's start-up values."""
        return cls(length=1.5, mass=1.0, gravity=9.81, damping=0.05)

    @classmethod
    def undamped(cls, length: float = 1.0, gravity: float = 9.81) -> "PendulumParameters":
        """Preset for energy-conserving runs."""
        return cls(length=length, mass=1.0, gravity=gravity, damping=0.0)


@dataclass
class SimulationConfig:
    """
    Settings for the wall-clock driven simulation controller.

    Attributes:
        max_delta: Largest wall-clock gap in seconds a single tick may
            integrate over. Longer gaps (tab switches, debugger pauses)
            are clamped to this value.
        time_scale: Simulation seconds per wall-clock second.
        series_capacity: Number of samples kept per time-series buffer.
        phase_capacity: Number of samples kept in the phase-space buffer.
        initial_angle: Angle in radians used on construction and reset.
    """

    max_delta: float = 0.1
    time_scale: float = 1.0
    series_capacity: int = 200
    phase_capacity: int = 400
    initial_angle: float = math.pi / 4

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raises ValueError for non-finite or non-positive settings."""
        for name in ("max_delta", "time_scale", "initial_angle"):
            setattr(self, name, _require_finite(name, getattr(self, name)))
        if self.max_delta <= 0:
            raise ValueError(f"max_delta must be positive, got {self.max_delta}")
        if self.time_scale <= 0:
            raise ValueError(f"time_scale must be positive, got {self.time_scale}")
        for name in ("series_capacity", "phase_capacity"):
            value = getattr(self, name)
            if int(value) != value or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value}")
            setattr(self, name, int(value))

    def copy(self, **overrides) -> "SimulationConfig":
        """Create a validated copy with optional setting overrides."""
        kwargs = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in kwargs:
                raise ValueError(f"Unknown parameter: {key}")
            kwargs[key] = value
        return SimulationConfig(**kwargs)
