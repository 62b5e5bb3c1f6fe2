"""
controller.py

Bridges wall-clock time and user intent (start, pause, reset, speed) to
deterministic calls into the integrator and the series buffers.

The controller is driven by an external loop (an animation timer, a game
loop, a test) that calls `step()` roughly once per frame. It is not
thread-safe; callers sharing it between threads must serialise access.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .buffer import SeriesBuffer, Sample
from .configs import PendulumParameters, SimulationConfig
from .integrator import PendulumIntegrator, PendulumState


logger = logging.getLogger(__name__)


# Keys of the buffers exposed through get_graph_data().
TIME_SERIES = ("angle", "angular_velocity", "energy", "potential_energy", "kinetic_energy")
PHASE_SPACE = "phase_space"


@dataclass(frozen=True)
class StepResult:
    """Point state returned by a successful controller tick."""

    angle: float
    angular_velocity: float
    time: float
    energy: float


class SimulationController:
    """
    Two-state (stopped/running) scheduler around a PendulumIntegrator.

    Each tick converts the wall-clock time elapsed since the previous tick
    into a simulation step: the raw delta is clamped to `config.max_delta`
    and multiplied by the time scale before being handed to the integrator.
    The resulting state is appended to one buffer per tracked quantity.

    Args:
        params: Initial physical parameters. Defaults to
            PendulumParameters.default().
        config: Scheduling and buffer settings. Defaults to SimulationConfig().
        clock: Callable returning monotonic wall-clock time in seconds.
    """

    def __init__(
        self,
        params: Optional[PendulumParameters] = None,
        config: Optional[SimulationConfig] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.config = config.copy() if config is not None else SimulationConfig()
        params = params if params is not None else PendulumParameters.default()

        self._clock = clock
        self._integrator = PendulumIntegrator.from_parameters(params)
        self._integrator.set_angle(self.config.initial_angle)

        self._buffers: Dict[str, SeriesBuffer] = {
            name: SeriesBuffer(self.config.series_capacity) for name in TIME_SERIES
        }
        self._buffers[PHASE_SPACE] = SeriesBuffer(self.config.phase_capacity)

        self._running = False
        self._has_started = False
        self._time_scale = self.config.time_scale
        self._last_tick = 0.0

    # --- State machine ---

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_started(self) -> bool:
        """True once start() has been called since construction or the last reset."""
        return self._has_started

    @property
    def primary_action(self) -> str:
        """Label for the start/pause toggle of a front-end."""
        if self._running:
            return "Pause"
        return "Resume" if self._has_started else "Start"

    def start(self, now: Optional[float] = None) -> None:
        """Switches to running and takes `now` as the reference for the next tick."""
        self._last_tick = self._read_clock(now)
        if not self._running:
            logger.info("Simulation started at t=%.3f s", self._integrator.time)
        self._running = True
        self._has_started = True

    def pause(self) -> None:
        if self._running:
            logger.info("Simulation paused at t=%.3f s", self._integrator.time)
        self._running = False

    def toggle(self, now: Optional[float] = None) -> None:
        """Starts when stopped, pauses when running."""
        if self._running:
            self.pause()
        else:
            self.start(now)

    def reset(self, angle: Optional[float] = None) -> None:
        """
        Stops the simulation, rewinds the integrator to `angle` at rest with
        time zero, and empties every buffer. Parameters are kept.

        Args:
            angle: Starting angle in radians. Defaults to config.initial_angle.
        """
        angle = self.config.initial_angle if angle is None else angle
        self._integrator.reset(angle)
        for buffer in self._buffers.values():
            buffer.clear()
        self._running = False
        self._has_started = False
        logger.info("Simulation reset to angle=%.4f rad", self._integrator.angle)

    # --- Settings ---

    @property
    def time_scale(self) -> float:
        return self._time_scale

    def set_time_scale(self, scale: float) -> None:
        """
        Sets simulation seconds per wall-clock second.

        Raises:
            ValueError: If scale is not a positive finite number.
        """
        scale = float(scale)
        if not math.isfinite(scale) or scale <= 0:
            raise ValueError(f"time scale must be a positive finite number, got {scale}")
        self._time_scale = scale
        logger.debug("Time scale set to %s", scale)

    @property
    def params(self) -> PendulumParameters:
        return self._integrator.params

    def update_params(
        self,
        length: Optional[float] = None,
        mass: Optional[float] = None,
        gravity: Optional[float] = None,
        damping: Optional[float] = None,
    ) -> None:
        """
        Changes any subset of the physical parameters. Angle, angular
        velocity and time are preserved; only future dynamics change.
        """
        new = self._integrator.params.copy(
            **{
                key: value
                for key, value in (
                    ("length", length),
                    ("mass", mass),
                    ("gravity", gravity),
                    ("damping", damping),
                )
                if value is not None
            }
        )
        self._integrator.set_params(*new.as_tuple())

    def set_angle(self, angle: float) -> bool:
        """
        Places the pendulum at `angle` at rest. Only honoured while stopped,
        since repositioning a moving pendulum has no defined meaning.

        Returns:
            True if the angle was applied, False if it was ignored.
        """
        if self._running:
            logger.warning("Ignoring angle edit while the simulation is running")
            return False
        self._integrator.set_angle(angle)
        return True

    # --- Ticking ---

    def step(self, now: Optional[float] = None) -> Optional[StepResult]:
        """
        Performs one tick.

        Args:
            now: Wall-clock time in seconds. Read from the clock if omitted.

        Returns:
            The new point state, or None while stopped.
        """
        if not self._running:
            return None

        now = self._read_clock(now)
        raw_delta = max(now - self._last_tick, 0.0)
        if raw_delta > self.config.max_delta:
            logger.debug(
                "Clamping frame delta %.3f s to %.3f s", raw_delta, self.config.max_delta
            )
            raw_delta = self.config.max_delta
        dt = raw_delta * self._time_scale
        self._last_tick = now

        integ = self._integrator
        integ.step(dt)

        t = integ.time
        self._buffers["angle"].add(t, integ.angle)
        self._buffers["angular_velocity"].add(t, integ.angular_velocity)
        self._buffers["energy"].add(t, integ.energy)
        self._buffers["potential_energy"].add(t, integ.potential_energy)
        self._buffers["kinetic_energy"].add(t, integ.kinetic_energy)
        self._buffers[PHASE_SPACE].add(integ.angle, integ.angular_velocity)

        return StepResult(
            angle=integ.angle,
            angular_velocity=integ.angular_velocity,
            time=t,
            energy=integ.energy,
        )

    def _read_clock(self, now: Optional[float]) -> float:
        now = self._clock() if now is None else float(now)
        if not math.isfinite(now):
            raise ValueError(f"clock reading must be finite, got {now}")
        return now

    # --- Read access for renderers ---

    def get_state(self) -> PendulumState:
        return self._integrator.get_state()

    def get_graph_data(self) -> Dict[str, List[Sample]]:
        """Snapshot of every buffer, keyed by tracked quantity."""
        return {name: buffer.get() for name, buffer in self._buffers.items()}

    def get_bob_position(self, pivot_x: float = 0.0, pivot_y: float = 0.0):
        return self._integrator.get_bob_position(pivot_x, pivot_y)
