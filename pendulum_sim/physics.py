"""
physics.py

Equations of motion, energy bookkeeping and coordinate transformations for
the damped simple pendulum (2D state space [theta, omega]).
"""

import math
from typing import Tuple, List, Union

import numpy as np
from scipy.integrate import solve_ivp


# --- 1. Math Utilities ---


def wrap_angle(theta: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Wraps an angle or array of angles to the interval [-pi, pi).

    Args:
        theta: Input angle(s) in radians.

    Returns:
        The wrapped angle(s).
    """
    return (theta + np.pi) % (2 * np.pi) - np.pi


def normalised_angle(theta: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Maps an angle onto [0, 2*pi), as used by the circular phase diagram."""
    return np.mod(theta, 2 * np.pi)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in/ease-out curve on [0, 1]."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


# --- 2. Dynamics (Non-linear, damped) ---


def angular_acceleration(
    theta: Union[float, np.ndarray],
    omega: Union[float, np.ndarray],
    L: float = 1.0,
    g: float = 9.81,
    b: float = 0.0,
) -> Union[float, np.ndarray]:
    """
    omega' = -(g/L) sin(theta) - b * omega

    Accepts scalars or arrays; scalar input gives a Python float.
    """
    if np.ndim(theta) == 0 and np.ndim(omega) == 0:
        return -(g / L) * math.sin(theta) - b * omega
    return -(g / L) * np.sin(theta) - b * omega


def eom(
    t: float, y: np.ndarray, L: float = 1.0, g: float = 9.81, b: float = 0.0
) -> List[float]:
    """
    Equations of motion of the damped pendulum in first-order form.

    State vector y = [theta, omega]

    Args:
        t: Time (unused in autonomous system).
        y: State vector [angle, angular velocity].
        L, g, b: Length, gravity and damping coefficient.

    Returns:
        dydt: [d(theta)/dt, d(omega)/dt]
    """
    theta, omega = y
    return [omega, angular_acceleration(theta, omega, L, g, b)]


# --- 3. Energies ---


def potential_energy(
    theta: Union[float, np.ndarray], L: float = 1.0, m: float = 1.0, g: float = 9.81
) -> Union[float, np.ndarray]:
    """
    Gravitational potential energy measured from the lowest point of the swing.
    theta = 0 hangs straight down and has zero potential energy.
    """
    height = L * (1 - np.cos(theta))
    return m * g * height


def kinetic_energy(
    omega: Union[float, np.ndarray], L: float = 1.0, m: float = 1.0
) -> Union[float, np.ndarray]:
    """Kinetic energy of the bob, 1/2 m L^2 omega^2."""
    return 0.5 * m * L * L * omega * omega


def total_energy(
    theta: Union[float, np.ndarray],
    omega: Union[float, np.ndarray],
    L: float = 1.0,
    m: float = 1.0,
    g: float = 9.81,
) -> Union[float, np.ndarray]:
    return potential_energy(theta, L, m, g) + kinetic_energy(omega, L, m)


# --- 4. Coordinates ---


def get_coords(
    theta: Union[float, np.ndarray], L: float = 1.0
) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
    """
    Converts angular state to Cartesian coordinates for visualisation.
    Standard pendulum convention: 0 is down, pivot at the origin, y up.
    """
    x = L * np.sin(theta)
    y = -L * np.cos(theta)
    return x, y


def angle_from_point(dx: float, dy: float) -> float:
    """
    Angle of a point relative to the pivot in screen coordinates (y down).
    Used to turn a pointer drag into a pendulum angle.
    """
    return float(np.arctan2(dx, dy))


# --- 5. Reference solutions and analysis ---


def small_angle_period(L: float = 1.0, g: float = 9.81) -> float:
    """Linear-theory period T = 2 pi sqrt(L / g)."""
    return 2 * np.pi * np.sqrt(L / g)


def solve_trajectory(
    y0: np.ndarray,
    t_points: np.ndarray,
    L: float = 1.0,
    g: float = 9.81,
    b: float = 0.0,
    rtol: float = 1e-10,
    atol: float = 1e-12,
    method: str = "DOP853",
) -> np.ndarray:
    """
    High-accuracy reference trajectory from scipy's adaptive solvers.

    Args:
        y0: Initial state [theta, omega].
        t_points: Array of time points to evaluate at.
        L, g, b: Length, gravity and damping coefficient.
        rtol, atol: Solver tolerances.
        method: Integration method (e.g., 'RK45', 'DOP853').

    Returns:
        Solution array of shape (2, n_times).
    """
    t_points = np.asarray(t_points, dtype=float)
    t_span = (t_points[0], t_points[-1])
    sol = solve_ivp(
        eom,
        t_span,
        y0,
        t_eval=t_points,
        method=method,
        rtol=rtol,
        atol=atol,
        args=(L, g, b),
    )
    if not sol.success:
        raise RuntimeError(f"Reference integration failed: {sol.message}")
    return sol.y


def estimate_period(samples) -> float:
    """
    Estimates the oscillation period from an angle time series.

    Uses upward zero crossings, located by linear interpolation between the
    bracketing samples, and averages the spacing between them.

    Args:
        samples: Sequence of (time, angle) pairs in chronological order.

    Returns:
        The mean period, or nan if fewer than two upward crossings exist.
    """
    data = np.asarray(samples, dtype=float).reshape(-1, 2)
    t, theta = data[:, 0], data[:, 1]
    idx = np.nonzero((theta[:-1] < 0) & (theta[1:] >= 0))[0]
    if len(idx) < 2:
        return float("nan")
    frac = -theta[idx] / (theta[idx + 1] - theta[idx])
    crossings = t[idx] + frac * (t[idx + 1] - t[idx])
    return float(np.mean(np.diff(crossings)))
