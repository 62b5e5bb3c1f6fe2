"""
visualisation.py

Display helpers and a matplotlib front-end for the live pendulum simulation.
Handles axis ranges for the graph panels, a static snapshot plot of the
series buffers, and an interactive animation driven by a
SimulationController.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.collections import LineCollection

from . import physics as phys
from .configs import TIME_SCALE_PRESETS
from .controller import SimulationController


logger = logging.getLogger(__name__)

Range = Tuple[float, float]

TIME_WINDOW = 10.0
MIN_VELOCITY_SPAN = 5.0
TRAIL_LENGTH = 50
TRAIL_RGB = (0.0, 1.0, 0.78)


# --- Axis Ranges ---


def time_window(samples: Sequence, current_time: float) -> Range:
    """Scrolling window showing the last ten seconds plus one second of headroom."""
    if len(samples) == 0:
        return (0.0, TIME_WINDOW)
    return (max(0.0, current_time - TIME_WINDOW), current_time + 1.0)


def angle_range() -> Range:
    return (-np.pi, np.pi)


def velocity_range(samples: Sequence) -> Range:
    """Symmetric range covering every sample, never narrower than +/-5 rad/s."""
    ys = np.asarray(samples, dtype=float).reshape(-1, 2)[:, 1]
    peak = max(MIN_VELOCITY_SPAN, float(np.max(np.abs(ys)))) if ys.size else MIN_VELOCITY_SPAN
    return (-peak, peak)


def energy_range(
    potential: Sequence, kinetic: Sequence, total: Sequence = ()
) -> Optional[Range]:
    """
    Shared range for the potential, kinetic and total energy curves.

    Pads by 2 J when the curves span less than 1 J and by 10% of the span
    otherwise. The lower bound never drops below zero.

    Returns:
        The (low, high) range, or None while either energy series is empty.
    """
    if len(potential) == 0 or len(kinetic) == 0:
        return None
    values = np.concatenate(
        [np.asarray(s, dtype=float).reshape(-1, 2)[:, 1] for s in (potential, kinetic, total)]
    )
    low, high = float(values.min()), float(values.max())
    spread = high - low
    if spread < 1:
        return (max(0.0, low - 2), high + 2)
    return (max(0.0, low - 0.1 * spread), high + 0.1 * spread)


def phase_space_scale(samples: Sequence, radius: float) -> float:
    """Scale factor fitting the phase-space trajectory inside a circle of `radius`."""
    data = np.asarray(samples, dtype=float).reshape(-1, 2)
    peak = float(np.max(np.abs(data))) if data.size else 0.0
    return radius / max(peak, 0.1)


def trail_colors(n: int) -> np.ndarray:
    """RGBA colours for a fading trail of n segments, oldest first."""
    if n <= 0:
        return np.empty((0, 4))
    colors = np.empty((n, 4))
    colors[:, :3] = TRAIL_RGB
    colors[:, 3] = [
        phys.lerp(0.0, 0.6, phys.ease_in_out_cubic((i + 1) / n)) for i in range(n)
    ]
    return colors


# --- Static Plots ---


def plot_graph_data(
    graph_data: Dict[str, List[Tuple[float, float]]], title: Optional[str] = None
) -> plt.Figure:
    """
    Plots a snapshot of the controller buffers: angle, angular velocity and
    energies against time, plus the phase-space trajectory.
    """
    fig, axes = plt.subplots(2, 2, figsize=(12, 8))
    ax_angle, ax_vel, ax_energy, ax_phase = axes.ravel()

    def columns(key):
        data = np.asarray(graph_data.get(key, []), dtype=float).reshape(-1, 2)
        return data[:, 0], data[:, 1]

    ax_angle.plot(*columns("angle"), color="tab:cyan")
    ax_angle.set_ylim(angle_range())
    ax_angle.set_ylabel("Angle (rad)")

    ax_vel.plot(*columns("angular_velocity"), color="tab:red")
    ax_vel.set_ylim(velocity_range(graph_data.get("angular_velocity", [])))
    ax_vel.set_ylabel(r"$\omega$ (rad/s)")

    for key, color, label in (
        ("potential_energy", "tab:blue", "PE"),
        ("kinetic_energy", "tab:orange", "KE"),
        ("energy", "k", "Total"),
    ):
        ax_energy.plot(*columns(key), color=color, label=label)
    e_range = energy_range(
        graph_data.get("potential_energy", []),
        graph_data.get("kinetic_energy", []),
        graph_data.get("energy", []),
    )
    if e_range is not None:
        ax_energy.set_ylim(e_range)
    ax_energy.set_ylabel("Energy (J)")
    ax_energy.legend(loc="upper right")

    for ax in (ax_angle, ax_vel, ax_energy):
        ax.set_xlabel("Time (s)")
        ax.grid(True, alpha=0.3)

    ax_phase.plot(*columns("phase_space"), color="seagreen", lw=1.5)
    ax_phase.set_xlabel(r"$\theta$ (rad)")
    ax_phase.set_ylabel(r"$\omega$ (rad/s)")
    ax_phase.set_title("Phase Space")
    ax_phase.grid(True, alpha=0.3)

    if title:
        plt.suptitle(title, fontsize=16)

    plt.tight_layout()
    plt.show()
    return fig


# --- Animation ---


def animate_simulation(
    controller: SimulationController, interval: int = 16
) -> FuncAnimation:
    """
    Live view of a running simulation.

    Left: the pendulum with a fading trail and the phase-space trajectory.
    Right: angle, angular velocity and energies against time.

    Every frame calls `controller.step()`. While paused the bob can be
    dragged with the mouse to a new starting angle. Keys: space toggles
    start/pause, 'r' resets, '1'-'4' select the time-scale presets.

    Args:
        controller: The simulation to drive.
        interval: Delay between frames in milliseconds.

    Returns:
        The FuncAnimation (keep a reference to stop it being collected).
    """
    fig = plt.figure(figsize=(14, 8))
    grid = fig.add_gridspec(3, 2, width_ratios=[1.2, 1])
    ax_pend = fig.add_subplot(grid[0:2, 0])
    ax_phase = fig.add_subplot(grid[2, 0])
    ax_angle = fig.add_subplot(grid[0, 1])
    ax_vel = fig.add_subplot(grid[1, 1])
    ax_energy = fig.add_subplot(grid[2, 1])

    # --- Pendulum ---
    ax_pend.set_aspect("equal")
    ax_pend.grid(True, alpha=0.3)
    ax_pend.set_title("Pendulum")
    (rod,) = ax_pend.plot(
        [], [], "o-", lw=3, color="#4a90e2", markerfacecolor="firebrick", markersize=12
    )
    trail = LineCollection([], linewidths=2)
    ax_pend.add_collection(trail)
    status_text = ax_pend.text(0.03, 0.93, "", transform=ax_pend.transAxes)

    # --- Phase Space ---
    ax_phase.set_xlabel(r"$\theta$ (rad)")
    ax_phase.set_ylabel(r"$\omega$ (rad/s)")
    ax_phase.grid(True, alpha=0.3)
    (phase_trace,) = ax_phase.plot([], [], "-", color="seagreen", lw=1.5, alpha=0.8)
    (phase_head,) = ax_phase.plot([], [], "o", color="seagreen")

    # --- Time Series ---
    (angle_line,) = ax_angle.plot([], [], color="tab:cyan")
    ax_angle.set_ylabel("Angle (rad)")
    ax_angle.set_ylim(angle_range())
    (vel_line,) = ax_vel.plot([], [], color="tab:red")
    ax_vel.set_ylabel(r"$\omega$ (rad/s)")
    (pe_line,) = ax_energy.plot([], [], color="tab:blue", label="PE")
    (ke_line,) = ax_energy.plot([], [], color="tab:orange", label="KE")
    (e_line,) = ax_energy.plot([], [], color="k", label="Total")
    ax_energy.set_ylabel("Energy (J)")
    ax_energy.set_xlabel("Time (s)")
    ax_energy.legend(loc="upper right")
    for ax in (ax_angle, ax_vel, ax_energy):
        ax.grid(True, alpha=0.3)

    trail_points = deque(maxlen=TRAIL_LENGTH)
    drag = {"active": False}

    def set_series(line, samples):
        data = np.asarray(samples, dtype=float).reshape(-1, 2)
        line.set_data(data[:, 0], data[:, 1])

    def update(_frame):
        controller.step()
        state = controller.get_state()
        graph = controller.get_graph_data()
        L = controller.params.length

        lim = 1.2 * L
        ax_pend.set_xlim(-lim, lim)
        ax_pend.set_ylim(-lim, lim)
        x, y = phys.get_coords(state.angle, L)
        rod.set_data([0, x], [0, y])

        if controller.is_running:
            trail_points.append((x, y))
        else:
            trail_points.clear()
        if len(trail_points) > 1:
            pts = np.asarray(trail_points)
            segments = np.stack([pts[:-1], pts[1:]], axis=1)
            trail.set_segments(segments)
            trail.set_color(trail_colors(len(segments)))
        else:
            trail.set_segments([])

        status_text.set_text(
            f"t = {state.time:.2f}s   E = {state.energy:.3f} J   "
            f"[{controller.primary_action}]  x{controller.time_scale:g}"
        )

        t_range = time_window(graph["angle"], state.time)
        set_series(angle_line, graph["angle"])
        set_series(vel_line, graph["angular_velocity"])
        set_series(pe_line, graph["potential_energy"])
        set_series(ke_line, graph["kinetic_energy"])
        set_series(e_line, graph["energy"])
        for ax in (ax_angle, ax_vel, ax_energy):
            ax.set_xlim(t_range)
        ax_vel.set_ylim(velocity_range(graph["angular_velocity"]))
        e_range = energy_range(
            graph["potential_energy"], graph["kinetic_energy"], graph["energy"]
        )
        if e_range is not None:
            ax_energy.set_ylim(e_range)

        phase = graph["phase_space"]
        set_series(phase_trace, phase)
        if phase:
            phase_head.set_data([phase[-1][0]], [phase[-1][1]])
            half = 1.1 / phase_space_scale(phase, 1.0)
            ax_phase.set_xlim(-half, half)
            ax_phase.set_ylim(-half, half)
        else:
            phase_head.set_data([], [])

        return (
            rod, trail, status_text, phase_trace, phase_head,
            angle_line, vel_line, pe_line, ke_line, e_line,
        )

    # --- Interaction ---

    def on_press(event):
        if event.inaxes is not ax_pend or controller.is_running:
            return
        drag["active"] = True

    def on_motion(event):
        if not drag["active"] or event.inaxes is not ax_pend or controller.is_running:
            return
        if event.xdata is None or event.ydata is None:
            return
        # Data coordinates are y-up; angle_from_point expects y-down.
        controller.set_angle(phys.angle_from_point(event.xdata, -event.ydata))

    def on_release(_event):
        drag["active"] = False

    def on_key(event):
        if event.key == " ":
            controller.toggle()
        elif event.key == "r":
            controller.reset()
        elif event.key in ("1", "2", "3", "4"):
            controller.set_time_scale(TIME_SCALE_PRESETS[int(event.key) - 1])

    fig.canvas.mpl_connect("button_press_event", on_press)
    fig.canvas.mpl_connect("motion_notify_event", on_motion)
    fig.canvas.mpl_connect("button_release_event", on_release)
    fig.canvas.mpl_connect("key_press_event", on_key)

    plt.tight_layout()
    logger.debug("Animation created with interval=%s ms", interval)
    return FuncAnimation(fig, update, interval=interval, blit=False, cache_frame_data=False)
