"""
Visualization Engine
====================
Plots for trajectory and solver analysis:
  1. Trajectory (height vs downrange) with target marker
  2. Range envelope (landing x vs launch angle) with solved angle
  3. Time-step convergence of the flight time
"""

import os
from typing import Optional, Sequence, Tuple

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .state import ProjectileState
from .trajectory import Trajectory, simulate_until_target


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'trajectory': '#00d4ff',
    'convergence': '#ff6b35',
    'launch': '#00e676',
    'target': '#ffeb3b',
    'max_range': '#e040fb',
    'landing': '#ff5252',
}


def _dark_figure(figsize: Tuple[float, float]):
    """New single-axes figure in the dark theme."""
    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor(STYLE['bg_color'])
    ax.set_facecolor(STYLE['bg_color'])
    ax.tick_params(colors=STYLE['text_color'])
    for label in (ax.xaxis.label, ax.yaxis.label, ax.title):
        label.set_color(STYLE['text_color'])
    ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
    for spine in ax.spines.values():
        spine.set_color(STYLE['grid_color'])
    return fig, ax


def _legend(ax):
    ax.legend(fontsize=10, facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'])


def _finish(fig, save_path: Optional[str]):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    return fig


def ensure_output_dir(path: str = 'outputs') -> str:
    """Create the plot directory if needed and return its path."""
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: Trajectory, save_path: str = None,
                    max_points: int = 2000) -> plt.Figure:
    """Height vs downrange for a single trajectory."""
    fig, ax = _dark_figure((12, 6))

    # Thin out fine time steps; the curve is smooth
    stride = max(1, len(result) // max_points)
    x, y = result.x[::stride], result.y[::stride]
    state = result.state

    ax.plot(x, y, color=STYLE['trajectory'], linewidth=2.5,
            label='Trajectory')
    ax.plot(state.start_x, state.start_y, 'o', color=STYLE['launch'],
            markersize=10, label='Launch', zorder=5)
    end_x, end_y = result.ending_position
    ax.plot(end_x, end_y, 'x', color=STYLE['landing'], markersize=12,
            markeredgewidth=3, label='Landing', zorder=5)
    ax.plot(state.target_x, state.target_y, 's', color=STYLE['target'],
            markersize=9, fillstyle='none', markeredgewidth=2,
            label='Target', zorder=5)

    ax.set_xlabel('Downrange (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(f'Projectile Trajectory (v₀={state.speed:.1f} m/s, '
                 f'θ={state.direction_deg:.2f}°, Δt={result.t_step:g} s)',
                 fontsize=13, fontweight='bold')
    _legend(ax)
    return _finish(fig, save_path)


# ══════════════════════════════════════════════════════════════════════════
#  2. Range Envelope
# ══════════════════════════════════════════════════════════════════════════

def range_envelope(state: ProjectileState, t_step: float = 1e-3,
                   angles_deg: Sequence[float] = None
                   ) -> Tuple[np.ndarray, np.ndarray]:
    """Landing x for each launch angle (degrees) at the state's speed."""
    if angles_deg is None:
        angles_deg = np.linspace(-89.0, 89.0, 179)
    angles_deg = np.asarray(angles_deg, dtype=float)
    landing = np.array([
        simulate_until_target(state.trial(direction=np.radians(a)), t_step).landing_x
        for a in angles_deg
    ])
    return angles_deg, landing


def plot_range_envelope(state: ProjectileState, t_step: float = 1e-3,
                        solved_direction: Optional[float] = None,
                        max_range: Optional[Tuple[float, float]] = None,
                        save_path: str = None) -> plt.Figure:
    """Landing x vs launch angle, with target distance and solutions."""
    fig, ax = _dark_figure((11, 6))

    angles, landing = range_envelope(state, t_step)
    ax.plot(angles, landing, color=STYLE['trajectory'], linewidth=2.5,
            label=f'Landing x (v₀={state.speed:.1f} m/s)')
    ax.axhline(y=state.target_x, color=STYLE['target'], linestyle='--',
               alpha=0.7, label=f'Target x = {state.target_x:g} m')

    if max_range is not None:
        distance, angle = max_range
        ax.plot(np.degrees(angle), distance, '^', color=STYLE['max_range'],
                markersize=10, label=f'Max range {distance:.2f} m', zorder=5)
    if solved_direction is not None:
        ax.axvline(x=np.degrees(solved_direction), color=STYLE['launch'],
                   linestyle=':', linewidth=2,
                   label=f'Solved θ = {np.degrees(solved_direction):.3f}°')

    ax.set_xlabel('Launch Angle (°)')
    ax.set_ylabel('Landing x (m)')
    ax.set_title('Range Envelope', fontweight='bold')
    _legend(ax)
    return _finish(fig, save_path)


# ══════════════════════════════════════════════════════════════════════════
#  3. Time-Step Convergence
# ══════════════════════════════════════════════════════════════════════════

def plot_step_convergence(convergence: Sequence[Tuple[float, float]],
                          save_path: str = None) -> plt.Figure:
    """Flight-time error vs time step on log-log axes."""
    fig, ax = _dark_figure((9, 6))

    steps = np.array([c[0] for c in convergence])
    errors = np.array([c[1] for c in convergence])
    ax.loglog(steps, errors, 'o-', color=STYLE['convergence'],
              linewidth=2, markersize=8, label='|ToF error|')
    ax.loglog(steps, steps, '--', color='#888', linewidth=1,
              label='Error = Δt')

    ax.set_xlabel('Time Step Δt (s)')
    ax.set_ylabel('Flight-Time Error (s)')
    ax.set_title('Convergence with Time Step', fontweight='bold')
    _legend(ax)
    return _finish(fig, save_path)
