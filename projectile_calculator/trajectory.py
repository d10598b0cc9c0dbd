"""
Trajectory Simulator
====================
Drag-free point-mass flight under constant gravity, sampled at a fixed
time step:

    x(t) = x0 + v·cos(θ)·t
    y(t) = y0 + v·sin(θ)·t − ½·g·t²

Positions come from the closed-form kinematics; only the *landing* is
discretized. The projectile is sampled at t = 0, Δt, 2Δt, ... and the walk
stops at the first sample below the target height. The last sample at or
above the target height is the landing position, so the true impact lies
within one Δt after the reported flight time.

Output: Trajectory dataclass with the full sample history.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

import numpy as np

from .config import DEFAULT_MAX_SAMPLES, check_positive
from .exceptions import InfeasibleTargetError, NonConvergentError
from .state import ProjectileState


GRAVITY = 9.807  # m/s²

# Chunk size used once the first (estimated) chunk holds no crossing
_MIN_CHUNK = 1024

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class TrajectorySample:
    """Snapshot of the projectile at one instant."""
    time: float
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass
class Trajectory:
    """Sampled flight from launch down to the target height."""
    state: ProjectileState
    t_step: float

    # Arrays: each has shape (N,), N >= 1
    time: np.ndarray
    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return len(self.time)

    @property
    def flight_time(self) -> float:
        """Last sampled time at or above the target height (s)."""
        return float(self.time[-1])

    @property
    def ending_position(self) -> Tuple[float, float]:
        """Landing position (x, y) in meters."""
        return float(self.x[-1]), float(self.y[-1])

    @property
    def landing_x(self) -> float:
        return float(self.x[-1])

    @property
    def max_height(self) -> float:
        """Highest sampled height (m)."""
        return float(np.max(self.y))

    def samples(self) -> Iterator[TrajectorySample]:
        """Samples in time order."""
        for t, x, y in zip(self.time, self.x, self.y):
            yield TrajectorySample(float(t), float(x), float(y))

    def summary(self) -> str:
        """Human-readable summary string."""
        end_x, end_y = self.ending_position
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY{'':<34s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Launch speed : {self.state.speed:>10.3f} m/s{'':<22s} ║",
            f"║  Direction    : {self.state.direction_deg:>10.3f} °{'':<24s} ║",
            f"║  Timestep     : {self.t_step:<36.2e} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Landing x    : {end_x:>10.3f} m{'':<24s} ║",
            f"║  Landing y    : {end_y:>10.3f} m{'':<24s} ║",
            f"║  Max height   : {self.max_height:>10.3f} m{'':<24s} ║",
            f"║  Flight time  : {self.flight_time:>10.4f} s{'':<24s} ║",
            f"║  Samples      : {len(self):>10d}{'':<26s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def position(state: ProjectileState, t: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
    """
    Position (x, y) at elapsed time t.

    t may be a scalar or a numpy array; any real t is accepted, including
    times before launch or after landing.
    """
    vx, vy = state.velocity_components()
    x = state.start_x + vx * t
    y = state.start_y + vy * t - 0.5 * GRAVITY * t ** 2
    return x, y


def apex_time(state: ProjectileState) -> float:
    """Time of peak height, t* = v·sin(θ)/g (negative for downward shots)."""
    _, vy = state.velocity_components()
    return vy / GRAVITY


def _estimated_samples(state: ProjectileState, t_step: float) -> int:
    """Samples needed to pass the analytic impact time."""
    _, vy = state.velocity_components()
    drop = state.start_y - state.target_y
    impact = (vy + math.sqrt(vy * vy + 2.0 * GRAVITY * drop)) / GRAVITY
    if not math.isfinite(impact):
        return _MIN_CHUNK
    return int(impact / t_step) + 2


def simulate_until_target(state: ProjectileState, t_step: float,
                          max_samples: int = DEFAULT_MAX_SAMPLES) -> Trajectory:
    """
    Sample the flight until the projectile drops below the target height.

    Parameters
    ----------
    state : launch state (not modified)
    t_step : time increment (s), > 0
    max_samples : cap on the number of samples

    Returns
    -------
    Trajectory holding every sample at or above the target height.

    Raises
    ------
    InvalidParameterError : t_step <= 0
    InfeasibleTargetError : launch height below target height
    NonConvergentError : no crossing within max_samples samples
    """
    check_positive('t_step', t_step)
    if state.start_y < state.target_y:
        raise InfeasibleTargetError(
            f"Launch height {state.start_y} m is below target height "
            f"{state.target_y} m")

    chunk = min(max(_estimated_samples(state, t_step), 2), max_samples)
    times, xs, ys = [], [], []
    first = 0
    while first < max_samples:
        n = min(chunk, max_samples - first)
        t = (first + np.arange(n)) * t_step
        x, y = position(state, t)

        below = np.flatnonzero(y < state.target_y)
        if below.size:
            stop = below[0]
            times.append(t[:stop])
            xs.append(x[:stop])
            ys.append(y[:stop])
            break

        times.append(t)
        xs.append(x)
        ys.append(y)
        first += n
        chunk = max(_MIN_CHUNK, 2 * n)
    else:
        raise NonConvergentError(
            f"Projectile did not reach target height within {max_samples} "
            f"samples", iterations=max_samples,
            last_value=float(times[-1][-1]))

    return Trajectory(
        state=state,
        t_step=t_step,
        time=np.concatenate(times),
        x=np.concatenate(xs),
        y=np.concatenate(ys),
    )


def flight_time(state: ProjectileState, t_step: float,
                max_samples: int = DEFAULT_MAX_SAMPLES) -> float:
    """Flight time (s) down to the target height."""
    return simulate_until_target(state, t_step, max_samples).flight_time


def ending_position(state: ProjectileState, t_step: float,
                    max_samples: int = DEFAULT_MAX_SAMPLES) -> Tuple[float, float]:
    """Landing position (x, y) at the target height."""
    return simulate_until_target(state, t_step, max_samples).ending_position
