"""
Maximum Range
=============
Greatest x coordinate reachable at a fixed launch speed, varying only the
launch angle, when landing Δh = y_start − y_target below the launch point.

Closed form (k = v²/g):

    R     = √(k² + 2·k·Δh)
    θ_max = atan(k / R)

The closed-form angle is then re-simulated with the caller's time step so
that the reported distance matches what the discretized simulator actually
reaches.
"""

import logging
import math
from typing import Tuple

from .config import DEFAULT_MAX_SAMPLES
from .exceptions import InfeasibleTargetError
from .state import ProjectileState
from .trajectory import GRAVITY, simulate_until_target

logger = logging.getLogger(__name__)


def theoretical_max_range(state: ProjectileState) -> Tuple[float, float]:
    """
    Closed-form maximum horizontal distance and its launch angle.

    Returns (0.0, 0.0) for a zero launch speed above the target.
    """
    reach = state.speed ** 2 / GRAVITY
    drop = state.start_y - state.target_y
    radicand = reach ** 2 + 2.0 * reach * drop
    if radicand < 0:
        raise InfeasibleTargetError(
            f"Target height {state.target_y} m cannot be reached at "
            f"{state.speed} m/s from {state.start_y} m")
    distance = math.sqrt(radicand)
    return distance, math.atan2(reach, distance)


def max_range(state: ProjectileState, t_step: float,
              max_samples: int = DEFAULT_MAX_SAMPLES) -> Tuple[float, float]:
    """
    Simulated maximum range.

    Returns
    -------
    (max_distance, angle) : landing x coordinate (m) when launched at the
        closed-form optimal angle (rad). The state's own direction is left
        unchanged.
    """
    distance, angle = theoretical_max_range(state)
    landing_x, _ = simulate_until_target(
        state.trial(direction=angle), t_step, max_samples).ending_position
    logger.debug("max range: closed form %.6f m, simulated x=%.6f m at %.6f rad",
                 distance, landing_x, angle)
    return landing_x, angle


def is_at_max_range(state: ProjectileState, distance: float, t_step: float,
                    max_samples: int = DEFAULT_MAX_SAMPLES) -> bool:
    """True if distance is at or beyond the simulated maximum range."""
    return distance >= max_range(state, t_step, max_samples)[0]
