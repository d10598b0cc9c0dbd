"""
Required Speed
==============
Linear search over launch speed for the landing position nearest the
target, at the state's fixed launch direction.

Candidates are 0, Δv, 2Δv, ... The search keeps advancing while the next
candidate lands strictly closer to the target than the current one on
*either* axis, and returns the last candidate accepted.
"""

import logging
from typing import Tuple

from .config import (
    DEFAULT_MAX_SAMPLES, DEFAULT_MAX_SPEED_ITERATIONS, check_positive,
)
from .exceptions import NonConvergentError
from .state import ProjectileState
from .trajectory import simulate_until_target

logger = logging.getLogger(__name__)


def _miss(state: ProjectileState, speed: float, t_step: float,
          max_samples: int) -> Tuple[float, float]:
    """Per-axis distance (|dx|, |dy|) from landing position to target."""
    x, y = simulate_until_target(
        state.trial(speed=speed), t_step, max_samples).ending_position
    return abs(x - state.target_x), abs(y - state.target_y)


def required_speed(state: ProjectileState, t_step: float, v_step: float,
                   max_iterations: int = DEFAULT_MAX_SPEED_ITERATIONS,
                   max_samples: int = DEFAULT_MAX_SAMPLES) -> float:
    """
    Smallest multiple of v_step whose landing position is a local minimum
    of the distance to the target.

    The state is not modified.

    Raises
    ------
    InvalidParameterError : t_step, v_step or max_iterations <= 0
    NonConvergentError : more than max_iterations candidates accepted
    """
    check_positive('t_step', t_step)
    check_positive('v_step', v_step)
    check_positive('max_iterations', max_iterations)

    step = 0
    current = _miss(state, 0.0, t_step, max_samples)
    following = _miss(state, v_step, t_step, max_samples)

    while following[0] < current[0] or following[1] < current[1]:
        step += 1
        if step > max_iterations:
            raise NonConvergentError(
                f"Speed search did not settle within {max_iterations} steps "
                f"of {v_step} m/s", iterations=max_iterations,
                last_value=step * v_step)
        current = following
        following = _miss(state, (step + 1) * v_step, t_step, max_samples)

    speed = step * v_step
    logger.debug("required speed %.6f m/s after %d trajectory evaluations",
                 speed, step + 2)
    return speed
