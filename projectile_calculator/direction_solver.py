"""
Required Direction
==================
Bisection over the launch angle in [−90°, 90°] for the landing x nearest
the target, at the state's fixed launch speed.

Starting from a horizontal launch, an overshoot (landing beyond the target)
moves the upper bound down to the current angle and halves toward the
lower bound; anything else moves the lower bound up and halves toward the
upper bound. The search stops once the miss distance changes by no more
than the precision between two consecutive angles.

Targets at or beyond the maximum range raise OutOfRangeError before any
bisection takes place.
"""

import logging
import math
from typing import Tuple

from .config import (
    DEFAULT_MAX_DIRECTION_ITERATIONS, DEFAULT_MAX_SAMPLES, check_positive,
)
from .exceptions import NonConvergentError, OutOfRangeError
from .range_solver import max_range
from .state import ProjectileState
from .trajectory import simulate_until_target

logger = logging.getLogger(__name__)


def _landing_x(state: ProjectileState, direction: float, t_step: float,
               max_samples: int) -> float:
    return simulate_until_target(
        state.trial(direction=direction), t_step, max_samples).landing_x


def _halve(lower: float, upper: float, direction: float,
           overshoot: bool) -> Tuple[float, float, float]:
    """Next (lower, upper, direction) of the bisection."""
    if overshoot:
        return lower, direction, (lower + direction) / 2
    return direction, upper, (upper + direction) / 2


def required_direction(state: ProjectileState, t_step: float, d_precision: float,
                       max_iterations: int = DEFAULT_MAX_DIRECTION_ITERATIONS,
                       max_samples: int = DEFAULT_MAX_SAMPLES) -> float:
    """
    Launch angle (rad) whose landing x is nearest the target x.

    The state is not modified.

    Raises
    ------
    InvalidParameterError : t_step, d_precision or max_iterations <= 0
    OutOfRangeError : target x at or beyond the simulated maximum range
    NonConvergentError : more than max_iterations bisection steps
    """
    check_positive('t_step', t_step)
    check_positive('d_precision', d_precision)
    check_positive('max_iterations', max_iterations)

    farthest, best_angle = max_range(state, t_step, max_samples)
    if state.target_x >= farthest:
        raise OutOfRangeError(state.target_x, farthest, best_angle)

    lower, upper = -math.pi / 2, math.pi / 2
    direction = 0.0

    landing = _landing_x(state, direction, t_step, max_samples)
    previous_miss = abs(landing - state.target_x)
    lower, upper, direction = _halve(lower, upper, direction,
                                     landing > state.target_x)
    landing = _landing_x(state, direction, t_step, max_samples)
    miss = abs(landing - state.target_x)

    iterations = 1
    while abs(miss - previous_miss) > d_precision:
        if iterations >= max_iterations:
            raise NonConvergentError(
                f"Direction search did not converge to {d_precision} within "
                f"{max_iterations} steps", iterations=iterations,
                last_value=direction)
        lower, upper, direction = _halve(lower, upper, direction,
                                         landing > state.target_x)
        previous_miss = miss
        landing = _landing_x(state, direction, t_step, max_samples)
        miss = abs(landing - state.target_x)
        iterations += 1

    logger.debug("required direction %.8f rad (miss %.6f m) after %d steps",
                 direction, miss, iterations)
    return direction
