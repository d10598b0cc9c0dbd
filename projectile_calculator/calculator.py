"""
Projectile Calculator
=====================
Owns a ProjectileState and a SolverConfig and answers every query about
them. Step sizes default to the configuration and can be overridden per
call.

The solver functions never modify a state; the calculator commits the
speed or direction it solves for back into its own state.
"""

from typing import Optional, Tuple

from .config import SolverConfig
from .direction_solver import required_direction
from .range_solver import is_at_max_range, max_range
from .speed_solver import required_speed
from .state import ProjectileState
from .trajectory import Trajectory, position, simulate_until_target


class ProjectileCalculator:
    """
    Trajectory queries and inverse solves for one projectile.
    """

    def __init__(self, state: Optional[ProjectileState] = None,
                 config: Optional[SolverConfig] = None):
        self.state = state if state is not None else ProjectileState()
        self.config = config if config is not None else SolverConfig()

    def __repr__(self) -> str:
        return f"ProjectileCalculator({self.state!r}, {self.config!r})"

    def _t_step(self, t_step: Optional[float]) -> float:
        return self.config.t_step if t_step is None else t_step

    def position(self, t: float) -> Tuple[float, float]:
        """Position (x, y) at elapsed time t."""
        return position(self.state, t)

    def trajectory(self, t_step: Optional[float] = None) -> Trajectory:
        return simulate_until_target(self.state, self._t_step(t_step),
                                     self.config.max_samples)

    def ending_position(self, t_step: Optional[float] = None) -> Tuple[float, float]:
        return self.trajectory(t_step).ending_position

    def flight_time(self, t_step: Optional[float] = None) -> float:
        return self.trajectory(t_step).flight_time

    def max_range(self, t_step: Optional[float] = None) -> Tuple[float, float]:
        """(max_distance, launch_angle) for the current speed."""
        return max_range(self.state, self._t_step(t_step),
                         self.config.max_samples)

    def is_at_max_range(self, distance: float,
                        t_step: Optional[float] = None) -> bool:
        return is_at_max_range(self.state, distance, self._t_step(t_step),
                               self.config.max_samples)

    def required_speed(self, t_step: Optional[float] = None,
                       v_step: Optional[float] = None) -> float:
        """Solve for the launch speed and store it in the state."""
        speed = required_speed(
            self.state, self._t_step(t_step),
            self.config.v_step if v_step is None else v_step,
            max_iterations=self.config.max_speed_iterations,
            max_samples=self.config.max_samples,
        )
        self.state.change_speed(speed)
        return speed

    def required_direction(self, t_step: Optional[float] = None,
                           d_precision: Optional[float] = None) -> float:
        """
        Solve for the launch direction and store it in the state.

        Raises OutOfRangeError when the target lies at or beyond the
        maximum range; the state is left unchanged in that case.
        """
        direction = required_direction(
            self.state, self._t_step(t_step),
            self.config.d_precision if d_precision is None else d_precision,
            max_iterations=self.config.max_direction_iterations,
            max_samples=self.config.max_samples,
        )
        self.state.change_direction(direction)
        return direction
