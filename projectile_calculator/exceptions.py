"""
Solver Exceptions
=================
Error taxonomy shared by the simulator and the solvers.

    ProjectileError
    ├── InvalidParameterError   bad step size, precision, cap or speed
    ├── NonConvergentError      iteration / sample cap exceeded
    └── InfeasibleTargetError   no solution under the drag-free model
        └── OutOfRangeError     target at or beyond maximum range
"""

from typing import Optional


class ProjectileError(Exception):
    """Base class for every error raised by projectile_calculator."""


class InvalidParameterError(ProjectileError, ValueError):
    """A step size, precision, cap or state field is out of its domain."""


class NonConvergentError(ProjectileError, RuntimeError):
    """
    A search exceeded its iteration cap without meeting its stop condition.

    Attributes
    ----------
    iterations : number of iterations performed
    last_value : last candidate evaluated (speed in m/s or direction in rad)
    """

    def __init__(self, message: str, iterations: int,
                 last_value: Optional[float] = None):
        super().__init__(message)
        self.iterations = iterations
        self.last_value = last_value


class InfeasibleTargetError(ProjectileError):
    """The target cannot be reached with the given launch state."""


class OutOfRangeError(InfeasibleTargetError):
    """
    Requested distance is at or beyond the maximum range.

    Attributes
    ----------
    requested_distance : target x coordinate (m)
    max_distance       : simulated maximum x coordinate (m)
    angle              : launch angle of the maximum range (rad)
    """

    def __init__(self, requested_distance: float, max_distance: float,
                 angle: float):
        super().__init__(
            f"Target at x={requested_distance:.4f} m is out of range "
            f"(max x={max_distance:.4f} m at {angle:.6f} rad)"
        )
        self.requested_distance = requested_distance
        self.max_distance = max_distance
        self.angle = angle
