"""
Projectile Calculator
=====================
Drag-free point-mass trajectories under constant gravity, and the inverse
problems built on them:
  - Launch speed needed to hit a target (linear search)
  - Launch angle needed to hit a target (bisection)
  - Maximum range for a launch speed and height difference

Trajectories are sampled at a fixed time step; every solver works against
the sampled landing position, so the chosen step sets the accuracy of the
answers.
"""

from .exceptions import (
    ProjectileError, InvalidParameterError, NonConvergentError,
    InfeasibleTargetError, OutOfRangeError,
)
from .config import SolverConfig, DEFAULT_SOLVER_CONFIG, create_solver_config
from .state import ProjectileState
from .trajectory import (
    GRAVITY, Trajectory, TrajectorySample,
    position, apex_time, simulate_until_target, flight_time, ending_position,
)
from .range_solver import theoretical_max_range, max_range, is_at_max_range
from .speed_solver import required_speed
from .direction_solver import required_direction
from .calculator import ProjectileCalculator
from .validation import (
    validate_against_analytic, analytic_flight_time, analytic_max_range_angle,
    step_convergence, REFERENCE_CASES,
)
from .visualization import (
    plot_trajectory, plot_range_envelope, plot_step_convergence,
)

__version__ = "1.0.0"
__all__ = [
    'ProjectileError', 'InvalidParameterError', 'NonConvergentError',
    'InfeasibleTargetError', 'OutOfRangeError',
    'SolverConfig', 'DEFAULT_SOLVER_CONFIG', 'create_solver_config',
    'ProjectileState', 'ProjectileCalculator',
    'GRAVITY', 'Trajectory', 'TrajectorySample',
    'position', 'apex_time', 'simulate_until_target',
    'flight_time', 'ending_position',
    'theoretical_max_range', 'max_range', 'is_at_max_range',
    'required_speed', 'required_direction',
    'validate_against_analytic', 'analytic_flight_time',
    'analytic_max_range_angle', 'step_convergence', 'REFERENCE_CASES',
    'plot_trajectory', 'plot_range_envelope', 'plot_step_convergence',
]
