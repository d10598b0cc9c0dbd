"""
Solver Configuration
====================
Step sizes, precisions and iteration caps used by the solvers.

The caps bound the speed and direction searches, which otherwise loop for
as long as their stop condition is unmet.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from .exceptions import InvalidParameterError


# ── Defaults ──────────────────────────────────────────────────────────────
DEFAULT_T_STEP = 1e-5                  # s
DEFAULT_V_STEP = 1.0                   # m/s
DEFAULT_D_PRECISION = 1e-5             # m, change of miss distance
DEFAULT_MAX_SPEED_ITERATIONS = 100_000
DEFAULT_MAX_DIRECTION_ITERATIONS = 200
DEFAULT_MAX_SAMPLES = 5_000_000        # samples per simulated trajectory


def check_positive(name: str, value: float) -> float:
    """Raise InvalidParameterError unless value is a finite number > 0."""
    if not (value > 0 and math.isfinite(value)):
        raise InvalidParameterError(f"{name} must be > 0, got {value!r}")
    return value


@dataclass
class SolverConfig:
    """
    Parameters shared by the calculator and the solvers.

    Attributes
    ----------
    t_step : simulation time increment (s)
    v_step : speed increment of the linear speed search (m/s)
    d_precision : bisection stops once the miss distance changes by less
        than this between two consecutive directions (m)
    max_speed_iterations : cap on speed candidates past the first
    max_direction_iterations : cap on bisection steps
    max_samples : cap on samples in a single trajectory
    """
    t_step: float = DEFAULT_T_STEP
    v_step: float = DEFAULT_V_STEP
    d_precision: float = DEFAULT_D_PRECISION
    max_speed_iterations: int = DEFAULT_MAX_SPEED_ITERATIONS
    max_direction_iterations: int = DEFAULT_MAX_DIRECTION_ITERATIONS
    max_samples: int = DEFAULT_MAX_SAMPLES

    def __post_init__(self):
        for f in fields(self):
            check_positive(f.name, getattr(self, f.name))


DEFAULT_SOLVER_CONFIG = SolverConfig()


def create_solver_config(overrides: Optional[Mapping[str, float]] = None) -> SolverConfig:
    """
    Build a SolverConfig from a partial mapping merged over the defaults.

    Keys mapped to None keep their default value.

    >>> create_solver_config({'t_step': 1e-4}).t_step
    0.0001
    """
    if not overrides:
        return SolverConfig()
    known = {f.name for f in fields(SolverConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise InvalidParameterError(
            f"Unknown solver config keys: {', '.join(sorted(unknown))}")
    values = {k: v for k, v in overrides.items() if v is not None}
    return replace(DEFAULT_SOLVER_CONFIG, **values)
