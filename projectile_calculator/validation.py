"""
Validation Against the Continuous Model
=======================================
Compares the discretized simulator against continuous-time references:
  - impact time: root of y(t) = y_target, bracketed after the apex and
    solved with Brent's method
  - max-range angle: the launch angle maximizing the continuous landing
    distance, found by bounded scalar minimization

Reference scenarios cover elevated, level and horizontal launches.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from scipy.optimize import brentq, minimize_scalar

from .exceptions import InfeasibleTargetError
from .range_solver import theoretical_max_range
from .state import ProjectileState
from .trajectory import GRAVITY, apex_time, position, simulate_until_target


# ══════════════════════════════════════════════════════════════════════════
#  Reference scenarios
# ══════════════════════════════════════════════════════════════════════════

REFERENCE_CASES = [
    {
        'name': 'Elevated launch, 104.8 m target',
        'start': (0.0, 15.0),
        'target': (104.8, 0.0),
        'speed': 30.0,
        'direction_deg': 45.0,
    },
    {
        'name': 'Shoulder launch, 96 m target',
        'start': (0.0, 4.0),
        'target': (96.0, 0.0),
        'speed': 30.0,
        'direction_deg': 45.0,
    },
    {
        'name': 'Level ground',
        'start': (0.0, 0.0),
        'target': (90.0, 0.0),
        'speed': 30.0,
        'direction_deg': 30.0,
    },
    {
        'name': 'Horizontal from 4.9 m',
        'start': (0.0, 4.9035),
        'target': (20.0, 0.0),
        'speed': 20.0,
        'direction_deg': 0.0,
    },
]


def state_from_case(case: dict) -> ProjectileState:
    return ProjectileState.from_degrees(case['start'], case['target'],
                                        case['speed'], case['direction_deg'])


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    name: str
    ref_flight_time: float     # continuous impact time (s)
    sim_flight_time: float     # last sample at/above target height (s)
    flight_time_error: float   # sim − ref (s), within (−t_step, 0]
    ref_landing_x: float
    sim_landing_x: float
    landing_x_error: float     # sim − ref (m)
    closed_form_angle: float   # atan(k/R) (rad)
    numeric_angle: float       # argmax of continuous range (rad)
    angle_error: float         # closed form − numeric (rad)


def analytic_flight_time(state: ProjectileState) -> float:
    """Exact time (s) at which the projectile descends to the target height."""
    if state.start_y < state.target_y:
        raise InfeasibleTargetError(
            f"Launch height {state.start_y} m is below target height "
            f"{state.target_y} m")

    def height_above_target(t):
        return position(state, t)[1] - state.target_y

    lo = max(apex_time(state), 0.0)
    hi = 2.0 * lo + 1.0
    while height_above_target(hi) >= 0:
        hi *= 2.0
    return brentq(height_above_target, lo, hi, xtol=1e-14)


def continuous_range(state: ProjectileState, direction: float) -> float:
    """Horizontal distance (m) at impact for a launch at direction."""
    vx = state.speed * math.cos(direction)
    vy = state.speed * math.sin(direction)
    drop = state.start_y - state.target_y
    impact = (vy + math.sqrt(vy * vy + 2.0 * GRAVITY * drop)) / GRAVITY
    return vx * impact


def analytic_max_range_angle(state: ProjectileState) -> float:
    """Launch angle (rad) maximizing the continuous landing distance."""
    result = minimize_scalar(lambda a: -continuous_range(state, a),
                             bounds=(0.0, math.pi / 2), method='bounded',
                             options={'xatol': 1e-10})
    return float(result.x)


def validate_case(case: dict, t_step: float = 1e-4) -> ValidationResult:
    state = state_from_case(case)
    traj = simulate_until_target(state, t_step)

    ref_time = analytic_flight_time(state)
    ref_x = float(position(state, ref_time)[0])
    closed_form = theoretical_max_range(state)[1]
    numeric = analytic_max_range_angle(state)

    return ValidationResult(
        name=case['name'],
        ref_flight_time=ref_time,
        sim_flight_time=traj.flight_time,
        flight_time_error=traj.flight_time - ref_time,
        ref_landing_x=ref_x,
        sim_landing_x=traj.landing_x,
        landing_x_error=traj.landing_x - ref_x,
        closed_form_angle=closed_form,
        numeric_angle=numeric,
        angle_error=closed_form - numeric,
    )


def validate_against_analytic(cases: Iterable[dict] = REFERENCE_CASES,
                              t_step: float = 1e-4,
                              verbose: bool = True) -> List[ValidationResult]:
    """
    Run the simulator on each scenario and compare against the
    continuous model.
    """
    results = [validate_case(case, t_step) for case in cases]

    if verbose:
        print(f"\n{'='*78}")
        print(f"  VALIDATION: discretized vs continuous model (Δt = {t_step:g} s)")
        print(f"{'='*78}")
        print(f"{'Scenario':<34} {'ToF ref':>8} {'ToF sim':>8} {'ΔToF':>9} "
              f"{'Δx (m)':>9} {'Δθ (°)':>8}")
        print("-" * 78)
        for r in results:
            print(f"{r.name:<34} {r.ref_flight_time:>8.4f} {r.sim_flight_time:>8.4f} "
                  f"{r.flight_time_error:>+9.2e} {r.landing_x_error:>+9.2e} "
                  f"{math.degrees(r.angle_error):>+8.4f}")
        worst = float(np.max(np.abs([r.flight_time_error for r in results])))
        print("-" * 78)
        status = "✓ PASS" if worst <= t_step else "✗ CHECK TIME STEP"
        print(f"  Worst flight-time error: {worst:.2e} s  Status: {status}")
        print(f"{'='*78}\n")

    return results


def step_convergence(state: ProjectileState,
                     t_steps: Sequence[float] = (1e-2, 1e-3, 1e-4)
                     ) -> List[Tuple[float, float]]:
    """
    Flight-time error against the continuous impact time for each t_step.

    Returns [(t_step, |error|), ...] in the order given.
    """
    reference = analytic_flight_time(state)
    return [(float(dt), abs(simulate_until_target(state, dt).flight_time - reference))
            for dt in t_steps]


if __name__ == "__main__":
    validate_against_analytic(verbose=True)
