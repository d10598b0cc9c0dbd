#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE CALCULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Runs the demonstration scenarios:
    1. Elevated launch trajectory (30 m/s, 45°, 15 m → 104.8 m)
    2. Maximum range and feasibility check
    3. Required launch direction
    4. Required launch speed
    5. Validation against the continuous model
    6. Time-step convergence

  Plots are saved to the outputs/ directory.

  Usage:
    python main.py
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
import math
import os
import time

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from projectile_calculator import (
    ProjectileCalculator, ProjectileState, SolverConfig, OutOfRangeError,
    validate_against_analytic, step_convergence,
)
from projectile_calculator.visualization import (
    plot_trajectory, plot_range_envelope, plot_step_convergence,
    ensure_output_dir,
)


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def main():
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    start_time = time.time()
    out = ensure_output_dir('outputs')
    config = SolverConfig(t_step=1e-5, v_step=1.0, d_precision=1e-5)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Elevated launch
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Trajectory (30 m/s, 45°, launch at 15 m)")
    calc = ProjectileCalculator(
        ProjectileState.from_degrees((0.0, 15.0), (104.8, 0.0), 30.0, 45.0),
        config,
    )
    traj = calc.trajectory()
    print(traj.summary())
    end_x, end_y = traj.ending_position
    print(f"  end x: {end_x:.6f} | end y: {end_y:.6f}")
    print(f"  flight time: {traj.flight_time:.5f} seconds")

    fig = plot_trajectory(traj, save_path=f'{out}/01_trajectory.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/01_trajectory.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Maximum range
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Maximum Range (30 m/s, launch at 4 m)")
    shoulder = ProjectileCalculator(
        ProjectileState.from_degrees((0.0, 4.0), (96.0, 0.0), 30.0, 45.0),
        config,
    )
    distance, angle = shoulder.max_range()
    print(f"  maximum range: {distance:.6f} | launch angle: {math.degrees(angle):.4f}°")
    target_x = shoulder.state.target_x
    if shoulder.is_at_max_range(target_x):
        print(f"  Target at {target_x:g} m: at max range!")
    else:
        print(f"  Target at {target_x:g} m: not at max range")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Required direction
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Required Direction")
    try:
        shoulder.required_direction()
    except OutOfRangeError as exc:
        print(f"  {exc}")

    shoulder.state.change_target_position(90.0, 0.0)
    direction = shoulder.required_direction()
    land_x, _ = shoulder.ending_position()
    print(f"  Required direction for x=90 m: {math.degrees(direction):.6f}° "
          f"(lands at x={land_x:.5f} m)")

    fig = plot_range_envelope(shoulder.state, t_step=1e-3,
                              solved_direction=direction,
                              max_range=(distance, angle),
                              save_path=f'{out}/02_range_envelope.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/02_range_envelope.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Required speed
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Required Speed (horizontal launch from 4.9035 m)")
    level = ProjectileCalculator(
        ProjectileState.from_degrees((0.0, 4.9035), (20.0, 0.0), 0.0, 0.0),
        SolverConfig(t_step=1e-4, v_step=0.5),
    )
    speed = level.required_speed()
    land_x, _ = level.ending_position()
    print(f"  Required speed: {speed:.2f} m/s (lands at x={land_x:.4f} m)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Validation — Continuous Model")
    validate_against_analytic(t_step=1e-4, verbose=True)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Convergence
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Time-Step Convergence")
    convergence = step_convergence(calc.state, (1e-2, 1e-3, 1e-4, 1e-5))
    for dt, err in convergence:
        print(f"  Δt = {dt:<8g}  |ToF error| = {err:.3e} s")
    fig = plot_step_convergence(convergence,
                                save_path=f'{out}/03_step_convergence.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/03_step_convergence.png")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Total runtime: {elapsed:.1f} seconds
""")


if __name__ == "__main__":
    main()
