"""
Validation & Plotting Tests
===========================
Cross-checks the simulator against the continuous model and makes sure
every figure renders.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.colors import to_hex

from projectile_calculator.exceptions import InfeasibleTargetError
from projectile_calculator.range_solver import theoretical_max_range
from projectile_calculator.state import ProjectileState
from projectile_calculator.trajectory import simulate_until_target
from projectile_calculator.validation import (
    REFERENCE_CASES, analytic_flight_time, analytic_max_range_angle,
    continuous_range, state_from_case, step_convergence,
    validate_against_analytic,
)
from projectile_calculator.visualization import (
    STYLE, plot_range_envelope, plot_step_convergence, plot_trajectory,
    range_envelope,
)


class TestContinuousModel:
    """Verify the continuous-time references."""

    def test_free_fall_one_second(self):
        state = ProjectileState(start_y=4.9035, speed=0.0)
        assert abs(analytic_flight_time(state) - 1.0) < 1e-9

    def test_level_ground_flight_time(self):
        state = ProjectileState.from_degrees((0, 0), (0, 0), 30.0, 45.0)
        expected = 2 * 30.0 * math.sin(math.radians(45)) / 9.807
        assert abs(analytic_flight_time(state) - expected) < 1e-9

    def test_level_ground_range(self):
        state = ProjectileState(speed=30.0)
        assert abs(continuous_range(state, math.pi / 4) - 900 / 9.807) < 1e-9

    @pytest.mark.parametrize("case", REFERENCE_CASES,
                             ids=[c['name'] for c in REFERENCE_CASES])
    def test_closed_form_angle_is_optimal(self, case):
        state = state_from_case(case)
        closed_form = theoretical_max_range(state)[1]
        assert abs(analytic_max_range_angle(state) - closed_form) < 1e-5

    def test_launch_below_target_raises(self):
        state = ProjectileState(start_y=0.0, target_y=3.0, speed=30.0,
                                direction=1.0)
        with pytest.raises(InfeasibleTargetError):
            analytic_flight_time(state)


class TestValidation:
    """Verify the discretized simulator against the references."""

    def test_all_cases_within_one_step(self):
        t_step = 1e-4
        results = validate_against_analytic(t_step=t_step, verbose=False)
        assert len(results) == len(REFERENCE_CASES)
        for r in results:
            assert -t_step - 1e-9 < r.flight_time_error <= 1e-9
            assert abs(r.landing_x_error) < 30.0 * t_step + 1e-9
            assert abs(r.angle_error) < 1e-5

    def test_verbose_report(self, capsys):
        validate_against_analytic(REFERENCE_CASES[:1], t_step=1e-3,
                                  verbose=True)
        out = capsys.readouterr().out
        assert 'VALIDATION' in out
        assert REFERENCE_CASES[0]['name'] in out

    def test_step_convergence_bounded_by_step(self):
        state = state_from_case(REFERENCE_CASES[0])
        convergence = step_convergence(state, (1e-2, 1e-3, 1e-4))
        assert [dt for dt, _ in convergence] == [1e-2, 1e-3, 1e-4]
        for dt, err in convergence:
            assert err < dt + 1e-9


class TestPlots:
    """Figures render and save without error."""

    def test_plot_trajectory(self, tmp_path):
        traj = simulate_until_target(state_from_case(REFERENCE_CASES[0]), 1e-4)
        path = tmp_path / 'trajectory.png'
        fig = plot_trajectory(traj, save_path=str(path))
        assert path.exists()
        assert to_hex(fig.get_facecolor()) == STYLE['bg_color']
        assert to_hex(fig.axes[0].get_facecolor()) == \
            STYLE['bg_color']
        plt.close(fig)

    def test_range_envelope_peaks_near_max_range_angle(self):
        state = state_from_case(REFERENCE_CASES[1])
        angles, landing = range_envelope(state, 1e-3, range(0, 90, 1))
        best = angles[landing.argmax()]
        closed_form = math.degrees(theoretical_max_range(state)[1])
        assert abs(best - closed_form) <= 1.5

    def test_plot_range_envelope(self, tmp_path):
        state = state_from_case(REFERENCE_CASES[2])
        path = tmp_path / 'envelope.png'
        fig = plot_range_envelope(state, t_step=1e-2,
                                  solved_direction=math.radians(30),
                                  max_range=(91.7, math.pi / 4),
                                  save_path=str(path))
        assert path.exists()
        plt.close(fig)

    def test_plot_step_convergence(self, tmp_path):
        path = tmp_path / 'convergence.png'
        fig = plot_step_convergence([(1e-2, 4e-3), (1e-3, 2e-4), (1e-4, 6e-5)],
                                    save_path=str(path))
        assert path.exists()
        plt.close(fig)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
