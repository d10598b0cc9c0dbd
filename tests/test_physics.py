"""
Unit Tests for the Projectile Calculator
========================================
Tests the state, trajectory simulator and maximum-range modules.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_calculator.exceptions import (
    InfeasibleTargetError, InvalidParameterError, NonConvergentError,
)
from projectile_calculator.state import ProjectileState
from projectile_calculator.trajectory import (
    GRAVITY, TrajectorySample, apex_time, ending_position, flight_time,
    position, simulate_until_target,
)
from projectile_calculator.range_solver import (
    is_at_max_range, max_range, theoretical_max_range,
)


def elevated_launch():
    """30 m/s at 45° from 15 m toward a target at (104.8, 0)."""
    return ProjectileState.from_degrees((0.0, 15.0), (104.8, 0.0), 30.0, 45.0)


def shoulder_launch(target_x=96.0):
    return ProjectileState.from_degrees((0.0, 4.0), (target_x, 0.0), 30.0, 45.0)


def level_launch(direction_deg=45.0, target_x=0.0):
    return ProjectileState.from_degrees((0.0, 0.0), (target_x, 0.0), 30.0,
                                        direction_deg)


def exact_impact_time(state):
    vx, vy = state.velocity_components()
    drop = state.start_y - state.target_y
    return (vy + math.sqrt(vy * vy + 2 * GRAVITY * drop)) / GRAVITY


class TestState:
    """Verify the launch state container."""

    def test_negative_speed_rejected(self):
        with pytest.raises(InvalidParameterError):
            ProjectileState(speed=-1.0)

    def test_nan_speed_rejected(self):
        state = ProjectileState(speed=5.0)
        with pytest.raises(InvalidParameterError):
            state.change_speed(float('nan'))
        assert state.speed == 5.0

    @pytest.mark.parametrize("direction", [float('nan'), float('inf'),
                                           float('-inf')])
    def test_non_finite_direction_rejected(self, direction):
        with pytest.raises(InvalidParameterError):
            ProjectileState(speed=10.0, direction=direction)
        state = ProjectileState(speed=10.0, direction=0.5)
        with pytest.raises(InvalidParameterError):
            state.change_direction(direction)
        with pytest.raises(InvalidParameterError):
            state.trial(direction=direction)
        assert state.direction == 0.5

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            ProjectileState(speed=-0.5)

    def test_from_degrees(self):
        state = ProjectileState.from_degrees((1.0, 2.0), (3.0, 4.0), 10.0, 30.0)
        assert state.start_position == (1.0, 2.0)
        assert state.target_position == (3.0, 4.0)
        assert abs(state.direction - math.pi / 6) < 1e-12
        assert abs(state.direction_deg - 30.0) < 1e-9

    def test_velocity_components(self):
        state = ProjectileState(speed=100.0, direction=math.radians(45))
        vx, vy = state.velocity_components()
        assert abs(math.hypot(vx, vy) - 100.0) < 1e-9
        assert abs(vy - 100 * math.sin(math.radians(45))) < 1e-9

    def test_mutators(self):
        state = ProjectileState()
        state.change_start_position(1.0, 2.0)
        state.change_target_position(50.0, -3.0)
        state.change_speed(12.5)
        state.change_direction(0.3)
        assert state.start_position == (1.0, 2.0)
        assert state.target_position == (50.0, -3.0)
        assert state.speed == 12.5
        assert state.direction == 0.3

    def test_trial_leaves_original_untouched(self):
        state = elevated_launch()
        trial = state.trial(speed=10.0, direction=0.0)
        assert trial.speed == 10.0 and trial.direction == 0.0
        assert state.speed == 30.0
        assert abs(state.direction - math.pi / 4) < 1e-12
        assert trial.target_position == state.target_position

    def test_trial_validates_speed(self):
        with pytest.raises(InvalidParameterError):
            elevated_launch().trial(speed=-3.0)

    def test_isclose(self):
        a = elevated_launch()
        b = a.trial(speed=a.speed + 1e-9)
        c = a.trial(speed=a.speed + 1e-3)
        assert a.isclose(b)
        assert not a.isclose(c)

    def test_str(self):
        assert str(ProjectileState(speed=2.0, direction=0.5)) == \
            "speed: 2.0, angle/direction: 0.5"


class TestTrajectory:
    """Verify closed-form positions and the sampled landing."""

    def test_position_at_launch(self):
        state = elevated_launch()
        assert position(state, 0.0) == (0.0, 15.0)

    def test_position_closed_form(self):
        state = elevated_launch()
        x, y = position(state, 2.0)
        v = 30.0 / math.sqrt(2)
        assert abs(x - v * 2.0) < 1e-9
        assert abs(y - (15.0 + v * 2.0 - 0.5 * 9.807 * 4.0)) < 1e-9

    def test_position_vectorized_matches_scalar(self):
        state = elevated_launch()
        ts = np.array([0.0, 0.5, 1.25, 3.0])
        xs, ys = position(state, ts)
        for t, x, y in zip(ts, xs, ys):
            sx, sy = position(state, float(t))
            assert abs(x - sx) < 1e-12 and abs(y - sy) < 1e-12

    def test_parabola_symmetric_about_apex(self):
        state = elevated_launch()
        t_star = apex_time(state)
        assert abs(t_star - 30.0 * math.sin(math.pi / 4) / 9.807) < 1e-12
        for dt in [0.3, 1.0, 1.7]:
            assert abs(position(state, t_star - dt)[1]
                       - position(state, t_star + dt)[1]) < 1e-9

    def test_height_non_increasing_after_apex(self):
        state = elevated_launch()
        t_star = apex_time(state)
        ys = position(state, np.linspace(t_star, t_star + 5.0, 400))[1]
        assert np.all(np.diff(ys) <= 0)

    def test_reference_scenario(self):
        """30 m/s, 45°, from 15 m: lands near x = 104.8 m."""
        traj = simulate_until_target(elevated_launch(), 1e-5)
        end_x, end_y = traj.ending_position
        assert abs(end_x - 104.8) < 0.5
        assert 0.0 <= end_y < 1e-3
        assert 4.94 < traj.flight_time < 4.95

    def test_flight_time_within_one_step(self):
        state = elevated_launch()
        exact = exact_impact_time(state)
        for dt in [1e-2, 1e-3, 1e-4]:
            err = exact - flight_time(state, dt)
            assert -1e-9 < err < dt + 1e-9

    def test_error_bound_shrinks_with_step(self):
        """Error is bounded by the step, so it shrinks linearly with it."""
        state = shoulder_launch()
        exact = exact_impact_time(state)
        for dt in [1e-2, 1e-3, 1e-4, 1e-5]:
            assert abs(exact - flight_time(state, dt)) < dt + 1e-9

    def test_samples_evenly_spaced_above_target(self):
        state = shoulder_launch()
        traj = simulate_until_target(state, 1e-3)
        assert traj.time[0] == 0.0
        assert np.allclose(np.diff(traj.time), 1e-3)
        assert np.all(traj.y >= state.target_y)
        assert position(state, traj.flight_time + 1e-3)[1] < state.target_y

    def test_samples_iterator(self):
        traj = simulate_until_target(shoulder_launch(), 1e-2)
        samples = list(traj.samples())
        assert len(samples) == len(traj)
        assert isinstance(samples[0], TrajectorySample)
        assert samples[0].position == (0.0, 4.0)
        assert samples[-1].time == traj.flight_time
        assert all(a.time < b.time for a, b in zip(samples, samples[1:]))

    def test_ending_position_query(self):
        state = shoulder_launch()
        assert ending_position(state, 1e-3) == \
            simulate_until_target(state, 1e-3).ending_position

    def test_max_height_near_apex(self):
        state = elevated_launch()
        traj = simulate_until_target(state, 1e-4)
        apex = position(state, apex_time(state))[1]
        assert abs(traj.max_height - apex) < 1e-6

    def test_free_fall_from_rest(self):
        """Dropped from 4.9035 m, lands after 1 s at the launch x."""
        state = ProjectileState(start_x=3.0, start_y=4.9035, speed=0.0)
        traj = simulate_until_target(state, 1e-3)
        assert abs(traj.flight_time - 1.0) <= 1e-3 + 1e-12
        assert traj.landing_x == 3.0

    def test_downward_launch_at_target_height(self):
        state = level_launch(direction_deg=-30.0)
        traj = simulate_until_target(state, 1e-3)
        assert traj.flight_time == 0.0
        assert traj.ending_position == (0.0, 0.0)

    def test_state_not_modified(self):
        state = elevated_launch()
        before = ProjectileState(**vars(state))
        simulate_until_target(state, 1e-3)
        assert state == before

    def test_launch_below_target_raises(self):
        state = ProjectileState(start_y=0.0, target_y=5.0, speed=30.0,
                                direction=math.radians(60))
        with pytest.raises(InfeasibleTargetError):
            simulate_until_target(state, 1e-3)

    @pytest.mark.parametrize("t_step", [0.0, -1e-3, float('nan')])
    def test_invalid_step_raises(self, t_step):
        with pytest.raises(InvalidParameterError):
            simulate_until_target(elevated_launch(), t_step)

    def test_sample_cap_raises(self):
        with pytest.raises(NonConvergentError):
            simulate_until_target(elevated_launch(), 1e-3, max_samples=100)

    def test_nan_direction_hits_sample_cap(self):
        """A NaN height never drops below the target, so the cap trips."""
        state = ProjectileState(start_y=1.0, speed=10.0)
        state.direction = float('nan')
        with pytest.raises(NonConvergentError) as info:
            simulate_until_target(state, 1e-3, max_samples=10_000)
        assert info.value.iterations == 10_000

    def test_summary(self):
        text = simulate_until_target(elevated_launch(), 1e-3).summary()
        assert 'TRAJECTORY SUMMARY' in text
        assert 'Flight time' in text


class TestMaxRange:
    """Verify the closed-form and simulated maximum range."""

    def test_level_ground_matches_v2_over_g(self):
        state = level_launch(direction_deg=10.0)
        distance, angle = max_range(state, 1e-5)
        assert abs(distance - 30.0 ** 2 / 9.807) < 1e-2
        assert abs(angle - math.pi / 4) < 1e-12

    def test_closed_form_with_height(self):
        state = shoulder_launch()
        k = 900.0 / 9.807
        distance, angle = theoretical_max_range(state)
        assert abs(distance - math.sqrt(k * k + 8.0 * k)) < 1e-9
        assert abs(angle - math.atan(k / distance)) < 1e-12
        assert angle < math.pi / 4

    def test_simulated_close_to_closed_form(self):
        state = shoulder_launch()
        closed, _ = theoretical_max_range(state)
        simulated, _ = max_range(state, 1e-5)
        assert -1e-9 <= closed - simulated < 1e-2

    def test_direction_untouched(self):
        state = shoulder_launch()
        max_range(state, 1e-4)
        assert abs(state.direction - math.pi / 4) < 1e-12

    def test_is_at_max_range(self):
        state = level_launch()
        distance, _ = max_range(state, 1e-4)
        assert is_at_max_range(state, distance + 0.01, 1e-4)
        assert is_at_max_range(state, distance, 1e-4)
        assert not is_at_max_range(state, distance - 0.01, 1e-4)

    def test_shoulder_target_beyond_range(self):
        state = shoulder_launch(96.0)
        assert is_at_max_range(state, state.target_x, 1e-5)
        assert not is_at_max_range(state, 90.0, 1e-5)

    def test_zero_speed_degenerate(self):
        state = ProjectileState(start_x=2.0, start_y=10.0, speed=0.0)
        assert theoretical_max_range(state) == (0.0, 0.0)
        distance, angle = max_range(state, 1e-3)
        assert distance == 2.0 and angle == 0.0

    def test_unreachable_height_raises(self):
        state = ProjectileState(start_y=0.0, target_y=100.0, speed=10.0)
        with pytest.raises(InfeasibleTargetError):
            theoretical_max_range(state)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
