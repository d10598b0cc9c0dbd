"""
Projectile State
================
Launch state of a point-mass projectile: where it starts, where it should
land, how fast and in which direction it leaves.

Coordinate system:
  x = downrange (horizontal)
  y = height    (vertical, up positive)

Directions are radians above the horizontal.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .exceptions import InvalidParameterError


# Tolerance for field-by-field comparison of two states
EPSILON = 1e-7


def _check_speed(speed: float) -> float:
    if not (speed >= 0 and math.isfinite(speed)):
        raise InvalidParameterError(f"speed must be finite and >= 0, got {speed!r}")
    return speed


def _check_direction(direction: float) -> float:
    if not math.isfinite(direction):
        raise InvalidParameterError(f"direction must be finite, got {direction!r}")
    return direction


@dataclass
class ProjectileState:
    """
    Start position, target position, launch speed and launch direction.
    """
    start_x: float = 0.0          # m
    start_y: float = 0.0          # m
    target_x: float = 0.0         # m
    target_y: float = 0.0         # m
    speed: float = 0.0            # m/s
    direction: float = 0.0        # rad above horizontal

    def __post_init__(self):
        _check_speed(self.speed)
        _check_direction(self.direction)

    @classmethod
    def from_degrees(cls, start: Tuple[float, float], target: Tuple[float, float],
                     speed: float, direction_deg: float) -> 'ProjectileState':
        """Build a state from positions and a launch angle in degrees."""
        return cls(start_x=start[0], start_y=start[1],
                   target_x=target[0], target_y=target[1],
                   speed=speed, direction=math.radians(direction_deg))

    @property
    def start_position(self) -> Tuple[float, float]:
        return self.start_x, self.start_y

    @property
    def target_position(self) -> Tuple[float, float]:
        return self.target_x, self.target_y

    @property
    def direction_deg(self) -> float:
        return math.degrees(self.direction)

    def velocity_components(self) -> Tuple[float, float]:
        """Launch velocity as (vx, vy)."""
        return (self.speed * math.cos(self.direction),
                self.speed * math.sin(self.direction))

    # ── Mutators ──────────────────────────────────────────────────────────
    def change_start_position(self, x: float, y: float) -> None:
        self.start_x, self.start_y = x, y

    def change_target_position(self, x: float, y: float) -> None:
        self.target_x, self.target_y = x, y

    def change_speed(self, speed: float) -> None:
        self.speed = _check_speed(speed)

    def change_direction(self, direction: float) -> None:
        self.direction = _check_direction(direction)

    def trial(self, speed: Optional[float] = None,
              direction: Optional[float] = None) -> 'ProjectileState':
        """
        Copy of this state with speed and/or direction replaced.

        Searches probe candidates on trial states so that the caller's
        state is never touched mid-search.
        """
        changes = {}
        if speed is not None:
            changes['speed'] = speed
        if direction is not None:
            changes['direction'] = direction
        return replace(self, **changes)

    def isclose(self, other: 'ProjectileState', tol: float = EPSILON) -> bool:
        """True when every field differs from other's by at most tol."""
        return all(abs(a - b) <= tol for a, b in (
            (self.speed, other.speed),
            (self.direction, other.direction),
            (self.start_x, other.start_x),
            (self.start_y, other.start_y),
            (self.target_x, other.target_x),
            (self.target_y, other.target_y),
        ))

    def __str__(self) -> str:
        return f"speed: {self.speed}, angle/direction: {self.direction}"
