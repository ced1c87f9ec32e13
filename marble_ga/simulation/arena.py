"""Headless 2D arena marbles are launched into.

The arena is the reference ``Simulation`` for the engine: a walled rectangle
with optional rectangular obstacles. Marbles never collide with each other, so
a whole generation can fly through the same level at once.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from marble_ga.exceptions import ConfigurationError
from marble_ga.math_utils import Vector2
from marble_ga.simulation.marble import Marble

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArenaPhysics:
    """Physics tuning shared by every marble of an arena.

    Attributes:
        decay_rate: Velocity retained per tick (0.98 = 98%)
        restitution: Velocity retained by a bounce
        rest_speed: Speed below which a marble comes to rest
        power_scale: Initial speed per unit of launch power
    """

    decay_rate: float = 0.98
    restitution: float = 0.8
    rest_speed: float = 0.05
    power_scale: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.decay_rate < 1.0:
            raise ConfigurationError(f"decay_rate must be within [0, 1), got {self.decay_rate!r}")
        if not 0.0 <= self.restitution <= 1.0:
            raise ConfigurationError(
                f"restitution must be within [0, 1], got {self.restitution!r}"
            )
        if self.rest_speed <= 0.0:
            raise ConfigurationError(f"rest_speed must be positive, got {self.rest_speed!r}")
        if self.power_scale < 0.0:
            raise ConfigurationError(
                f"power_scale must be non-negative, got {self.power_scale!r}"
            )


@dataclass(frozen=True)
class Obstacle:
    """Axis-aligned rectangular obstacle given by its center and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        half_w = self.width / 2.0
        half_h = self.height / 2.0
        return self.x - half_w, self.y - half_h, self.x + half_w, self.y + half_h

    def resolve_collision(self, marble: Marble, restitution: float) -> bool:
        """Push ``marble`` out of the obstacle and reflect its velocity.

        Returns:
            True if the marble was touching the obstacle
        """
        left, top, right, bottom = self.bounds
        closest_x = max(left, min(right, marble.pos.x))
        closest_y = max(top, min(bottom, marble.pos.y))
        dx = marble.pos.x - closest_x
        dy = marble.pos.y - closest_y
        distance = math.hypot(dx, dy)

        if distance >= marble.radius:
            return False

        if distance > 0.0:
            normal = Vector2(dx / distance, dy / distance)
            depth = marble.radius - distance
        else:
            # Center inside the rectangle: leave through the nearest edge
            exits = (
                (marble.pos.x - left, Vector2(-1.0, 0.0)),
                (right - marble.pos.x, Vector2(1.0, 0.0)),
                (marble.pos.y - top, Vector2(0.0, -1.0)),
                (bottom - marble.pos.y, Vector2(0.0, 1.0)),
            )
            gap, normal = min(exits, key=lambda item: item[0])
            depth = gap + marble.radius

        marble.pos.add_inplace(normal * depth)

        approach = marble.vel.x * normal.x + marble.vel.y * normal.y
        if approach < 0.0:
            marble.vel.add_inplace(normal * (-(1.0 + restitution) * approach))
        return True


class Arena:
    """Walled rectangle that owns and steps every spawned marble.

    Args:
        width: Arena width
        height: Arena height
        obstacles: Rectangular obstacles inside the arena
        physics: Physics tuning
    """

    def __init__(
        self,
        width: float,
        height: float,
        obstacles: Iterable[Obstacle] = (),
        physics: ArenaPhysics = ArenaPhysics(),
    ) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Arena size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        self.obstacles: Tuple[Obstacle, ...] = tuple(obstacles)
        self.physics = physics
        self._marbles: List[Marble] = []

    @property
    def marbles(self) -> Tuple[Marble, ...]:
        return tuple(self._marbles)

    def spawn(self, start_position: Vector2, visual_identity: str, size: float) -> Marble:
        marble = Marble(self, start_position, visual_identity, size)
        self._marbles.append(marble)
        return marble

    def remove(self, marble: Marble) -> None:
        self._marbles.remove(marble)

    def step(self) -> None:
        """Advance every marble by one tick."""
        for marble in self._marbles:
            marble.update()

    def is_settled(self) -> bool:
        return not any(marble.is_moving() for marble in self._marbles)
