"""Marble body for the reference arena.

Physics Model:
    Each tick the marble:
    1. Moves by its velocity
    2. Loses a fraction of its velocity (rolling friction)
    3. Bounces off walls and obstacles, losing energy on impact
    4. Comes to rest once its speed drops below the rest threshold

The model is deterministic: the same launch always settles at the same spot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from marble_ga.exceptions import SimulationError
from marble_ga.math_utils import Vector2

if TYPE_CHECKING:
    from marble_ga.simulation.arena import Arena


class Marble:
    """A round body spawned into an ``Arena``.

    Satisfies the ``AgentHandle`` protocol.

    Attributes:
        pos: Center position
        vel: Velocity per tick
        radius: Collision radius
        visual_identity: Skin name, only carried for renderers
    """

    def __init__(self, arena: "Arena", position: Vector2, visual_identity: str, size: float) -> None:
        self._arena: Optional["Arena"] = arena
        self.pos = position.copy()
        self.vel = Vector2(0.0, 0.0)
        self.radius = size / 2.0
        self.visual_identity = visual_identity
        self.bounces = 0

    @property
    def destroyed(self) -> bool:
        return self._arena is None

    def _require_arena(self) -> "Arena":
        if self._arena is None:
            raise SimulationError("Marble has been destroyed")
        return self._arena

    def launch(self, power: float, angle: float) -> None:
        """Set the initial velocity; ``power`` scales speed, ``angle`` sets direction."""
        arena = self._require_arena()
        self.vel = Vector2.from_angle(angle, power * arena.physics.power_scale)

    def is_moving(self) -> bool:
        self._require_arena()
        return self.vel.x != 0.0 or self.vel.y != 0.0

    def position_distance_to(self, point: Vector2) -> float:
        self._require_arena()
        return self.pos.distance_to(point)

    def stop(self) -> None:
        self._require_arena()
        self.vel = Vector2(0.0, 0.0)

    def destroy(self) -> None:
        arena = self._require_arena()
        arena.remove(self)
        self._arena = None

    def update(self) -> None:
        """Advance the marble by one tick."""
        arena = self._require_arena()
        if not self.is_moving():
            return
        physics = arena.physics

        # 1. Velocity -> Position
        self.pos.add_inplace(self.vel)

        # 2. Rolling friction
        self.vel.mul_inplace(physics.decay_rate)

        # 3. Collisions
        self._handle_boundary_collision(arena)
        for obstacle in arena.obstacles:
            if obstacle.resolve_collision(self, physics.restitution):
                self.bounces += 1

        # 4. Rest
        if self.vel.length() < physics.rest_speed:
            self.vel = Vector2(0.0, 0.0)

    def _handle_boundary_collision(self, arena: "Arena") -> None:
        restitution = arena.physics.restitution
        r = self.radius

        # Horizontal walls
        if self.pos.x - r < 0.0:
            self.pos.x = r
            self.vel.x = abs(self.vel.x) * restitution
            self.bounces += 1
        elif self.pos.x + r > arena.width:
            self.pos.x = arena.width - r
            self.vel.x = -abs(self.vel.x) * restitution
            self.bounces += 1

        # Vertical walls
        if self.pos.y - r < 0.0:
            self.pos.y = r
            self.vel.y = abs(self.vel.y) * restitution
            self.bounces += 1
        elif self.pos.y + r > arena.height:
            self.pos.y = arena.height - r
            self.vel.y = -abs(self.vel.y) * restitution
            self.bounces += 1

    def __repr__(self) -> str:
        return f"Marble(pos={self.pos!r}, vel={self.vel!r})"
