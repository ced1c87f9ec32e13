"""2D vector math shared by the arena and the engine.

Screen coordinates are used throughout: x grows to the right and y grows
downward, matching the level files.
"""

from __future__ import annotations

import math


class Vector2:
    """A mutable 2D vector."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    @classmethod
    def from_angle(cls, angle: float, magnitude: float = 1.0) -> "Vector2":
        """Build a vector pointing ``angle`` radians above the positive x axis.

        The y component is negated because screen y grows downward, so an
        angle of ``pi / 2`` points straight up on screen.
        """
        return cls(math.cos(angle) * magnitude, -math.sin(angle) * magnitude)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def add_inplace(self, other: "Vector2") -> "Vector2":
        self.x += other.x
        self.y += other.y
        return self

    def mul_inplace(self, scalar: float) -> "Vector2":
        self.x *= scalar
        self.y *= scalar
        return self

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


__all__ = ["Vector2"]
