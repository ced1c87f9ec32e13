"""Protocol-based abstractions for the simulation the engine drives.

The genetic algorithm never touches physics or rendering directly. It only
needs a ``Simulation`` that can spawn marbles, and ``AgentHandle`` objects
that can be launched, polled, measured and destroyed. Any object with these
methods works, which keeps the engine testable with scripted fakes.

Protocol Hierarchy:
------------------
    Simulation - Spawns agent handles at a launch site
    AgentHandle - One spawned marble: launch, poll, measure, stop, destroy

Value types:
------------
    Goal - The fixed target every individual of a run aims at
    LaunchSite - Where and how a level's marbles are spawned
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from marble_ga.math_utils import Vector2


@runtime_checkable
class AgentHandle(Protocol):
    """Protocol for a marble living inside a simulation."""

    def launch(self, power: float, angle: float) -> None:
        """Start moving; power scales initial speed, angle sets direction."""
        ...

    def is_moving(self) -> bool:
        """Live motion state, never a cached value."""
        ...

    def position_distance_to(self, point: Vector2) -> float:
        """Euclidean distance from the current position to ``point``."""
        ...

    def stop(self) -> None:
        """Halt any remaining motion."""
        ...

    def destroy(self) -> None:
        """Release the simulation-side resource."""
        ...


@runtime_checkable
class Simulation(Protocol):
    """Protocol for the physical world marbles are spawned into."""

    def spawn(self, start_position: Vector2, visual_identity: str, size: float) -> AgentHandle:
        ...


@dataclass(frozen=True)
class Goal:
    """The target point shared read-only by every individual of a run."""

    x: float
    y: float
    diameter: float = 0.0

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def radius(self) -> float:
        return self.diameter / 2.0


@dataclass(frozen=True)
class LaunchSite:
    """Spawn parameters shared by all marbles of a level.

    Attributes:
        x: Start x position
        y: Start y position
        visual_identity: Skin/texture name handed to the simulation
        size: Marble diameter
    """

    x: float
    y: float
    visual_identity: str
    size: float

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)

    def spawn(self, simulation: Simulation) -> AgentHandle:
        return simulation.spawn(self.position, self.visual_identity, self.size)
