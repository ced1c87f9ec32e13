"""Fake simulation for testing the engine without physics.

Agents settle after a scripted number of ticks at a scripted distance from
the goal. The distance is looked up from the launch parameters, so a test can
decide exactly where every genome lands.
"""

from typing import Callable, List, Optional, Tuple

from marble_ga.math_utils import Vector2

DistanceFn = Callable[[float, float], float]


class FakeAgent:
    """Scripted stand-in for a marble; satisfies the AgentHandle protocol."""

    def __init__(
        self, simulation: "FakeSimulation", start: Vector2, visual_identity: str, size: float
    ) -> None:
        self.simulation = simulation
        self.start = start
        self.visual_identity = visual_identity
        self.size = size
        self.launches: List[Tuple[float, float]] = []
        self.remaining_ticks = 0
        self.stopped = False
        self.destroyed = False
        self.distance: Optional[float] = None

    def launch(self, power: float, angle: float) -> None:
        self._check()
        self.launches.append((power, angle))
        self.remaining_ticks = self.simulation.ticks_to_settle
        self.distance = self.simulation.distance_fn(power, angle)

    def is_moving(self) -> bool:
        self._check()
        return self.remaining_ticks > 0

    def position_distance_to(self, point: Vector2) -> float:
        self._check()
        if self.distance is None:
            return self.simulation.idle_distance
        return self.distance

    def stop(self) -> None:
        self._check()
        self.stopped = True
        self.remaining_ticks = 0

    def destroy(self) -> None:
        self._check()
        self.destroyed = True
        self.simulation.live.remove(self)

    def advance(self) -> None:
        if self.remaining_ticks > 0:
            self.remaining_ticks -= 1

    def _check(self) -> None:
        if self.destroyed:
            raise AssertionError("FakeAgent used after destroy()")


class FakeSimulation:
    """Spawns FakeAgents and steps them deterministically.

    Args:
        distance_fn: Maps (power, angle) to the resting distance from the goal
        ticks_to_settle: Ticks an agent keeps moving after launch
        idle_distance: Distance reported by an agent that was never launched
    """

    def __init__(
        self,
        distance_fn: Optional[DistanceFn] = None,
        ticks_to_settle: int = 3,
        idle_distance: float = 100.0,
    ) -> None:
        self.distance_fn: DistanceFn = distance_fn or (lambda power, angle: 1.0)
        self.ticks_to_settle = ticks_to_settle
        self.idle_distance = idle_distance
        self.spawned: List[FakeAgent] = []
        self.live: List[FakeAgent] = []

    def spawn(self, start_position: Vector2, visual_identity: str, size: float) -> FakeAgent:
        agent = FakeAgent(self, start_position, visual_identity, size)
        self.spawned.append(agent)
        self.live.append(agent)
        return agent

    def step(self) -> None:
        for agent in self.live:
            agent.advance()
