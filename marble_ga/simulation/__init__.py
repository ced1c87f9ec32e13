"""Reference simulation: a headless arena marbles are launched into."""

from marble_ga.simulation.arena import Arena, ArenaPhysics, Obstacle
from marble_ga.simulation.marble import Marble

__all__ = [
    "Arena",
    "ArenaPhysics",
    "Marble",
    "Obstacle",
]
