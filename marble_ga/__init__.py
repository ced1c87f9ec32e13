"""Marble GA - evolving marble launches toward a goal.

A population of marbles, each described by a launch power and a launch angle,
is launched into a 2D arena generation after generation. Marbles that come to
rest closer to the goal are more likely to pass their genes on.
"""

__version__ = "0.1.0"

from marble_ga.algorithm import GenerationReport, GeneticAlgorithm
from marble_ga.config.algorithm import GeneticAlgorithmConfig
from marble_ga.exceptions import (
    ConfigurationError,
    GeneticsError,
    LifecycleError,
    MarbleError,
    SelectionError,
    SimulationError,
)
from marble_ga.genetics import Genome
from marble_ga.individual import MarbleIndividual
from marble_ga.protocols import AgentHandle, Goal, LaunchSite, Simulation

__all__ = [
    "GeneticAlgorithm",
    "GeneticAlgorithmConfig",
    "GenerationReport",
    "MarbleIndividual",
    "Genome",
    "Goal",
    "LaunchSite",
    "AgentHandle",
    "Simulation",
    "MarbleError",
    "ConfigurationError",
    "SimulationError",
    "GeneticsError",
    "SelectionError",
    "LifecycleError",
]
