"""Configuration for the marble genetic algorithm.

- ``algorithm``: the plain settings the engine reads
- ``models``: the pydantic schema of level files
- ``loader``: reading level files from disk
"""

from marble_ga.config.algorithm import GeneticAlgorithmConfig
from marble_ga.config.loader import DEFAULT_CONFIG_PATH, load_configuration, parse_configuration
from marble_ga.config.models import ConfigurationModel, LevelModel

__all__ = [
    "GeneticAlgorithmConfig",
    "ConfigurationModel",
    "LevelModel",
    "DEFAULT_CONFIG_PATH",
    "load_configuration",
    "parse_configuration",
]
