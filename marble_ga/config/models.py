"""Level file schema.

A level file is a JSON document describing the arena, the skins, one or more
levels and the genetic algorithm settings. The models validate the document
and translate it into the plain values the engine and the arena consume.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from marble_ga.config.algorithm import (
    DEFAULT_ANGLE_MUTATION_PROBABILITY,
    DEFAULT_ANGLE_MUTATION_RANGE,
    DEFAULT_FATHER_GENE_PROBABILITY,
    DEFAULT_MUTATION_PROBABILITY,
    DEFAULT_POPULATION_SIZE,
    DEFAULT_POWER_MUTATION_PROBABILITY,
    DEFAULT_POWER_MUTATION_RANGE,
    GeneticAlgorithmConfig,
)
from marble_ga.exceptions import ConfigurationError
from marble_ga.genetics.genome import ANGLE, POWER
from marble_ga.protocols import Goal, LaunchSite
from marble_ga.simulation.arena import Arena, ArenaPhysics, Obstacle


class CoordinateModel(BaseModel):
    """A point in arena coordinates."""

    x: float
    y: float


class SizeModel(BaseModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class ObstacleModel(BaseModel):
    """Rectangular obstacle; ``position`` is its center."""

    position: CoordinateModel
    size: SizeModel


class GoalModel(BaseModel):
    position: CoordinateModel
    diameter: float = Field(gt=0)


class MarbleModel(BaseModel):
    """Start position and size of the level's marbles."""

    position: CoordinateModel
    diameter: float = Field(gt=0)


class LevelModel(BaseModel):
    marble: MarbleModel
    goal: GoalModel
    obstacles: List[ObstacleModel] = Field(default_factory=list)


class SkinsModel(BaseModel):
    """Visual identities handed to the simulation."""

    marble: str = "marble"
    goal: str = "goal"
    obstacle: str = "obstacle"
    individual: str = "individual"


class ArenaModel(BaseModel):
    width: float = Field(800.0, gt=0)
    height: float = Field(600.0, gt=0)
    decay_rate: float = Field(0.98, ge=0, lt=1)
    restitution: float = Field(0.8, ge=0, le=1)
    rest_speed: float = Field(0.05, gt=0)
    power_scale: float = Field(1.0, ge=0)


class GeneModel(BaseModel):
    """Per-gene breeding settings.

    ``father_probability`` falls back to the algorithm-wide
    ``father_genes_probability`` when omitted.
    """

    mutation_probability: float = Field(ge=0, le=1)
    mutation_range: float = Field(ge=0)
    father_probability: Optional[float] = Field(None, ge=0, le=1)


class GeneticAlgorithmModel(BaseModel):
    individual_count: int = Field(DEFAULT_POPULATION_SIZE, ge=1)
    father_genes_probability: float = Field(DEFAULT_FATHER_GENE_PROBABILITY, ge=0, le=1)
    mutation_probability: float = Field(DEFAULT_MUTATION_PROBABILITY, ge=0, le=1)
    power: GeneModel = Field(
        default_factory=lambda: GeneModel(
            mutation_probability=DEFAULT_POWER_MUTATION_PROBABILITY,
            mutation_range=DEFAULT_POWER_MUTATION_RANGE,
        )
    )
    angle: GeneModel = Field(
        default_factory=lambda: GeneModel(
            mutation_probability=DEFAULT_ANGLE_MUTATION_PROBABILITY,
            mutation_range=DEFAULT_ANGLE_MUTATION_RANGE,
        )
    )

    def father_probability(self, gene: GeneModel) -> float:
        if gene.father_probability is None:
            return self.father_genes_probability
        return gene.father_probability


class ConfigurationModel(BaseModel):
    """Root of a level file."""

    arena: ArenaModel = Field(default_factory=ArenaModel)
    skins: SkinsModel = Field(default_factory=SkinsModel)
    levels: List[LevelModel] = Field(min_length=1)
    genetic_algorithm: GeneticAlgorithmModel = Field(default_factory=GeneticAlgorithmModel)

    def get_level(self, level_number: int = 0) -> LevelModel:
        if not 0 <= level_number < len(self.levels):
            raise ConfigurationError(
                f"Level {level_number} is not defined; the file has {len(self.levels)} level(s)"
            )
        return self.levels[level_number]

    def to_algorithm_config(self) -> GeneticAlgorithmConfig:
        ga = self.genetic_algorithm
        return GeneticAlgorithmConfig(
            population_size=ga.individual_count,
            father_gene_probability={
                POWER.name: ga.father_probability(ga.power),
                ANGLE.name: ga.father_probability(ga.angle),
            },
            mutation_probability=ga.mutation_probability,
            gene_mutation_probability={
                POWER.name: ga.power.mutation_probability,
                ANGLE.name: ga.angle.mutation_probability,
            },
            gene_mutation_range={
                POWER.name: ga.power.mutation_range,
                ANGLE.name: ga.angle.mutation_range,
            },
        ).validate()

    def build_arena(self, level_number: int = 0) -> Arena:
        level = self.get_level(level_number)
        arena = self.arena
        physics = ArenaPhysics(
            decay_rate=arena.decay_rate,
            restitution=arena.restitution,
            rest_speed=arena.rest_speed,
            power_scale=arena.power_scale,
        )
        obstacles = [
            Obstacle(o.position.x, o.position.y, o.size.width, o.size.height)
            for o in level.obstacles
        ]
        return Arena(arena.width, arena.height, obstacles=obstacles, physics=physics)

    def build_goal(self, level_number: int = 0) -> Goal:
        goal = self.get_level(level_number).goal
        return Goal(goal.position.x, goal.position.y, goal.diameter)

    def build_launch_site(self, level_number: int = 0) -> LaunchSite:
        marble = self.get_level(level_number).marble
        return LaunchSite(
            marble.position.x,
            marble.position.y,
            visual_identity=self.skins.individual,
            size=marble.diameter,
        )
