"""Fixed-rate tick loop driving the genetic algorithm through an arena.

Each call to ``tick`` is one frame:

- if a new generation was requested, launch it;
- otherwise, while a generation is in flight, step the arena and, once every
  marble has come to rest, stop the generation and request the next one.

The loop never calls ``stop_iteration`` before ``all_stopped`` is true, so
every marble is scored at its final resting position.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from marble_ga.algorithm import GenerationReport, GeneticAlgorithm
from marble_ga.config.models import ConfigurationModel
from marble_ga.exceptions import SimulationError
from marble_ga.individual import MarbleIndividual
from marble_ga.simulation.arena import Arena

logger = logging.getLogger(__name__)

DEFAULT_MAX_TICKS_PER_GENERATION = 10_000


class EvolutionRunner:
    """Drives a ``GeneticAlgorithm`` one frame at a time.

    Args:
        algorithm: An initialized algorithm whose population lives in ``arena``
        arena: The simulation stepped once per frame
        max_ticks_per_generation: Frames a generation may take to settle
    """

    def __init__(
        self,
        algorithm: GeneticAlgorithm,
        arena: Arena,
        max_ticks_per_generation: int = DEFAULT_MAX_TICKS_PER_GENERATION,
    ) -> None:
        self.algorithm = algorithm
        self.arena = arena
        self.max_ticks_per_generation = max_ticks_per_generation
        self.reports: List[GenerationReport] = []

        self._new_iteration = False
        self._in_flight = False
        self._generation_ticks = 0

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def request_generation(self) -> None:
        """Ask for a generation to be launched on the next tick."""
        self._new_iteration = True

    def tick(self) -> Optional[GenerationReport]:
        """Advance one frame.

        Returns:
            The report of the generation that finished this frame, if any

        Raises:
            SimulationError: If a generation does not settle within
                ``max_ticks_per_generation`` frames
        """
        if self._new_iteration:
            self._new_iteration = False
            self.algorithm.start_iteration()
            self._in_flight = True
            self._generation_ticks = 0
            return None

        if not self._in_flight:
            return None

        self.arena.step()
        self._generation_ticks += 1

        if self.algorithm.all_stopped():
            self._in_flight = False
            report = self.algorithm.stop_iteration()
            self.reports.append(report)
            logger.debug(
                "Generation %d settled after %d ticks", report.generation, self._generation_ticks
            )
            self._new_iteration = True
            return report

        if self._generation_ticks >= self.max_ticks_per_generation:
            raise SimulationError(
                f"Generation {self.algorithm.iteration_count} did not settle within "
                f"{self.max_ticks_per_generation} ticks"
            )
        return None

    def run(self, max_generations: int, stop_on_goal: bool = False) -> List[GenerationReport]:
        """Run whole generations until ``max_generations`` have been scored.

        Args:
            max_generations: Number of generations to evaluate
            stop_on_goal: Stop early once a generation's best marble rests in the goal

        Returns:
            Reports of the generations evaluated by this call
        """
        reports: List[GenerationReport] = []
        if max_generations <= 0:
            return reports

        self.request_generation()
        while len(reports) < max_generations:
            report = self.tick()
            if report is None:
                continue
            reports.append(report)
            if stop_on_goal and report.reached_goal:
                logger.info("Goal reached in generation %d", report.generation)
                break

        # Leave the freshly bred population waiting rather than launched
        self._new_iteration = False
        return reports

    def abort(self) -> None:
        """Kill the whole population immediately."""
        logger.warning(
            "Aborting run in generation %d, killing %d individuals",
            self.algorithm.iteration_count,
            len(self.algorithm.population),
        )
        self._new_iteration = False
        self._in_flight = False
        self.algorithm.kill_all()


def build_runner(
    configuration: ConfigurationModel,
    level_number: int = 0,
    rng: Optional[random.Random] = None,
    max_ticks_per_generation: int = DEFAULT_MAX_TICKS_PER_GENERATION,
) -> EvolutionRunner:
    """Set up the arena, goal and random initial population of a level."""
    rng = rng or random.Random()
    arena = configuration.build_arena(level_number)
    goal = configuration.build_goal(level_number)
    launch_site = configuration.build_launch_site(level_number)
    algorithm_config = configuration.to_algorithm_config()

    algorithm = GeneticAlgorithm(algorithm_config, rng=rng)
    algorithm.initialize(
        MarbleIndividual(arena, launch_site, goal, rng=rng)
        for _ in range(algorithm_config.population_size)
    )
    logger.info(
        "Level %d: start (%.0f, %.0f), goal (%.0f, %.0f), %d obstacle(s)",
        level_number,
        launch_site.x,
        launch_site.y,
        goal.x,
        goal.y,
        len(arena.obstacles),
    )
    return EvolutionRunner(algorithm, arena, max_ticks_per_generation=max_ticks_per_generation)
