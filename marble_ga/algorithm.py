"""Genetic algorithm driver.

The algorithm owns the current population and advances it one generation at a
time. It is driven by an external fixed-rate tick loop:

    algorithm.initialize(population)
    algorithm.start_iteration()
    # every tick, after the simulation stepped:
    if algorithm.all_stopped():
        report = algorithm.stop_iteration()
        algorithm.start_iteration()

``stop_iteration`` scores the settled population, breeds a same-sized
population through roulette wheel selection, crossover and mutation, destroys
the old marbles and adopts the children. The algorithm never blocks; calling
``stop_iteration`` before ``all_stopped`` is true would truncate the flight of
the marbles still rolling, so it raises ``LifecycleError`` and leaves the
generation in flight.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from marble_ga.config.algorithm import GeneticAlgorithmConfig
from marble_ga.evolution.selection import RouletteWheel
from marble_ga.exceptions import LifecycleError, SelectionError
from marble_ga.individual import MarbleIndividual

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationReport:
    """Summary of one scored generation.

    Attributes:
        generation: Generation number (the first generation is 1)
        fitness_values: Fitness per individual, in population order
        best_fitness: Highest fitness of the generation
        best_genome: Gene values of the fittest individual
        closest_distance: Resting distance of the fittest individual
        mean_fitness: Average fitness of the generation
        reached_goal: Whether the fittest individual rests inside the goal
    """

    generation: int
    fitness_values: Tuple[float, ...]
    best_fitness: float
    best_genome: Dict[str, float]
    closest_distance: float
    mean_fitness: float
    reached_goal: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "generation": self.generation,
            "fitness_values": list(self.fitness_values),
            "best_fitness": self.best_fitness,
            "best_genome": dict(self.best_genome),
            "closest_distance": self.closest_distance,
            "mean_fitness": self.mean_fitness,
            "reached_goal": self.reached_goal,
        }


class GeneticAlgorithm:
    """Owns the population and advances it generation by generation.

    Args:
        config: Algorithm settings, validated on construction
        rng: Random number generator for selection and breeding
    """

    def __init__(
        self,
        config: Optional[GeneticAlgorithmConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = (config or GeneticAlgorithmConfig()).validate()
        self.rng = rng or random.Random()

        self._population: List[MarbleIndividual] = []
        self._iteration_count = 0
        self._initialized = False
        self._running = False
        self._advancing = False
        # Serializes every replacement of the population
        self._lock = threading.RLock()

    @property
    def iteration_count(self) -> int:
        """Number of the current generation; 0 until the first one starts."""
        return self._iteration_count

    @property
    def population(self) -> Tuple[MarbleIndividual, ...]:
        return tuple(self._population)

    @property
    def is_running(self) -> bool:
        """Whether a generation has been launched and not yet stopped."""
        return self._running

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise LifecycleError("initialize() must be called before driving the algorithm")

    def initialize(self, initial_population: Iterable[MarbleIndividual]) -> None:
        """Adopt the initial population and reset the generation counter."""
        with self._lock:
            if self._initialized:
                raise LifecycleError("The algorithm has already been initialized")
            self._population = list(initial_population)
            self._iteration_count = 0
            self._initialized = True
        logger.info("Initialized algorithm with %d individuals", len(self._population))

    def start_iteration(self) -> None:
        """Start a new generation by launching every individual."""
        self._require_initialized()
        if self._running:
            raise LifecycleError(f"Generation {self._iteration_count} is still in flight")

        self._iteration_count += 1
        self._running = True
        logger.info("Iteration %d", self._iteration_count)
        for individual in self._population:
            individual.launch()

    def all_stopped(self) -> bool:
        """Return True when no individual is moving; an empty population is stopped."""
        self._require_initialized()
        return all(not individual.is_moving() for individual in self._population)

    def stop_iteration(self) -> GenerationReport:
        """Stop the current generation and replace it with its offspring."""
        self._require_initialized()
        if not self._running:
            raise LifecycleError("No generation is in flight")
        if not self.all_stopped():
            raise LifecycleError("Cannot stop a generation while marbles are still moving")

        for individual in self._population:
            individual.stop()
        report = self._iteration_finished()
        self._running = False
        return report

    def kill_all(self) -> None:
        """Destroy every individual and empty the population.

        **Use with care**: also used to abort a run from outside.
        """
        self._require_initialized()
        with self._lock:
            for individual in self._population:
                individual.destroy()
            killed = len(self._population)
            self._population = []
            self._running = False
        logger.debug("Killed %d individuals", killed)

    def _iteration_finished(self) -> GenerationReport:
        """Score the population and breed the next one."""
        with self._lock:
            if self._advancing:
                raise LifecycleError("Generation advancement is not reentrant")
            self._advancing = True
            try:
                population = self._population
                if not population:
                    raise SelectionError(
                        f"Generation {self._iteration_count} has no individuals to select from"
                    )

                fitness_values = [individual.fitness() for individual in population]
                report = self._build_report(population, fitness_values)

                new_population = self._breed(population, fitness_values)

                self.kill_all()
                self._population = new_population
            finally:
                self._advancing = False

        logger.info(
            "Generation %d finished: best fitness %.6g, closest distance %.2f, mean fitness %.6g",
            report.generation,
            report.best_fitness,
            report.closest_distance,
            report.mean_fitness,
        )
        return report

    def _breed(
        self, population: List[MarbleIndividual], fitness_values: List[float]
    ) -> List[MarbleIndividual]:
        config = self.config
        wheel = RouletteWheel(population, fitness_values)

        new_population: List[MarbleIndividual] = []
        for _ in range(len(population)):
            father = wheel.spin(self.rng)
            mother = wheel.spin(self.rng)

            child = father.reproduce(mother, config.father_gene_probability, rng=self.rng)

            if self.rng.random() < config.mutation_probability:
                child.mutate(
                    config.gene_mutation_probability,
                    config.gene_mutation_range,
                    rng=self.rng,
                )

            new_population.append(child)
        return new_population

    def _build_report(
        self, population: List[MarbleIndividual], fitness_values: List[float]
    ) -> GenerationReport:
        best_index = max(range(len(fitness_values)), key=fitness_values.__getitem__)
        best = population[best_index]
        closest_distance = best.distance_to_goal()
        for index, individual in enumerate(population):
            logger.debug(
                "  #%d %r fitness=%.6g", index, individual.genome, fitness_values[index]
            )
        return GenerationReport(
            generation=self._iteration_count,
            fitness_values=tuple(fitness_values),
            best_fitness=fitness_values[best_index],
            best_genome=best.genome.to_dict(),
            closest_distance=closest_distance,
            mean_fitness=sum(fitness_values) / len(fitness_values),
            reached_goal=closest_distance <= best.goal.radius,
        )
