"""Marble individual controlled by the genetic algorithm.

An individual is composed of an agent handle spawned into the simulation, its
genome (the launch power and angle), the shared goal it aims at, and the launch
site it was spawned at. It does not subclass any simulation entity: everything
physical goes through the ``AgentHandle`` protocol.

Lifecycle:
    created -> launched -> settled -> scored -> destroyed
"""

from __future__ import annotations

import logging
import math
import random
import uuid
from typing import Mapping, Optional

from marble_ga.evolution.crossover import crossover_genomes
from marble_ga.evolution.mutation import mutate_genome
from marble_ga.exceptions import GeneticsError, LifecycleError
from marble_ga.genetics.genome import Genome
from marble_ga.protocols import AgentHandle, Goal, LaunchSite, Simulation

logger = logging.getLogger(__name__)

# Resting distances below this are treated as this distance, which caps the
# fitness of a marble lying exactly on the goal at 1 / MIN_FITNESS_DISTANCE**2.
MIN_FITNESS_DISTANCE = 1e-3
MAX_FITNESS = 1.0 / (MIN_FITNESS_DISTANCE * MIN_FITNESS_DISTANCE)


class MarbleIndividual:
    """One marble of a generation.

    Args:
        simulation: World the marble is spawned into
        launch_site: Start position, skin and diameter of the marble
        goal: Target the marble should come to rest at
        genome: Explicit DNA (a bred child); sampled at random when omitted
        rng: Random number generator used to sample a missing genome
    """

    def __init__(
        self,
        simulation: Simulation,
        launch_site: LaunchSite,
        goal: Goal,
        genome: Optional[Genome] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.individual_id = uuid.uuid4()
        self.simulation = simulation
        self.launch_site = launch_site
        self.goal = goal
        self.genome = genome if genome is not None else Genome.random(rng)

        self._agent: Optional[AgentHandle] = launch_site.spawn(simulation)
        self._fitness: Optional[float] = None

    @property
    def destroyed(self) -> bool:
        return self._agent is None

    def _require_agent(self) -> AgentHandle:
        if self._agent is None:
            raise LifecycleError(f"Individual {self.individual_id} has been destroyed")
        return self._agent

    def launch(self, genome: Optional[Genome] = None) -> None:
        """Launch the marble using ``genome`` (its own genome by default)."""
        agent = self._require_agent()
        if genome is None:
            genome = self.genome
        self._fitness = None
        agent.launch(genome.power, genome.angle)

    def is_moving(self) -> bool:
        return self._require_agent().is_moving()

    def stop(self) -> None:
        self._require_agent().stop()

    def distance_to_goal(self) -> float:
        return self._require_agent().position_distance_to(self.goal.position)

    def reached_goal(self) -> bool:
        """Whether the marble rests inside the goal's radius."""
        return self.distance_to_goal() <= self.goal.radius

    def fitness(self) -> float:
        """Score the marble as the reciprocal of its squared distance to the goal.

        The score is computed once per launch and cached. Distances below
        ``MIN_FITNESS_DISTANCE`` are floored, so the result is always finite
        and lies in ``(0, MAX_FITNESS]``.

        Raises:
            LifecycleError: If the marble is still moving or was destroyed
            GeneticsError: If the simulation reports a non-finite distance
        """
        agent = self._require_agent()
        if self._fitness is not None:
            return self._fitness

        if agent.is_moving():
            raise LifecycleError(
                f"Individual {self.individual_id} cannot be scored before it settles"
            )

        distance = agent.position_distance_to(self.goal.position)
        if not math.isfinite(distance) or distance < 0.0:
            raise GeneticsError(
                f"Individual {self.individual_id} reported an invalid distance {distance!r}"
            )

        distance = max(distance, MIN_FITNESS_DISTANCE)
        self._fitness = 1.0 / (distance * distance)
        return self._fitness

    def reproduce(
        self,
        mother: "MarbleIndividual",
        father_gene_probability: Mapping[str, float],
        rng: Optional[random.Random] = None,
    ) -> "MarbleIndividual":
        """Breed a child with ``self`` as the father.

        The child is spawned with the father's simulation, launch site and
        goal; within one generation both parents always share those.
        """
        self._require_agent()
        mother._require_agent()
        child_genome = crossover_genomes(
            self.genome, mother.genome, father_gene_probability, rng=rng
        )
        return MarbleIndividual(self.simulation, self.launch_site, self.goal, genome=child_genome)

    def mutate(
        self,
        gene_probability: Mapping[str, float],
        gene_range: Mapping[str, float],
        rng: Optional[random.Random] = None,
    ) -> bool:
        """Mutate this individual's own genome in place.

        A call does not guarantee a mutation; each gene changes with its own
        probability.
        """
        self._require_agent()
        return mutate_genome(self.genome, gene_probability, gene_range, rng=rng)

    def destroy(self) -> None:
        agent = self._require_agent()
        agent.destroy()
        self._agent = None
        logger.debug("Destroyed individual %s", self.individual_id)

    def __repr__(self) -> str:
        state = "destroyed" if self.destroyed else "alive"
        return f"MarbleIndividual({self.individual_id}, {self.genome!r}, {state})"
