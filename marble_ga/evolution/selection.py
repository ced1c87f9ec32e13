"""Fitness proportionate ("roulette wheel") parent selection.

Each individual owns a slice of ``[0, 1)`` proportional to its share of the
population's total fitness. The slices are laid out as ascending cutoffs:

    c[i] = c[i - 1] + fitness[i] / sum(fitness),  c[-1] = 0

A uniform draw ``r`` selects the smallest index with ``r < c[i]``. Summing
the shares can leave the last cutoff a hair below 1.0, in which case a draw
above it falls back to the last individual.
"""

import bisect
import math
import random
from typing import Generic, List, Optional, Sequence, TypeVar

from marble_ga.exceptions import SelectionError

T = TypeVar("T")


def compute_cutoffs(fitness_values: Sequence[float]) -> List[float]:
    """Compute the cumulative normalized cutoffs for ``fitness_values``.

    Raises:
        SelectionError: If the vector is empty, holds a negative or non-finite
            value, or sums to zero
    """
    if not fitness_values:
        raise SelectionError("Cannot select from an empty population")

    for index, value in enumerate(fitness_values):
        if not math.isfinite(value) or value < 0.0:
            raise SelectionError(
                f"Fitness values must be finite and non-negative, got {value!r} at index {index}"
            )

    total = math.fsum(fitness_values)
    if total <= 0.0:
        raise SelectionError("Cannot select when every fitness value is zero")

    cutoffs: List[float] = []
    previous = 0.0
    for value in fitness_values:
        previous = previous + value / total
        cutoffs.append(previous)
    return cutoffs


def select_index(cutoffs: Sequence[float], selection: float) -> int:
    """Return the smallest index whose cutoff exceeds ``selection``.

    Always returns a valid index: a draw that no cutoff exceeds (rounding
    left the last cutoff below 1.0) maps to the last individual.
    """
    if not cutoffs:
        raise SelectionError("Cannot select from an empty population")
    index = bisect.bisect_right(cutoffs, selection)
    return min(index, len(cutoffs) - 1)


class RouletteWheel(Generic[T]):
    """A roulette wheel built once per generation and spun once per parent.

    Args:
        population: Candidates, index aligned with ``fitness_values``
        fitness_values: One fitness value per candidate
    """

    def __init__(self, population: Sequence[T], fitness_values: Sequence[float]) -> None:
        if len(population) != len(fitness_values):
            raise SelectionError(
                f"Population ({len(population)}) and fitness values "
                f"({len(fitness_values)}) are not index aligned"
            )
        self._population = list(population)
        self._cutoffs = compute_cutoffs(fitness_values)

    @property
    def cutoffs(self) -> List[float]:
        return list(self._cutoffs)

    def probability_of(self, index: int) -> float:
        """Selection probability of the candidate at ``index``."""
        previous = self._cutoffs[index - 1] if index > 0 else 0.0
        return self._cutoffs[index] - previous

    def spin(self, rng: Optional[random.Random] = None) -> T:
        rng = rng or random
        return self._population[select_index(self._cutoffs, rng.random())]


def roulette_select(
    population: Sequence[T],
    fitness_values: Sequence[float],
    rng: Optional[random.Random] = None,
) -> T:
    """Select one candidate with probability proportional to its fitness."""
    return RouletteWheel(population, fitness_values).spin(rng)
