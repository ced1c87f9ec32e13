"""Evolution module for the marble genetic algorithm.

Unlike an open-ended simulation, every generation here ends with an explicit
fitness evaluation, and parents are drawn by fitness proportionate selection.

The module consolidates:
- Selection: Roulette wheel sampling of parents
- Crossover: Per-gene inheritance from father or mother
- Mutation: Bounded random perturbation of a child's genes
"""

from marble_ga.evolution.crossover import crossover_genomes, inherit_gene
from marble_ga.evolution.mutation import mutate_gene, mutate_genome
from marble_ga.evolution.selection import (
    RouletteWheel,
    compute_cutoffs,
    roulette_select,
    select_index,
)

__all__ = [
    # Selection
    "RouletteWheel",
    "compute_cutoffs",
    "select_index",
    "roulette_select",
    # Crossover
    "crossover_genomes",
    "inherit_gene",
    # Mutation
    "mutate_gene",
    "mutate_genome",
]
