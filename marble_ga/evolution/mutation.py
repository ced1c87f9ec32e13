"""Mutation operations for genetic variation.

Mutations introduce random variation into a freshly bred child, letting the
population explore launches neither parent tried. Each gene mutates
independently: a perturbation drawn uniformly from ``[-range, +range]`` is
added to the current value and the result is clamped back into the gene's
bounds, so a mutated genome can never leave the valid launch space.
"""

import logging
import random
from typing import Mapping, Optional

from marble_ga.genetics.genome import GENE_SPECS, GeneSpec, Genome

logger = logging.getLogger(__name__)


def mutate_gene(
    value: float,
    spec: GeneSpec,
    mutation_probability: float,
    mutation_range: float,
    rng: Optional[random.Random] = None,
) -> float:
    """Mutate a single gene value with uniform noise.

    Args:
        value: Current gene value
        spec: Bounds of the gene
        mutation_probability: Probability of mutation (0.0-1.0)
        mutation_range: Half-width of the uniform perturbation
        rng: Random number generator (uses global if None)

    Returns:
        Mutated value, clamped to the gene bounds
    """
    rng = rng or random

    if rng.random() < mutation_probability:
        value += rng.uniform(-mutation_range, mutation_range)

    return spec.clamp(value)


def mutate_genome(
    genome: Genome,
    gene_probability: Mapping[str, float],
    gene_range: Mapping[str, float],
    rng: Optional[random.Random] = None,
) -> bool:
    """Mutate ``genome`` in place, gene by gene.

    Args:
        genome: The child's own genome, never a parent's
        gene_probability: Per-gene mutation probability keyed by gene name
        gene_range: Per-gene perturbation half-width keyed by gene name
        rng: Random number generator (uses global if None)

    Returns:
        True if at least one gene value changed
    """
    rng = rng or random
    changed = False

    for spec in GENE_SPECS:
        before = genome.get(spec)
        after = mutate_gene(
            before,
            spec,
            gene_probability[spec.name],
            gene_range[spec.name],
            rng=rng,
        )
        if after != before:
            genome.set_clamped(spec, after)
            changed = True
            logger.debug("Mutated %s: %.4f -> %.4f", spec.name, before, after)

    return changed
