"""Crossover of two parent genomes.

Every gene is inherited whole from one parent: for each gene a uniform draw
below the configured father gene probability takes the father's value,
otherwise the mother's. Values are never blended, so a child's genes always
come from its parents' value sets.
"""

import random
from typing import Mapping, Optional

from marble_ga.genetics.genome import GENE_SPECS, Genome


def inherit_gene(
    father_value: float,
    mother_value: float,
    father_probability: float,
    rng: Optional[random.Random] = None,
) -> float:
    """Pick one parent's value for a single gene."""
    rng = rng or random
    return father_value if rng.random() < father_probability else mother_value


def crossover_genomes(
    father: Genome,
    mother: Genome,
    father_gene_probability: Mapping[str, float],
    rng: Optional[random.Random] = None,
) -> Genome:
    """Create a child genome from two parents.

    Args:
        father: First parent's genome (read only)
        mother: Second parent's genome (read only)
        father_gene_probability: Per gene, chance of taking the father's value
        rng: Random number generator (uses global if None)

    Returns:
        A new Genome that shares no state with either parent
    """
    rng = rng or random
    values = {
        spec.name: inherit_gene(
            father.get(spec),
            mother.get(spec),
            father_gene_probability[spec.name],
            rng=rng,
        )
        for spec in GENE_SPECS
    }
    return Genome(**values)
