"""Genetic algorithm settings consumed by the engine.

The engine reads these as plain values; parsing them from a level file is the
job of ``marble_ga.config.loader``.
"""

from dataclasses import dataclass, field
from typing import Dict

from marble_ga.exceptions import ConfigurationError
from marble_ga.genetics.genome import ANGLE, GENE_SPECS, POWER

DEFAULT_POPULATION_SIZE = 20

# Child mutation chance, then per-gene chances once a child is mutated
DEFAULT_MUTATION_PROBABILITY = 0.2
DEFAULT_POWER_MUTATION_PROBABILITY = 0.5
DEFAULT_ANGLE_MUTATION_PROBABILITY = 0.5

# Perturbations are drawn uniformly from [-range, +range]
DEFAULT_POWER_MUTATION_RANGE = 2.0
DEFAULT_ANGLE_MUTATION_RANGE = 0.2

DEFAULT_FATHER_GENE_PROBABILITY = 0.5


def _per_gene(power: float, angle: float) -> Dict[str, float]:
    return {POWER.name: power, ANGLE.name: angle}


@dataclass
class GeneticAlgorithmConfig:
    """Configuration for one evolutionary run.

    Attributes:
        population_size: Number of marbles per generation
        father_gene_probability: Per gene, chance a child inherits the father's value
        mutation_probability: Chance a freshly bred child is mutated at all
        gene_mutation_probability: Per gene, chance a mutated child's gene changes
        gene_mutation_range: Per gene, half-width of the uniform perturbation
    """

    population_size: int = DEFAULT_POPULATION_SIZE
    father_gene_probability: Dict[str, float] = field(
        default_factory=lambda: _per_gene(
            DEFAULT_FATHER_GENE_PROBABILITY, DEFAULT_FATHER_GENE_PROBABILITY
        )
    )
    mutation_probability: float = DEFAULT_MUTATION_PROBABILITY
    gene_mutation_probability: Dict[str, float] = field(
        default_factory=lambda: _per_gene(
            DEFAULT_POWER_MUTATION_PROBABILITY, DEFAULT_ANGLE_MUTATION_PROBABILITY
        )
    )
    gene_mutation_range: Dict[str, float] = field(
        default_factory=lambda: _per_gene(
            DEFAULT_POWER_MUTATION_RANGE, DEFAULT_ANGLE_MUTATION_RANGE
        )
    )

    def validate(self) -> "GeneticAlgorithmConfig":
        """Raise ConfigurationError if any value is out of range.

        Returns:
            self, so construction and validation can be chained
        """
        if self.population_size < 1:
            raise ConfigurationError(
                f"population_size must be at least 1, got {self.population_size}"
            )
        _check_probability("mutation_probability", self.mutation_probability)

        for spec in GENE_SPECS:
            for table_name in (
                "father_gene_probability",
                "gene_mutation_probability",
                "gene_mutation_range",
            ):
                table = getattr(self, table_name)
                if spec.name not in table:
                    raise ConfigurationError(f"{table_name} is missing gene {spec.name!r}")
            _check_probability(
                f"father_gene_probability[{spec.name}]",
                self.father_gene_probability[spec.name],
            )
            _check_probability(
                f"gene_mutation_probability[{spec.name}]",
                self.gene_mutation_probability[spec.name],
            )
            mutation_range = self.gene_mutation_range[spec.name]
            if not mutation_range >= 0.0:
                raise ConfigurationError(
                    f"gene_mutation_range[{spec.name}] must be non-negative, got {mutation_range!r}"
                )
        return self


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be within [0, 1], got {value!r}")
