"""Marble DNA: the launch power and launch angle genes.

This module provides:
- GeneSpec: Declarative bounds for a single gene
- POWER / ANGLE: The two gene specifications every genome carries
- Genome: The mutable container holding one marble's gene values
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from marble_ga.exceptions import GeneticsError


@dataclass(frozen=True)
class GeneSpec:
    """Specification for one gene.

    Attributes:
        name: Attribute name on the Genome
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
    """

    name: str
    min_val: float
    max_val: float

    def clamp(self, value: float) -> float:
        """Clamp ``value`` into ``[min_val, max_val]``."""
        return max(self.min_val, min(self.max_val, value))

    def contains(self, value: float) -> bool:
        return self.min_val <= value <= self.max_val

    def random_value(self, rng: random.Random) -> float:
        return rng.uniform(self.min_val, self.max_val)


POWER = GeneSpec("power", 0.0, 25.0)
ANGLE = GeneSpec("angle", 0.0, math.pi)

# Gene order used by crossover and mutation
GENE_SPECS: Tuple[GeneSpec, ...] = (POWER, ANGLE)


class Genome:
    """The DNA of a marble individual.

    Gene values are mutable so that mutation rewrites the child's own genome
    in place; the genome object itself keeps its identity across mutations.
    """

    __slots__ = ("power", "angle")

    def __init__(self, power: float, angle: float) -> None:
        self.power = _checked(POWER, power)
        self.angle = _checked(ANGLE, angle)

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "Genome":
        """Sample every gene uniformly within its bounds."""
        rng = rng or random
        return cls(power=POWER.random_value(rng), angle=ANGLE.random_value(rng))

    def get(self, spec: GeneSpec) -> float:
        return getattr(self, spec.name)

    def set_clamped(self, spec: GeneSpec, value: float) -> None:
        """Store ``value`` for ``spec`` after clamping it into the gene bounds."""
        if not math.isfinite(value):
            raise GeneticsError(f"Gene {spec.name!r} cannot take non-finite value {value!r}")
        setattr(self, spec.name, spec.clamp(value))

    def genes(self) -> Iterator[Tuple[GeneSpec, float]]:
        for spec in GENE_SPECS:
            yield spec, getattr(self, spec.name)

    def copy(self) -> "Genome":
        return Genome(self.power, self.angle)

    def to_dict(self) -> Dict[str, float]:
        return {spec.name: value for spec, value in self.genes()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return self.power == other.power and self.angle == other.angle

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Genome(power={self.power:.4f}, angle={self.angle:.4f})"


def _checked(spec: GeneSpec, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or not spec.contains(value):
        raise GeneticsError(
            f"Gene {spec.name!r} must be within [{spec.min_val}, {spec.max_val}], got {value!r}"
        )
    return value
