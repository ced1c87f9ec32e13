"""Genetics module: the marble genome and its gene bounds."""

from marble_ga.genetics.genome import ANGLE, GENE_SPECS, POWER, GeneSpec, Genome

__all__ = [
    "Genome",
    "GeneSpec",
    "POWER",
    "ANGLE",
    "GENE_SPECS",
]
