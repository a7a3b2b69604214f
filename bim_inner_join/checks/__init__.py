"""Locus ordering and allele compatibility checks."""

from bim_inner_join.checks.alleles import (
    alleles_eq,
    frontier_matches,
    known_alleles,
    representative,
)
from bim_inner_join.checks.locus import compare, locus_eq, max_locus_index, same_locus

__all__ = [
    "alleles_eq",
    "compare",
    "frontier_matches",
    "known_alleles",
    "locus_eq",
    "max_locus_index",
    "representative",
    "same_locus",
]
