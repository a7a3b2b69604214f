"""Allele compatibility between variants at the same locus.

PLINK writes "0" for an allele it could not determine, typically at a
monomorphic site. Such alleles are left out of the comparison, so A/0
matches G/A while A/0 does not match T/G: two variants are compatible when
the set of their known alleles has at most two members.
"""

from collections.abc import Sequence

from bim_inner_join.checks.locus import locus_eq
from bim_inner_join.models import MISSING_ALLELE, BimVariant


def known_alleles(*variants: BimVariant) -> set[str]:
    """Collect the non-missing alleles of one or more variants.

    Example:
        >>> sorted(known_alleles(BimVariant(1, "rs1", 100, "A", "0")))
        ['A']
    """
    alleles: set[str] = set()
    for variant in variants:
        for allele in (variant.allele1, variant.allele2):
            if allele != MISSING_ALLELE:
                alleles.add(allele)
    return alleles


def alleles_eq(a: BimVariant, b: BimVariant) -> bool:
    """Check that two variants are the same locus with compatible alleles.

    Args:
        a: First variant
        b: Second variant

    Returns:
        True if the loci are equal and at most two distinct known alleles
        appear across both variants

    Example:
        >>> alleles_eq(BimVariant(1, "rs1", 100, "A", "0"), BimVariant(1, "rs1b", 100, "G", "A"))
        True
        >>> alleles_eq(BimVariant(1, "rs1", 100, "A", "0"), BimVariant(1, "rs1b", 100, "T", "G"))
        False
    """
    return locus_eq(a, b) and len(known_alleles(a, b)) <= 2


def frontier_matches(frontier: Sequence[BimVariant]) -> bool:
    """Check whether the whole frontier forms a match.

    Every variant is checked against the first one only; variants other than
    the first are never compared with each other.
    """
    reference = frontier[0]
    return all(alleles_eq(reference, v) for v in frontier[1:])


def is_fully_called(variant: BimVariant) -> bool:
    """Check that neither allele is missing."""
    return variant.allele1 != MISSING_ALLELE and variant.allele2 != MISSING_ALLELE


def representative(frontier: Sequence[BimVariant]) -> BimVariant:
    """Pick the variant written out for a matched group.

    Returns:
        First variant (in input order) with both alleles known, or the first
        variant if every one of them has a missing allele
    """
    for variant in frontier:
        if is_fully_called(variant):
            return variant
    return frontier[0]
