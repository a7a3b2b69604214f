"""Locus ordering for .bim variants.

Variants are ordered by chromosome, then position. Alleles play no part in
the ordering: two variants at the same (chromosome, position) are the same
locus whatever their alleles.
"""

from collections.abc import Sequence

from bim_inner_join.models import BimVariant


def compare(a: BimVariant, b: BimVariant) -> int:
    """Compare two variants by locus.

    Args:
        a: First variant
        b: Second variant

    Returns:
        Negative if a sorts before b, zero on the same locus, positive otherwise

    Example:
        >>> compare(BimVariant(1, "rs1", 100, "A", "G"), BimVariant(2, "rs2", 50, "A", "G"))
        -1
    """
    if a.chrom != b.chrom:
        return -1 if a.chrom < b.chrom else 1
    if a.pos != b.pos:
        return -1 if a.pos < b.pos else 1
    return 0


def locus_eq(a: BimVariant, b: BimVariant) -> bool:
    """Check whether two variants sit on the same (chromosome, position)."""
    return a.chrom == b.chrom and a.pos == b.pos


def same_locus(frontier: Sequence[BimVariant]) -> bool:
    """Check whether every variant in the frontier shares the first one's locus."""
    first = frontier[0]
    return all(locus_eq(first, v) for v in frontier[1:])


def max_locus_index(frontier: Sequence[BimVariant]) -> int:
    """Find the index of the furthest-advanced variant.

    Scans in index order and only replaces the current maximum when a later
    variant is strictly greater, so ties resolve to the earliest index.

    Args:
        frontier: Current variant of each input (must not be empty)

    Returns:
        Index of the first variant holding the maximum locus
    """
    greatest = 0
    for i in range(1, len(frontier)):
        if compare(frontier[i], frontier[greatest]) > 0:
            greatest = i
    return greatest
