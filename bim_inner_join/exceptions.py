"""Exceptions raised by the BIM inner join."""

from bim_inner_join.models import BimVariant


class BimJoinError(Exception):
    """Base class for join errors."""


class MalformedRecordError(BimJoinError, ValueError):
    """A .bim line did not parse and the strict policy is in effect."""

    def __init__(self, source: str, line_num: int, reason: str) -> None:
        self.source = source
        self.line_num = line_num
        self.reason = reason
        super().__init__(f"Malformed record in {source} at line {line_num}: {reason}")


class AlleleConflictError(BimJoinError):
    """All inputs share a locus but their alleles are incompatible."""

    def __init__(self, frontier: list[BimVariant]) -> None:
        self.frontier = list(frontier)
        first = self.frontier[0]
        variants = ", ".join(str(v) for v in self.frontier)
        super().__init__(
            f"Allele conflict at chr{first.chrom}:{first.pos}: {variants}"
        )
