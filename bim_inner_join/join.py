"""Sorted-merge inner join across k .bim inputs.

Each input must be sorted by (chromosome, position). The join holds one
current variant per input (the frontier) and repeats:

1. Full match (every variant has the first one's locus and compatible
   alleles): write the group as a match and advance every input.
2. Same locus everywhere but alleles incompatible: apply the conflict
   policy. "advance" writes the group as a mismatch and advances every
   input; "fatal" raises AlleleConflictError.
3. Otherwise: find the furthest locus (earliest input wins ties) and
   advance every input that is strictly behind it. Inputs at the maximum
   stay where they are.

The join stops as soon as any input is exhausted. Records left in the
other inputs are never read. Every step reads at least one record, so the
number of steps is bounded by the total number of records.
"""

import logging
from collections.abc import Sequence
from typing import Literal, Protocol

from bim_inner_join.checks.alleles import frontier_matches
from bim_inner_join.checks.locus import compare, max_locus_index, same_locus
from bim_inner_join.exceptions import AlleleConflictError
from bim_inner_join.models import BimVariant, JoinStatistics
from bim_inner_join.parsers.bim import BimStream

logger = logging.getLogger(__name__)

ConflictPolicy = Literal["advance", "fatal"]
CONFLICT_POLICIES: tuple[str, ...] = ("advance", "fatal")


class JoinSink(Protocol):
    """Destination for matched and mismatched groups."""

    def write_match(self, frontier: Sequence[BimVariant]) -> None: ...

    def write_mismatch(self, frontier: Sequence[BimVariant]) -> None: ...


def inner_join(
    streams: Sequence[BimStream],
    sink: JoinSink,
    stats: JoinStatistics | None = None,
    on_conflict: ConflictPolicy = "advance",
) -> JoinStatistics:
    """Join the inputs on locus and report every shared locus to the sink.

    Args:
        streams: One cursor per input, in input order
        sink: Receives match and mismatch groups (index-aligned to streams)
        stats: Statistics to update (a new one is created if None)
        on_conflict: What to do when all inputs share a locus but their
            alleles disagree, "advance" or "fatal"

    Returns:
        Statistics for the run

    Raises:
        ValueError: If fewer than two streams are given or the policy is unknown
        AlleleConflictError: On an allele conflict under the "fatal" policy
        MalformedRecordError: Propagated from a strict stream
    """
    if len(streams) < 2:
        raise ValueError(f"At least two inputs are required, got {len(streams)}")
    if on_conflict not in CONFLICT_POLICIES:
        raise ValueError(
            f"Unknown conflict policy '{on_conflict}'. "
            f"Valid options: {', '.join(CONFLICT_POLICIES)}"
        )

    n = len(streams)
    if stats is None:
        stats = JoinStatistics(n_streams=n)

    frontier: list[BimVariant | None] = [stream.next_variant() for stream in streams]

    while all(v is not None for v in frontier):
        current: list[BimVariant] = frontier  # type: ignore[assignment]
        stats.steps += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Frontier: %s", ", ".join(str(v) for v in current))

        if frontier_matches(current):
            sink.write_match(current)
            stats.matches += 1
            to_advance = range(n)

        elif same_locus(current):
            if on_conflict == "fatal":
                raise AlleleConflictError(current)
            logger.debug("Allele conflict at chr%d:%d", current[0].chrom, current[0].pos)
            sink.write_mismatch(current)
            stats.mismatches += 1
            to_advance = range(n)

        else:
            greatest = current[max_locus_index(current)]
            to_advance = [i for i in range(n) if compare(current[i], greatest) < 0]
            stats.laggard_advances += len(to_advance)

        for i in to_advance:
            frontier[i] = streams[i].next_variant()

    stats.exhausted_stream = next(i for i, v in enumerate(frontier) if v is None)
    stats.records_read = [stream.records_read for stream in streams]
    stats.malformed = [stream.malformed for stream in streams]

    logger.info(
        "Input %d exhausted after %d steps; stopping join",
        stats.exhausted_stream + 1,
        stats.steps,
    )

    return stats
