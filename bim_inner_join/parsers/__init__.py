"""Parsers for PLINK .bim variant files."""

from bim_inner_join.parsers.bim import (
    MALFORMED_POLICIES,
    BimStream,
    MalformedPolicy,
    iter_bim_records,
    normalize_chromosome,
    parse_bim_line,
    parse_bim_line_lenient,
)

__all__ = [
    "MALFORMED_POLICIES",
    "BimStream",
    "MalformedPolicy",
    "iter_bim_records",
    "normalize_chromosome",
    "parse_bim_line",
    "parse_bim_line_lenient",
]
