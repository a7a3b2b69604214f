"""PLINK BIM file reader.

Reads .bim files one record at a time so that arbitrarily large inputs can
be joined in bounded memory. Supports gzipped files.

BIM file format (tab/space-separated, no header):
chromosome  rsID  genetic_distance  position  allele1  allele2
1           rs123 0                 10000     A        G

A line that does not parse comes back as a ParseError instead of raising;
BimStream decides what to do with it according to its malformed policy:

- strict: raise MalformedRecordError (default)
- skip: log a warning and move on to the next line
- legacy: keep the line, with unparseable numbers read as 0 and missing
  fields read as empty strings
"""

import logging
from collections.abc import Iterator
from typing import IO, Literal

from bim_inner_join.exceptions import MalformedRecordError
from bim_inner_join.models import BimVariant, ParseError

logger = logging.getLogger(__name__)

MalformedPolicy = Literal["strict", "skip", "legacy"]
MALFORMED_POLICIES: tuple[str, ...] = ("strict", "skip", "legacy")

BIM_COLUMNS = 6

# PLINK numeric codes for the non-autosomal chromosomes
CHROMOSOME_CODES: dict[str, int] = {
    "X": 23,
    "Y": 24,
    "XY": 25,
    "MT": 26,
    "M": 26,
}


def normalize_chromosome(chr_val: str) -> int:
    """Convert a chromosome column to its numeric code.

    Args:
        chr_val: Chromosome value (may include "chr" prefix)

    Returns:
        Chromosome number, with X/Y/XY/MT mapped to 23/24/25/26

    Raises:
        ValueError: If the value is not a known chromosome

    Example:
        >>> normalize_chromosome("chr1")
        1
        >>> normalize_chromosome("X")
        23
    """
    if chr_val.lower().startswith("chr"):
        chr_val = chr_val[3:]

    code = CHROMOSOME_CODES.get(chr_val.upper())
    if code is not None:
        return code

    if not (chr_val.isascii() and chr_val.isdigit()):
        raise ValueError(f"invalid chromosome '{chr_val}'")
    return int(chr_val)


def _parse_position(pos_val: str) -> int:
    if not (pos_val.isascii() and pos_val.isdigit()):
        raise ValueError(f"invalid position '{pos_val}'")
    return int(pos_val)


def parse_bim_line(line: str, line_num: int) -> BimVariant | ParseError:
    """Parse one .bim line.

    Args:
        line: Raw line (trailing newline allowed)
        line_num: 1-based line number, reported back on failure

    Returns:
        BimVariant on success, ParseError describing the problem otherwise
    """
    line = line.rstrip("\n")
    parts = line.split()

    if len(parts) != BIM_COLUMNS:
        return ParseError(
            line_num=line_num,
            line=line,
            reason=f"expected {BIM_COLUMNS} columns, got {len(parts)}",
        )

    try:
        chrom = normalize_chromosome(parts[0])
        pos = _parse_position(parts[3])
    except ValueError as e:
        return ParseError(line_num=line_num, line=line, reason=str(e))

    return BimVariant(
        chrom=chrom,
        id=parts[1],
        pos=pos,
        allele1=parts[4],
        allele2=parts[5],
        genetic_dist=parts[2],
    )


def parse_bim_line_lenient(line: str) -> BimVariant:
    """Parse one .bim line without validation.

    Unparseable chromosome or position values become 0, absent fields
    become empty strings and extra fields are ignored.
    """
    parts = line.rstrip("\n").split()
    parts += [""] * (BIM_COLUMNS - len(parts))

    try:
        chrom = normalize_chromosome(parts[0])
    except ValueError:
        chrom = 0
    try:
        pos = _parse_position(parts[3])
    except ValueError:
        pos = 0

    return BimVariant(
        chrom=chrom,
        id=parts[1],
        pos=pos,
        allele1=parts[4],
        allele2=parts[5],
        genetic_dist=parts[2],
    )


def iter_bim_records(handle: IO[str]) -> Iterator[BimVariant | ParseError]:
    """Stream parse results from an open .bim handle.

    Blank lines are skipped. The iterator ends at end of file.

    Args:
        handle: Text handle positioned at the first line

    Yields:
        BimVariant or ParseError for each non-blank line
    """
    for line_num, line in enumerate(handle, 1):
        if not line.strip():
            continue
        yield parse_bim_line(line, line_num)


class BimStream:
    """Cursor over one .bim input.

    Hands out one variant at a time and applies the malformed policy to
    lines that do not parse. Once next_variant() returns None the stream is
    exhausted and stays so.

    Usage:
        with smart_open(path) as f:
            stream = BimStream(f, source=str(path))
            while (variant := stream.next_variant()) is not None:
                ...
    """

    def __init__(
        self,
        handle: IO[str],
        source: str = "<stream>",
        on_malformed: MalformedPolicy = "strict",
    ) -> None:
        """Wrap an open handle.

        Args:
            handle: Text handle to read from
            source: Name used in log and error messages
            on_malformed: "strict", "skip" or "legacy"

        Raises:
            ValueError: If on_malformed is not a known policy
        """
        if on_malformed not in MALFORMED_POLICIES:
            raise ValueError(
                f"Unknown malformed policy '{on_malformed}'. "
                f"Valid options: {', '.join(MALFORMED_POLICIES)}"
            )

        self.source = source
        self.on_malformed = on_malformed
        self._records = iter_bim_records(handle)

        self.records_read = 0
        self.malformed = 0
        self.exhausted = False

    def next_variant(self) -> BimVariant | None:
        """Read the next variant.

        Returns:
            Next BimVariant, or None once the input is exhausted

        Raises:
            MalformedRecordError: On a malformed line under the strict policy
        """
        if self.exhausted:
            return None

        for result in self._records:
            if isinstance(result, ParseError):
                variant = self._handle_malformed(result)
                if variant is None:
                    continue
            else:
                variant = result

            self.records_read += 1
            return variant

        self.exhausted = True
        return None

    def _handle_malformed(self, error: ParseError) -> BimVariant | None:
        self.malformed += 1

        if self.on_malformed == "strict":
            raise MalformedRecordError(self.source, error.line_num, error.reason)

        if self.on_malformed == "skip":
            logger.warning(
                "Skipping malformed line %d in %s: %s",
                error.line_num,
                self.source,
                error.reason,
            )
            return None

        logger.debug(
            "Reading malformed line %d in %s leniently: %s",
            error.line_num,
            self.source,
            error.reason,
        )
        return parse_bim_line_lenient(error.line)
