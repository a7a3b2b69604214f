"""Output files for the BIM inner join.

Output files (fixed names, overwritten on every run):
- bij_names_{i}.txt - matched variant IDs from input i (1-indexed), one per line
- bij_matches.bim - one representative record per matched locus
- bij_mismatches.bim - first input's record for each locus shared by all
  inputs whose alleles disagree

Records are written in .bim layout with the genetic distance set to 0.
"""

from collections.abc import Sequence
from pathlib import Path
from types import TracebackType
from typing import TextIO

from bim_inner_join.checks.alleles import representative
from bim_inner_join.io_utils import ENCODING, ENCODING_ERRORS
from bim_inner_join.models import BimVariant

MATCHES_FILENAME = "bij_matches.bim"
MISMATCHES_FILENAME = "bij_mismatches.bim"


def names_filename(index: int) -> str:
    """Name of the ID list for the input at 0-based index."""
    return f"bij_names_{index + 1}.txt"


def format_bim_line(variant: BimVariant) -> str:
    """Format a variant as a .bim line with zero genetic distance.

    Example:
        >>> format_bim_line(BimVariant(1, "rs1", 100, "A", "G"))
        '1\\trs1\\t0\\t100\\tA\\tG\\n'
    """
    return (
        f"{variant.chrom}\t{variant.id}\t0\t{variant.pos}\t"
        f"{variant.allele1}\t{variant.allele2}\n"
    )


class JoinFileWriter:
    """Manages all join output files.

    Opens every output file on initialization and writes match and
    mismatch groups as they are found. Implements the context manager
    protocol so the files are closed on every exit path.

    Usage:
        with JoinFileWriter(output_dir, n_files=2) as writer:
            inner_join(streams, writer)
    """

    def __init__(self, output_dir: Path, n_files: int) -> None:
        """Initialize writer and open all output files.

        Args:
            output_dir: Directory for output files (must exist)
            n_files: Number of joined inputs

        Raises:
            OSError: If any output file cannot be opened; files already
                opened are closed before the error propagates
        """
        self.output_dir = output_dir
        self.n_files = n_files

        self._files: list[TextIO] = []
        try:
            self.names_files = [self._open(names_filename(i)) for i in range(n_files)]
            self.matches_file = self._open(MATCHES_FILENAME)
            self.mismatches_file = self._open(MISMATCHES_FILENAME)
        except OSError:
            self.close()
            raise

        self.match_count = 0
        self.mismatch_count = 0

    def _open(self, filename: str) -> TextIO:
        f = open(
            self.output_dir / filename, "w", encoding=ENCODING, errors=ENCODING_ERRORS
        )
        self._files.append(f)
        return f

    def write_match(self, frontier: Sequence[BimVariant]) -> None:
        """Write a matched group.

        Each input's variant ID goes to that input's names file, and one
        representative record goes to the matches file.

        Args:
            frontier: Matched variants, index-aligned to the inputs
        """
        for names_file, variant in zip(self.names_files, frontier):
            names_file.write(f"{variant.id}\n")

        self.matches_file.write(format_bim_line(representative(frontier)))
        self.match_count += 1

    def write_mismatch(self, frontier: Sequence[BimVariant]) -> None:
        """Write a same-locus group whose alleles disagree.

        Args:
            frontier: Conflicting variants, index-aligned to the inputs
        """
        self.mismatches_file.write(format_bim_line(frontier[0]))
        self.mismatch_count += 1

    def close(self) -> None:
        """Close all file handles."""
        for f in self._files:
            f.close()

    def __enter__(self) -> "JoinFileWriter":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - close all files."""
        self.close()

    def get_file_paths(self) -> dict[str, Path]:
        """Get paths to all output files.

        Returns:
            Dictionary mapping file type to path
        """
        paths = {
            f"names_{i + 1}": self.output_dir / names_filename(i)
            for i in range(self.n_files)
        }
        paths["matches"] = self.output_dir / MATCHES_FILENAME
        paths["mismatches"] = self.output_dir / MISMATCHES_FILENAME
        return paths
