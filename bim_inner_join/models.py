"""Data models for the BIM inner join.

Variants as read from PLINK .bim files, the parse failure record produced by
the line reader, and the running statistics of a join.
"""

from dataclasses import dataclass, field

# Allele code PLINK writes for a monomorphic or uncalled allele
MISSING_ALLELE = "0"


@dataclass(slots=True)
class BimVariant:
    """Variant from PLINK .bim file.

    Attributes:
        chrom: Numeric chromosome code (X/Y/XY/MT mapped to 23-26)
        id: Variant identifier (rsID)
        pos: Base pair position
        allele1: First allele, "0" if unknown
        allele2: Second allele, "0" if unknown
        genetic_dist: Genetic distance column as read (never written back)
    """

    chrom: int
    id: str
    pos: int
    allele1: str
    allele2: str
    genetic_dist: str = "0"

    @property
    def locus(self) -> tuple[int, int]:
        """(chromosome, position) sort key."""
        return self.chrom, self.pos

    def __str__(self) -> str:
        return (
            f"<Variant {self.id} chr{self.chrom}:{self.pos}, "
            f"[{self.allele1}, {self.allele2}]>"
        )


@dataclass(slots=True)
class ParseError:
    """A .bim line that could not be turned into a BimVariant.

    Attributes:
        line_num: 1-based line number in the source
        line: Raw line without trailing newline
        reason: Human readable description of the problem
    """

    line_num: int
    line: str
    reason: str


@dataclass
class JoinStatistics:
    """Running statistics for one inner join.

    Attributes:
        n_streams: Number of joined inputs
        steps: Number of frontier evaluations
        matches: Loci shared by all inputs with compatible alleles
        mismatches: Loci shared by all inputs with conflicting alleles
        laggard_advances: Single-stream reads made to catch up to the maximum
        records_read: Records read per input
        malformed: Malformed lines seen per input
        exhausted_stream: Index of the first input that ran out (None if unset)
    """

    n_streams: int
    steps: int = 0
    matches: int = 0
    mismatches: int = 0
    laggard_advances: int = 0
    records_read: list[int] = field(default_factory=list)
    malformed: list[int] = field(default_factory=list)
    exhausted_stream: int | None = None

    def __post_init__(self) -> None:
        if not self.records_read:
            self.records_read = [0] * self.n_streams
        if not self.malformed:
            self.malformed = [0] * self.n_streams

    @property
    def shared_loci(self) -> int:
        """Loci present in every input (matched or not)."""
        return self.matches + self.mismatches

    @property
    def total_read(self) -> int:
        """Records read across all inputs."""
        return sum(self.records_read)
