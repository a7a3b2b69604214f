"""Configuration dataclass for the BIM inner join."""

from dataclasses import dataclass, field
from pathlib import Path

from bim_inner_join.join import CONFLICT_POLICIES, ConflictPolicy
from bim_inner_join.parsers.bim import MALFORMED_POLICIES, MalformedPolicy

LOG_FILENAME = "bij_log.txt"


@dataclass
class Config:
    """Configuration for an inner join run.

    Attributes:
        input_files: .bim files to join, in order (at least two)
        output_dir: Directory for output files (default: current directory)
        on_malformed: Policy for unparseable lines ("strict", "skip", "legacy")
        on_conflict: Policy for same-locus allele conflicts ("advance", "fatal")
        verbose: Enable verbose logging
        write_log: Write the run log file next to the outputs
    """

    input_files: list[Path] = field(default_factory=list)
    output_dir: Path | None = None

    on_malformed: MalformedPolicy = "strict"
    on_conflict: ConflictPolicy = "advance"

    verbose: bool = False
    write_log: bool = True

    def __post_init__(self) -> None:
        """Normalize paths and set defaults."""
        self.input_files = [Path(p) for p in self.input_files]

        if self.output_dir is None:
            self.output_dir = Path.cwd()
        elif isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

    @property
    def n_files(self) -> int:
        """Number of inputs."""
        return len(self.input_files)

    @property
    def log_file(self) -> Path:
        """Path of the run log file."""
        return self.get_output_path(LOG_FILENAME)

    def get_output_path(self, filename: str) -> Path:
        """Get full output path for a file.

        Args:
            filename: Name of the output file

        Returns:
            Full path to the output file
        """
        assert self.output_dir is not None  # Set in __post_init__
        return self.output_dir / filename

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Input files are not checked here; opening them reports the failure.

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if self.n_files < 2:
            errors.append(f"At least two input files are required, got {self.n_files}")

        if self.output_dir is not None and not self.output_dir.is_dir():
            errors.append(f"Output directory does not exist: {self.output_dir}")

        if self.on_malformed not in MALFORMED_POLICIES:
            errors.append(
                f"Invalid malformed policy '{self.on_malformed}'. "
                f"Valid options: {', '.join(MALFORMED_POLICIES)}"
            )

        if self.on_conflict not in CONFLICT_POLICIES:
            errors.append(
                f"Invalid conflict policy '{self.on_conflict}'. "
                f"Valid options: {', '.join(CONFLICT_POLICIES)}"
            )

        return errors
