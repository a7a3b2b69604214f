"""Log file writer for statistics and summary.

The log holds no timestamps, so joining the same inputs twice gives a
byte-identical log.
"""

from pathlib import Path

from rich.console import Console

from bim_inner_join.config import Config
from bim_inner_join.io_utils import ENCODING, ENCODING_ERRORS
from bim_inner_join.models import JoinStatistics

console = Console()


def _exhausted_label(stats: JoinStatistics) -> str:
    if stats.exhausted_stream is None:
        return "none"
    return f"input {stats.exhausted_stream + 1}"


def write_log_file(config: Config, stats: JoinStatistics) -> Path:
    """Write the log file with run options and statistics.

    Args:
        config: Configuration used for the run
        stats: Statistics collected during the join

    Returns:
        Path to generated log file
    """
    log_path = config.log_file

    with open(log_path, "w", encoding=ENCODING, errors=ENCODING_ERRORS) as f:
        f.write("Options Set:\n")
        for i, path in enumerate(config.input_files, 1):
            f.write(f"Input {i}:                     {path}\n")
        f.write(f"Malformed line policy:       {config.on_malformed}\n")
        f.write(f"Allele conflict policy:      {config.on_conflict}\n")
        if config.verbose:
            f.write("Verbose logging flag set\n")
        f.write("\n\n")

        f.write("Records read\n")
        for i, (read, malformed) in enumerate(zip(stats.records_read, stats.malformed), 1):
            f.write(f" Input {i} {read} (malformed {malformed})\n")
        f.write(f"Total records read {stats.total_read}\n")
        f.write(f"First exhausted {_exhausted_label(stats)}\n\n")

        f.write(f"Join steps {stats.steps}\n")
        f.write(f"Laggard advances {stats.laggard_advances}\n")
        f.write(f"Loci shared by all inputs {stats.shared_loci}\n")
        f.write(f" Matching alleles {stats.matches}\n")
        f.write(f" Non matching alleles {stats.mismatches}\n")

    return log_path


def print_summary(stats: JoinStatistics) -> None:
    """Print summary statistics to the console.

    Args:
        stats: Statistics collected during the join
    """
    console.print("\n[bold]Join summary[/bold]")
    for i, (read, malformed) in enumerate(zip(stats.records_read, stats.malformed), 1):
        line = f" Input {i}: {read:,} records read"
        if malformed:
            line += f" [yellow]({malformed:,} malformed)[/yellow]"
        console.print(line)
    console.print(f" First exhausted: {_exhausted_label(stats)}")
    console.print(f"\nLoci shared by all inputs {stats.shared_loci:,}")
    console.print(f" Matching alleles      {stats.matches:,}")
    console.print(f" Non matching alleles  {stats.mismatches:,}")
