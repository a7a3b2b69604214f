"""Main orchestration for the BIM inner join.

Implements run_join(), which opens every input and output file, runs the
join and writes the log and summary.
"""

import logging
from contextlib import ExitStack

from rich.console import Console
from rich.markup import escape

from bim_inner_join.config import Config
from bim_inner_join.io_utils import smart_open
from bim_inner_join.join import inner_join
from bim_inner_join.models import JoinStatistics
from bim_inner_join.parsers.bim import BimStream
from bim_inner_join.writers.join_files import JoinFileWriter
from bim_inner_join.writers.log import print_summary, write_log_file

logger = logging.getLogger(__name__)

console = Console()


def run_join(config: Config) -> JoinStatistics:
    """Run the inner join described by config.

    Main entry point that coordinates:
    1. Opening every input file (plain or gzipped)
    2. Opening the output files
    3. Streaming the join
    4. Writing the log file (if enabled) and printing the summary

    All files are held open for the whole join and closed on every exit
    path, including errors.

    Args:
        config: Configuration with input files, output directory and policies

    Returns:
        Statistics for the run

    Raises:
        ValueError: If the configuration is invalid
        OSError: If an input or output file cannot be opened
        MalformedRecordError: On a malformed line under the strict policy
        AlleleConflictError: On an allele conflict under the fatal policy
    """
    errors = config.validate()
    if errors:
        raise ValueError("; ".join(errors))

    assert config.output_dir is not None  # Set in Config.__post_init__

    with ExitStack() as stack:
        streams = []
        for path in config.input_files:
            console.print(f"Opening: {escape(str(path))}", highlight=False)
            handle = stack.enter_context(smart_open(path))
            streams.append(
                BimStream(handle, source=str(path), on_malformed=config.on_malformed)
            )

        writer = stack.enter_context(JoinFileWriter(config.output_dir, config.n_files))

        stats = inner_join(streams, writer, on_conflict=config.on_conflict)

        output_paths = writer.get_file_paths()

    logger.info(
        "Wrote %d matches and %d mismatches to %s",
        writer.match_count,
        writer.mismatch_count,
        config.output_dir,
    )

    logger.debug("Wrote %s", ", ".join(str(p) for p in output_paths.values()))

    if config.write_log:
        log_path = write_log_file(config, stats)
        console.print(f"\nLog file: {log_path}")

    print_summary(stats)

    return stats
