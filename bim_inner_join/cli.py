"""Typer CLI for the BIM inner join.

Usage:
    # Join two files, outputs in the current directory
    bim-inner-join study1.bim study2.bim

    # Three files, outputs elsewhere, skip malformed lines
    bim-inner-join a.bim b.bim.gz c.bim -o joined/ --on-malformed skip
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from bim_inner_join import __version__
from bim_inner_join.exceptions import BimJoinError

app = typer.Typer(
    name="bim-inner-join",
    help="Inner join of position-sorted PLINK .bim files with allele checking",
    add_completion=False,
)

console = Console()

USAGE = "Usage:\n\tbim-inner-join file1.bim file2.bim [file3.bim ...]"


class OnMalformed(str, Enum):
    """Handling of .bim lines that do not parse."""

    strict = "strict"
    skip = "skip"
    legacy = "legacy"


class OnConflict(str, Enum):
    """Handling of loci shared by all inputs with conflicting alleles."""

    advance = "advance"
    fatal = "fatal"


def print_usage() -> None:
    """Print the short usage text."""
    console.print(USAGE, markup=False, highlight=False)


@app.command()
def join(
    files: Annotated[
        list[Path] | None,
        typer.Argument(
            help=".bim files sorted by chromosome then position (at least two)",
            show_default=False,
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir", "-o",
            help="Output directory (default: current directory)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    on_malformed: Annotated[
        OnMalformed,
        typer.Option(
            "--on-malformed",
            help="Malformed lines: 'strict' aborts, 'skip' drops them, 'legacy' reads them leniently",
        ),
    ] = OnMalformed.strict,
    on_conflict: Annotated[
        OnConflict,
        typer.Option(
            "--on-conflict",
            help="Same locus with conflicting alleles: 'advance' records a mismatch, 'fatal' aborts",
        ),
    ] = OnConflict.advance,
    no_log: Annotated[
        bool,
        typer.Option(
            "--no-log",
            help="Skip writing the bij_log.txt run log",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Enable verbose logging",
        ),
    ] = False,
) -> None:
    """Join .bim files on chromosome and position.

    Streams all files in lockstep and writes, for every locus present in
    all of them with compatible alleles, the variant ID from each file to
    bij_names_<i>.txt and one record to bij_matches.bim. Loci present in
    all files whose alleles conflict go to bij_mismatches.bim. The join
    stops when the shortest file runs out.

    Example usage:

        bim-inner-join study1.bim study2.bim

        bim-inner-join a.bim b.bim c.bim -o joined/ --on-malformed skip
    """
    if not files or len(files) < 2:
        print_usage()
        raise typer.Exit(code=1)

    from bim_inner_join.config import Config
    from bim_inner_join.main import run_join

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    console.print("\n")
    console.print("[bold]BIM Inner Join[/bold]", style="blue")
    console.print(f"v{__version__}\n")

    if output_dir is not None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            console.print(
                f"[red]ERROR:[/red] Could not create {escape(str(output_dir))}: {escape(str(e))}",
                highlight=False,
            )
            raise typer.Exit(code=1)

    config = Config(
        input_files=files,
        output_dir=output_dir,
        on_malformed=on_malformed.value,
        on_conflict=on_conflict.value,
        verbose=verbose,
        write_log=not no_log,
    )

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]ERROR:[/red] {error}")
        raise typer.Exit(code=1)

    try:
        run_join(config)
    except OSError as e:
        target = e.filename if e.filename is not None else e
        console.print(f"[red]ERROR:[/red] Could not open {escape(str(target))}", highlight=False)
        raise typer.Exit(code=1)
    except BimJoinError as e:
        console.print(f"[red]ERROR:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)

    console.print("\n[green]Join complete.[/green]\n")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
