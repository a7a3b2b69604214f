"""I/O utilities for reading plain or gzip-compressed .bim files.

Compression is detected from the file's magic bytes, so a .bim.gz and an
uncompressed .bim can be joined against each other.

Example:
    with smart_open(Path("study.bim.gz")) as f:
        line = f.readline()
"""

import gzip
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

# First two bytes of every gzip member
GZIP_MAGIC = b"\x1f\x8b"

# Undecodable bytes map to lone surrogates and are written back unchanged
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def is_gzipped(filepath: Path) -> bool:
    """Detect if a file is gzip-compressed.

    Checks magic bytes first, falls back to the extension if the file is
    too small or unreadable.

    Args:
        filepath: Path to file to check

    Returns:
        True if file is gzip-compressed
    """
    try:
        with open(filepath, "rb") as f:
            magic = f.read(2)
            if len(magic) >= 2:
                return magic == GZIP_MAGIC
    except OSError:
        pass

    return filepath.suffix == ".gz"


@contextmanager
def smart_open(filepath: Path) -> Iterator[IO[str]]:
    """Open a text file for reading with automatic gzip detection.

    Bytes that are not valid UTF-8 are decoded with surrogateescape, so
    variant IDs round-trip byte for byte when written with the same
    error handler.

    Args:
        filepath: Path to file (may be gzipped)

    Yields:
        Text handle positioned at the start of the file

    Raises:
        OSError: If the file cannot be opened (FileNotFoundError if missing)
    """
    if is_gzipped(filepath):
        f = gzip.open(filepath, "rt", encoding=ENCODING, errors=ENCODING_ERRORS)
    else:
        f = open(filepath, "rt", encoding=ENCODING, errors=ENCODING_ERRORS)

    try:
        yield f
    finally:
        f.close()
