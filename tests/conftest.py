"""Pytest fixtures for bim_inner_join tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from bim_inner_join.models import BimVariant


class RecordingSink:
    """In-memory sink collecting the groups passed by the join."""

    def __init__(self) -> None:
        self.matches: list[list[BimVariant]] = []
        self.mismatches: list[list[BimVariant]] = []

    def write_match(self, frontier) -> None:
        self.matches.append(list(frontier))

    def write_mismatch(self, frontier) -> None:
        self.mismatches.append(list(frontier))


@pytest.fixture
def sink() -> RecordingSink:
    """Empty recording sink."""
    return RecordingSink()


@pytest.fixture
def write_bim(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """Return a helper writing .bim lines to a file under tmp_path."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines))
        return path

    return _write


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Output directory for join results."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def sample_files(write_bim) -> dict[str, Path]:
    """Create three sorted .bim files for integration testing.

    Test cases:
    - 1:100  present in all three, A/G everywhere -> match
    - 1:200  only in study1 -> skipped
    - 1:300  present in all three, A/0 vs A/G vs G/A -> match, study2 written
    - 2:50   present in all three, A/G vs C/T -> mismatch
    - 2:80   only in study2 and study3 -> skipped
    - 3:10   present in all three, T/C -> match
    - 3:20   in study1 and study3 -> not joined, study2 ends first
    """
    study1 = write_bim(
        "study1.bim",
        [
            "1\trs100\t0\t100\tA\tG",
            "1\trs200\t0\t200\tC\tT",
            "1\trs300\t0\t300\tA\t0",
            "2\trs250\t0\t50\tA\tG",
            "3\trs310\t0\t10\tT\tC",
            "3\trs320\t0\t20\tG\tA",
        ],
    )
    study2 = write_bim(
        "study2.bim",
        [
            "1 s2_100 0 100 A G",
            "1 s2_300 0.1 300 A G",
            "2 s2_250 0 50 C T",
            "2 s2_280 0 80 G T",
            "3 s2_310 0 10 T C",
        ],
    )
    study3 = write_bim(
        "study3.bim",
        [
            "1\ts3_100\t0\t100\tG\tA",
            "1\ts3_300\t0\t300\tG\tA",
            "2\ts3_250\t0\t50\tA\tG",
            "2\ts3_280\t0\t80\tG\tT",
            "3\ts3_310\t0\t10\tC\tT",
            "3\ts3_320\t0\t20\tG\tA",
        ],
    )
    return {"study1": study1, "study2": study2, "study3": study3}


def variant(chrom: int, pos: int, a1: str = "A", a2: str = "G", id: str = "rs") -> BimVariant:
    """Build a variant with sensible defaults."""
    return BimVariant(chrom=chrom, id=id, pos=pos, allele1=a1, allele2=a2)
