"""Tests for the .bim reader."""

import io
import logging

import pytest

from bim_inner_join.exceptions import MalformedRecordError
from bim_inner_join.models import BimVariant, ParseError
from bim_inner_join.parsers.bim import (
    BimStream,
    iter_bim_records,
    normalize_chromosome,
    parse_bim_line,
    parse_bim_line_lenient,
)


class TestNormalizeChromosome:
    """Tests for chromosome code conversion."""

    def test_numeric(self) -> None:
        assert normalize_chromosome("1") == 1
        assert normalize_chromosome("22") == 22
        assert normalize_chromosome("01") == 1

    def test_chr_prefix(self) -> None:
        assert normalize_chromosome("chr7") == 7
        assert normalize_chromosome("CHR7") == 7

    def test_plink_codes(self) -> None:
        """X/Y/XY/MT map to PLINK's numeric codes."""
        assert normalize_chromosome("X") == 23
        assert normalize_chromosome("chrY") == 24
        assert normalize_chromosome("XY") == 25
        assert normalize_chromosome("MT") == 26

    @pytest.mark.parametrize("value", ["", "chr", "-1", "1.5", "Un", "chrUn_gl000220"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError, match="invalid chromosome"):
            normalize_chromosome(value)


class TestParseBimLine:
    """Tests for single line parsing."""

    def test_tab_separated(self) -> None:
        """Parse a tab-separated line."""
        result = parse_bim_line("1\trs123\t0\t10000\tA\tG\n", 1)

        assert isinstance(result, BimVariant)
        assert result.chrom == 1
        assert result.id == "rs123"
        assert result.pos == 10000
        assert result.allele1 == "A"
        assert result.allele2 == "G"
        assert result.genetic_dist == "0"

    def test_space_separated(self) -> None:
        """Parse a space-separated line."""
        result = parse_bim_line("2 rs9 0.53 500 C 0", 1)

        assert isinstance(result, BimVariant)
        assert result.chrom == 2
        assert result.genetic_dist == "0.53"
        assert result.allele2 == "0"

    def test_alleles_kept_verbatim(self) -> None:
        """Alleles are not normalized."""
        result = parse_bim_line("1 rs1 0 10 a TTA", 1)

        assert isinstance(result, BimVariant)
        assert result.allele1 == "a"
        assert result.allele2 == "TTA"

    def test_too_few_columns(self) -> None:
        """Four columns is an error result, not an exception."""
        result = parse_bim_line("1\trs123\t0\t10000\n", 7)

        assert isinstance(result, ParseError)
        assert result.line_num == 7
        assert result.line == "1\trs123\t0\t10000"
        assert "expected 6 columns, got 4" in result.reason

    def test_too_many_columns(self) -> None:
        result = parse_bim_line("1 rs1 0 10 A G extra", 1)

        assert isinstance(result, ParseError)
        assert "got 7" in result.reason

    def test_non_numeric_chromosome(self) -> None:
        result = parse_bim_line("chrUn rs1 0 10 A G", 3)

        assert isinstance(result, ParseError)
        assert "invalid chromosome" in result.reason

    @pytest.mark.parametrize("pos", ["abc", "-5", "1e5", "10.0"])
    def test_invalid_position(self, pos: str) -> None:
        result = parse_bim_line(f"1 rs1 0 {pos} A G", 1)

        assert isinstance(result, ParseError)
        assert "invalid position" in result.reason


class TestParseLenient:
    """Tests for legacy lenient parsing."""

    def test_bad_numbers_become_zero(self) -> None:
        v = parse_bim_line_lenient("chrUn rs1 0 abc A G")
        assert v.chrom == 0
        assert v.pos == 0
        assert v.id == "rs1"
        assert v.allele1 == "A"

    def test_missing_fields_become_empty(self) -> None:
        v = parse_bim_line_lenient("1 rs1 0 100")
        assert v.locus == (1, 100)
        assert v.allele1 == ""
        assert v.allele2 == ""

    def test_valid_line_unchanged(self) -> None:
        assert parse_bim_line_lenient("1 rs1 0 100 A G") == parse_bim_line("1 rs1 0 100 A G", 1)


class TestIterBimRecords:
    """Tests for streaming records from a handle."""

    def test_skips_blank_lines(self) -> None:
        handle = io.StringIO("1 rs1 0 10 A G\n\n   \n1 rs2 0 20 C T\n")
        results = list(iter_bim_records(handle))

        assert [r.id for r in results] == ["rs1", "rs2"]

    def test_reports_line_numbers(self) -> None:
        handle = io.StringIO("1 rs1 0 10 A G\n\nbad line\n")
        results = list(iter_bim_records(handle))

        assert isinstance(results[1], ParseError)
        assert results[1].line_num == 3

    def test_last_line_without_newline(self) -> None:
        """A final line with no newline is still a record."""
        handle = io.StringIO("1 rs1 0 10 A G\n1 rs2 0 20 C T")
        results = list(iter_bim_records(handle))

        assert len(results) == 2
        assert results[1].id == "rs2"


class TestBimStream:
    """Tests for the per-input cursor and malformed policies."""

    def test_reads_until_exhausted(self) -> None:
        stream = BimStream(io.StringIO("1 rs1 0 10 A G\n1 rs2 0 20 C T\n"))

        assert stream.next_variant().id == "rs1"
        assert stream.next_variant().id == "rs2"
        assert stream.next_variant() is None
        assert stream.exhausted
        assert stream.records_read == 2

    def test_stays_exhausted(self) -> None:
        stream = BimStream(io.StringIO(""))

        assert stream.next_variant() is None
        assert stream.next_variant() is None
        assert stream.records_read == 0

    def test_strict_raises(self) -> None:
        stream = BimStream(io.StringIO("1 rs1 0 10 A G\n1 rs2 0 abc C T\n"), source="a.bim")

        assert stream.next_variant().id == "rs1"
        with pytest.raises(MalformedRecordError) as exc_info:
            stream.next_variant()

        assert exc_info.value.source == "a.bim"
        assert exc_info.value.line_num == 2
        assert "invalid position" in str(exc_info.value)

    def test_malformed_error_is_value_error(self) -> None:
        stream = BimStream(io.StringIO("junk\n"))

        with pytest.raises(ValueError):
            stream.next_variant()

    def test_skip_policy(self, caplog: pytest.LogCaptureFixture) -> None:
        stream = BimStream(
            io.StringIO("1 rs1 0 10 A G\nbroken\n1 rs3 0 30 C T\n"),
            source="b.bim",
            on_malformed="skip",
        )

        with caplog.at_level(logging.WARNING, logger="bim_inner_join.parsers.bim"):
            ids = [stream.next_variant().id, stream.next_variant().id]

        assert ids == ["rs1", "rs3"]
        assert stream.malformed == 1
        assert stream.records_read == 2
        assert "Skipping malformed line 2 in b.bim" in caplog.text

    def test_legacy_policy(self) -> None:
        stream = BimStream(io.StringIO("X rs1 0 ten A G\n"), on_malformed="legacy")

        v = stream.next_variant()

        assert v.chrom == 23
        assert v.pos == 0
        assert stream.malformed == 1
        assert stream.records_read == 1

    def test_unknown_policy(self) -> None:
        with pytest.raises(ValueError, match="Unknown malformed policy"):
            BimStream(io.StringIO(""), on_malformed="ignore")  # type: ignore[arg-type]
