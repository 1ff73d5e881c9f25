"""
Tests for suite output formatting.
"""

import copy
import csv
import dataclasses
import io
import json

import pytest

from sdlp_bench.capacity import analyze_capacity
from sdlp_bench.formatters import (
    CAPACITY_COLUMNS,
    RESULT_COLUMNS,
    UnsupportedFormatError,
    format_bytes,
    format_duration,
    format_output,
    format_rate,
    format_simple_table,
)
from sdlp_bench.models import BenchmarkResult, BenchmarkSuite, Category, OutputFormat


def _csv_blocks(text):
    results_block, capacity_block = text.split("\n\n")
    return (list(csv.reader(io.StringIO(results_block))),
            list(csv.reader(io.StringIO(capacity_block))))


class TestJsonFormat:
    """JSON rendering."""

    def test_round_trip(self, sample_suite):
        parsed = json.loads(format_output(sample_suite, "json"))
        assert BenchmarkSuite.from_dict(parsed) == sample_suite

    def test_field_names(self, sample_suite):
        parsed = json.loads(format_output(sample_suite, OutputFormat.JSON))
        assert parsed["summary"]["totalTests"] == 4
        assert parsed["capacityAnalysis"][0]["efficiency"] == pytest.approx(0.4)
        assert parsed["results"][3]["metadata"]["expectedRatio"] is None

    def test_round_trip_with_sequence_metadata(self, sample_suite):
        extra = BenchmarkResult.from_timing("Create batch", Category.CREATION, 2, 2.0,
                                            {'sizes': (32, 64), 'labels': ['a', 'b']})
        suite = dataclasses.replace(sample_suite, results=sample_suite.results + (extra,), summary=None)

        parsed = json.loads(format_output(suite, "json"))

        assert parsed["results"][-1]["metadata"]["sizes"] == [32, 64]
        assert BenchmarkSuite.from_dict(parsed) == suite

    def test_round_trip_keeps_compressed_flag(self, sample_suite):
        suite = dataclasses.replace(sample_suite, capacity_analysis=(
            analyze_capacity(100, 250), analyze_capacity(100, 250, baseline_length=250)))

        restored = BenchmarkSuite.from_dict(json.loads(format_output(suite, "json")))

        assert [c.compressed for c in restored.capacity_analysis] == [False, True]


class TestCsvFormat:
    """CSV rendering."""

    def test_headers(self, sample_suite):
        results, capacity = _csv_blocks(format_output(sample_suite, "csv"))
        assert results[0] == RESULT_COLUMNS
        assert capacity[0] == CAPACITY_COLUMNS
        assert ",".join(RESULT_COLUMNS) == "name,category,iterations,totalTime,averageTime,operationsPerSecond"

    def test_row_counts(self, sample_suite):
        results, capacity = _csv_blocks(format_output(sample_suite, "csv"))
        assert len(results) - 1 == len(sample_suite.results)
        assert len(capacity) - 1 == len(sample_suite.capacity_analysis)

    def test_quoting(self, sample_suite):
        text = format_output(sample_suite, "csv")
        assert '"Verify ""quoted"", with comma"' in text

        results, _ = _csv_blocks(text)
        assert results[3][0] == 'Verify "quoted", with comma'
        assert results[3][1] == "verification"

    def test_values(self, sample_suite):
        results, capacity = _csv_blocks(format_output(sample_suite, "csv"))
        assert results[1] == ["Create small (no compression)", "creation", "4", "4.000", "1.000", "1000.00"]
        assert capacity[1] == ["100", "250", "0.4000", "1.0000"]


class TestTableFormat:
    """Human-readable rendering."""

    def test_sections(self, sample_suite):
        text = format_output(sample_suite, "table")

        assert "SDLP Performance Benchmark Suite v1.0.0" in text
        assert "2024-01-01T10:00:00.000+00:00" in text
        assert "Platform: linux/x86_64" in text
        assert "CREATION PERFORMANCE" in text
        assert "VERIFICATION PERFORMANCE" in text
        assert "COMPRESSION PERFORMANCE" in text
        assert "CAPACITY UTILIZATION ANALYSIS" in text
        assert "KEY INSIGHTS" in text
        assert text.index("KEY INSIGHTS") < text.index("SUMMARY\n")

    def test_empty_category_skipped(self, sample_suite):
        assert "CAPACITY PERFORMANCE" not in format_output(sample_suite, "table")

    def test_values(self, sample_suite):
        text = format_output(sample_suite, "table")

        assert "1.00ms" in text
        assert "40.0%" in text
        assert "Total Tests: 4" in text
        assert "Avg Creation Time: 2.00ms" in text
        assert "Best Compression: 75% reduction" in text
        assert "Fits QR Code optimized (2KB): 2/2 links" in text

    def test_compressed_entry_with_unit_ratio(self, sample_suite):
        suite = dataclasses.replace(sample_suite, capacity_analysis=(
            analyze_capacity(100, 250), analyze_capacity(100, 250, baseline_length=250)))

        lines = format_output(suite, "table").splitlines()
        start = lines.index("📏 CAPACITY UTILIZATION ANALYSIS")
        plain_row, compressed_row = lines[start + 4], lines[start + 5]

        assert plain_row.endswith("None")
        assert compressed_row.endswith("100.0%")

    def test_notes(self, sample_suite):
        text = format_output(sample_suite, "table")
        assert "2.0KB, Compressed" in text
        assert "75% smaller" in text


class TestFormatOutput:
    """Format dispatch."""

    def test_unsupported_format(self, sample_suite):
        with pytest.raises(UnsupportedFormatError):
            format_output(sample_suite, "xml")

    def test_unsupported_format_is_value_error(self, sample_suite):
        with pytest.raises(ValueError):
            format_output(sample_suite, None)

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_suite_not_mutated(self, sample_suite, fmt):
        before = copy.deepcopy(sample_suite)
        format_output(sample_suite, fmt)
        assert sample_suite == before


class TestHelpers:
    """Unit formatting helpers."""

    def test_format_duration(self):
        assert format_duration(0.5) == "500.00µs"
        assert format_duration(12.346) == "12.35ms"
        assert format_duration(2500) == "2.50s"

    def test_format_bytes(self):
        assert format_bytes(512) == "512B"
        assert format_bytes(2048) == "2.0KB"
        assert format_bytes(3 * 1024 * 1024) == "3.0MB"

    def test_format_rate(self):
        assert format_rate(250.4) == "250 ops/sec"
        assert format_rate(12500) == "12.5K ops/sec"

    def test_simple_table_alignment(self):
        text = format_simple_table([["A", "Long header"], ["value", "x"]])
        lines = text.splitlines()
        assert lines[0] == "A     | Long header"
        assert lines[1] == "------+------------"
        assert lines[2] == "value | x"

    def test_simple_table_empty(self):
        assert format_simple_table([]) == ""
