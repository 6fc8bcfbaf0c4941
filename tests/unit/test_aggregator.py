"""Tests for aggregation functionality."""

import pytest

from matriculas_scraper.core.aggregator import RecordIndex, aggregate, sort_key
from matriculas_scraper.core.models import MonthlySeries
from matriculas_scraper.core.normalizer import UNKNOWN_MONTH, month_index, normalize_record


def create_record(month: str = "Enero", year: int = 2024, series_end: str = "MFX") -> MonthlySeries:
    """Helper to create test records."""
    return MonthlySeries(month=month, year=year, series_end=series_end)


class TestAggregate:
    """Tests for aggregate function."""

    def test_case_differing_sources_dedupe(self):
        """Test that raw case differences normalize to one record."""
        source_a = [normalize_record("Enero", "2024", "MFX")]
        source_b = [normalize_record("enero", "2024", "mfx")]

        result = aggregate(source_a, source_b)

        assert result == [create_record()]

    def test_empty(self):
        assert aggregate() == []
        assert aggregate([], []) == []

    def test_sorted_by_year_then_month(self):
        records = [
            create_record("Marzo", 2024, "MKL"),
            create_record("Diciembre", 2023, "LZZ"),
            create_record("Enero", 2024, "MFX"),
            create_record("Julio", 2022, "LBB"),
        ]

        result = aggregate(records)

        assert [(r.year, r.month) for r in result] == [
            (2022, "Julio"),
            (2023, "Diciembre"),
            (2024, "Enero"),
            (2024, "Marzo"),
        ]

    def test_sort_property(self):
        """Test ordering holds for every adjacent pair."""
        records = [
            create_record(month, year, code)
            for year in (2025, 2021, 2023)
            for month, code in (("Octubre", "AB"), ("Enero", "CD"), (UNKNOWN_MONTH, "EF"))
        ]

        result = aggregate(records)

        for a, b in zip(result, result[1:]):
            assert a.year <= b.year
            if a.year == b.year:
                assert month_index(a.month) <= month_index(b.month)

    def test_unknown_month_sorts_first_within_year(self):
        result = aggregate([
            create_record("Enero", 2024, "MFX"),
            create_record(UNKNOWN_MONTH, 2024, "MAA"),
            create_record("Diciembre", 2023, "LZZ"),
        ])

        assert [r.month for r in result] == ["Diciembre", UNKNOWN_MONTH, "Enero"]

    def test_idempotent(self):
        records = [
            create_record("Marzo", 2024, "MKL"),
            create_record("Enero", 2024, "MFX"),
            create_record("Enero", 2024, "MFX"),
            create_record(UNKNOWN_MONTH, 2023, "LBB"),
        ]

        once = aggregate(records)

        assert aggregate(once) == once

    def test_last_write_wins(self):
        """Test that the later record instance survives."""
        first = create_record()
        second = create_record()

        result = aggregate([first], [second])

        assert len(result) == 1
        assert result[0] is second

    def test_renormalizes_series(self):
        result = aggregate([create_record(series_end="mf-x"), create_record(series_end="MFX")])

        assert result == [create_record(series_end="MFX")]

    def test_same_month_different_series_kept(self):
        """Test ties keep arrival order."""
        result = aggregate([create_record(series_end="MFX"), create_record(series_end="MFB")])

        assert [r.series_end for r in result] == ["MFX", "MFB"]

    def test_fallback_used_when_empty(self):
        fallback = [create_record(series_end="ZZZ"), create_record(series_end="AAA")]

        assert aggregate([], fallback=fallback) == fallback

    def test_fallback_ignored_when_records_found(self):
        result = aggregate([create_record()], fallback=[create_record(series_end="ZZZ")])

        assert result == [create_record()]


class TestRecordIndex:
    """Tests for RecordIndex class."""

    def test_add_and_len(self):
        index = RecordIndex()

        index.add(create_record(series_end="AAA"))
        index.add(create_record(series_end="BBB"))
        index.add(create_record(series_end="AAA"))

        assert len(index) == 2

    def test_extend_and_records(self):
        index = RecordIndex()
        index.extend([create_record("Mayo"), create_record("Abril")])

        assert [r.month for r in index.records()] == ["Abril", "Mayo"]

    def test_clear(self):
        index = RecordIndex()
        index.add(create_record())

        index.clear()

        assert len(index) == 0


class TestSortKey:
    """Tests for sort_key function."""

    def test_known_month(self):
        assert sort_key(create_record("Febrero", 2020)) == (2020, 1)

    def test_unknown_month(self):
        assert sort_key(create_record(UNKNOWN_MONTH, 2020)) == (2020, -1)
