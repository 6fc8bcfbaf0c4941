"""Tests for data models."""

import pytest

from matriculas_scraper.core.models import Found, MonthlySeries, NotFound


class TestMonthlySeries:
    """Tests for MonthlySeries dataclass."""

    def test_to_dict(self):
        """Test public JSON shape."""
        record = MonthlySeries(month="Enero", year=2024, series_end="MFX")

        assert record.to_dict() == {"mes": "Enero", "año": 2024, "fin": "MFX"}

    def test_from_dict(self):
        record = MonthlySeries.from_dict({"mes": "Marzo", "año": "2023", "fin": "LZZ"})

        assert record == MonthlySeries(month="Marzo", year=2023, series_end="LZZ")

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            MonthlySeries.from_dict({"mes": "Marzo", "año": 2023})

    def test_key(self):
        record = MonthlySeries(month="Enero", year=2024, series_end="MFX")
        assert record.key == (2024, "Enero", "MFX")

    def test_frozen(self):
        record = MonthlySeries(month="Enero", year=2024, series_end="MFX")
        with pytest.raises(AttributeError):
            record.year = 2025


class TestExtractionResult:
    """Tests for Found/NotFound results."""

    def test_found_is_truthy(self):
        assert Found(MonthlySeries("Enero", 2024, "MFX"))

    def test_not_found_is_falsy(self):
        assert not NotFound()
        assert NotFound("bare").reason == "bare"
