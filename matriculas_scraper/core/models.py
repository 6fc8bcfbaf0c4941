"""
Data models for the monthly plate-series table.

Records serialize to the public wire shape ``{"mes", "año", "fin"}``.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class MonthlySeries:
    """
    One row of the monthly table: the last plate series issued in a month.

    Identity is the ``(year, month, series_end)`` triple.
    """

    month: str  # Canonical Spanish month name or the "??" sentinel
    year: int
    series_end: str  # Uppercase A-Z only, may be empty

    @property
    def key(self) -> tuple:
        """Identity key used for deduplication."""
        return (self.year, self.month, self.series_end)

    def to_dict(self) -> dict:
        """Convert to the public JSON shape."""
        return {"mes": self.month, "año": self.year, "fin": self.series_end}

    @classmethod
    def from_dict(cls, data: dict) -> "MonthlySeries":
        """Create from the public JSON shape (e.g., the fallback data file)."""
        return cls(
            month=str(data["mes"]),
            year=int(data["año"]),
            series_end=str(data["fin"]),
        )


@dataclass(frozen=True)
class Found:
    """Successful extraction."""
    record: MonthlySeries

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """No pattern applied to the text. Expected, not an error."""
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return False


ExtractionResult = Union[Found, NotFound]
