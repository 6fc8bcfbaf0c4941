"""
Record aggregation: merge, deduplicate and sort.

Merges records from several sources keyed by ``(year, month, series_end)``.
Later records overwrite earlier ones with the same key.
"""

from typing import Iterable, Optional

import structlog

from .models import MonthlySeries
from .normalizer import month_index, normalize_series

logger = structlog.get_logger(__name__)


def sort_key(record: MonthlySeries) -> tuple[int, int]:
    """
    Canonical ordering key.

    The unknown-month sentinel has index -1, so within a year those records
    sort before Enero.
    """
    return (record.year, month_index(record.month))


class RecordIndex:
    """
    Key -> record map with last-write-wins semantics.

    Keeps first-seen insertion order for keys, so ties in sort_key
    come out in arrival order.
    """

    def __init__(self):
        """Initialize an empty index."""
        self._records: dict[tuple, MonthlySeries] = {}

    def add(self, record: MonthlySeries) -> None:
        """
        Add a record, re-normalizing its series.

        Args:
            record: Record to index
        """
        series_end = normalize_series(record.series_end)
        if series_end != record.series_end:
            record = MonthlySeries(record.month, record.year, series_end)

        if record.key in self._records:
            logger.debug(
                "record_overwritten",
                year=record.year,
                month=record.month,
                series_end=record.series_end,
            )
        self._records[record.key] = record

    def extend(self, records: Iterable[MonthlySeries]) -> None:
        """Add records in order."""
        for record in records:
            self.add(record)

    def records(self) -> list[MonthlySeries]:
        """Unique records sorted by (year, month index)."""
        return sorted(self._records.values(), key=sort_key)

    def clear(self) -> None:
        """Clear the index."""
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


def aggregate(
    *sequences: Iterable[MonthlySeries],
    fallback: Optional[Iterable[MonthlySeries]] = None,
) -> list[MonthlySeries]:
    """
    Merge record sequences into one canonical, deduplicated list.

    Args:
        *sequences: Record sequences in source order
        fallback: Records to return as-is when the merge is empty

    Returns:
        Sorted unique records, the fallback records, or an empty list
    """
    index = RecordIndex()
    total = 0
    for sequence in sequences:
        for record in sequence:
            index.add(record)
            total += 1

    result = index.records()

    logger.debug("records_aggregated", received=total, unique=len(result))

    if not result and fallback is not None:
        result = list(fallback)
        logger.info("using_fallback_records", count=len(result))

    return result
