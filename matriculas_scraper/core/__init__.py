"""
Core layer - pure extraction pipeline plus its I/O collaborators.

Components:
- models: MonthlySeries record, Found/NotFound results
- normalizer: Spanish month names, series codes, raw triples
- extractor: Ordered month/year/series pattern matchers
- aggregator: Last-write-wins merge and canonical sort
- cache: TTL cache for the built table
- http_client: Rate-limited, retrying HTTP client
"""

from .models import MonthlySeries, Found, NotFound, ExtractionResult
from .normalizer import (
    MONTHS_ES,
    UNKNOWN_MONTH,
    capitalize_month,
    month_index,
    normalize_series,
    normalize_record,
)
from .extractor import extract, extract_record
from .aggregator import RecordIndex, aggregate, sort_key
from .cache import TTLCache

__all__ = [
    "MonthlySeries",
    "Found",
    "NotFound",
    "ExtractionResult",
    "MONTHS_ES",
    "UNKNOWN_MONTH",
    "capitalize_month",
    "month_index",
    "normalize_series",
    "normalize_record",
    "extract",
    "extract_record",
    "RecordIndex",
    "aggregate",
    "sort_key",
    "TTLCache",
]
