"""
Normalization utilities for monthly plate-series records.

Handles:
- Spanish month names (canonical casing and sort index)
- Plate series codes (letters only, uppercase)
- Raw (month, year, series) triples from regex matches
"""

import re
from typing import Optional

import structlog

from .models import MonthlySeries

logger = structlog.get_logger(__name__)


# Canonical month list, also the sort order
MONTHS_ES = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)

# Sentinel for records whose month could not be identified
UNKNOWN_MONTH = "??"

_MONTH_INDEX = {name: i for i, name in enumerate(MONTHS_ES)}

_NON_LETTERS = re.compile(r"[^A-Za-z]")
_DIGITS = re.compile(r"\d+")


def capitalize_month(text: Optional[str]) -> str:
    """Upper-case the first letter and lower-case the rest."""
    if not text:
        return ""
    text = text.strip()
    return text[:1].upper() + text[1:].lower()


def month_index(month: Optional[str]) -> int:
    """
    Position of a month in the canonical list.

    Lookup is case-insensitive but accent-sensitive.

    Args:
        month: Month name in any casing

    Returns:
        0-11, or -1 for unknown names and the "??" sentinel
    """
    return _MONTH_INDEX.get(capitalize_month(month), -1)


def normalize_series(text: Optional[str]) -> str:
    """
    Normalize a plate series token.

    - "mf-x" -> "MFX"
    - "M.F.X" -> "MFX"
    - "12" -> ""

    Args:
        text: Raw series token

    Returns:
        Uppercase ASCII letters only (possibly empty)
    """
    if not text:
        return ""
    return _NON_LETTERS.sub("", text).upper()


def parse_year(text) -> int:
    """Integer from the first digit run of ``text``; 0 when there is none."""
    if isinstance(text, int):
        return text
    match = _DIGITS.search(text or "")
    return int(match.group(0)) if match else 0


def normalize_record(
    raw_month: Optional[str],
    raw_year,
    raw_series: Optional[str],
) -> MonthlySeries:
    """
    Build a canonical record from a raw (month, year, series) triple.

    Args:
        raw_month: Month text as matched, or None when absent
        raw_year: Year digits as matched
        raw_series: Series code as matched

    Returns:
        MonthlySeries with canonical month, int year and normalized series
    """
    month = capitalize_month(raw_month) or UNKNOWN_MONTH
    if month != UNKNOWN_MONTH and month not in _MONTH_INDEX:
        logger.debug("non_canonical_month", month=month)

    return MonthlySeries(
        month=month,
        year=parse_year(raw_year),
        series_end=normalize_series(raw_series),
    )
