"""
Pattern extractor for month / year / plate-series triples.

Tries an ordered list of matchers over a text span and returns the first
success. More specific forms come first so that the bare year + code form,
which matches a lot of unrelated numeric content, only applies when no
month name is present.
"""

import re
from typing import Callable, Optional

from .models import ExtractionResult, Found, MonthlySeries, NotFound
from .normalizer import MONTHS_ES, normalize_record

# Month names match in any casing; series codes must be uppercase
MONTH_PATTERN = r"(?i:(" + "|".join(MONTHS_ES) + r"))"

# 2-3 letters, optionally split by single "-" or "." (e.g. "MF-X")
CODE_PATTERN = r"([A-Z](?:[-.]?[A-Z]){1,2})"

# "Enero 2024", "Enero de 2024", "Enero del 2024", "Enero | 2024", "Enero/2024"
MONTH_YEAR_SEPARATOR = r"[\s|,:/-]+(?:(?i:del?)\s+)?"

MONTH_FIRST_RE = re.compile(
    MONTH_PATTERN + MONTH_YEAR_SEPARATOR + r"(\d{4}).{0,40}?" + CODE_PATTERN
)
YEAR_FIRST_RE = re.compile(
    r"(\d{4}).{0,20}?" + MONTH_PATTERN + r".{0,40}?" + CODE_PATTERN
)
BARE_RE = re.compile(r"(\d{4}).{0,40}?" + CODE_PATTERN)


def match_month_first(text: str) -> ExtractionResult:
    """Month-first form: "Enero 2024 ... MFX"."""
    match = MONTH_FIRST_RE.search(text)
    if not match:
        return NotFound("month_first")
    month, year, code = match.groups()
    return Found(normalize_record(month, year, code))


def match_year_first(text: str) -> ExtractionResult:
    """Year-first form: "2024 - Enero - MFX"."""
    match = YEAR_FIRST_RE.search(text)
    if not match:
        return NotFound("year_first")
    year, month, code = match.groups()
    return Found(normalize_record(month, year, code))


def match_bare(text: str) -> ExtractionResult:
    """Bare form "2024 ... MFX"; the month becomes the unknown sentinel."""
    match = BARE_RE.search(text)
    if not match:
        return NotFound("bare")
    year, code = match.groups()
    return Found(normalize_record(None, year, code))


# Priority order matters: first success wins
MATCHERS: tuple[Callable[[str], ExtractionResult], ...] = (
    match_month_first,
    match_year_first,
    match_bare,
)


def extract(text: Optional[str]) -> ExtractionResult:
    """
    Extract a record from a text span.

    Args:
        text: Table row line or raw HTML snippet

    Returns:
        Found(record) for the first matcher that applies, else NotFound
    """
    if not text:
        return NotFound("empty")

    for matcher in MATCHERS:
        result = matcher(text)
        if isinstance(result, Found):
            return result

    return NotFound("no_pattern")


def extract_record(text: Optional[str]) -> Optional[MonthlySeries]:
    """Like extract(), returning the record or None."""
    result = extract(text)
    return result.record if isinstance(result, Found) else None
