"""
Unstructured fallback scanner.

Searches the raw HTML text for "month ... year ... code" snippets. Lower
precision than the table scanner; meant for pages without usable tables.
"""

import re
from typing import Iterator

from matriculas_scraper.core.extractor import CODE_PATTERN, MONTH_PATTERN, extract
from matriculas_scraper.core.models import Found, MonthlySeries

from .base import ScannerStrategy

# Month, up to 10 non-digits, year, up to 40 non-alphanumerics, code
SNIPPET_RE = re.compile(
    MONTH_PATTERN + r"[^0-9]{0,10}\d{4}[^A-Za-z0-9]{0,40}?" + CODE_PATTERN
)


def iter_snippets(html: str) -> Iterator[str]:
    """
    Yield non-overlapping snippet matches, left to right.

    Each call starts a fresh scan over ``html``.
    """
    for match in SNIPPET_RE.finditer(html or ""):
        yield match.group(0)


class FallbackScanner(ScannerStrategy):
    """Scanner that treats the page as plain text."""

    def scan(self, html: str) -> list[MonthlySeries]:
        records = []
        snippets = 0

        for snippet in iter_snippets(html):
            snippets += 1
            result = extract(snippet)
            if isinstance(result, Found):
                records.append(result.record)

        self.logger.debug("fallback_scan_complete", snippets=snippets, records=len(records))
        return records


_default_scanner = FallbackScanner()


def scan_unstructured(html: str) -> list[MonthlySeries]:
    """Scan raw HTML text with the global snippet pattern."""
    return _default_scanner.scan(html)
