"""
Per-page scanning pipeline: tables first, free text when tables give nothing.
"""

from typing import Optional

import structlog

from matriculas_scraper.core.models import MonthlySeries

from .base import ScannerStrategy
from .fallback import FallbackScanner
from .structured import StructuredScanner

logger = structlog.get_logger(__name__)


class PageScanner:
    """Runs the structured scanner, then the fallback scanner if needed."""

    def __init__(
        self,
        structured: Optional[ScannerStrategy] = None,
        fallback: Optional[ScannerStrategy] = None,
    ):
        self.structured = structured or StructuredScanner()
        self.fallback = fallback or FallbackScanner()

    def scan(self, html: str, source_id: str = "") -> list[MonthlySeries]:
        """
        Extract records from one page body.

        Args:
            html: Raw HTML page body
            source_id: Source identifier, for logging only

        Returns:
            Records from the first strategy that found any
        """
        records = self.structured.scan(html)
        strategy = self.structured

        if not records:
            records = self.fallback.scan(html)
            strategy = self.fallback

        logger.info(
            "page_scanned",
            source=source_id,
            strategy=strategy.get_strategy_name(),
            records=len(records),
        )
        return records


def scan_page(html: str) -> list[MonthlySeries]:
    """Convenience wrapper around a default PageScanner."""
    return PageScanner().scan(html)
