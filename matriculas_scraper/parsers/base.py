"""
Base class for scanner strategies.

Scanners turn one HTML page body into a sequence of MonthlySeries
records. They are pure: no network or filesystem access.
"""

from abc import ABC, abstractmethod

import structlog

from matriculas_scraper.core.models import MonthlySeries

logger = structlog.get_logger(__name__)


class ScannerStrategy(ABC):
    """
    Abstract base class for scanner strategies.

    Each strategy handles a different page shape:
    - Structured: records laid out in HTML tables
    - Fallback: records scattered through free text
    """

    def __init__(self):
        """Initialize scanner."""
        self.logger = logger.bind(scanner=self.__class__.__name__)

    @abstractmethod
    def scan(self, html: str) -> list[MonthlySeries]:
        """
        Extract records from an HTML page.

        Args:
            html: Raw HTML page body

        Returns:
            Records in discovery order (possibly empty)
        """

    def __call__(self, html: str) -> list[MonthlySeries]:
        return self.scan(html)

    def get_strategy_name(self) -> str:
        """Return human-readable strategy name."""
        return self.__class__.__name__
