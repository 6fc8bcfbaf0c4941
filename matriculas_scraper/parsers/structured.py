"""
Structured table scanner.

Joins the cells of every table row into one line and runs the pattern
extractor over it.
"""

from typing import Iterator, Optional

from matriculas_scraper.core.extractor import extract
from matriculas_scraper.core.models import Found, MonthlySeries

from .base import ScannerStrategy
from .rows import SoupRowReader, TableRowReader

CELL_SEPARATOR = " | "


class StructuredScanner(ScannerStrategy):
    """
    Scanner for records laid out in HTML tables.

    Rows that match no pattern contribute nothing. A document that cannot
    be parsed yields no records at all.
    """

    def __init__(self, row_reader: Optional[TableRowReader] = None):
        """
        Initialize scanner.

        Args:
            row_reader: Table row reader (BeautifulSoup + lxml by default)
        """
        super().__init__()
        self.row_reader = row_reader or SoupRowReader()

    def iter_lines(self, html: str) -> Iterator[str]:
        """Yield one joined line per non-empty table row."""
        for cells in self.row_reader.iter_rows(html):
            if any(cells):
                yield CELL_SEPARATOR.join(cells)

    def scan(self, html: str) -> list[MonthlySeries]:
        records = []
        rows = 0

        try:
            for line in self.iter_lines(html):
                rows += 1
                result = extract(line)
                if isinstance(result, Found):
                    records.append(result.record)
        except Exception as e:
            self.logger.warning(
                "structured_parse_failed",
                reader=self.row_reader.get_reader_name(),
                error=str(e),
            )
            return []

        self.logger.debug("structured_scan_complete", rows=rows, records=len(records))
        return records


_default_scanner = StructuredScanner()


def scan_structured(html: str) -> list[MonthlySeries]:
    """Scan HTML tables with the default BeautifulSoup reader."""
    return _default_scanner.scan(html)
