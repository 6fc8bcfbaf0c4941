"""
Table row readers.

A row reader turns an HTML document into a lazy sequence of table rows,
each row being the stripped text of its ``<td>``/``<th>`` cells. Scanners
only depend on this interface, so the HTML parser behind it can be swapped.
"""

from abc import ABC, abstractmethod
from typing import Iterator

import lxml.html
from bs4 import BeautifulSoup

CELL_TAGS = ("td", "th")


class TableRowReader(ABC):
    """Abstract base class for HTML table row readers."""

    @abstractmethod
    def iter_rows(self, html: str) -> Iterator[list[str]]:
        """
        Yield the cell texts of every row of every table, in document order.

        Args:
            html: Raw HTML document

        Raises:
            Exception: Whatever the underlying parser raises when the
                document cannot be parsed at all
        """

    def get_reader_name(self) -> str:
        """Return human-readable reader name."""
        return self.__class__.__name__


class SoupRowReader(TableRowReader):
    """Row reader backed by BeautifulSoup (lxml features by default)."""

    def __init__(self, features: str = "lxml"):
        self.features = features

    def iter_rows(self, html: str) -> Iterator[list[str]]:
        soup = BeautifulSoup(html, self.features)
        for table in soup.find_all("table"):
            for tr in table.find_all("tr"):
                yield [cell.get_text().strip() for cell in tr.find_all(CELL_TAGS)]


class LxmlRowReader(TableRowReader):
    """Row reader using lxml.html directly. Raises on empty documents."""

    def iter_rows(self, html: str) -> Iterator[list[str]]:
        root = lxml.html.fromstring(html)
        for table in root.iter("table"):
            for tr in table.iter("tr"):
                yield [cell.text_content().strip() for cell in tr.iter(*CELL_TAGS)]
