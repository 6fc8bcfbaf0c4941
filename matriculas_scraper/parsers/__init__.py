"""
Scanner strategies for monthly plate-series extraction.

Scanners handle the extraction phase - converting an HTML page body
into MonthlySeries records.

Strategies:
- StructuredScanner: Walk HTML tables row by row
- FallbackScanner: Regex search over the raw page text
- PageScanner: Structured first, fallback when it finds nothing
"""

from .base import ScannerStrategy
from .rows import TableRowReader, SoupRowReader, LxmlRowReader
from .structured import StructuredScanner, scan_structured
from .fallback import FallbackScanner, scan_unstructured, iter_snippets
from .page import PageScanner, scan_page

__all__ = [
    "ScannerStrategy",
    "TableRowReader",
    "SoupRowReader",
    "LxmlRowReader",
    "StructuredScanner",
    "scan_structured",
    "FallbackScanner",
    "scan_unstructured",
    "iter_snippets",
    "PageScanner",
    "scan_page",
]
