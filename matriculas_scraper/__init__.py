"""
Matriculas Scraper - monthly plate-series table from public HTML pages.

Architecture:
- core/: Pure foundation (models, normalizer, extractor, aggregator) plus
  the HTTP client and TTL cache used around it
- parsers/: Scanning strategies (structured tables, unstructured fallback)
- config/: YAML-driven settings and source definitions
- orchestrator: Fetch, scan, aggregate and cache
- server: aiohttp JSON API
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
