"""
Orchestrator for the monthly table pipeline.

Coordinates:
- Configuration loading
- Concurrent source fetching
- Per-page scanning (tables, then free text)
- Aggregation and fallback data file
- Result caching
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import httpx
import structlog

from .config.loader import AppConfig, load_config
from .config.settings import SourceConfig
from .core.aggregator import aggregate
from .core.cache import TTLCache
from .core.http_client import HttpClient
from .core.models import MonthlySeries
from .parsers.page import PageScanner

logger = structlog.get_logger(__name__)

CACHE_KEY = "matriculas"


def load_fallback_file(path: Optional[str]) -> list[MonthlySeries]:
    """
    Load records from a ``{"monthly": [...]}`` JSON file.

    Args:
        path: File path, or None to skip

    Returns:
        Records from the file, empty when missing or unreadable
    """
    if not path:
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        items = data.get("monthly") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.warning("fallback_file_unavailable", path=path, error="no monthly list")
            return []
        records = [MonthlySeries.from_dict(item) for item in items]
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning("fallback_file_unavailable", path=path, error=str(e))
        return []

    logger.info("fallback_file_loaded", path=path, records=len(records))
    return records


def save_json(records: list[MonthlySeries], path: str) -> str:
    """
    Save records in the fallback file format.

    Args:
        records: Records to save
        path: Output file path

    Returns:
        Path to saved file
    """
    filepath = Path(path)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(
            {"monthly": [r.to_dict() for r in records]},
            f,
            ensure_ascii=False,
            indent=2,
        )

    logger.info("saved_json", path=str(filepath), records=len(records))
    return str(filepath)


class MonthlyBuilder:
    """
    Builds the monthly plate-series table from all configured sources.

    Fetches sources concurrently, scans each page, aggregates in source
    order and caches the result.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        config_path: Optional[str] = None,
        http_client: Optional[HttpClient] = None,
        cache: Optional[TTLCache] = None,
        page_scanner: Optional[PageScanner] = None,
    ):
        """
        Initialize builder.

        Args:
            config: Loaded configuration (loaded from config_path if omitted)
            config_path: Path to sources.yml
            http_client: Shared HTTP client (created per build if omitted)
            cache: Result cache (created from settings if omitted)
            page_scanner: Per-page scanning pipeline
        """
        self.config = config or load_config(config_path)
        self.settings = self.config.settings
        self.http_client = http_client
        self.cache = cache if cache is not None else TTLCache(ttl=self.settings.cache_ttl)
        self.page_scanner = page_scanner or PageScanner()

        self._lock = asyncio.Lock()

        # Statistics
        self.stats = {
            "builds": 0,
            "cache_hits": 0,
            "sources_fetched": 0,
            "records_extracted": 0,
            "fallback_used": 0,
            "errors": 0,
        }

    async def get_monthly(self, use_cache: bool = True) -> list[MonthlySeries]:
        """
        Return the monthly table, building it on cache miss.

        Args:
            use_cache: Whether to read the cache before building

        Returns:
            Sorted unique records (possibly from the fallback file)
        """
        async with self._lock:
            if use_cache:
                cached = self.cache.get(CACHE_KEY)
                if cached is not None:
                    self.stats["cache_hits"] += 1
                    logger.debug("cache_hit", key=CACHE_KEY, records=len(cached))
                    return cached

            monthly = await self.build()
            self.cache.set(CACHE_KEY, monthly)
            return monthly

    async def build(self) -> list[MonthlySeries]:
        """
        Fetch every source and aggregate the results, bypassing the cache.

        Returns:
            Sorted unique records, or the fallback file records when
            no source yields anything
        """
        sources = self.config.sources
        logger.info("starting_build", sources=[s.source_id for s in sources])

        if self.http_client is not None:
            per_source = await self._fetch_all(self.http_client, sources)
        else:
            async with HttpClient(
                requests_per_second=self.settings.requests_per_second,
                timeout=self.settings.timeout,
                max_retries=self.settings.max_retries,
            ) as client:
                per_source = await self._fetch_all(client, sources)

        monthly = aggregate(*per_source)

        if not monthly:
            logger.warning("no_records_extracted", sources=len(sources))
            fallback = load_fallback_file(self.settings.data_file)
            monthly = aggregate(fallback=fallback)
            if monthly:
                self.stats["fallback_used"] += 1

        self.stats["builds"] += 1
        logger.info("build_complete", records=len(monthly), **self.stats)

        return monthly

    async def _fetch_all(
        self,
        client: HttpClient,
        sources: list[SourceConfig],
    ) -> list[list[MonthlySeries]]:
        """Fetch and scan all sources concurrently, keeping source order."""
        return list(
            await asyncio.gather(
                *(self._process_source(client, source) for source in sources)
            )
        )

    async def _process_source(
        self,
        client: HttpClient,
        source: SourceConfig,
    ) -> list[MonthlySeries]:
        """
        Fetch and scan a single source.

        Args:
            client: HTTP client
            source: Source configuration

        Returns:
            Records from the page, empty on fetch failure
        """
        logger.info("fetching_source", source=source.source_id, url=source.url)

        try:
            html = await client.get_text(source.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                "source_fetch_failed",
                source=source.source_id,
                url=source.url,
                error=str(e),
            )
            self.stats["errors"] += 1
            return []

        self.stats["sources_fetched"] += 1

        records = self.page_scanner.scan(html, source_id=source.source_id)
        self.stats["records_extracted"] += len(records)

        return records

    def invalidate(self) -> None:
        """Drop the cached table."""
        self.cache.delete(CACHE_KEY)
