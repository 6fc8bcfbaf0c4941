"""
CLI entry point for matriculas-scraper.

Usage:
    python -m matriculas_scraper
    python -m matriculas_scraper --output data/matriculas_monthly.json
    python -m matriculas_scraper --serve --port 3000
"""

import argparse
import asyncio
import json
import logging
import sys

import structlog

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Monthly plate-series table from public HTML pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the table once and print it as JSON
  python -m matriculas_scraper

  # Refresh the fallback data file
  python -m matriculas_scraper --output data/matriculas_monthly.json

  # Serve GET /api/matriculas
  python -m matriculas_scraper --serve --port 3000

  # Use custom config file
  python -m matriculas_scraper --config /path/to/sources.yml
        """,
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP API instead of building once",
    )

    parser.add_argument(
        "--port",
        type=int,
        help="HTTP port (default: settings.port, env PORT)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to sources.yml config file",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write the table to this JSON file instead of stdout",
    )

    parser.add_argument(
        "--data-file",
        type=str,
        help="Fallback data file used when no source yields records",
    )

    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Rebuild the table on every API request (sets cache_ttl to 0)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


def build_builder(args, http_client=None):
    """Create a MonthlyBuilder with CLI overrides applied."""
    from .config.loader import load_config
    from .orchestrator import MonthlyBuilder

    config = load_config(args.config)
    if args.data_file:
        config.settings.data_file = args.data_file
    if args.port:
        config.settings.port = args.port
    if args.no_cache:
        config.settings.cache_ttl = 0

    return MonthlyBuilder(config=config, http_client=http_client)


async def main_async(args, http_client=None):
    """Build the table once and emit it."""
    from .orchestrator import save_json

    logger = structlog.get_logger(__name__)

    builder = build_builder(args, http_client=http_client)
    monthly = await builder.build()

    if args.output:
        save_json(monthly, args.output)
    else:
        json.dump(
            {"monthly": [r.to_dict() for r in monthly]},
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    if not monthly:
        logger.warning("no_records")

    return monthly


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        from . import __version__
        print(f"matriculas-scraper {__version__}")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        if args.serve:
            from .server import run_server

            builder = build_builder(args)
            run_server(builder, builder.settings.port)
            sys.exit(0)

        monthly = asyncio.run(main_async(args))
        sys.exit(0 if monthly else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
