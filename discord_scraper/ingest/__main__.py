"""CLI entry point for discord_scraper.ingest.

Usage:
    python -m discord_scraper.ingest 123 456             # Crawl two channels
    python -m discord_scraper.ingest -a TOKEN 123        # Explicit token
    python -m discord_scraper.ingest -d out/msgs.db 123  # Custom store path
    python -m discord_scraper.ingest --verbose 123       # Show more details
"""

from __future__ import annotations

import argparse
import sys

from discord_scraper.config.settings import DEFAULT_DB_PATH, load_settings
from discord_scraper.core.errors import ConfigError, ScraperError
from discord_scraper.ingest.logger import logger
from discord_scraper.ingest.run import run_crawl
from discord_scraper.utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discord-scraper",
        description="Download the full message history of Discord channels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m discord_scraper.ingest 123456789
      Crawl one channel using DISCORD_AUTH_TOKEN from the environment

  python -m discord_scraper.ingest --auth TOKEN 123456789 987654321
      Crawl two channels, one after the other

  python -m discord_scraper.ingest --db-path ./archive/guild.db 123456789
      Write to a custom SQLite file (parent directories are created)
        """,
    )

    parser.add_argument(
        "channel_ids",
        nargs="+",
        help="Channel IDs to crawl",
    )
    parser.add_argument(
        "-a",
        "--auth",
        type=str,
        help="Discord authorization token (default: $DISCORD_AUTH_TOKEN)",
    )
    parser.add_argument(
        "-d",
        "--db-path",
        type=str,
        help=f"Database path (default: {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.json",
        help="Optional JSON config file (default: config.json)",
    )
    parser.add_argument(
        "--max-rate-limit-retries",
        type=int,
        help="Give up after this many consecutive 429s (default: never)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug, log_file=args.log_file)

    try:
        settings = load_settings(
            args.config,
            auth_token=args.auth,
            db_path=args.db_path,
            max_rate_limit_retries=args.max_rate_limit_retries,
        )
        settings.require_token()
    except ConfigError as e:
        print(e)
        sys.exit(1)

    logger.info(f"Starting crawl of {len(args.channel_ids)} channel(s)")

    try:
        run_crawl(settings, args.channel_ids)
        logger.success("Crawl complete!")
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except ScraperError as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
