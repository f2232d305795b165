"""Console and log handler setup for the crawler.

Log records, the page progress line and the summary panel all print
through one rich Console so they never interleave. The CLI calls
setup_logging() once; nothing configures logging at import time.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


console = Console()

# HTTP and SQL libraries stay at WARNING unless --debug is given
THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Install console (and optional file) handlers on the root logger.

    Args:
        verbose: Show DEBUG records from the crawler, such as each new user.
        debug: Like verbose, and also let httpx and SQLAlchemy log.
        log_file: Also append plain-text records here; parent directories
            are created.
    """
    handlers: list[logging.Handler] = [
        RichHandler(console=console, show_path=False, rich_tracebacks=True)
    ]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose or debug else logging.INFO,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    third_party_level = logging.DEBUG if debug else logging.WARNING
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
