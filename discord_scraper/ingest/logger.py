"""Crawl event logging.

Plain notices (inserts, throttling, fatal errors) are Python log records;
channel headers, the per-page progress line and the final summary panel
are drawn on the shared rich console.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from discord_scraper.utils.logging import console
from discord_scraper.utils.snowflake import snowflake_to_datetime


class IngestLogger:
    """Logger for crawl operations with rich output."""

    def __init__(self, name: str = __name__) -> None:
        self.console: Console = console
        self._logger = logging.getLogger(name)
        self._progress_shown = False

    def _end_progress(self) -> None:
        """Erase the in-place progress line before printing anything else."""
        if self._progress_shown:
            self.console.file.write("\033[2K\r")
            self._progress_shown = False

    # -------------------------------------------------------------------------
    # Log records
    # -------------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._end_progress()
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._end_progress()
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._end_progress()
        self._logger.error(message)

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def success(self, message: str) -> None:
        self._end_progress()
        self.console.print(f"[green]✓[/green] {message}")

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------

    def rate_limit(self, sleep_for: float) -> None:
        """Log a rate limit warning with the computed sleep time."""
        self.warning(f"Too many requests. Sleeping for {sleep_for:.2f}s.")

    # -------------------------------------------------------------------------
    # Inserts
    # -------------------------------------------------------------------------

    def inserting_channel(self, name: str) -> None:
        self.info(f"Inserting 1 Channel: {name}")

    def inserting_users(self, count: int, new_usernames: list[str]) -> None:
        """Log a user batch; new usernames go to DEBUG."""
        self.info(f"Inserting {count} Users ({len(new_usernames)} new)")
        for username in new_usernames:
            self.debug(f"Inserting 1 User: {username!r}")

    def inserting_messages(self, count: int) -> None:
        self.info(f"Inserting {count} Messages")

    # -------------------------------------------------------------------------
    # Channel Processing
    # -------------------------------------------------------------------------

    def channel_start(self, channel_id: str, channel_name: str | None) -> None:
        self._end_progress()
        self.console.print()
        self.console.rule(
            f"[bold cyan]{channel_name or channel_id}[/bold cyan]", style="cyan"
        )
        self.console.print(f"[dim]Channel ID: {channel_id}[/dim]")

    def page_progress(self, messages_so_far: int, oldest_id: str) -> None:
        """Rewrite the progress line with the running count and how far back
        the walk has reached."""
        reached = snowflake_to_datetime(oldest_id).strftime("%Y-%m-%d")
        self._end_progress()
        self.console.print(
            f"    [dim]Fetched {messages_so_far:,} messages [→ {reached}][/dim]",
            end="\r",
        )
        self._progress_shown = True

    def channel_complete(self, message_count: int, stored_count: int) -> None:
        self._end_progress()
        self.console.print(
            f"  [green]✓[/green] {message_count:,} messages fetched "
            f"[dim]({stored_count:,} stored)[/dim]"
        )

    def channel_empty(self) -> None:
        self._end_progress()
        self.console.print("  [dim]Empty channel[/dim]")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(self, channels: int, messages: int, pages: int, elapsed: float) -> None:
        """Print the end-of-run panel."""
        self._end_progress()

        table = Table.grid(padding=(0, 2))
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="green")
        table.add_row("Channels", f"{channels:,}")
        table.add_row("Pages fetched", f"{pages:,}")
        table.add_row("Messages ingested", f"{messages:,}")
        table.add_row("Time elapsed", f"{elapsed:.1f}s")

        self.console.print()
        self.console.print(
            Panel(
                table,
                title="[bold]Crawl Complete[/bold]",
                border_style="cyan",
                padding=(1, 2),
            )
        )


# Global logger instance
logger = IngestLogger()
