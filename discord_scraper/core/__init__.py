"""Base orchestrator for pipeline execution.

Provides common infrastructure for pipeline orchestrators:
- Database engine and session management
- Schema initialization
- Timing and summary reporting

Usage:
    class MyOrchestrator(BaseOrchestrator):
        def _run_pipeline(self, session, channel_ids):
            # Implementation
            pass

        def _log_summary(self, elapsed):
            # Log final statistics
            pass
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from discord_scraper.core.errors import StoreError
from discord_scraper.db.engine import get_engine, get_session_factory
from discord_scraper.db.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import Session, sessionmaker


class BaseOrchestrator(ABC):
    """Abstract base class for pipeline orchestrators.

    Subclasses must implement:
    - _run_pipeline(): The actual pipeline logic
    - _log_summary(): Log final statistics
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the orchestrator.

        Args:
            db_path: Path to the SQLite store file.
        """
        self.db_path = db_path
        self.engine: Engine = get_engine(db_path)
        self.session_factory: sessionmaker[Session] = get_session_factory(db_path)
        self.start_time: float = 0.0

    def init_db(self) -> None:
        """Create tables if they don't exist."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StoreError("init_db", str(e)) from e

    def run(self, channel_ids: list[str]) -> None:
        """Run the pipeline.

        Args:
            channel_ids: Channels to process, in order.
        """
        self.start_time = time.time()

        self.init_db()
        with self.session_factory() as session:
            self._run_pipeline(session, channel_ids)

        elapsed = time.time() - self.start_time
        self._log_summary(elapsed)

    @abstractmethod
    def _run_pipeline(self, session: Session, channel_ids: list[str]) -> None:
        """Execute the pipeline logic.

        Args:
            session: The single store session for this run.
            channel_ids: Channels to process, in order.
        """
        ...

    @abstractmethod
    def _log_summary(self, elapsed: float) -> None:
        """Log the final summary statistics.

        Args:
            elapsed: Total time elapsed in seconds.
        """
        ...
