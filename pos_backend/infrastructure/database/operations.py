"""
Database operations and connection management

One embedded database handle per process. ``DatabaseManager`` owns the
engine, the session factory and the lock that keeps storage work from
interleaving; it is created at startup and handed to every repository.
"""

import logging
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pos_backend.infrastructure.configuration.config import Settings, get_config
from pos_backend.infrastructure.database.models import Base
from pos_backend.infrastructure.logging.logging_config import PerformanceLogger
from pos_backend.infrastructure.utilities.constants import (
    PerformanceSettings,
    RetrySettings,
)
from pos_backend.infrastructure.utilities.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Single-connection database gateway with serialized access"""

    def __init__(self, config: Optional[Settings] = None, database_url: Optional[str] = None):
        """Initialize database manager with configuration"""
        self.config = config or get_config()
        self.database_url = database_url or self.config.database_url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_engine(self) -> Engine:
        """Get database engine with proper configuration"""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """Create the engine; SQLite gets one shared connection"""
        engine_kwargs: Dict[str, Any] = {
            "echo": self.config.sql_echo,
        }

        if self.database_url.startswith("sqlite"):
            self._ensure_sqlite_directory()
            engine_kwargs.update({
                "poolclass": StaticPool,
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": RetrySettings.CONNECTION_TIMEOUT_SECONDS,
                },
            })
        else:
            engine_kwargs["pool_pre_ping"] = True

        engine = create_engine(self.database_url, **engine_kwargs)

        if self.database_url.startswith("sqlite"):
            self._setup_sqlite_pragmas(engine)
        self._setup_engine_events(engine)

        return engine

    def _ensure_sqlite_directory(self) -> None:
        """Create the parent directory of a file-backed SQLite database"""
        if not self.database_url.startswith("sqlite:///"):
            return
        path = self.database_url[len("sqlite:///"):]
        if path and path != ":memory:" and not path.startswith("file:"):
            Path(path).parent.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _setup_sqlite_pragmas(engine: Engine) -> None:
        """Turn on foreign keys so order items cascade with their order"""

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    def _setup_engine_events(self, engine: Engine) -> None:
        """Log slow statements"""

        @event.listens_for(engine, "before_cursor_execute")
        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            context._query_start_time = time.perf_counter()

        @event.listens_for(engine, "after_cursor_execute")
        def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            total_time_ms = (time.perf_counter() - context._query_start_time) * 1000

            if total_time_ms > PerformanceSettings.SLOW_QUERY_THRESHOLD_MS:
                self.logger.warning(
                    "Slow query detected",
                    extra={
                        "query_time_ms": total_time_ms,
                        "statement": statement[:200] + "..." if len(statement) > 200 else statement,
                    },
                )

    def get_session_factory(self) -> sessionmaker:
        """Get session factory"""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.get_engine(),
                expire_on_commit=False,
            )
        return self._session_factory

    @contextmanager
    def managed_session(self) -> Generator[Session, None, None]:
        """
        Hold the storage lock for one session, commit on success, roll back on error

        Yields:
            Session: The SQLAlchemy session object.

        Raises:
            SQLAlchemyError: If a database-related error occurs.
        """
        with self._lock:
            session = self.get_session_factory()()
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                self.logger.error("💥 DATABASE ERROR: %s", e)
                session.rollback()
                raise
            except Exception as e:
                self.logger.error("💥 UNEXPECTED ERROR: %s", e)
                session.rollback()
                raise
            finally:
                session.close()

    # A batch that must land all-or-nothing is simply one managed session
    transaction = managed_session

    def create_tables(self) -> None:
        """Create all database tables"""
        try:
            with PerformanceLogger("create_tables", self.logger):
                Base.metadata.create_all(self.get_engine())
                self.logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            self.logger.error("Failed to create database tables: %s", e, exc_info=True)
            raise DatabaseError(
                f"Failed to create database tables: {e}", operation="create_tables"
            ) from e

    def health_check(self) -> Dict[str, Any]:
        """Perform database health check"""
        try:
            with self.managed_session() as session:
                result = session.execute(text("SELECT 1")).scalar()
            if result == 1:
                return {"status": "healthy", "environment": self.config.environment}
            return {
                "status": "unhealthy",
                "error": "Health check query returned unexpected result",
            }
        except SQLAlchemyError as e:
            self.logger.error("Database health check failed: %s", e, exc_info=True)
            return {"status": "unhealthy", "error": str(e)}

    def close(self) -> None:
        """Close database connections"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None
        self.logger.info("Database connections closed")


def init_db(db_manager: DatabaseManager) -> None:
    """Initialize database tables"""
    db_manager.create_tables()
    logger.info("Database initialized at %s", db_manager.database_url)
