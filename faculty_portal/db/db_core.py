"""Core database functionality and configuration.

This module provides database management with environment-aware
configuration, connection pooling, and session handling.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.orm import scoped_session, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..models.owners import Faculty, Department, Admin  # noqa
from ..models.event_tables import FacultyEvent, DepartmentEvent  # noqa
from ..models.flagged_event import FlaggedEvent  # noqa
from ..config.environment import DEFAULT_SQLITE_PATH, IS_PRODUCTION_ENVIRONMENT, project_path
from ..errors import PortalError

logger = logging.getLogger(__name__)

IN_MEMORY = ':memory:'


class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        sqlite_path: Optional[Path] = None,
        postgres_url: Optional[str] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via postgres_url parameter.

        Args:
            sqlite_path: Path to SQLite database file (for development), or ':memory:'.
                        Defaults to SQLITE_PATH env variable, then data/portal.db
            postgres_url: PostgreSQL connection URL (for production)
                        If not provided, will use DATABASE_URL env variable
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via postgres_url parameter or DATABASE_URL env variable
        """
        if IS_PRODUCTION_ENVIRONMENT:
            self.postgres_url = postgres_url or os.environ.get('DATABASE_URL')
            if not self.postgres_url:
                raise ValueError(
                    "Database URL must be provided either via postgres_url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
            self.sqlite_path = None
        else:
            self.postgres_url = None
            configured = os.environ.get('SQLITE_PATH')
            if sqlite_path:
                self.sqlite_path = sqlite_path
            elif configured == IN_MEMORY:
                self.sqlite_path = IN_MEMORY
            else:
                self.sqlite_path = project_path(configured or DEFAULT_SQLITE_PATH)

        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping

    @property
    def is_sqlite(self) -> bool:
        return self.sqlite_path is not None

    @property
    def connection_url(self) -> str:
        """Get the database connection URL based on environment."""
        if self.is_sqlite:
            return f"sqlite:///{self.sqlite_path}"
        if not self.postgres_url:
            raise ValueError("PostgreSQL URL not configured")
        return self.postgres_url

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args: Dict[str, Any] = {"echo": self.echo}

        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            # One shared connection is the only way to see an in-memory database
            # from more than one session
            if str(self.sqlite_path) == IN_MEMORY:
                args["poolclass"] = StaticPool
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args


class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass


class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass


class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass


class StorageError(DatabaseError):
    """Raised when a table operation fails; carries the storage message verbatim."""
    pass


class Database:
    """Database manager owning one engine and its session factory."""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._tables_checked = False
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._scoped_session = scoped_session(self._session_factory)

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            if self.config.is_sqlite and str(self.config.sqlite_path) != IN_MEMORY:
                Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e

    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        try:
            with self.engine.begin() as conn:
                Base.metadata.create_all(conn)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except Exception as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e

    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        try:
            inspector = inspect(self.engine)
            existing_tables = inspector.get_table_names()
            required_tables = set(Base.metadata.tables)

            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                with self.engine.begin() as conn:
                    Base.metadata.create_all(conn)
                logger.info("Database schema initialized successfully")

            self._tables_checked = True

        except Exception as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        This is the preferred way to get a database session. It handles
        commit/rollback automatically and ensures proper cleanup.

        Example:
            with db.session() as session:
                event = session.get(FacultyEvent, 7)
                event.title = "New title"
                # No need to call commit - it's handled automatically

        Raises:
            SessionError: If there are issues with the session
            DatabaseError: If database schema verification fails
            PortalError: Business-rule errors raised inside the block, unchanged
        """
        self.ensure_tables_exist()

        session = self._scoped_session()
        try:
            yield session
            session.commit()
        except (PortalError, DatabaseError):
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        finally:
            session.close()
            self._scoped_session.remove()

    def dispose(self) -> None:
        """Release all pooled connections."""
        if self.engine is not None:
            self.engine.dispose()


# Create the global database instance with default configuration
db = Database()
