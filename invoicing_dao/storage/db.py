"""
Database connection management.

Provides SQLite connections and an explicit transaction scope.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


def get_connection(db_path: str = "invoicing.db") -> sqlite3.Connection:
    """Create and return a SQLite database connection with foreign keys enabled.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLite connection with foreign key constraints enabled
    """
    path = Path(db_path)
    conn = sqlite3.connect(str(path))
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


class DataSource(Protocol):
    """Anything able to hand out independent database connections."""

    def get_connection(self) -> sqlite3.Connection:
        ...


class SQLiteDataSource:
    """Connection provider backed by a SQLite database file.

    Every call returns a new connection. Callers own the connection and
    must close it.
    """

    def __init__(self, db_path: str = "invoicing.db"):
        self.db_path = db_path

    def get_connection(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def __repr__(self) -> str:
        return f"SQLiteDataSource(db_path={self.db_path!r})"


class Transaction:
    """Explicit transaction scope over a single connection.

    Entering switches the connection to manual transaction control and
    issues BEGIN. Leaving normally commits; leaving with an exception rolls
    back and lets the exception propagate. The connection's previous
    isolation level is restored on every exit path.
    A connection that already has an open transaction is refused, so
    pending work is never committed as a side effect of entering.

    Usage:
        with Transaction(conn):
            conn.execute(...)
            conn.execute(...)
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._saved_isolation_level: Optional[str] = None
        self.committed = False

    def __enter__(self) -> sqlite3.Connection:
        if self.conn.in_transaction:
            raise sqlite3.ProgrammingError("connection already has an open transaction")
        self._saved_isolation_level = self.conn.isolation_level
        self.conn.isolation_level = None
        try:
            self.conn.execute("BEGIN")
        except Exception:
            self.conn.isolation_level = self._saved_isolation_level
            raise
        return self.conn

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self.conn.commit()
                self.committed = True
            else:
                logger.warning("Rolling back transaction after %s: %s", exc_type.__name__, exc)
                self.conn.rollback()
        finally:
            self.conn.isolation_level = self._saved_isolation_level
        return False
