"""Database schema definitions for the sample health database.

This module contains all SQL DDL statements for creating tables, indexes,
and constraints, together with the connection and transaction helpers the
loaders share.

Functions:
    get_create_tables_sql(): Returns SQL statements for table creation
    get_create_indexes_sql(): Returns SQL statements for index creation
    open_connection(db_path): Opens a connection with foreign keys enforced
    atomic(conn): Runs a block of statements in a single transaction
    create_database_schema(conn): Creates complete database schema
    get_schema_version(conn): Reads the stamped schema version
    get_table_info(conn): Row counts per table
    check_foreign_keys(conn): Lists dangling foreign-key references

License:
    See LICENSE.md in the repository root.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from src.constants import SCHEMA_VERSION, EventType, Tables
from src.exceptions import SchemaException
from src.utils.logging_decorators import with_operation_logging
from src.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)

EVENT_TYPES_SQL = ", ".join(f"'{event_type.value}'" for event_type in EventType)


def get_create_tables_sql():
    """Return SQL statements for creating all database tables."""
    return [
        """
        CREATE TABLE IF NOT EXISTS documents (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            category TEXT NOT NULL,
            date_occurred TEXT NOT NULL,
            date_added TEXT NOT NULL,
            provider TEXT,
            file_path TEXT NOT NULL,
            file_type TEXT NOT NULL,
            file_size INTEGER,
            extracted_text TEXT,
            notes TEXT,
            needs_review INTEGER DEFAULT 0,
            inference_source TEXT,
            is_sample_data INTEGER DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS timeline_events (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT,
            date TEXT NOT NULL,
            category TEXT NOT NULL,
            type TEXT NOT NULL CHECK (type IN ({EVENT_TYPES_SQL})),
            is_sample_data INTEGER DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS event_documents (
            event_id TEXT NOT NULL,
            document_id TEXT NOT NULL,
            created_at TEXT NOT NULL,
            PRIMARY KEY (event_id, document_id),
            FOREIGN KEY (event_id) REFERENCES timeline_events(id) ON DELETE CASCADE,
            FOREIGN KEY (document_id) REFERENCES documents(id) ON DELETE CASCADE
        )
        """
    ]


def get_create_indexes_sql():
    """Return SQL statements for creating database indexes."""
    return [
        "CREATE INDEX IF NOT EXISTS idx_documents_date ON documents(date_occurred DESC)",
        "CREATE INDEX IF NOT EXISTS idx_documents_category ON documents(category)",
        "CREATE INDEX IF NOT EXISTS idx_documents_sample ON documents(is_sample_data)",
        "CREATE INDEX IF NOT EXISTS idx_documents_needs_review ON documents(needs_review)",
        "CREATE INDEX IF NOT EXISTS idx_events_date ON timeline_events(date DESC)",
        "CREATE INDEX IF NOT EXISTS idx_events_type ON timeline_events(type)",
        "CREATE INDEX IF NOT EXISTS idx_events_category ON timeline_events(category)",
        "CREATE INDEX IF NOT EXISTS idx_events_sample ON timeline_events(is_sample_data)",
        "CREATE INDEX IF NOT EXISTS idx_event_documents_event ON event_documents(event_id)",
        "CREATE INDEX IF NOT EXISTS idx_event_documents_document ON event_documents(document_id)"
    ]


def open_connection(db_path: Union[str, Path]) -> sqlite3.Connection:
    """Open an SQLite connection for building.

    The connection runs in autocommit mode so that transactions are only
    opened by ``atomic``. Foreign keys are off by default in SQLite and
    are switched on here.

    Args:
        db_path: Database file, or ":memory:"

    Returns:
        sqlite3.Connection: Open connection
    """
    conn = sqlite3.connect(str(db_path), isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def atomic(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the enclosed statements as one transaction.

    Commits when the block completes; rolls back and re-raises on any error,
    leaving the database exactly as it was before the block.

    Args:
        conn: Connection opened by ``open_connection``

    Yields:
        sqlite3.Connection: The same connection
    """
    conn.execute("BEGIN")
    try:
        yield conn
        conn.execute("COMMIT")
    except BaseException:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise


@with_operation_logging("create schema")
def create_database_schema(conn):
    """Create the complete database schema including tables and indexes.

    Safe to run against a database that already has the schema: every
    statement is create-if-absent.

    Args:
        conn: SQLite database connection

    Raises:
        SchemaException: If any DDL statement fails
    """
    logger.info("Creating schema...")
    try:
        with atomic(conn):
            for sql in get_create_tables_sql():
                conn.execute(sql)
                logger.debug(f"Created table: {sql.split()[5]}")  # Extract table name

            for sql in get_create_indexes_sql():
                conn.execute(sql)
                logger.debug(f"Created index: {sql.split()[5]}")  # Extract index name

        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

    except sqlite3.Error as e:
        logger.error(f"Error creating database schema: {e}")
        raise SchemaException(e) from e

    logger.info(f"Schema created (version {SCHEMA_VERSION})")


def get_schema_version(conn) -> int:
    """Return the schema version stamped in PRAGMA user_version."""
    return conn.execute("PRAGMA user_version").fetchone()[0]


def get_table_info(conn) -> Dict[str, int]:
    """Get row counts for every table of the sample database.

    Args:
        conn: SQLite database connection

    Returns:
        dict: Table name -> row count
    """
    info = {}
    for table in Tables.ALL:
        cursor = conn.execute(f"SELECT COUNT(*) FROM {table}")
        info[table] = cursor.fetchone()[0]
    return info


def check_foreign_keys(conn) -> List[Tuple]:
    """Return rows violating a foreign key (table, rowid, parent, fkid)."""
    return conn.execute("PRAGMA foreign_key_check").fetchall()
