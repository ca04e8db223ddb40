"""Bulk loaders for the sample database tables.

Each loader maps fixture records to rows and inserts the whole batch inside a
single transaction. A failing row (duplicate id, invalid event type, unknown
document reference) rolls the batch back and the sqlite3 error propagates to
the caller unchanged.

Functions:
    build_placeholder_path(file_name): File path template resolved at runtime
    document_to_row(document, timestamp): Row tuple for the documents table
    event_to_row(event, timestamp): Row tuple for the timeline_events table
    iter_event_document_links(events): (event_id, document_id) pairs
    insert_documents(conn, documents): Load the documents table
    insert_events(conn, events): Load the timeline_events table
    insert_event_document_links(conn, events): Load the event_documents table

License:
    See LICENSE.md in the repository root.
"""

import sqlite3
from typing import Iterator, Sequence, Tuple

from src.constants import DOCUMENT_DIR_PLACEHOLDER
from src.utils.logging_utils import get_module_logger

from .database_schema import atomic
from .date_utils import current_timestamp
from .fixture_models import SampleDocument, SampleEvent

logger = get_module_logger(__name__)


INSERT_DOCUMENT_SQL = """
    INSERT INTO documents (
        id, title, category, date_occurred, date_added, provider,
        file_path, file_type, file_size, extracted_text, notes,
        needs_review, inference_source, is_sample_data, created_at, updated_at
    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

INSERT_EVENT_SQL = """
    INSERT INTO timeline_events (
        id, title, description, date, category, type, is_sample_data, created_at, updated_at
    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

INSERT_LINK_SQL = """
    INSERT INTO event_documents (event_id, document_id, created_at)
    VALUES (?, ?, ?)
"""


def build_placeholder_path(file_name: str) -> str:
    """Return the unresolved path stored for a document file."""
    return f"{DOCUMENT_DIR_PLACEHOLDER}/{file_name}"


def document_to_row(document: SampleDocument, timestamp: str) -> Tuple:
    """Map a fixture document to a documents row.

    Sample documents occur and are added on the same date. Size, extracted
    text and notes are unknown at build time and stored as NULL.

    Args:
        document: Fixture document
        timestamp: Value for both created_at and updated_at

    Returns:
        Tuple of column values in INSERT_DOCUMENT_SQL order
    """
    return (
        document.id,
        document.title,
        document.category,
        document.date,
        document.date,
        document.provider or None,
        build_placeholder_path(document.file_name),
        document.mime_type,
        None,
        None,
        None,
        1 if document.needs_review else 0,
        document.inference_source or None,
        1,
        timestamp,
        timestamp,
    )


def event_to_row(event: SampleEvent, timestamp: str) -> Tuple:
    """Map a fixture event to a timeline_events row.

    The type is passed through as-is; the table's CHECK constraint rejects
    anything other than health_event and life_event.
    """
    return (
        event.id,
        event.title,
        event.description or None,
        event.date,
        event.category,
        event.type,
        1,
        timestamp,
        timestamp,
    )


def iter_event_document_links(events: Sequence[SampleEvent]) -> Iterator[Tuple[str, str]]:
    """Yield (event_id, document_id) in event order, then list order."""
    for event in events:
        for document_id in event.linked_documents or ():
            yield event.id, document_id


def insert_documents(conn: sqlite3.Connection, documents: Sequence[SampleDocument]) -> int:
    """Insert all fixture documents in one transaction.

    Args:
        conn: Database connection
        documents: Fixture documents in load order

    Returns:
        Number of rows written

    Raises:
        sqlite3.IntegrityError: On a duplicate id or missing required value
    """
    logger.info(f"Inserting {len(documents)} documents...")

    with atomic(conn):
        for document in documents:
            conn.execute(INSERT_DOCUMENT_SQL, document_to_row(document, current_timestamp()))

    logger.info(f"Inserted {len(documents)} documents")
    return len(documents)


def insert_events(conn: sqlite3.Connection, events: Sequence[SampleEvent]) -> int:
    """Insert all fixture events in one transaction.

    Raises:
        sqlite3.IntegrityError: On a duplicate id or an event type outside
            health_event/life_event
    """
    logger.info(f"Inserting {len(events)} events...")

    with atomic(conn):
        for event in events:
            conn.execute(INSERT_EVENT_SQL, event_to_row(event, current_timestamp()))

    logger.info(f"Inserted {len(events)} events")
    return len(events)


def insert_event_document_links(conn: sqlite3.Connection, events: Sequence[SampleEvent]) -> int:
    """Insert one event_documents row per linked document of every event.

    Events without linked documents contribute nothing. Must run after
    both parent tables are loaded.

    Args:
        conn: Database connection
        events: Fixture events carrying their linked document ids

    Returns:
        Number of link rows written

    Raises:
        sqlite3.IntegrityError: If an event or document id does not exist,
            or a pair is listed twice
    """
    logger.info("Creating event-document links...")

    link_count = 0
    with atomic(conn):
        for event_id, document_id in iter_event_document_links(events):
            conn.execute(INSERT_LINK_SQL, (event_id, document_id, current_timestamp()))
            link_count += 1

    logger.info(f"Created {link_count} event-document links")
    return link_count
