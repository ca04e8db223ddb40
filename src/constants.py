"""
Constants module for the sample health database builder.

This module contains string constants, enums, and other immutable values
used throughout the application.

License:
    See LICENSE.md in the repository root.
"""

from enum import Enum
from typing import Final, Tuple


# Timeline event types
class EventType(str, Enum):
    """Allowed values for timeline_events.type."""

    HEALTH_EVENT = "health_event"
    LIFE_EVENT = "life_event"


# Table names, in load order
class Tables:
    """Names of the tables in the sample database."""

    DOCUMENTS: Final = "documents"
    TIMELINE_EVENTS: Final = "timeline_events"
    EVENT_DOCUMENTS: Final = "event_documents"

    ALL: Final[Tuple[str, ...]] = (DOCUMENTS, TIMELINE_EVENTS, EVENT_DOCUMENTS)


# Build stages
class BuildStage(str, Enum):
    """Stages of a database build, in execution order."""

    VALIDATE_INPUT = "validate_input"
    RESET_OUTPUT = "reset_output"
    INIT_SCHEMA = "init_schema"
    LOAD_DOCUMENTS = "load_documents"
    LOAD_EVENTS = "load_events"
    LOAD_LINKS = "load_links"
    VERIFY_COUNTS = "verify_counts"
    FINALIZE = "finalize"


# Placeholder resolved by the host application at runtime
DOCUMENT_DIR_PLACEHOLDER: Final = "{DOCUMENT_DIR}"

# Value stamped into PRAGMA user_version
SCHEMA_VERSION: Final = 1

# Encoding
DEFAULT_ENCODING: Final = "utf-8"

# Timestamp format for created_at / updated_at (UTC, millisecond precision)
TIMESTAMP_FORMAT: Final = "YYYY-MM-DD[T]HH:mm:ss.SSS[Z]"
