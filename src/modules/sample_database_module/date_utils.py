"""Timestamp utilities for the sample database.

Functions:
    current_timestamp(): ISO-8601 UTC timestamp for created_at/updated_at columns

License:
    See LICENSE.md in the repository root.
"""

import arrow

from src.constants import TIMESTAMP_FORMAT


def current_timestamp() -> str:
    """Return the current UTC instant, e.g. ``2024-05-01T09:30:12.345Z``."""
    return arrow.utcnow().format(TIMESTAMP_FORMAT)
