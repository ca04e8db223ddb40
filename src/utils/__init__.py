"""
Utility modules for the sample health database builder.

This package contains common utilities shared by the database module
and the entry points.
"""

from .file_utils import (
    FileOperations,
    read_json
)

__all__ = [
    # File utilities
    'FileOperations',
    'read_json',
]
