"""
Custom exception classes for the sample health database builder.

This module defines specific exception types for different error scenarios,
making error handling more precise and informative.

License:
    See LICENSE.md in the repository root.
"""

from typing import Optional, Dict, Any
from pathlib import Path


class SampleDatabaseException(Exception):
    """Base exception class for all builder-specific exceptions."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# Fixture (input) Exceptions

class FixtureException(SampleDatabaseException):
    """Base exception for problems with the JSON fixture."""
    pass


class FixtureNotFoundException(FixtureException):
    """Exception raised when the fixture file does not exist."""

    def __init__(self, fixture_path: Path):
        self.fixture_path = fixture_path
        super().__init__(
            f"Sample data JSON not found: {fixture_path}",
            {"file": str(fixture_path)}
        )


class JSONParsingException(FixtureException):
    """Exception raised when JSON parsing fails."""

    def __init__(self, source: str, original_error: Optional[Exception] = None):
        message = f"Failed to parse JSON from: {source}"
        details = {"source": source}
        if original_error:
            details["error"] = str(original_error)
        super().__init__(message, details)


class FixtureValidationException(FixtureException):
    """Exception raised when the fixture does not have the expected structure."""

    def __init__(self, source: str, errors: Optional[list] = None):
        self.errors = errors or []
        message = f"Invalid sample data structure in: {source}"
        details = {"source": source, "error_count": len(self.errors)}
        if self.errors:
            first = self.errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            details["first_error"] = f"{location}: {first.get('msg')}"
        super().__init__(message, details)


# File Exceptions

class FileProcessingException(SampleDatabaseException):
    """Exception raised when a file system operation fails."""

    def __init__(self, file_path: Path, operation: str, original_error: Optional[Exception] = None):
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error

        message = f"Failed to {operation} file: {file_path}"
        details = {
            "file": str(file_path),
            "operation": operation,
        }
        if original_error:
            details["error"] = str(original_error)
            details["error_type"] = type(original_error).__name__

        super().__init__(message, details)


# Database Exceptions

class DatabaseBuildException(SampleDatabaseException):
    """Exception raised when a build stage fails against the database."""

    def __init__(self, stage: str, original_error: Optional[Exception] = None, details: Optional[Dict[str, Any]] = None):
        self.stage = stage
        self.original_error = original_error

        message = f"Database build failed during stage: {stage}"
        error_details = {"stage": stage}
        if original_error:
            error_details["error"] = str(original_error)
            error_details["error_type"] = type(original_error).__name__
        if details:
            error_details.update(details)
        super().__init__(message, error_details)


class SchemaException(DatabaseBuildException):
    """Exception raised when the schema cannot be created."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__("init_schema", original_error)


class CountMismatchException(SampleDatabaseException):
    """Exception raised when inserted rows disagree with declared fixture totals."""

    def __init__(self, table: str, expected: int, actual: int):
        self.table = table
        self.expected = expected
        self.actual = actual
        message = f"Row count mismatch for table '{table}'"
        details = {"table": table, "expected": expected, "actual": actual}
        super().__init__(message, details)
