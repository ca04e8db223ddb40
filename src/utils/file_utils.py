"""
File operation utilities for the sample health database builder.

This module provides common file operations with consistent error handling
and logging.
"""

import json
from pathlib import Path
from typing import Any, Dict

from src.logging_config import get_logger
from src.exceptions import (
    FileProcessingException, FixtureNotFoundException, JSONParsingException
)
from src.constants import DEFAULT_ENCODING

logger = get_logger(__name__)


class FileOperations:
    """Centralized file operations with consistent error handling."""

    @staticmethod
    def read_json(file_path: Path, encoding: str = DEFAULT_ENCODING) -> Dict[str, Any]:
        """
        Read and parse a JSON file with proper error handling.

        Args:
            file_path: Path to the JSON file
            encoding: File encoding (default: utf-8)

        Returns:
            Parsed JSON data as dictionary

        Raises:
            FixtureNotFoundException: If the file does not exist
            JSONParsingException: If the content is not valid JSON
            FileProcessingException: If the file cannot be read
        """
        if not file_path.is_file():
            raise FixtureNotFoundException(file_path)

        try:
            with open(file_path, 'r', encoding=encoding) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise JSONParsingException(str(file_path), e) from e
        except OSError as e:
            raise FileProcessingException(file_path, "read JSON", e) from e

        logger.debug(f"Successfully read JSON from: {file_path}")
        return data

    @staticmethod
    def ensure_directory(directory: Path) -> None:
        """
        Ensure a directory exists, creating it if necessary.

        Raises:
            FileProcessingException: If directory cannot be created
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory exists: {directory}")
        except OSError as e:
            raise FileProcessingException(directory, "create directory", e) from e

    @staticmethod
    def safe_delete(file_path: Path) -> bool:
        """
        Delete a file if it exists.

        Args:
            file_path: Path to the file to delete

        Returns:
            True if file was deleted, False if it didn't exist

        Raises:
            FileProcessingException: If file cannot be deleted
        """
        try:
            file_path.unlink()
            logger.debug(f"Removed file: {file_path}")
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileProcessingException(file_path, "delete", e) from e

    @staticmethod
    def replace_file(source: Path, destination: Path) -> None:
        """
        Atomically move source over destination.

        Raises:
            FileProcessingException: If the move fails
        """
        try:
            source.replace(destination)
            logger.debug(f"Moved {source} to {destination}")
        except OSError as e:
            raise FileProcessingException(source, f"move to {destination}", e) from e

    @staticmethod
    def file_size(file_path: Path) -> int:
        """
        Return the size of a file in bytes.

        Raises:
            FileProcessingException: If the file cannot be inspected
        """
        try:
            return file_path.stat().st_size
        except OSError as e:
            raise FileProcessingException(file_path, "stat", e) from e


# Convenience functions
def read_json(file_path: Path) -> Dict[str, Any]:
    """Convenience function to read JSON file."""
    return FileOperations.read_json(file_path)
