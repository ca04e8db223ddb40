"""Main database builder for creating the sample SQLite database from the fixture.

This module orchestrates the build: it validates the fixture, resets the
output file, creates the schema, loads documents, events and their links, then
verifies row counts against the totals the fixture declares.

Functions:
    build_database(config): Main entry point
    verify_counts(conn, sample_data, strict): Compare row counts with fixture totals
    build_stage(stage): Timed scope that tags database errors with the stage name

License:
    See LICENSE.md in the repository root.
"""

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from src.config import BuildConfig
from src.constants import BuildStage, Tables
from src.exceptions import CountMismatchException, DatabaseBuildException
from src.logging_config import LoggerManager
from src.utils.file_utils import FileOperations
from src.utils.logging_utils import LogContext, get_module_logger

from .database_schema import (
    check_foreign_keys,
    create_database_schema,
    get_schema_version,
    get_table_info,
    open_connection,
)
from .fixture_models import SampleData, load_fixture
from .record_loaders import (
    insert_documents,
    insert_event_document_links,
    insert_events,
)

logger = get_module_logger(__name__)
metrics = LoggerManager.get_metrics_logger(__name__)


@dataclass
class BuildResult:
    """Summary of a finished build."""
    output_path: Path
    documents: int
    events: int
    links: int
    size_bytes: int
    schema_version: int
    persona: str
    fixture_version: str
    count_mismatches: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024


@contextmanager
def build_stage(stage: BuildStage):
    """Run one build stage with operation logging.

    sqlite3 errors raised inside the stage are re-raised as
    DatabaseBuildException chained to the original error.
    """
    with LogContext(stage=stage.value), LoggerManager.create_operation_logger(stage.value):
        try:
            yield
        except sqlite3.Error as e:
            raise DatabaseBuildException(stage.value, e) from e


def verify_counts(
    conn: sqlite3.Connection,
    sample_data: SampleData,
    strict: bool = False
) -> Tuple[Dict[str, int], List[Dict[str, Any]]]:
    """Compare table row counts with the totals declared in the fixture.

    Args:
        conn: Database connection
        sample_data: Parsed fixture
        strict: Raise on the first mismatch instead of warning

    Returns:
        (row counts per table, list of mismatches)

    Raises:
        CountMismatchException: On a mismatch when strict is set
        DatabaseBuildException: If any row references a missing parent
    """
    table_info = get_table_info(conn)
    expected = {
        Tables.DOCUMENTS: sample_data.metadata.total_documents,
        Tables.TIMELINE_EVENTS: sample_data.metadata.total_events,
    }

    mismatches = []
    for table, declared in expected.items():
        actual = table_info[table]
        if actual == declared:
            continue
        if strict:
            raise CountMismatchException(table, declared, actual)
        logger.warning(
            f"Row count mismatch for {table}: fixture declares {declared}, inserted {actual}"
        )
        mismatches.append({"table": table, "expected": declared, "actual": actual})

    violations = check_foreign_keys(conn)
    if violations:
        raise DatabaseBuildException(
            BuildStage.VERIFY_COUNTS.value,
            details={"foreign_key_violations": len(violations)}
        )

    return table_info, mismatches


def build_database(config: BuildConfig) -> BuildResult:
    """Build the sample database described by config.

    Any existing output is deleted first. In staged mode the build goes to a
    staging file that replaces the output only after verification, so the
    previous database survives a failed build.

    Args:
        config: Fixture/output locations and build options

    Returns:
        BuildResult with the final row counts and file size

    Raises:
        FixtureException: If the fixture is missing or malformed (nothing is written)
        DatabaseBuildException: If a stage fails against the database
        CountMismatchException: On a count mismatch in strict mode
        FileProcessingException: If the output cannot be removed, moved or inspected
    """
    logger.info("Building sample database...")
    logger.info(f"Output: {config.output_path}")

    with build_stage(BuildStage.VALIDATE_INPUT):
        sample_data = load_fixture(config.fixture_path)

    target = config.staging_path if config.staged else config.output_path

    with build_stage(BuildStage.RESET_OUTPUT):
        FileOperations.ensure_directory(target.parent)
        if FileOperations.safe_delete(target):
            logger.info(f"Removed old database: {target}")
        conn = open_connection(target)

    try:
        with build_stage(BuildStage.INIT_SCHEMA):
            create_database_schema(conn)

        with build_stage(BuildStage.LOAD_DOCUMENTS):
            insert_documents(conn, sample_data.documents)

        with build_stage(BuildStage.LOAD_EVENTS):
            insert_events(conn, sample_data.timeline_events)

        with build_stage(BuildStage.LOAD_LINKS):
            insert_event_document_links(conn, sample_data.timeline_events)

        with build_stage(BuildStage.VERIFY_COUNTS):
            table_info, mismatches = verify_counts(conn, sample_data, config.strict_counts)
            schema_version = get_schema_version(conn)

    finally:
        conn.close()

    with build_stage(BuildStage.FINALIZE):
        if config.staged:
            FileOperations.replace_file(target, config.output_path)
            logger.info(f"Replaced {config.output_path} with staged build")
        size_bytes = FileOperations.file_size(config.output_path)

    result = BuildResult(
        output_path=config.output_path,
        documents=table_info[Tables.DOCUMENTS],
        events=table_info[Tables.TIMELINE_EVENTS],
        links=table_info[Tables.EVENT_DOCUMENTS],
        size_bytes=size_bytes,
        schema_version=schema_version,
        persona=sample_data.metadata.persona,
        fixture_version=sample_data.metadata.version,
        count_mismatches=mismatches,
    )

    logger.info("Database statistics:")
    metrics.record_count("Documents", result.documents)
    metrics.record_count("Events", result.events)
    metrics.record_count("Links", result.links)
    logger.info("Sample database created successfully!")
    logger.info(f"Location: {result.output_path}")
    logger.info(f"Size: {result.size_kb:.1f} KB")

    return result
