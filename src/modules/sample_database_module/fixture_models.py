"""Data models for the sample-data fixture.

This module defines Pydantic models for the JSON fixture the database is
built from. Field names follow the database vocabulary; the camelCase keys
used in the fixture are accepted as aliases.

Event types and identifier uniqueness are not checked here: those rules are
enforced by the database constraints when the rows are inserted. The
fixture's `isSampleData` flags are not read: every loaded row is marked as
sample data.

License:
    See LICENSE.md in the repository root.
"""

from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.exceptions import FixtureValidationException
from src.utils.file_utils import read_json
from src.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class FixtureModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""
    model_config = ConfigDict(populate_by_name=True)


class FixtureMetadata(FixtureModel):
    """Descriptive header of the fixture, including the declared totals."""
    persona: str
    version: str
    total_events: int = Field(alias="totalEvents")
    total_documents: int = Field(alias="totalDocuments")


class SampleDocument(FixtureModel):
    """A health-record document entry."""
    id: str
    title: str
    category: str
    date: str
    provider: Optional[str] = None
    file_name: str = Field(alias="fileName")
    mime_type: str = Field(alias="mimeType")
    needs_review: bool = Field(default=False, alias="needsReview")
    inference_source: Optional[str] = Field(default=None, alias="inferenceSource")


class SampleEvent(FixtureModel):
    """A timeline event entry with the ids of the documents it links to."""
    id: str
    title: str
    description: Optional[str] = None
    date: str
    category: str
    type: str
    linked_documents: Optional[List[str]] = Field(default=None, alias="linkedDocuments")


class SampleData(FixtureModel):
    """The complete fixture."""
    metadata: FixtureMetadata
    timeline_events: List[SampleEvent] = Field(alias="timelineEvents")
    documents: List[SampleDocument]


def parse_fixture(data: dict, source: str = "<fixture>") -> SampleData:
    """Validate already-decoded fixture JSON.

    Args:
        data: Decoded JSON object
        source: Name used in error messages

    Returns:
        SampleData: Parsed fixture

    Raises:
        FixtureValidationException: If required keys are missing or have the wrong type
    """
    try:
        return SampleData.model_validate(data)
    except ValidationError as e:
        raise FixtureValidationException(source, e.errors()) from e


def load_fixture(fixture_path: Union[str, Path]) -> SampleData:
    """Read and validate the fixture file.

    Raises:
        FixtureNotFoundException: If the file does not exist
        JSONParsingException: If the file is not valid JSON
        FixtureValidationException: If the structure is not a fixture
    """
    fixture_path = Path(fixture_path)
    logger.info("Reading sample data JSON...")
    sample_data = parse_fixture(read_json(fixture_path), str(fixture_path))
    logger.info(
        f"Loaded data: {sample_data.metadata.total_events} events, "
        f"{sample_data.metadata.total_documents} documents "
        f"(persona: {sample_data.metadata.persona}, version: {sample_data.metadata.version})"
    )
    return sample_data
