import json
import os

import pytest

# Keep test runs from writing logs/process.log
os.environ.setdefault("LOG_DISABLE_FILE", "true")

from src.config import BuildConfig
from src.modules.sample_database_module.database_schema import (
    create_database_schema,
    open_connection,
)
from src.modules.sample_database_module.fixture_models import parse_fixture


@pytest.fixture
def fixture_data():
    """Two documents and two events, one of them without links."""
    return {
        "metadata": {
            "persona": "Test Persona",
            "version": "1.0.0",
            "totalEvents": 2,
            "totalDocuments": 2,
        },
        "timelineEvents": [
            {
                "id": "evt1",
                "title": "Annual physical",
                "description": "Routine check-up",
                "date": "2024-01-15",
                "category": "checkup",
                "type": "health_event",
                "linkedDocuments": ["doc1", "doc2"],
                "isSampleData": True,
            },
            {
                "id": "evt2",
                "title": "Moved house",
                "date": "2024-03-01",
                "category": "personal",
                "type": "life_event",
                "isSampleData": True,
            },
        ],
        "documents": [
            {
                "id": "doc1",
                "title": "Visit summary",
                "category": "visit_summary",
                "date": "2024-01-15",
                "provider": "Dr. Smith",
                "fileName": "visit-summary.pdf",
                "mimeType": "application/pdf",
                "isSampleData": True,
            },
            {
                "id": "doc2",
                "title": "Blood panel",
                "category": "lab_result",
                "date": "2024-01-15",
                "fileName": "blood-panel.png",
                "mimeType": "image/png",
                "needsReview": True,
                "inferenceSource": "date inferred from file name",
                "isSampleData": True,
            },
        ],
    }


@pytest.fixture
def sample_data(fixture_data):
    return parse_fixture(fixture_data)


@pytest.fixture
def fixture_file(tmp_path, fixture_data):
    path = tmp_path / "sample-data.json"
    path.write_text(json.dumps(fixture_data), encoding="utf-8")
    return path


@pytest.fixture
def build_config(tmp_path, fixture_file):
    return BuildConfig(
        fixture_path=fixture_file,
        output_path=tmp_path / "out" / "sample.db",
    )


@pytest.fixture
def connection():
    """In-memory database with the schema applied."""
    conn = open_connection(":memory:")
    create_database_schema(conn)
    yield conn
    conn.close()
