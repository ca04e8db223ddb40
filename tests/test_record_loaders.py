"""Tests for the documents, events and link loaders."""

import sqlite3

import pytest

from src.modules.sample_database_module.database_schema import get_table_info
from src.modules.sample_database_module.fixture_models import SampleDocument, SampleEvent, parse_fixture
from src.modules.sample_database_module.record_loaders import (
    build_placeholder_path,
    document_to_row,
    insert_documents,
    insert_event_document_links,
    insert_events,
    iter_event_document_links,
)


def _load_parents(conn, sample_data):
    insert_documents(conn, sample_data.documents)
    insert_events(conn, sample_data.timeline_events)


def _document_rows(conn):
    conn.row_factory = sqlite3.Row
    try:
        return {row["id"]: dict(row) for row in conn.execute("SELECT * FROM documents")}
    finally:
        conn.row_factory = None


class TestDocumentLoader:

    def test_returns_rows_written(self, connection, sample_data):
        assert insert_documents(connection, sample_data.documents) == 2
        assert get_table_info(connection)["documents"] == 2

    def test_maps_fixture_fields(self, connection, sample_data):
        insert_documents(connection, sample_data.documents)
        rows = _document_rows(connection)

        doc1 = rows["doc1"]
        assert doc1["title"] == "Visit summary"
        assert doc1["category"] == "visit_summary"
        assert doc1["date_occurred"] == doc1["date_added"] == "2024-01-15"
        assert doc1["provider"] == "Dr. Smith"
        assert doc1["file_path"] == "{DOCUMENT_DIR}/visit-summary.pdf"
        assert doc1["file_type"] == "application/pdf"
        assert doc1["needs_review"] == 0
        assert doc1["inference_source"] is None
        assert doc1["is_sample_data"] == 1
        assert doc1["created_at"] == doc1["updated_at"]

        doc2 = rows["doc2"]
        assert doc2["provider"] is None
        assert doc2["needs_review"] == 1
        assert doc2["inference_source"] == "date inferred from file name"

    def test_unknown_build_time_fields_are_null(self, connection, sample_data):
        insert_documents(connection, sample_data.documents)

        for row in _document_rows(connection).values():
            assert row["file_size"] is None
            assert row["extracted_text"] is None
            assert row["notes"] is None

    def test_empty_optional_strings_become_null(self):
        document = SampleDocument(
            id="doc9", title="t", category="c", date="2024-01-01",
            provider="", fileName="f.pdf", mimeType="application/pdf",
            inferenceSource="",
        )

        row = document_to_row(document, "2024-01-01T00:00:00.000Z")

        assert row[5] is None
        assert row[12] is None

    def test_placeholder_path_is_never_resolved(self, connection, sample_data):
        insert_documents(connection, sample_data.documents)

        for document in sample_data.documents:
            path = _document_rows(connection)[document.id]["file_path"]
            assert path == build_placeholder_path(document.file_name)
            assert path.startswith("{DOCUMENT_DIR}/")
            assert not path.startswith("/")

    def test_duplicate_id_rolls_back_whole_batch(self, connection, sample_data):
        duplicated = list(sample_data.documents) + [sample_data.documents[0]]

        with pytest.raises(sqlite3.IntegrityError):
            insert_documents(connection, duplicated)

        assert get_table_info(connection)["documents"] == 0
        assert not connection.in_transaction

    def test_failed_batch_keeps_previous_rows(self, connection, sample_data):
        insert_documents(connection, sample_data.documents[:1])

        with pytest.raises(sqlite3.IntegrityError):
            insert_documents(connection, sample_data.documents)

        assert list(_document_rows(connection)) == ["doc1"]


class TestEventLoader:

    def test_inserts_events(self, connection, sample_data):
        assert insert_events(connection, sample_data.timeline_events) == 2

        rows = connection.execute(
            "SELECT id, type, description, is_sample_data, created_at = updated_at "
            "FROM timeline_events ORDER BY id"
        ).fetchall()
        assert rows == [
            ("evt1", "health_event", "Routine check-up", 1, 1),
            ("evt2", "life_event", None, 1, 1),
        ]

    def test_invalid_type_fails_at_storage_layer(self, connection):
        events = [
            SampleEvent(id="evt1", title="ok", date="2024-01-01", category="c", type="health_event"),
            SampleEvent(id="evt2", title="bad", date="2024-01-02", category="c", type="work_event"),
        ]

        with pytest.raises(sqlite3.IntegrityError, match="CHECK"):
            insert_events(connection, events)

        assert get_table_info(connection)["timeline_events"] == 0

    def test_duplicate_id_rolls_back(self, connection, sample_data):
        events = list(sample_data.timeline_events) * 2

        with pytest.raises(sqlite3.IntegrityError):
            insert_events(connection, events)

        assert get_table_info(connection)["timeline_events"] == 0


class TestLinkLoader:

    def test_expands_linked_documents(self, connection, sample_data):
        _load_parents(connection, sample_data)

        assert insert_event_document_links(connection, sample_data.timeline_events) == 2

        rows = connection.execute(
            "SELECT event_id, document_id FROM event_documents ORDER BY rowid"
        ).fetchall()
        assert rows == [("evt1", "doc1"), ("evt1", "doc2")]

    def test_events_without_links_contribute_nothing(self):
        events = [
            SampleEvent(id="a", title="t", date="d", category="c", type="life_event"),
            SampleEvent(id="b", title="t", date="d", category="c", type="life_event", linkedDocuments=[]),
            SampleEvent(id="c", title="t", date="d", category="c", type="life_event", linkedDocuments=["x", "y", "z"]),
        ]

        assert list(iter_event_document_links(events)) == [("c", "x"), ("c", "y"), ("c", "z")]

    def test_no_links_at_all(self, connection, sample_data):
        _load_parents(connection, sample_data)
        unlinked = [event for event in sample_data.timeline_events if not event.linked_documents]

        assert insert_event_document_links(connection, unlinked) == 0

    def test_dangling_document_reference_fails(self, connection, sample_data):
        _load_parents(connection, sample_data)
        events = [
            SampleEvent(
                id="evt2", title="t", date="d", category="c", type="life_event",
                linkedDocuments=["doc1", "missing-doc"],
            )
        ]

        with pytest.raises(sqlite3.IntegrityError, match="FOREIGN KEY"):
            insert_event_document_links(connection, events)

        assert get_table_info(connection)["event_documents"] == 0

    def test_dangling_event_reference_fails(self, connection, sample_data):
        insert_documents(connection, sample_data.documents)

        with pytest.raises(sqlite3.IntegrityError):
            insert_event_document_links(connection, sample_data.timeline_events)

    def test_duplicate_pair_fails(self, connection, sample_data):
        _load_parents(connection, sample_data)
        events = [
            SampleEvent(
                id="evt2", title="t", date="d", category="c", type="life_event",
                linkedDocuments=["doc1", "doc1"],
            )
        ]

        with pytest.raises(sqlite3.IntegrityError):
            insert_event_document_links(connection, events)

    @pytest.mark.parametrize("table, parent_id, remaining", [
        ("documents", "doc1", [("evt1", "doc2")]),
        ("timeline_events", "evt1", []),
    ])
    def test_deleting_parent_cascades(self, connection, sample_data, table, parent_id, remaining):
        _load_parents(connection, sample_data)
        insert_event_document_links(connection, sample_data.timeline_events)

        connection.execute(f"DELETE FROM {table} WHERE id = ?", (parent_id,))

        rows = connection.execute(
            "SELECT event_id, document_id FROM event_documents ORDER BY document_id"
        ).fetchall()
        assert rows == remaining


def test_fixture_sample_flag_is_ignored(connection, fixture_data):
    for entry in fixture_data["documents"] + fixture_data["timelineEvents"]:
        entry["isSampleData"] = False
    sample_data = parse_fixture(fixture_data)

    _load_parents(connection, sample_data)

    assert connection.execute("SELECT DISTINCT is_sample_data FROM documents").fetchall() == [(1,)]
    assert connection.execute("SELECT DISTINCT is_sample_data FROM timeline_events").fetchall() == [(1,)]
