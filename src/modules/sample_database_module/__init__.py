"""Sample database module for building the demo health-narrative SQLite database.

This module reads the JSON sample-data fixture and creates an SQLite database
with documents, timeline events and the links between them. The load runs in
dependency order and every table is filled inside its own transaction.

Modules:
    database_schema: SQL DDL definitions, connection setup and the transaction helper
    fixture_models: Pydantic models for the JSON fixture
    record_loaders: Mapping of fixture records to rows and the bulk inserts
    database_builder: Build orchestration, verification and reporting
    date_utils: Timestamp helpers

License:
    See LICENSE.md in the repository root.
"""
