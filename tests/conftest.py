"""Shared fixtures for the mushaf_library test suite."""

import pytest

from fakes import SAMPLE_DATASET, FakeStore
from mushaf_library.io import ContentIngestor, DatabaseManager, SqliteStoreService
from mushaf_library.io.database_manager import MEMORY_DB
from mushaf_library.repositories import open_settings


@pytest.fixture
def fake_store():
    """Store over the sample chapters 1-3 and pages 1-5 (page 5 empty)."""
    return FakeStore()


@pytest.fixture
def database():
    """In-memory database with the full schema."""
    db = DatabaseManager(MEMORY_DB)
    db.ensure_schema()
    yield db
    db.close()


@pytest.fixture
def connection(database):
    return database.connection


@pytest.fixture
def sqlite_store(database):
    """SqliteStoreService over the sample content dataset."""
    ContentIngestor(database).ingest(SAMPLE_DATASET)
    return SqliteStoreService(database)


@pytest.fixture
def qsettings(tmp_path):
    """INI-backed QSettings in a temporary directory."""
    settings = open_settings(tmp_path / "prefs" / "preferences.ini")
    yield settings
    settings.sync()
