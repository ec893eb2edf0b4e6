"""Unit tests for the storage backends."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QSettings
from sqlalchemy.exc import SQLAlchemyError

from knittracker.exc import StorageError
from knittracker.services.storage import (
    BACKEND_SETTING,
    DatabaseStorage,
    SettingsStorage,
    get_default_storage,
)

BLOB = "[{\"name\": \"Pullover • Größe M\"}]".encode() + b"\x00\xff"


class TestSettingsStorage:
    """Test cases for SettingsStorage."""

    def test_read_missing_key(self, settings):
        """Test read() returns None for a key never written."""
        assert SettingsStorage(settings).read("SavedProjects") is None

    def test_write_then_read(self, settings):
        """Test bytes come back unchanged."""
        storage = SettingsStorage(settings)
        storage.write("SavedProjects", BLOB)
        assert storage.read("SavedProjects") == BLOB

    def test_overwrite(self, settings):
        """Test a second write replaces the first."""
        storage = SettingsStorage(settings)
        storage.write("SavedProjects", b"first")
        storage.write("SavedProjects", b"second")
        assert storage.read("SavedProjects") == b"second"

    def test_persists_to_file(self, qapp, tmp_path):
        """Test a fresh QSettings on the same file sees the value."""
        path = str(tmp_path / "prefs.ini")
        SettingsStorage(QSettings(path, QSettings.Format.IniFormat)).write(
            "SavedProjects", BLOB
        )
        reopened = SettingsStorage(QSettings(path, QSettings.Format.IniFormat))
        assert reopened.read("SavedProjects") == BLOB

    def test_read_text_value(self, settings):
        """Test a value stored as text is returned as UTF-8 bytes."""
        settings.setValue("SavedProjects", "[]")
        assert SettingsStorage(settings).read("SavedProjects") == b"[]"

    def test_read_unexpected_type(self):
        """Test a value of an unexpected type raises StorageError."""
        settings = MagicMock()
        settings.value.return_value = 42
        with pytest.raises(StorageError, match="unexpected value type"):
            SettingsStorage(settings).read("SavedProjects")

    def test_write_failure_raises(self):
        """Test a QSettings error status raises StorageError."""
        settings = MagicMock()
        settings.status.return_value = QSettings.Status.AccessError
        with pytest.raises(StorageError, match="AccessError"):
            SettingsStorage(settings).write("SavedProjects", b"[]")
        settings.sync.assert_called_once()


class TestDatabaseStorage:
    """Test cases for DatabaseStorage."""

    @pytest.fixture
    def db_storage(self, tmp_path):
        storage = DatabaseStorage(tmp_path / "kv.db")
        yield storage
        storage.close()

    def test_read_missing_key(self, db_storage):
        """Test read() returns None for a key never written."""
        assert db_storage.read("SavedProjects") is None

    def test_write_then_read(self, db_storage):
        """Test bytes come back unchanged."""
        db_storage.write("SavedProjects", BLOB)
        assert db_storage.read("SavedProjects") == BLOB

    def test_overwrite(self, db_storage):
        """Test a second write replaces the first."""
        db_storage.write("SavedProjects", b"first")
        db_storage.write("SavedProjects", b"second")
        assert db_storage.read("SavedProjects") == b"second"

    def test_keys_are_independent(self, db_storage):
        """Test values under different keys do not interfere."""
        db_storage.write("a", b"1")
        db_storage.write("b", b"2")
        assert db_storage.read("a") == b"1"
        assert db_storage.read("b") == b"2"

    def test_persists_to_file(self, tmp_path):
        """Test a new storage on the same file sees the value."""
        path = tmp_path / "kv.db"
        first = DatabaseStorage(path)
        first.write("SavedProjects", BLOB)
        first.close()

        second = DatabaseStorage(path)
        try:
            assert second.read("SavedProjects") == BLOB
        finally:
            second.close()

    def test_errors_become_storage_errors(self, db_storage):
        """Test SQLAlchemy errors are raised as StorageError."""
        db_storage.session_factory = MagicMock(side_effect=SQLAlchemyError("locked"))
        with pytest.raises(StorageError, match="locked"):
            db_storage.read("SavedProjects")
        with pytest.raises(StorageError, match="locked"):
            db_storage.write("SavedProjects", b"[]")

    def test_unwritable_location(self, tmp_path):
        """Test an uncreatable database fails on use, not on construction."""
        storage = DatabaseStorage(tmp_path / "missing_dir" / "kv.db")
        with pytest.raises(StorageError, match="database"):
            storage.read("SavedProjects")
        with pytest.raises(StorageError, match="database"):
            storage.write("SavedProjects", b"[]")
        storage.close()


class TestGetDefaultStorage:
    """Test cases for get_default_storage()."""

    def test_defaults_to_settings(self, settings):
        """Test the settings backend is used when nothing is configured."""
        storage = get_default_storage(settings)
        assert isinstance(storage, SettingsStorage)
        assert storage.settings is settings

    def test_database_backend(self, settings, monkeypatch, tmp_path):
        """Test the database backend is used when configured."""
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        settings.setValue(BACKEND_SETTING, "database")

        storage = get_default_storage(settings)
        try:
            assert isinstance(storage, DatabaseStorage)
            assert storage.read("SavedProjects") is None
            assert str(tmp_path) in str(storage.engine.url)
        finally:
            storage.close()

    def test_unknown_backend_falls_back(self, settings, caplog):
        """Test an unknown backend name falls back to settings with a warning."""
        settings.setValue(BACKEND_SETTING, "cloud")
        with caplog.at_level(logging.WARNING):
            storage = get_default_storage(settings)
        assert isinstance(storage, SettingsStorage)
        assert "Unknown storage backend" in caplog.text
