"""Shared pytest fixtures and test helpers for Knitting Tracker tests."""

import json

import pytest
from PySide6.QtCore import QCoreApplication, QSettings

from knittracker.exc import StorageError
from knittracker.models.project import Project
from knittracker.models.section import Section
from knittracker.services.store import ProjectStore


class MemoryStorage:
    """Dictionary-backed stand-in for a key/value storage backend."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = 0

    def read(self, key):
        return self.data.get(key)

    def write(self, key, data):
        self.data[key] = data
        self.writes += 1


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def write(self, key, data):
        self.writes += 1
        raise StorageError("memory", key, "disk full")


class UnreadableStorage(MemoryStorage):
    """Storage whose reads always fail."""

    def read(self, key):
        raise StorageError("memory", key, "permission denied")


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication instance for Qt objects and settings."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def storage():
    """An empty in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def settings(qapp, tmp_path):
    """QSettings backed by a temporary INI file."""
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def store(qapp, storage):
    """An empty project store writing to in-memory storage."""
    return ProjectStore(storage)


@pytest.fixture
def sample_project(store):
    """A two-section project already added to the store."""
    project = create_test_project(
        sections=[
            create_test_section(name="Back", total_rows=10),
            create_test_section(name="Front", total_rows=4, current_row=4),
        ]
    )
    store.add_project(project)
    return project


# Test helper functions (not fixtures, but available for import)


def create_test_section(name="Body", total_rows=10, current_row=0, **kwargs):
    """
    Helper to create a section with defaults.

    Args:
        name: Section name
        total_rows: Target row count
        current_row: Rows already worked
        **kwargs: Any other :class:`Section` fields

    Returns:
        Created Section instance
    """
    kwargs.setdefault("pattern_instructions", "K2, P2 ribbing")
    return Section(name=name, total_rows=total_rows, current_row=current_row, **kwargs)


def create_test_project(name="Test Project", sections=None, **kwargs):
    """
    Helper to create a project with defaults.

    Args:
        name: Project name
        sections: Sections; if None, one 10-row section is used
        **kwargs: Any other :class:`Project` fields

    Returns:
        Created Project instance
    """
    if sections is None:
        sections = [create_test_section()]
    kwargs.setdefault("description", "A test project")
    return Project(name=name, sections=sections, **kwargs)


def project_with(**fields):
    """
    Helper to encode a one-project saved list with some JSON fields
    overridden, for feeding hand-broken data to decoders.

    Args:
        **fields: JSON field names and the values to store under them

    Returns:
        Encoded bytes
    """
    project_data = create_test_project().to_json()
    project_data.update(fields)
    return json.dumps([project_data]).encode("utf-8")
