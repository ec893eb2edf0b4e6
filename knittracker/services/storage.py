"""Key/value persistence backends for the project store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final, Protocol, cast

from PySide6.QtCore import QByteArray, QSettings
from sqlalchemy.exc import SQLAlchemyError

from knittracker.db import create_engine_with_path, create_session_factory
from knittracker.exc import StorageError
from knittracker.models.key_value import KeyValue

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Engine
    from sqlalchemy.orm import sessionmaker

logger = logging.getLogger(__name__)

#: Organization name used for the default :class:`QSettings` scope.
ORGANIZATION_NAME: Final[str] = "Knitting Tracker"
#: Application name used for the default :class:`QSettings` scope.
APPLICATION_NAME: Final[str] = "Knitting Tracker"
#: Settings key naming the storage backend to use.
BACKEND_SETTING: Final[str] = "storage/backend"


def default_settings() -> QSettings:
    """
    Get the application's :class:`QSettings`.
    """
    return QSettings(ORGANIZATION_NAME, APPLICATION_NAME)


class KeyValueStorage(Protocol):
    """An opaque byte store keyed by string."""

    def read(self, key: str) -> bytes | None:
        """Return the bytes stored under ``key``, or None if there are none."""
        ...

    def write(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any previous value."""
        ...


class SettingsStorage:
    """
    Storage backed by :class:`QSettings`, the platform preferences store.

    Args:
        settings: The settings object to use.  If None, the application's
            default settings are used.

    """

    def __init__(self, settings: QSettings | None = None) -> None:
        #: The settings object values are kept in.
        self.settings = settings if settings is not None else default_settings()

    def read(self, key: str) -> bytes | None:
        value = self.settings.value(key)
        if value is None:
            return None
        if isinstance(value, QByteArray):
            return value.data()
        if isinstance(value, bytes):
            return value
        if isinstance(value, str):
            # Some platform formats hand byte arrays back as text
            return value.encode("utf-8")
        msg = f"unexpected value type {type(value).__name__}"
        raise StorageError("settings", key, msg)

    def write(self, key: str, data: bytes) -> None:
        self.settings.setValue(key, QByteArray(data))
        self.settings.sync()
        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise StorageError("settings", key, f"QSettings status {status.name}")


class DatabaseStorage:
    """
    Storage backed by a SQLite ``key_values`` table.

    The database file is opened on first use, so a data directory that
    cannot be written shows up as a :class:`StorageError` from :meth:`read`
    or :meth:`write` rather than from the constructor.

    Args:
        db_path: Path to the database file.  If None, uses the default path
            in the application data directory.

    Keyword Args:
        engine: An existing engine to use instead of opening ``db_path``

    """

    def __init__(self, db_path: Path | None = None, engine: Engine | None = None):
        #: Path to the database file, used when no engine was given.
        self.db_path = db_path
        #: The SQLAlchemy engine; created on first use if not given.
        self.engine = engine
        #: The session factory, with tables created; set on first use.
        self.session_factory: sessionmaker | None = None

    def _sessions(self) -> sessionmaker:
        if self.session_factory is None:
            if self.engine is None:
                self.engine = create_engine_with_path(self.db_path)
            self.session_factory = create_session_factory(self.engine)
        return self.session_factory

    def read(self, key: str) -> bytes | None:
        try:
            with self._sessions()() as session:
                row = session.get(KeyValue, key)
                return None if row is None else row.value
        except (SQLAlchemyError, OSError) as e:
            raise StorageError("database", key, str(e)) from e

    def write(self, key: str, data: bytes) -> None:
        try:
            with self._sessions()() as session:
                row = session.get(KeyValue, key)
                if row is None:
                    session.add(KeyValue(key=key, value=data))
                else:
                    row.value = data
                session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError("database", key, str(e)) from e

    def close(self) -> None:
        """Release the engine's connections."""
        if self.engine is not None:
            self.engine.dispose()


def get_default_storage(settings: QSettings | None = None) -> KeyValueStorage:
    """
    Build the storage backend named by the ``storage/backend`` setting:
    ``"settings"`` (the default) or ``"database"``.

    Args:
        settings: Settings to read the choice from and, for the settings
            backend, to store into.  If None, the application's default
            settings are used.

    Returns:
        The storage backend

    """
    if settings is None:
        settings = default_settings()
    backend = cast("str", settings.value(BACKEND_SETTING, "settings", type=str))
    if backend == "database":
        logger.info("Using database storage backend")
        return DatabaseStorage()
    if backend != "settings":
        logger.warning(f"Unknown storage backend {backend!r}, using settings")
    return SettingsStorage(settings)
