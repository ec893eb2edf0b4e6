"""Utility functions for Knitting Tracker."""

import sys
from datetime import UTC, datetime
from pathlib import Path


def get_data_dir() -> Path:
    """
    Get the application data directory, creating it if needed.

    - On Windows, this is the user's ``AppData/Local/Knitting Tracker``
        directory.
    - On macOS, this is the user's
        ``~/Library/Application Support/Knitting Tracker`` directory.
    - On Linux, this is the user's ``~/.config/Knitting Tracker`` directory.
    - If the platform is not supported, raise a ValueError.

    Returns:
        Path to the data directory

    """
    if sys.platform not in ["win32", "darwin", "linux"]:
        msg = f"Unsupported platform: {sys.platform}"
        raise ValueError(msg)
    if sys.platform == "win32":
        data_dir = Path.home() / "AppData" / "Local" / "Knitting Tracker"
    elif sys.platform == "darwin":
        data_dir = Path.home() / "Library" / "Application Support" / "Knitting Tracker"
    else:
        data_dir = Path.home() / ".config" / "Knitting Tracker"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def utcnow() -> datetime:
    """
    Current time as a naive UTC datetime.

    All timestamps held in memory are naive UTC so they compare cleanly with
    values parsed by :func:`from_utc_iso`.
    """
    return datetime.now(tz=UTC).replace(tzinfo=None)


def to_utc_iso(dt: datetime | None) -> str | None:
    """
    Convert datetime to UTC ISO format string.

    Args:
        dt: Datetime object to convert, or None

    Returns:
        ISO format string with UTC timezone, or None

    """
    if dt is None:
        return None
    # Naive datetimes are already UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt_utc = dt.astimezone(UTC)
    return dt_utc.isoformat()


def from_utc_iso(iso_str: str | None) -> datetime | None:
    """
    Parse UTC ISO format string to datetime.

    Args:
        iso_str: ISO format string, or None

    Returns:
        Naive datetime object (UTC), or None

    """
    if iso_str is None:
        return None
    dt = datetime.fromisoformat(iso_str)
    dt = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    return dt.replace(tzinfo=None)
