"""Services package initialization."""

from knittracker.services.codec import decode_projects, encode_projects
from knittracker.services.filter import filter_projects
from knittracker.services.import_export import ProjectExporter, ProjectImporter
from knittracker.services.pattern_grid import (
    GridCell,
    PatternGrid,
    RowLabel,
    render_grid,
)
from knittracker.services.seed import sample_projects
from knittracker.services.storage import (
    DatabaseStorage,
    KeyValueStorage,
    SettingsStorage,
    get_default_storage,
)
from knittracker.services.store import ProjectStore

__all__ = [
    "DatabaseStorage",
    "GridCell",
    "KeyValueStorage",
    "PatternGrid",
    "ProjectExporter",
    "ProjectImporter",
    "ProjectStore",
    "RowLabel",
    "SettingsStorage",
    "decode_projects",
    "encode_projects",
    "filter_projects",
    "get_default_storage",
    "render_grid",
    "sample_projects",
]
