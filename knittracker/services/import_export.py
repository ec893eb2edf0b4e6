"""Project import/export service for Knitting Tracker."""

from __future__ import annotations

import dataclasses
import json
import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from knittracker.exc import DecodeError, DoesNotExist, InvalidProject
from knittracker.models.project import Project

if TYPE_CHECKING:
    from knittracker.services.store import ProjectStore

logger = logging.getLogger(__name__)

#: Format version written into export files.
EXPORT_VERSION: Final[str] = "1.0"


class ProjectExporter:
    """Exports single projects to JSON files."""

    def __init__(self, store: ProjectStore) -> None:
        """
        Initialize exporter.

        Args:
            store: The project store to export from

        """
        self.store = store

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """
        Sanitize filename.

        Args:
            filename: Filename to sanitize

        Returns:
            Sanitized filename

        """
        return filename.replace(" ", "_").replace(".", "")

    def get_project(self, project_id: uuid.UUID) -> Project:
        """
        Get project by ID.

        Args:
            project_id: Project ID

        Raises:
            DoesNotExist: if the store has no such project

        Returns:
            A snapshot of the project

        """
        project = self.store.get_project(project_id)
        if project is None:
            raise DoesNotExist("Project", project_id)  # noqa: EM101
        return project

    def export_project_json(self, project_id: uuid.UUID, filename: str) -> Path:
        """
        Export project as JSON to a file.

        Args:
            project_id: Project ID to export
            filename: Filename to export the project to; ``.json`` is
                appended if missing

        Raises:
            DoesNotExist: If project is not found
            ValueError: If the file cannot be written, with a descriptive
                message

        Returns:
            The path written

        """
        if not filename.endswith(".json"):
            filename += ".json"

        project = self.get_project(project_id)
        export_data: dict[str, Any] = {
            "export_version": EXPORT_VERSION,
            "project": project.to_json(),
        }

        path = Path(filename)
        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(export_data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            msg = f"Failed to write export file:\n{e!s}"
            raise ValueError(msg) from e
        logger.info(f"Exported project {project.name!r} to {path}")
        return path


class ProjectImporter:
    """Reads exported project files and adds them to the store."""

    def __init__(self, store: ProjectStore) -> None:
        """
        Initialize importer.

        Args:
            store: The project store to import into

        """
        self.store = store

    def _resolve_project_name(self, name: str) -> tuple[str, bool]:
        """
        Pick a name no project in the store already has, by appending
        `` (1)``, `` (2)``... to ``name``.

        Args:
            name: The name from the export file

        Returns:
            Tuple of the name to use and whether it had to be changed

        """
        taken = {project.name for project in self.store.projects}
        if name not in taken:
            return name, False
        counter = 1
        while f"{name} ({counter})" in taken:
            counter += 1
        return f"{name} ({counter})", True

    def _read(self, filename: str) -> Project:
        try:
            with Path(filename).open(encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            msg = f"Failed to read import file:\n{e!s}"
            raise ValueError(msg) from e
        except json.JSONDecodeError as e:
            msg = f"Import file is not valid JSON:\n{e!s}"
            raise ValueError(msg) from e

        if not isinstance(data, dict) or "export_version" not in data:
            msg = "Import file missing export_version"
            raise ValueError(msg)
        if data["export_version"] != EXPORT_VERSION:
            msg = (
                f"Export version {data['export_version']} is not supported; "
                f"expected {EXPORT_VERSION}."
            )
            raise ValueError(msg)
        try:
            return Project.from_json(data.get("project"))
        except DecodeError as e:
            msg = f"Import file does not contain a valid project:\n{e!s}"
            raise ValueError(msg) from e

    def import_project_json(self, filename: str) -> tuple[Project, bool]:
        """
        Import a project exported by :class:`ProjectExporter`.

        The imported project and its sections get new IDs and fresh
        timestamps, so importing the same file twice gives two projects.

        Args:
            filename: Path of the export file

        Raises:
            ValueError: If the file cannot be read, does not hold a project,
                or the project has no sections or a blank name

        Returns:
            Tuple of the imported project and whether it was renamed to avoid
            a name collision

        """
        exported = self._read(filename)
        name, was_renamed = self._resolve_project_name(exported.name)
        try:
            project = Project.create(
                name,
                description=exported.description,
                sections=[
                    dataclasses.replace(section, id=uuid.uuid4())
                    for section in exported.sections
                ],
                notes=exported.notes,
                image_data=exported.image_data,
            )
        except InvalidProject as e:
            msg = f"Import file does not contain a valid project:\n{e!s}"
            raise ValueError(msg) from e
        self.store.add_project(project)
        logger.info(f"Imported project {name!r} from {filename}")
        return project, was_renamed
