"""The project store: owner of every project and sole writer to storage."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QObject, Signal

from knittracker.exc import DecodeError, EncodeError, StorageError
from knittracker.services.codec import decode_projects, encode_projects
from knittracker.services.filter import filter_projects
from knittracker.services.seed import sample_projects
from knittracker.services.storage import get_default_storage

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable, Iterable

    from knittracker.models.project import Project
    from knittracker.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class ProjectStore(QObject):
    """
    Holds the canonical list of projects and applies every change to it.

    Readers get deep copies (:attr:`projects`, :meth:`get_project`); changes
    come back in through the mutating methods.  After each change that
    actually alters the list, the whole list is written to storage under
    :attr:`SAVE_KEY` and :attr:`projects_changed` is emitted.  Write failures
    are logged and otherwise ignored: the in-memory list stays authoritative
    and the next successful write brings storage back in line.

    Mutating methods return True when they changed something.  Looking up a
    project or section that isn't there is a quiet no-op that returns False.

    Args:
        storage: Where to persist projects.  If None, the backend configured
            in the application settings is used.

    Keyword Args:
        parent: Qt parent object

    """

    #: Emitted after every change to the project list, and after :meth:`load`.
    projects_changed = Signal()
    #: Emitted with a snapshot of a newly added project.
    project_added = Signal(object)
    #: Emitted with a snapshot of a project after it changed.
    project_updated = Signal(object)
    #: Emitted with the last snapshot of a removed project.
    project_removed = Signal(object)

    #: The storage key the project list is saved under.
    SAVE_KEY: Final[str] = "SavedProjects"

    def __init__(
        self, storage: KeyValueStorage | None = None, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        #: The persistence backend.
        self.storage = storage if storage is not None else get_default_storage()
        #: The canonical projects, in display order.
        self._projects: list[Project] = []

    # ===============================
    # Reading
    # ===============================

    @property
    def projects(self) -> list[Project]:
        """
        A snapshot of every project, in display order.  Editing the returned
        objects does not affect the store.
        """
        return [copy.deepcopy(project) for project in self._projects]

    def get_project(self, project_id: uuid.UUID) -> Project | None:
        """
        Get a snapshot of a project by ID.

        Args:
            project_id: Project ID

        Returns:
            A copy of the project, or None if not found

        """
        project = self._find(project_id)
        return None if project is None else copy.deepcopy(project)

    def search(self, text: str) -> list[Project]:
        """
        Find projects by name or description, ignoring case.

        Args:
            text: Search text; blank text returns every project

        Returns:
            Snapshots of the matching projects

        """
        return filter_projects(self.projects, text)

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Call ``callback`` after every change to the project list.

        Args:
            callback: Function taking no arguments

        Returns:
            A function that undoes the subscription

        """
        self.projects_changed.connect(callback)

        def unsubscribe() -> None:
            self.projects_changed.disconnect(callback)

        return unsubscribe

    # ===============================
    # Loading
    # ===============================

    def load(self) -> None:
        """
        Replace the in-memory projects with what storage holds.

        Missing or unreadable data counts as no data.  If that leaves the
        store empty, the sample projects are loaded so a first run has
        something to show; they are not written until the first change.
        """
        self._projects = self._read()
        if self._projects:
            logger.info(f"Loaded {len(self._projects)} projects")
        else:
            logger.info("No saved projects found, loading sample projects")
            self._projects = sample_projects()
        self.projects_changed.emit()

    def _read(self) -> list[Project]:
        try:
            data = self.storage.read(self.SAVE_KEY)
        except StorageError as e:
            logger.warning(f"Could not read saved projects: {e}")
            return []
        if data is None:
            return []
        try:
            return decode_projects(data)
        except DecodeError as e:
            logger.warning(f"Ignoring unreadable saved projects: {e}")
            return []

    # ===============================
    # Project management
    # ===============================

    def add_project(self, project: Project) -> bool:
        """
        Append a project to the end of the list.

        Args:
            project: The project to add.  The store keeps its own copy.

        Returns:
            True if added; False if a project with the same ID is already
            in the store, or two of its sections share an ID

        """
        if self._index_of(project.id) is not None:
            logger.warning(f"Project {project.id} is already in the store")
            return False
        if not project.has_unique_section_ids:
            logger.warning(f"Project {project.id} has sections sharing an ID")
            return False
        added = copy.deepcopy(project)
        self._clamp_rows(added)
        self._projects.append(added)
        self._commit()
        self.project_added.emit(copy.deepcopy(added))
        return True

    def update_project(self, project: Project) -> bool:
        """
        Replace the stored project that has the same ID.  ``updated_at`` is
        set to now whatever the caller put in it.

        Args:
            project: The edited project

        Returns:
            True if replaced; False if no project has that ID, or two of
            the edited project's sections share an ID

        """
        index = self._index_of(project.id)
        if index is None:
            return False
        if not project.has_unique_section_ids:
            logger.warning(f"Project {project.id} has sections sharing an ID")
            return False
        updated = copy.deepcopy(project)
        updated.updated_at = self._projects[index].updated_at
        updated.touch()
        self._clamp_rows(updated)
        self._projects[index] = updated
        self._commit()
        self.project_updated.emit(copy.deepcopy(updated))
        return True

    def update_notes(self, project_id: uuid.UUID, notes: str) -> bool:
        """
        Replace a project's notes.

        Args:
            project_id: Project ID
            notes: The new notes

        Returns:
            True if the project was found

        """
        project = self._find(project_id)
        if project is None:
            return False
        project.notes = notes
        project.touch()
        self._commit()
        self.project_updated.emit(copy.deepcopy(project))
        return True

    def delete_project(self, project: Project) -> bool:
        """
        Remove the project with the same ID as ``project``.

        Args:
            project: The project to remove

        Returns:
            True if removed; False if no project has that ID

        """
        index = self._index_of(project.id)
        if index is None:
            return False
        removed = self._projects.pop(index)
        self._commit()
        self.project_removed.emit(removed)
        return True

    def delete_projects(self, indices: Iterable[int]) -> bool:
        """
        Remove projects by position in the list.  Positions outside the list
        are ignored, as are repeats.

        Args:
            indices: Zero-based positions

        Returns:
            True if anything was removed

        """
        positions = sorted(
            {index for index in indices if 0 <= index < len(self._projects)},
            reverse=True,
        )
        if not positions:
            return False
        removed = [self._projects.pop(index) for index in positions]
        self._commit()
        for project in reversed(removed):
            self.project_removed.emit(project)
        return True

    # ===============================
    # Row counter
    # ===============================

    def increment_row(self, project_id: uuid.UUID, section_id: uuid.UUID) -> bool:
        """
        Count one more worked row in a section.  Does nothing once the
        section has reached its total.

        Args:
            project_id: Project ID
            section_id: Section ID within that project

        Returns:
            True if the counter moved

        """
        return self._change_row(project_id, section_id, increment=True)

    def decrement_row(self, project_id: uuid.UUID, section_id: uuid.UUID) -> bool:
        """
        Take back one worked row in a section.  Does nothing at row zero.

        Args:
            project_id: Project ID
            section_id: Section ID within that project

        Returns:
            True if the counter moved

        """
        return self._change_row(project_id, section_id, increment=False)

    def _change_row(
        self, project_id: uuid.UUID, section_id: uuid.UUID, *, increment: bool
    ) -> bool:
        project = self._find(project_id)
        if project is None:
            return False
        section = project.find_section(section_id)
        if section is None:
            return False
        moved = section.increment() if increment else section.decrement()
        if not moved:
            return False
        project.touch()
        self._commit()
        self.project_updated.emit(copy.deepcopy(project))
        return True

    # ===============================
    # Internals
    # ===============================

    def _index_of(self, project_id: uuid.UUID) -> int | None:
        for index, project in enumerate(self._projects):
            if project.id == project_id:
                return index
        return None

    def _find(self, project_id: uuid.UUID) -> Project | None:
        index = self._index_of(project_id)
        return None if index is None else self._projects[index]

    @staticmethod
    def _clamp_rows(project: Project) -> None:
        for section in project.sections:
            section.clamp()

    def _commit(self) -> None:
        """Write the whole list to storage, then tell subscribers."""
        self._save()
        self.projects_changed.emit()

    def _save(self) -> None:
        try:
            data = encode_projects(self._projects)
            self.storage.write(self.SAVE_KEY, data)
        except (EncodeError, StorageError):
            logger.exception("Failed to save projects")
