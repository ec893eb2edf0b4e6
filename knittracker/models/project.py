"""Project model."""

from __future__ import annotations

import base64
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar, Final

from knittracker.exc import DecodeError, InvalidProject
from knittracker.mixins import ImmutableFieldsMixin
from knittracker.models.section import Section, parse_uuid, require
from knittracker.utils import from_utc_iso, to_utc_iso, utcnow

if TYPE_CHECKING:
    from collections.abc import Iterable

#: Name of the default section made when none are given to :meth:`Project.create`.
DEFAULT_SECTION_NAME: Final[str] = "Main Section"
#: Row count of the default section.
DEFAULT_SECTION_ROWS: Final[int] = 50


@dataclass
class Project(ImmutableFieldsMixin):
    """
    Represents a knitting project: an ordered list of sections plus notes and
    an optional photo.

    ``created_at`` is fixed at construction; ``updated_at`` starts equal to it
    and only ever moves forward (see :meth:`touch`).
    """

    IMMUTABLE_FIELDS: ClassVar[tuple[str, ...]] = ("id", "created_at")

    #: The project name.
    name: str
    #: Short description, e.g. the collection or recipient.
    description: str = ""
    #: The sections, in working order.
    sections: list[Section] = field(default_factory=list)
    #: Free-text notes.
    notes: str = ""
    #: Optional photo of the work, as raw bytes.
    image_data: bytes | None = None
    #: The project ID.
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    #: The date and time the project was created (naive UTC).
    created_at: datetime = field(default_factory=utcnow)
    #: The date and time the project was last updated (naive UTC).
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.updated_at is None or self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @classmethod
    def create(
        cls,
        name: str,
        description: str = "",
        sections: Iterable[Section] | None = None,
        notes: str = "",
        image_data: bytes | None = None,
    ) -> Project:
        """
        Create a new project, as the new project form does.

        Args:
            name: Project name

        Keyword Args:
            description: Project description
            sections: Sections to start with.  If None, a single default
                section is created.
            notes: Project notes
            image_data: Optional photo bytes

        Raises:
            InvalidProject: if the name is blank or ``sections`` is empty

        Returns:
            The new :class:`Project`

        """
        if not name.strip():
            msg = "project name must not be blank"
            raise InvalidProject(msg)
        if sections is None:
            section_list = [
                Section.create(DEFAULT_SECTION_NAME, DEFAULT_SECTION_ROWS)
            ]
        else:
            section_list = list(sections)
        if not section_list:
            msg = "a project needs at least one section"
            raise InvalidProject(msg)
        project = cls(
            name=name,
            description=description,
            sections=section_list,
            notes=notes,
            image_data=image_data,
        )
        if not project.has_unique_section_ids:
            msg = "section identifiers must be unique within a project"
            raise InvalidProject(msg)
        return project

    @property
    def overall_progress(self) -> float:
        """Mean of the sections' progress; 0 when there are no sections."""
        if not self.sections:
            return 0.0
        return sum(section.progress for section in self.sections) / len(
            self.sections
        )

    @property
    def active_section(self) -> Section | None:
        """The first section with rows left to work, or None."""
        for section in self.sections:
            if section.current_row < section.total_rows:
                return section
        return None

    @property
    def has_unique_section_ids(self) -> bool:
        """True unless two sections share an ID."""
        section_ids = {section.id for section in self.sections}
        return len(section_ids) == len(self.sections)

    @property
    def completed_sections(self) -> int:
        """Number of sections whose rows are all worked."""
        return sum(1 for section in self.sections if section.is_complete)

    def find_section(self, section_id: uuid.UUID) -> Section | None:
        """
        Get a section of this project by ID.

        Args:
            section_id: Section ID

        Returns:
            The section, or None if not found

        """
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def touch(self, now: datetime | None = None) -> None:
        """
        Mark the project as modified.  ``updated_at`` never goes backwards,
        even if the wall clock does.

        Keyword Args:
            now: The modification time; defaults to the current time

        """
        if now is None:
            now = utcnow()
        floor = self.updated_at if self.updated_at is not None else self.created_at
        self.updated_at = max(now, floor, self.created_at)

    def to_json(self) -> dict[str, Any]:
        """
        Serialize project to a JSON-compatible dictionary.  ``imageData`` is
        base64 text and is left out when there is no image.

        Returns:
            Dictionary containing project data with its sections

        """
        project_data: dict[str, Any] = {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "sections": [section.to_json() for section in self.sections],
            "notes": self.notes,
            "createdAt": to_utc_iso(self.created_at),
            "updatedAt": to_utc_iso(self.updated_at),
        }
        if self.image_data is not None:
            project_data["imageData"] = base64.b64encode(self.image_data).decode(
                "ascii"
            )
        return project_data

    @classmethod
    def from_json(cls, project_data: Any) -> Project:
        """
        Create a project from decoded JSON data.

        Args:
            project_data: Project dictionary

        Returns:
            The decoded :class:`Project`

        Raises:
            DecodeError: if the data is not a valid project

        """
        if not isinstance(project_data, dict):
            msg = "project is not an object"
            raise DecodeError(msg)
        image_data = project_data.get("imageData")
        if image_data is not None:
            encoded = require(project_data, "imageData", str)
            try:
                image_data = base64.b64decode(encoded, validate=True)
            except ValueError as e:
                msg = "imageData is not valid base64"
                raise DecodeError(msg) from e
        sections = [
            Section.from_json(section_data)
            for section_data in require(project_data, "sections", list)
        ]
        return cls(
            id=parse_uuid(require(project_data, "id", str)),
            name=require(project_data, "name", str),
            description=require(project_data, "description", str),
            sections=sections,
            notes=require(project_data, "notes", str),
            image_data=image_data,
            created_at=cls._parse_timestamp(project_data, "createdAt"),
            updated_at=cls._parse_timestamp(project_data, "updatedAt"),
        )

    @staticmethod
    def _parse_timestamp(project_data: dict[str, Any], key: str) -> datetime:
        value = require(project_data, key, str)
        try:
            parsed = from_utc_iso(value)
        except (ValueError, OverflowError) as e:
            msg = f'field "{key}" is not an ISO timestamp'
            raise DecodeError(msg) from e
        if parsed is None:
            msg = f'field "{key}" is empty'
            raise DecodeError(msg)
        return parsed
