"""Section model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, ClassVar, Final

from knittracker.exc import DecodeError
from knittracker.mixins import ImmutableFieldsMixin

#: Instructions given to sections created from the new project form.
DEFAULT_INSTRUCTIONS: Final[str] = "Add your pattern instructions here"


def require(data: dict[str, Any], key: str, kind: type) -> Any:
    """
    Fetch ``key`` from a decoded JSON object, checking its type.

    ``bool`` is never accepted where ``int`` is asked for, even though Python
    treats it as a subclass.

    Raises:
        DecodeError: the key is missing or holds the wrong type

    """
    if key not in data:
        msg = f'missing field "{key}"'
        raise DecodeError(msg)
    value = data[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f'field "{key}" has type {type(value).__name__}'
        raise DecodeError(msg)
    return value


def parse_uuid(value: str) -> uuid.UUID:
    """Parse an identifier string, raising :class:`DecodeError` on garbage."""
    try:
        return uuid.UUID(value)
    except ValueError as e:
        msg = f'bad identifier "{value}"'
        raise DecodeError(msg) from e


@dataclass
class Section(ImmutableFieldsMixin):
    """
    Represents one piece of a project (a sleeve, a back panel...) with its own
    row counter.

    ``current_row`` is kept inside ``[0, total_rows]`` by :meth:`increment`,
    :meth:`decrement` and :meth:`clamp`; the store routes every counter
    change through those.  ``total_rows`` of zero is allowed and simply means
    no measurable progress.
    """

    IMMUTABLE_FIELDS: ClassVar[tuple[str, ...]] = ("id",)

    #: The section name.
    name: str
    #: The number of rows this section needs.
    total_rows: int
    #: The number of rows worked so far.
    current_row: int = 0
    #: The pattern instructions for this section.
    pattern_instructions: str = ""
    #: Free-text notes.
    notes: str = ""
    #: Optional stitch count for the section.
    stitch_count: int | None = None
    #: The section ID, unique within its project.
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(cls, name: str, total_rows: int) -> Section:
        """
        Create a fresh section the way the new project form does: no rows
        worked, placeholder instructions, no stitch count.

        Args:
            name: Section name
            total_rows: Target row count

        Returns:
            The new :class:`Section`

        """
        return cls(
            name=name,
            total_rows=total_rows,
            pattern_instructions=DEFAULT_INSTRUCTIONS,
        )

    @property
    def progress(self) -> float:
        """
        Percentage of rows worked, in ``[0, 100]``; 0 when ``total_rows`` is
        not positive.
        """
        if self.total_rows <= 0:
            return 0.0
        ratio = self.current_row / self.total_rows * 100
        return min(max(ratio, 0.0), 100.0)

    @property
    def is_complete(self) -> bool:
        """True once every row has been worked."""
        return self.current_row >= self.total_rows

    def increment(self) -> bool:
        """
        Work one more row, unless the section is already at its total.

        Returns:
            True if the counter moved

        """
        if self.current_row < self.total_rows:
            self.current_row += 1
            return True
        return False

    def decrement(self) -> bool:
        """
        Undo one row, unless the counter is already at zero.

        Returns:
            True if the counter moved

        """
        if self.current_row > 0:
            self.current_row -= 1
            return True
        return False

    def clamp(self) -> None:
        """Pull ``current_row`` back into ``[0, total_rows]``."""
        upper = max(self.total_rows, 0)
        self.current_row = min(max(self.current_row, 0), upper)

    def to_json(self) -> dict[str, Any]:
        """
        Serialize section to a JSON-compatible dictionary.  ``stitchCount`` is
        left out entirely when unset.

        Returns:
            Dictionary containing section data

        """
        section_data: dict[str, Any] = {
            "id": str(self.id),
            "name": self.name,
            "currentRow": self.current_row,
            "totalRows": self.total_rows,
            "patternInstructions": self.pattern_instructions,
            "notes": self.notes,
        }
        if self.stitch_count is not None:
            section_data["stitchCount"] = self.stitch_count
        return section_data

    @classmethod
    def from_json(cls, section_data: Any) -> Section:
        """
        Create a section from decoded JSON data.

        Args:
            section_data: Section dictionary

        Returns:
            The decoded :class:`Section`

        Raises:
            DecodeError: if the data is not a valid section

        """
        if not isinstance(section_data, dict):
            msg = "section is not an object"
            raise DecodeError(msg)
        stitch_count = section_data.get("stitchCount")
        if stitch_count is not None:
            stitch_count = require(section_data, "stitchCount", int)
        return cls(
            id=parse_uuid(require(section_data, "id", str)),
            name=require(section_data, "name", str),
            current_row=require(section_data, "currentRow", int),
            total_rows=require(section_data, "totalRows", int),
            pattern_instructions=require(section_data, "patternInstructions", str),
            notes=require(section_data, "notes", str),
            stitch_count=stitch_count,
        )
