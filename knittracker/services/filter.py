"""Search over the project list."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from knittracker.models.project import Project


def filter_projects(projects: Iterable[Project], text: str) -> list[Project]:
    """
    Find projects whose name or description contains ``text``, ignoring case.

    Args:
        projects: Projects to search, in display order
        text: Search text.  Blank text matches everything.

    Returns:
        The matching projects, in their original order

    """
    needle = text.strip().casefold()
    if not needle:
        return list(projects)
    return [
        project
        for project in projects
        if needle in project.name.casefold() or needle in project.description.casefold()
    ]
