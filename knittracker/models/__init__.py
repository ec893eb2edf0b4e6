"""Data models for Knitting Tracker."""

from knittracker.models.project import Project
from knittracker.models.section import Section
from knittracker.models.stitch import StitchSymbol

__all__ = ["Project", "Section", "StitchSymbol"]
