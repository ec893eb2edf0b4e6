"""Encoding of the whole project collection for storage."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from knittracker.exc import DecodeError, EncodeError
from knittracker.models.project import Project

if TYPE_CHECKING:
    from collections.abc import Iterable


def encode_projects(projects: Iterable[Project]) -> bytes:
    """
    Serialize an ordered collection of projects as UTF-8 JSON.

    Args:
        projects: The projects, in list order

    Returns:
        The encoded bytes

    Raises:
        EncodeError: if the projects cannot be serialized

    """
    try:
        payload = [project.to_json() for project in projects]
        return json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as e:
        raise EncodeError(str(e)) from e


def decode_projects(data: bytes) -> list[Project]:
    """
    Parse bytes produced by :func:`encode_projects`.

    Args:
        data: The encoded collection

    Returns:
        The projects, in stored order

    Raises:
        DecodeError: if ``data`` is not a valid project collection

    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise DecodeError(str(e)) from e
    if not isinstance(payload, list):
        msg = "top level value is not a list"
        raise DecodeError(msg)
    return [Project.from_json(project_data) for project_data in payload]
