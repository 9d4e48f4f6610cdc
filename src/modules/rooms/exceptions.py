"""Room domain exceptions."""

from __future__ import annotations


class RoomAlreadyExists(Exception):
    """A room with the same name already exists."""


class RoomNotFound(Exception):
    """The requested room does not exist."""
