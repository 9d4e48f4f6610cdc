"""Option domain exceptions."""

from __future__ import annotations


class OptionAlreadyExists(Exception):
    """An option with the same name already exists."""


class OptionNotFound(Exception):
    """The requested option does not exist."""
