"""
archive/errors.py -- Error taxonomy for the archive core.

Load errors are terminal for the session.  Lookup and export errors are
recovered by the navigation controller and never reach the GUI as
exceptions.
"""

from __future__ import annotations


class ArchiveError(Exception):
    """Base class for all archive errors."""


class LoadError(ArchiveError):
    """The archive data could not be loaded.

    Parameters
    ----------
    source : str
        Path or URL of the data document.
    reason : str
        Human-readable description of the failure.
    """

    user_message = "Error loading archive data."

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class UnreachableError(LoadError):
    """The data document could not be read (missing file, network failure)."""

    user_message = (
        "Error loading archive data. Please check the data file path."
    )


class MalformedError(LoadError):
    """The data document was read but does not match the entry schema."""

    user_message = (
        "Error loading archive data. Please check the data file format."
    )


class EntityNotFoundError(ArchiveError, LookupError):
    """No entity with the requested id exists in the collection."""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(entity_id)


class GraphExportError(ArchiveError):
    """The mind map was exported before its layout was ready."""
