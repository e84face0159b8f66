"""
archive/ -- Qt-free core of the Unity Archive Viewer.

Submodules:
    models      Pydantic model for archive entries.
    errors      Error taxonomy (load, lookup, export).
    store       One-shot loader and read-only entity collection.
    notes       Note store adapter over a key/value backend.
    search      Text filter over the collection.
    render      Pure view builders (grids, timeline, detail, daily, mind map).
    graph       NetworkX helpers for laying out the mind map.
    navigation  View-state controller and command dispatch.
    utils       Atomic JSON file helpers.
"""

from archive.models import Entity
from archive.store import EntityStore

__all__ = ["Entity", "EntityStore"]
