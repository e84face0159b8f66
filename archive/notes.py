"""
archive/notes.py -- Note store adapter.

Free-text notes are kept in an external key/value backend.  This module
owns the key scheme and the "absent means empty" rule; the backend owns
persistence.  Writes always overwrite, reads default to ``""``, and
nothing is ever deleted.

Key scheme::

    homeNotes, personsNotes, ...     one fixed key per section notes box
    notes-<entity id>                one key per entity detail page

Usage::

    from archive.notes import NoteStore, JsonFileBackend, detail_key

    notes = NoteStore(JsonFileBackend("notes.json"))
    notes.save(detail_key("ann-001"), "hello")
    notes.load("notes-ann-001")      # "hello"
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from archive.utils import safe_read_json, safe_write_json

logger = logging.getLogger(__name__)

# Fixed note keys, one per section notes box
SECTION_NOTE_KEYS: dict[str, str] = {
    "home": "homeNotes",
    "persons": "personsNotes",
    "movements": "movementsNotes",
    "timeline": "timelineNotes",
    "mindmap": "mindmapNotes",
    "resources": "resourcesNotes",
}

DETAIL_KEY_PREFIX = "notes-"


def section_key(section_id: str) -> str | None:
    """Return the fixed note key for *section_id*, or ``None`` if it has no box."""
    return SECTION_NOTE_KEYS.get(section_id)


def detail_key(entity_id: str) -> str:
    """Return the note key for an entity's detail page."""
    return DETAIL_KEY_PREFIX + entity_id


class KeyValueBackend(Protocol):
    """String key/value persistence capability."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """Backend that lives only as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileBackend:
    """Backend persisted as one flat JSON object on disk.

    Every ``set`` rewrites the file atomically.  A missing or corrupt file
    reads as empty.
    """

    def __init__(self, path):
        self._path = str(path)
        self._lock = threading.Lock()
        data = safe_read_json(self._path, default={})
        if not isinstance(data, dict):
            logger.warning("Notes file %s is not a JSON object, ignoring it", self._path)
            data = {}
        self._data: dict[str, str] = {str(k): str(v) for k, v in data.items()}

    @property
    def path(self) -> str:
        return self._path

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            snapshot = dict(self._data)
        safe_write_json(self._path, snapshot)


class NoteStore:
    """Thin pass-through to a :class:`KeyValueBackend`.

    No validation, no size limits, no eviction.
    """

    def __init__(self, backend: KeyValueBackend):
        self._backend = backend

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    def save(self, key: str, text: str) -> None:
        self._backend.set(key, text)
        logger.debug("Saved %d chars under %s", len(text), key)

    def load(self, key: str) -> str:
        value = self._backend.get(key)
        return value if value is not None else ""
