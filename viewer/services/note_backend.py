"""
viewer/services/note_backend.py -- QSettings-backed note persistence.

Notes live under the ``notes/`` group of the application's QSettings so
they survive restarts next to the saved window layout.

Usage::

    from archive.notes import NoteStore
    from viewer.services.note_backend import QSettingsBackend

    notes = NoteStore(QSettingsBackend())
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ORG_NAME = "UnityArchive"
APP_NAME = "UnityArchiveViewer"

_GROUP = "notes"


class QSettingsBackend:
    """Key/value backend over ``QSettings``.

    Parameters
    ----------
    settings : QSettings | None
        Settings object to use.  Defaults to the application's native
        settings store.
    """

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings(ORG_NAME, APP_NAME)

    @property
    def settings(self) -> QSettings:
        return self._settings

    def get(self, key: str) -> str | None:
        value = self._settings.value(f"{_GROUP}/{key}")
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(f"{_GROUP}/{key}", value)
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            logger.warning("QSettings reported %s while saving %s", self._settings.status(), key)
