"""
viewer/services/loader.py -- QThread worker for the one-shot archive load.

Runs ``EntityStore.load()`` off the GUI thread and reports the outcome
with Qt signals.  The main window builds nothing until one of them fires.

Usage::

    worker = LoaderWorker(store)
    worker.loaded.connect(on_loaded)
    worker.failed.connect(on_failed)
    worker.start()
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QThread, Signal

from archive.errors import LoadError
from archive.store import EntityStore

logger = logging.getLogger(__name__)


class LoaderWorker(QThread):
    """Background thread that loads the archive exactly once.

    Signals
    -------
    loaded(int)
        Emitted on success. Payload is the number of entries.
    failed(object)
        Emitted on failure. Payload is the ``LoadError``.
    """

    loaded = Signal(int)
    failed = Signal(object)

    def __init__(self, store: EntityStore, parent=None):
        super().__init__(parent)
        self._store = store

    @property
    def store(self) -> EntityStore:
        return self._store

    def run(self) -> None:
        """Thread entry point -- one load attempt, no retry."""
        try:
            entities = self._store.load()
        except LoadError as e:
            logger.error("Failed to load archive: %s", e)
            self.failed.emit(e)
            return
        self.loaded.emit(len(entities))
