"""
viewer/services/event_bus.py -- Application-wide event bus using Qt signals.

Singleton that provides typed signals for user commands.  Pages emit on
the bus instead of calling the navigation controller directly; the main
window turns each signal into a ``Command`` and dispatches it.

Usage::

    from viewer.services.event_bus import EventBus

    bus = EventBus.instance()
    bus.entity_selected.connect(my_handler)
    bus.entity_selected.emit("ann-001")
"""

from __future__ import annotations

import threading

from PySide6.QtCore import QObject, Signal


class EventBus(QObject):
    """Application-wide signal bus for user commands.

    Signals
    -------
    section_requested(str)
        The user picked a section. Payload is the section id.
    entity_selected(str)
        The user clicked a card, timeline entry or node. Payload is the
        entity ID.
    detail_closed()
        The user pressed Back on the detail page.
    search_changed(str)
        The search text changed. Payload is the raw query.
    notes_edited(str, str)
        A notes box changed: (note_key, text).
    notes_copy_requested(str)
        The user pressed Copy on a notes box. Payload is the note key.
    mind_map_reset_requested()
        The user pressed Reset on the mind map.
    mind_map_export_requested(str)
        The user chose a file to save the mind map to. Payload is the path.
    error_occurred(str)
        Something failed that the user should hear about, such as the
        mind map layout. Payload is the message.
    """

    # Navigation
    section_requested = Signal(str)
    entity_selected = Signal(str)
    detail_closed = Signal()
    search_changed = Signal(str)

    # Notes
    notes_edited = Signal(str, str)
    notes_copy_requested = Signal(str)

    # Mind map
    mind_map_reset_requested = Signal()
    mind_map_export_requested = Signal(str)

    # Errors
    error_occurred = Signal(str)

    # Singleton
    _instance: EventBus | None = None
    _lock = threading.Lock()

    @classmethod
    def instance(cls) -> EventBus:
        """Return the singleton EventBus instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.deleteLater()
            cls._instance = None
