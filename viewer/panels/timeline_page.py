"""
viewer/panels/timeline_page.py -- Chronological list of every entry.
"""

from __future__ import annotations

from collections.abc import Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from archive.render import TimelineEntry
from viewer.panels.entity_grid import ENTITY_ID_ROLE
from viewer.services.event_bus import EventBus
from viewer.widgets.notes_box import NotesBox


def entry_text(entry: TimelineEntry) -> str:
    return f"{entry.dates}\n{entry.name} ({entry.type})\n{entry.summary}"


class TimelinePage(QWidget):
    """Timeline entries, oldest first; clicking one opens its detail page."""

    def __init__(self, note_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._bus = EventBus.instance()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        heading = QLabel("Timeline")
        heading.setStyleSheet("font-family: Georgia, serif; font-size: 20px; font-weight: bold;")
        layout.addWidget(heading)

        self._list = QListWidget()
        self._list.setObjectName("timeline_list")
        self._list.setWordWrap(True)
        self._list.setSpacing(4)
        self._list.setCursor(Qt.CursorShape.PointingHandCursor)
        self._list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self._list, 3)

        self._notes = NotesBox(note_key)
        layout.addWidget(self._notes, 1)

    @property
    def notes_box(self) -> NotesBox:
        return self._notes

    def show_entries(self, entries: Sequence[TimelineEntry]) -> None:
        self._list.clear()
        for entry in entries:
            item = QListWidgetItem(entry_text(entry))
            item.setData(ENTITY_ID_ROLE, entry.entity_id)
            self._list.addItem(item)

    def entity_ids(self) -> list[str]:
        return [self._list.item(row).data(ENTITY_ID_ROLE) for row in range(self._list.count())]

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        entity_id = item.data(ENTITY_ID_ROLE)
        if entity_id:
            self._bus.entity_selected.emit(entity_id)
