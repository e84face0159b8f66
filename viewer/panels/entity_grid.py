"""
viewer/panels/entity_grid.py -- Card grid page for persons or movements/events.

Shows one ``GridBucket`` as a wrapping grid of cards.  Clicking a card
emits entity_selected via EventBus; an empty bucket shows its empty-state
message instead of the grid.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QSize, Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListView,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from archive.render import Card, GridBucket
from viewer.services.event_bus import EventBus
from viewer.widgets.notes_box import NotesBox

logger = logging.getLogger(__name__)

# Custom role for storing entity ID in list items
ENTITY_ID_ROLE = Qt.ItemDataRole.UserRole + 1

CARD_SIZE = QSize(280, 120)


def card_text(card: Card) -> str:
    return f"{card.name}\nType: {card.type}\nKey Terms: {card.key_terms}"


class EntityGridPage(QWidget):
    """Grid of entity cards with a section notes box underneath."""

    def __init__(self, title: str, note_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._title = title
        self._bus = EventBus.instance()
        self._setup_ui(note_key)
        self._grid.itemClicked.connect(self._on_item_clicked)

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------

    def _setup_ui(self, note_key: str) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        header = QHBoxLayout()
        heading = QLabel(self._title)
        heading.setStyleSheet("font-family: Georgia, serif; font-size: 20px; font-weight: bold;")
        header.addWidget(heading)
        header.addStretch()
        self._count_label = QLabel("0 entries")
        self._count_label.setStyleSheet("color: #888; font-size: 11px;")
        header.addWidget(self._count_label)
        layout.addLayout(header)

        self._grid = QListWidget()
        self._grid.setObjectName("entity_grid")
        self._grid.setViewMode(QListView.ViewMode.IconMode)
        self._grid.setResizeMode(QListView.ResizeMode.Adjust)
        self._grid.setMovement(QListView.Movement.Static)
        self._grid.setGridSize(CARD_SIZE)
        self._grid.setWordWrap(True)
        self._grid.setSpacing(8)
        self._grid.setCursor(Qt.CursorShape.PointingHandCursor)
        layout.addWidget(self._grid, 3)

        self._empty_label = QLabel("")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("color: gray; font-style: italic;")
        self._empty_label.setVisible(False)
        layout.addWidget(self._empty_label)

        self._notes = NotesBox(note_key)
        layout.addWidget(self._notes, 1)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def notes_box(self) -> NotesBox:
        return self._notes

    def show_bucket(self, bucket: GridBucket) -> None:
        """Replace the cards with *bucket*."""
        self._grid.clear()
        for card in bucket.cards:
            item = QListWidgetItem(card_text(card))
            item.setData(ENTITY_ID_ROLE, card.entity_id)
            item.setToolTip(card.name)
            item.setSizeHint(CARD_SIZE)
            self._grid.addItem(item)

        self._empty_label.setText(bucket.empty_message)
        self._empty_label.setVisible(bucket.is_empty)
        self._grid.setVisible(not bucket.is_empty)
        self._count_label.setText(f"{len(bucket)} entries")

    def card_count(self) -> int:
        return self._grid.count()

    def entity_ids(self) -> list[str]:
        return [self._grid.item(row).data(ENTITY_ID_ROLE) for row in range(self._grid.count())]

    def empty_message(self) -> str:
        return self._empty_label.text() if self._empty_label.isVisibleTo(self) else ""

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        entity_id = item.data(ENTITY_ID_ROLE)
        if entity_id:
            self._bus.entity_selected.emit(entity_id)
