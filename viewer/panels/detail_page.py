"""
viewer/panels/detail_page.py -- Entity detail page.

Shows one entry's name, period, long-form text and sources, plus a notes
box keyed to that entry.  The long-form text is rendered as rich text
exactly as it appears in the data document: the document is trusted and
no sanitisation happens here.
"""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QSplitter,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import Qt

from archive.render import DetailView
from viewer.services.event_bus import EventBus
from viewer.widgets.notes_box import NotesBox

logger = logging.getLogger(__name__)


class DetailPage(QWidget):
    """Single-entry view with a Back button."""

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._bus = EventBus.instance()
        self._entity_id = ""
        self._setup_ui()
        self._back_btn.clicked.connect(self._bus.detail_closed.emit)

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        header = QHBoxLayout()
        self._back_btn = QPushButton("← Back")
        self._back_btn.setMaximumWidth(90)
        header.addWidget(self._back_btn)
        self._title_label = QLabel("")
        self._title_label.setStyleSheet("font-family: Georgia, serif; font-size: 22px; font-weight: bold;")
        header.addWidget(self._title_label, 1)
        layout.addLayout(header)

        self._dates_label = QLabel("")
        self._dates_label.setStyleSheet("font-style: italic;")
        layout.addWidget(self._dates_label)

        splitter = QSplitter(Qt.Orientation.Vertical)

        self._content = QTextBrowser()
        self._content.setOpenExternalLinks(True)
        splitter.addWidget(self._content)

        sources_group = QGroupBox("Sources")
        sources_layout = QVBoxLayout(sources_group)
        self._sources = QListWidget()
        self._sources.setWordWrap(True)
        sources_layout.addWidget(self._sources)
        splitter.addWidget(sources_group)

        self._notes = NotesBox(title="Notes on this entry")
        splitter.addWidget(self._notes)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        splitter.setStretchFactor(2, 1)
        layout.addWidget(splitter, 1)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def notes_box(self) -> NotesBox:
        return self._notes

    @property
    def entity_id(self) -> str:
        return self._entity_id

    def title(self) -> str:
        return self._title_label.text()

    def period(self) -> str:
        return self._dates_label.text()

    def sources(self) -> list[str]:
        return [self._sources.item(row).text() for row in range(self._sources.count())]

    def content_text(self) -> str:
        return self._content.toPlainText()

    def show_detail(self, detail: DetailView, note_text: str) -> None:
        self._entity_id = detail.entity_id
        self._title_label.setText(detail.title)
        self._dates_label.setText(detail.period)
        self._content.setHtml(detail.detail_html)

        self._sources.clear()
        for number, source in enumerate(detail.sources, start=1):
            self._sources.addItem(f"{number}. {source}")

        self._notes.set_key(detail.note_key)
        self._notes.set_text(note_text)
        logger.debug("Detail page showing %s", detail.entity_id)
