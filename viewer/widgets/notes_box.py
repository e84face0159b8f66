"""
viewer/widgets/notes_box.py -- Persistent notes box with a Copy button.

Each box is bound to one note key.  Every edit is published on the
EventBus so the navigation controller can persist it; text pushed in from
the controller does not echo back as an edit.
"""

from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from archive.navigation import COPIED_MESSAGE
from viewer.services.event_bus import EventBus

_COPY_LABEL = "Copy Notes"
_COPIED_STYLE = "background-color: #2e7d32; color: #fff;"
COPY_FEEDBACK_MS = 2000


class NotesBox(QWidget):
    """Titled plain-text notes editor bound to a note key."""

    def __init__(self, key: str = "", title: str = "My Notes", parent: QWidget | None = None):
        super().__init__(parent)
        self._key = key
        self._bus = EventBus.instance()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 4, 0, 0)
        layout.setSpacing(4)

        header = QHBoxLayout()
        self._title = QLabel(title)
        self._title.setStyleSheet("font-weight: bold;")
        header.addWidget(self._title)
        header.addStretch()

        self._copy_btn = QPushButton(_COPY_LABEL)
        self._copy_btn.setMaximumWidth(110)
        header.addWidget(self._copy_btn)
        layout.addLayout(header)

        self._edit = QPlainTextEdit()
        self._edit.setPlaceholderText("Write your notes here. They are saved as you type.")
        self._edit.setMinimumHeight(90)
        layout.addWidget(self._edit, 1)

        self._restore_timer = QTimer(self)
        self._restore_timer.setSingleShot(True)
        self._restore_timer.setInterval(COPY_FEEDBACK_MS)
        self._restore_timer.timeout.connect(self._restore_copy_button)

        self._edit.textChanged.connect(self._on_text_changed)
        self._copy_btn.clicked.connect(self._on_copy)

    @property
    def key(self) -> str:
        return self._key

    def set_key(self, key: str) -> None:
        """Rebind the box to another note key (detail page)."""
        self._key = key

    def text(self) -> str:
        return self._edit.toPlainText()

    def set_text(self, text: str) -> None:
        """Replace the contents without publishing an edit."""
        self._edit.blockSignals(True)
        try:
            self._edit.setPlainText(text)
        finally:
            self._edit.blockSignals(False)

    def flash_copied(self) -> None:
        """Show "Copied!" on the button for a couple of seconds."""
        self._copy_btn.setText(COPIED_MESSAGE)
        self._copy_btn.setStyleSheet(_COPIED_STYLE)
        self._restore_timer.start()

    def _restore_copy_button(self) -> None:
        self._copy_btn.setText(_COPY_LABEL)
        self._copy_btn.setStyleSheet("")

    def _on_text_changed(self) -> None:
        if self._key:
            self._bus.notes_edited.emit(self._key, self._edit.toPlainText())

    def _on_copy(self) -> None:
        if self._key:
            self._bus.notes_copy_requested.emit(self._key)
