"""
viewer/panels/resources_page.py -- Resources section: a free-form notes page.
"""

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from viewer.widgets.notes_box import NotesBox


class ResourcesPage(QWidget):
    def __init__(self, note_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        heading = QLabel("Resources")
        heading.setStyleSheet("font-family: Georgia, serif; font-size: 20px; font-weight: bold;")
        layout.addWidget(heading)

        hint = QLabel("Keep reading lists, links and further research here.")
        hint.setStyleSheet("color: #888;")
        layout.addWidget(hint)

        self._notes = NotesBox(note_key, title="Resource Notes")
        layout.addWidget(self._notes, 1)

    @property
    def notes_box(self) -> NotesBox:
        return self._notes
