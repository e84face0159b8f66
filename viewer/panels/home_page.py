"""
viewer/panels/home_page.py -- Home section.

Welcome quotes, the entry of the day with a "Learn More" button, and the
home notes box.
"""

from __future__ import annotations

from PySide6.QtWidgets import QGroupBox, QLabel, QPushButton, QVBoxLayout, QWidget

from archive.render import DailyCard
from viewer.services.event_bus import EventBus
from viewer.widgets.notes_box import NotesBox
from viewer.widgets.welcome_banner import WelcomeBanner


class HomePage(QWidget):
    def __init__(self, note_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._bus = EventBus.instance()
        self._daily_id = ""

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        self._welcome = WelcomeBanner()
        self._welcome.setMinimumHeight(90)
        layout.addWidget(self._welcome)

        daily_group = QGroupBox("Daily Review")
        daily_layout = QVBoxLayout(daily_group)
        self._daily_title = QLabel("")
        self._daily_title.setStyleSheet("font-family: Georgia, serif; font-size: 18px; font-weight: bold;")
        daily_layout.addWidget(self._daily_title)
        self._daily_period = QLabel("")
        daily_layout.addWidget(self._daily_period)
        self._daily_summary = QLabel("")
        self._daily_summary.setWordWrap(True)
        daily_layout.addWidget(self._daily_summary)
        self._learn_more = QPushButton("Learn More")
        self._learn_more.setMaximumWidth(120)
        self._learn_more.clicked.connect(self._on_learn_more)
        daily_layout.addWidget(self._learn_more)
        layout.addWidget(daily_group)

        self._notes = NotesBox(note_key)
        layout.addWidget(self._notes, 1)

        self.show_daily(None)

    @property
    def notes_box(self) -> NotesBox:
        return self._notes

    @property
    def welcome(self) -> WelcomeBanner:
        return self._welcome

    @property
    def daily_entity_id(self) -> str:
        return self._daily_id

    def daily_title(self) -> str:
        return self._daily_title.text()

    def show_daily(self, card: DailyCard | None) -> None:
        if card is None:
            self._daily_id = ""
            self._daily_title.setText("The archive is empty.")
            self._daily_period.setText("")
            self._daily_summary.setText("")
            self._learn_more.setEnabled(False)
            return
        self._daily_id = card.entity_id
        self._daily_title.setText(card.title)
        self._daily_period.setText(card.period)
        self._daily_summary.setText(card.summary)
        self._learn_more.setEnabled(True)

    def _on_learn_more(self) -> None:
        if self._daily_id:
            self._bus.entity_selected.emit(self._daily_id)
