"""
viewer/widgets/welcome_banner.py -- Rotating welcome quotes on the home page.

Shows each quote in turn, fading between them.  The first quote stays up
longer than the rest; the last one stays up for good.
"""

from __future__ import annotations

from PySide6.QtCore import QPropertyAnimation, Qt, QTimer
from PySide6.QtWidgets import QGraphicsOpacityEffect, QLabel, QWidget

QUOTES: tuple[str, ...] = (
    "\"We have survived the roughest game in the history of the world. "
    "No matter what we say against ourselves, no matter what our limits and "
    "hang-ups are, we have come through something, and if we can get this far, "
    "we can get further.\" — James Baldwin",
    "\"I go away to prepare a place for you, and where I am ye may be also.\" "
    "— Harriet Tubman",
    "\"May your words echo enough to cause an avalanche and your actions ripple "
    "into waves. Knowledge is power. A closed mind is a weak mind.\" — Love, Kira",
)

FIRST_QUOTE_MS = 8000
QUOTE_MS = 5000
FADE_MS = 1500


def display_time(index: int) -> int:
    """Milliseconds quote *index* stays fully visible before fading out."""
    return FIRST_QUOTE_MS if index == 0 else QUOTE_MS


class WelcomeBanner(QLabel):
    """Label that cycles through :data:`QUOTES` once."""

    def __init__(self, quotes: tuple[str, ...] = QUOTES, parent: QWidget | None = None):
        super().__init__("", parent)
        self._quotes = quotes
        self._index = -1

        self.setWordWrap(True)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet("font-family: Georgia, serif; font-size: 16px; font-style: italic;")

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)

        self._hold_timer = QTimer(self)
        self._hold_timer.setSingleShot(True)
        self._hold_timer.timeout.connect(self._fade_out)

        self._gap_timer = QTimer(self)
        self._gap_timer.setSingleShot(True)
        self._gap_timer.setInterval(FADE_MS)
        self._gap_timer.timeout.connect(self._advance)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_finished(self) -> bool:
        return self._index >= len(self._quotes) - 1

    def start(self) -> None:
        """Begin the sequence from the first quote."""
        self._hold_timer.stop()
        self._gap_timer.stop()
        self._index = -1
        self._advance()

    def _advance(self) -> None:
        if self.is_finished:
            return
        self._index += 1
        self.setText(self._quotes[self._index])
        self._animate_opacity(1.0)
        if not self.is_finished:
            self._hold_timer.start(display_time(self._index))

    def _fade_out(self) -> None:
        self._animate_opacity(0.0)
        self._gap_timer.start()

    def _animate_opacity(self, target: float) -> None:
        anim = QPropertyAnimation(self._opacity, b"opacity", self)
        anim.setDuration(FADE_MS)
        anim.setStartValue(self._opacity.opacity())
        anim.setEndValue(target)
        anim.start()
        self._anim = anim
