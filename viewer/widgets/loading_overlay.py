"""
viewer/widgets/loading_overlay.py -- Loading and load-failure overlay.

Covers its parent while the archive loads.  If the load fails the overlay
switches to a persistent error message and stays up for the rest of the
session; nothing underneath is built.
"""

from __future__ import annotations

from PySide6.QtCore import QEvent, Qt, QTimer
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

_MESSAGE_STYLE = (
    "color: #F8F8FF; font-size: 15px; font-family: Georgia, serif; "
    "background: transparent;"
)
_ERROR_STYLE = (
    "color: #F44336; font-size: 15px; font-weight: bold; "
    "background: transparent;"
)


class LoadingOverlay(QWidget):
    """Semi-transparent overlay with a spinner or a fatal error message.

    Usage::

        overlay = LoadingOverlay(central_widget)
        overlay.show_loading("Loading archive...")
        # ... later, one of:
        overlay.hide_loading()
        overlay.show_error("Error loading archive data.")
    """

    _SPINNER_CHARS = ["|", "/", "-", "\\"]

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setVisible(False)
        parent.installEventFilter(self)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._label = QLabel("")
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setWordWrap(True)
        self._label.setStyleSheet(_MESSAGE_STYLE)
        layout.addWidget(self._label)

        self._message = ""
        self._spinner_idx = 0
        self._is_error = False

        self._timer = QTimer(self)
        self._timer.setInterval(150)
        self._timer.timeout.connect(self._tick)

    @property
    def is_error(self) -> bool:
        return self._is_error

    def text(self) -> str:
        return self._label.text()

    def show_loading(self, message: str = "Loading...") -> None:
        self._message = message
        self._spinner_idx = 0
        self._is_error = False
        self._label.setStyleSheet(_MESSAGE_STYLE)
        self._update_text()
        self._cover_parent()
        self._timer.start()

    def show_error(self, message: str) -> None:
        """Replace the spinner with *message*; the overlay stays visible."""
        self._timer.stop()
        self._is_error = True
        self._label.setStyleSheet(_ERROR_STYLE)
        self._label.setText(message)
        self._cover_parent()

    def hide_loading(self) -> None:
        if self._is_error:
            return
        self._timer.stop()
        self.setVisible(False)

    def _cover_parent(self) -> None:
        self.setGeometry(self.parent().rect())
        self.setVisible(True)
        self.raise_()

    def _tick(self) -> None:
        self._spinner_idx = (self._spinner_idx + 1) % len(self._SPINNER_CHARS)
        self._update_text()

    def _update_text(self) -> None:
        char = self._SPINNER_CHARS[self._spinner_idx]
        self._label.setText(f"{char}  {self._message}  {char}")

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0, 170))
        painter.end()
        super().paintEvent(event)

    def eventFilter(self, obj, event) -> bool:
        if obj is self.parent() and event.type() == QEvent.Type.Resize:
            if self.isVisible():
                self.setGeometry(self.parent().rect())
        return super().eventFilter(obj, event)
