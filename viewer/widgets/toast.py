"""
viewer/widgets/toast.py -- Toast notification widget.

Short user-facing notices ("Nothing to copy yet!", export results) slide
in from the bottom-right of the main window and dismiss themselves.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QEasingCurve, QPoint, QPropertyAnimation, Qt, QTimer
from PySide6.QtWidgets import QLabel, QWidget

from archive.navigation import NoticeLevel

logger = logging.getLogger(__name__)

# Error is GUI-only; the controller never raises one as a notice
ERROR = "error"

_ACCENTS = {
    NoticeLevel.INFO.value: "#DAA520",
    NoticeLevel.SUCCESS.value: "#2e7d32",
    NoticeLevel.WARNING.value: "#FFC107",
    ERROR: "#F44336",
}

_STYLE = (
    "background-color: #2b1d14; color: #F8F8FF; "
    "padding: 10px 16px; border-radius: 4px; font-size: 12px; "
    "font-family: Georgia, serif; border-left: 4px solid {accent};"
)

# Auto-dismiss durations (ms)
_DURATIONS = {
    NoticeLevel.INFO.value: 4000,
    NoticeLevel.SUCCESS.value: 3000,
    NoticeLevel.WARNING.value: 5000,
    ERROR: 8000,
}

_SLIDE_MS = 250


class Toast(QLabel):
    """A single notice label that closes when clicked or timed out."""

    def __init__(self, message: str, level: str, parent: QWidget | None = None):
        super().__init__(message, parent)
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.Tool
            | Qt.WindowType.WindowStaysOnTopHint
        )
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
        self.setStyleSheet(_STYLE.format(accent=_ACCENTS.get(level, _ACCENTS["info"])))
        self.setWordWrap(True)
        self.setMinimumWidth(260)
        self.setMaximumWidth(380)
        self.adjustSize()
        self.level = level

    def mousePressEvent(self, event) -> None:
        self.close()


class ToastManager:
    """Stacks toasts against the bottom-right corner of *parent*.

    Usage::

        toasts = ToastManager(main_window)
        toasts.show_notice("Copied!", NoticeLevel.SUCCESS)
        toasts.show_error("Error loading archive data.")
    """

    def __init__(self, parent: QWidget):
        self._parent = parent
        self._active: list[Toast] = []
        self._margin = 12
        self._spacing = 6

    @property
    def active(self) -> list[Toast]:
        return list(self._active)

    def show_notice(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> Toast:
        return self._show(message, level.value)

    def show_error(self, message: str) -> Toast:
        return self._show(message, ERROR)

    def _show(self, message: str, level: str) -> Toast:
        logger.debug("Toast (%s): %s", level, message)
        toast = Toast(message, level, self._parent)

        timer = QTimer(toast)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._dismiss(toast))
        timer.start(_DURATIONS[level])

        self._active.append(toast)
        self._reposition()
        toast.show()
        self._slide(toast, toast.pos(), entering=True)
        return toast

    def _slide(self, toast: Toast, anchor: QPoint, entering: bool) -> None:
        offscreen = QPoint(anchor.x() + toast.width() + self._margin, anchor.y())
        anim = QPropertyAnimation(toast, b"pos", toast)
        anim.setDuration(_SLIDE_MS)
        if entering:
            toast.move(offscreen)
            anim.setStartValue(offscreen)
            anim.setEndValue(anchor)
            anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        else:
            anim.setStartValue(anchor)
            anim.setEndValue(offscreen)
            anim.setEasingCurve(QEasingCurve.Type.InCubic)
            anim.finished.connect(toast.close)
            anim.finished.connect(toast.deleteLater)
            anim.finished.connect(self._reposition)
        anim.start()
        toast._anim = anim  # keep a reference until it finishes

    def _dismiss(self, toast: Toast) -> None:
        if toast in self._active:
            self._active.remove(toast)
            self._slide(toast, toast.pos(), entering=False)

    def _reposition(self) -> None:
        corner = self._parent.mapToGlobal(self._parent.rect().bottomRight())
        y_offset = self._margin
        for toast in reversed(self._active):
            toast.adjustSize()
            x = corner.x() - toast.width() - self._margin
            y = corner.y() - toast.height() - y_offset
            toast.move(QPoint(x, y))
            y_offset += toast.height() + self._spacing
