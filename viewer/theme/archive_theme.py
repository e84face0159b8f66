"""
viewer/theme/archive_theme.py -- Archive theme configuration.

Applies qt-material's dark_amber theme with custom QSS overrides: serif
headings, warm card tiles and a roomier timeline.

Usage::

    from viewer.theme.archive_theme import apply_theme
    apply_theme(app)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtWidgets import QApplication

logger = logging.getLogger(__name__)

THEME_NAME = "dark_amber.xml"

# Custom QSS overrides applied on top of qt-material
_CUSTOM_QSS = """
/* Section toolbar */
QToolBar QToolButton {
    font-family: Georgia, serif;
    font-size: 14px;
    padding: 6px 12px;
}

/* Card grids */
QListWidget#entity_grid::item {
    border: 1px solid #5a4632;
    border-radius: 6px;
    padding: 8px;
    margin: 4px;
}

QListWidget#entity_grid::item:hover {
    background-color: rgba(218, 165, 32, 40);
}

/* Timeline */
QListWidget#timeline_list::item {
    padding: 8px 4px;
    border-bottom: 1px solid #3a3a3a;
}

/* Detail page body */
QTextBrowser {
    font-family: Georgia, serif;
    font-size: 14px;
}

/* Status bar */
QStatusBar {
    font-size: 12px;
}

/* Tool tips */
QToolTip {
    padding: 4px 8px;
    font-size: 12px;
}

/* Placeholder text in line edits */
QLineEdit[placeholderText] {
    font-style: italic;
}
"""


def apply_theme(app: "QApplication") -> None:
    """Apply the dark amber material theme with custom overrides.

    Parameters
    ----------
    app : QApplication
        The application instance to theme.
    """
    try:
        from qt_material import apply_stylesheet
        apply_stylesheet(app, theme=THEME_NAME)
        logger.info("Applied qt-material %s theme", THEME_NAME)
    except Exception:
        logger.warning("qt-material theme failed, falling back to Fusion", exc_info=True)
        from PySide6.QtWidgets import QApplication
        QApplication.setStyle("Fusion")

    existing = app.styleSheet() or ""
    app.setStyleSheet(existing + _CUSTOM_QSS)
