"""
viewer/main.py -- Application entry point.

Parses the command line, initializes the QApplication, applies the theme,
creates the MainWindow and starts the one-shot archive load.

Usage::

    python -m viewer.main --data path/to/data.json
    # or
    unity-archive --data https://example.org/data.json --debug
    unity-archive --notes-file ~/archive-notes.json
"""

from __future__ import annotations

import os
os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

import argparse
import logging
import sys
import traceback

# Ensure project root is on sys.path
_THIS_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_THIS_DIR)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from viewer.paths import DATA_ENV_VAR, get_user_data_dir, is_frozen, resolve_data_source


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="unity-archive",
        description="Browse the Unity Archive of persons, movements and events.",
    )
    parser.add_argument(
        "--data",
        metavar="PATH_OR_URL",
        help=f"archive document to load (default: ${DATA_ENV_VAR} or the bundled data.json)",
    )
    parser.add_argument(
        "--notes-file",
        metavar="PATH",
        help="keep notes in this JSON file instead of the Qt settings store",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def _build_note_store(notes_file: str | None):
    """Return a file-backed NoteStore for *notes_file*, or None to use QSettings."""
    if not notes_file:
        return None
    from archive.notes import JsonFileBackend, NoteStore
    logging.getLogger("viewer").info("Notes file: %s", notes_file)
    return NoteStore(JsonFileBackend(notes_file))


def _setup_logging(debug: bool = False) -> None:
    """Configure logging for the desktop application."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _global_exception_hook(exc_type, exc_value, exc_tb):
    """Last-resort handler for uncaught exceptions.

    Logs the traceback and shows a message box (if a QApplication exists).
    """
    logger = logging.getLogger("viewer")
    logger.critical(
        "Uncaught exception: %s",
        "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
    )

    try:
        from PySide6.QtWidgets import QApplication, QMessageBox
        app = QApplication.instance()
        if app is not None:
            QMessageBox.critical(
                None,
                "Unexpected Error",
                f"An unexpected error occurred:\n\n{exc_value}\n\n"
                "The application will attempt to continue.\n"
                "Please check the logs for details.",
            )
    except Exception:
        logger.debug("Could not show the error dialog", exc_info=True)


def main(argv: list[str] | None = None) -> int:
    """Launch the Unity Archive viewer."""
    args = _parse_args(argv)
    _setup_logging(args.debug)
    logger = logging.getLogger("viewer")
    logger.info("Starting Unity Archive viewer")

    sys.excepthook = _global_exception_hook

    source = resolve_data_source(args.data)
    logger.info("Archive source: %s (frozen=%s)", source, is_frozen())
    logger.debug("User data directory: %s", get_user_data_dir())

    # Must create QApplication before anything else Qt-related
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("Unity Archive")

    from viewer.theme.archive_theme import apply_theme
    apply_theme(app)

    from archive.store import EntityStore
    from viewer.main_window import MainWindow

    window = MainWindow(notes=_build_note_store(args.notes_file))
    window.show()
    logger.info("Main window displayed")

    window.begin_load(EntityStore(source))

    exit_code = app.exec()
    logger.info("Goodbye!")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
