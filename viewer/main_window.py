"""
viewer/main_window.py -- Main application window.

Hosts the section pages in a stacked widget under a navigation toolbar
with a search box.  The window is the navigation controller's view sink:
the controller decides what is visible, the window only draws it.  User
actions arrive on the EventBus and are dispatched to the controller as
``Command`` objects.  Window geometry is saved/restored via QSettings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from PySide6.QtCore import QSettings, QTimer
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent, QGuiApplication, QKeySequence
from PySide6.QtWidgets import (
    QLineEdit,
    QMainWindow,
    QStackedWidget,
    QStatusBar,
    QToolBar,
    QWidget,
)

from archive.errors import LoadError
from archive.navigation import (
    DETAIL_PAGE,
    HOME,
    MINDMAP,
    MOVEMENTS,
    PERSONS,
    RESOURCES,
    TIMELINE,
    Command,
    CommandKind,
    NavigationController,
    NoticeLevel,
)
from archive.notes import NoteStore, section_key
from archive.render import DailyCard, DetailView, GridViews, MindMap, TimelineEntry
from archive.store import EntityStore
from viewer.panels.detail_page import DetailPage
from viewer.panels.entity_grid import EntityGridPage
from viewer.panels.home_page import HomePage
from viewer.panels.mind_map import MindMapPanel
from viewer.panels.resources_page import ResourcesPage
from viewer.panels.timeline_page import TimelinePage
from viewer.services.event_bus import EventBus
from viewer.services.loader import LoaderWorker
from viewer.services.note_backend import APP_NAME, ORG_NAME, QSettingsBackend
from viewer.widgets.loading_overlay import LoadingOverlay
from viewer.widgets.notes_box import NotesBox
from viewer.widgets.toast import ToastManager

logger = logging.getLogger(__name__)

# (section id, toolbar label) in toolbar order
SECTIONS: tuple[tuple[str, str], ...] = (
    (HOME, "Home"),
    (PERSONS, "Persons"),
    (MOVEMENTS, "Movements & Events"),
    (TIMELINE, "Timeline"),
    (MINDMAP, "Mind Map"),
    (RESOURCES, "Resources"),
)

SEARCH_DEBOUNCE_MS = 200


class MainWindow(QMainWindow):
    """Main application window and view sink.

    Parameters
    ----------
    notes : NoteStore | None
        Note persistence.  Defaults to the QSettings-backed store.
    settings : QSettings | None
        Where window geometry is kept.
    """

    def __init__(
        self,
        notes: NoteStore | None = None,
        settings: QSettings | None = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings(ORG_NAME, APP_NAME)
        self._notes = notes if notes is not None else NoteStore(QSettingsBackend(self._settings))
        self._controller: NavigationController | None = None
        self._loader: LoaderWorker | None = None
        self._bus = EventBus.instance()

        self.setWindowTitle("Unity Archive")
        self.setMinimumSize(1024, 720)

        # Pages
        self._home_page = HomePage(section_key(HOME))
        self._persons_page = EntityGridPage("Persons", section_key(PERSONS))
        self._movements_page = EntityGridPage("Movements & Events", section_key(MOVEMENTS))
        self._timeline_page = TimelinePage(section_key(TIMELINE))
        self._mind_map_panel = MindMapPanel(section_key(MINDMAP))
        self._resources_page = ResourcesPage(section_key(RESOURCES))
        self._detail_page = DetailPage()

        self._pages: dict[str, QWidget] = {
            HOME: self._home_page,
            PERSONS: self._persons_page,
            MOVEMENTS: self._movements_page,
            TIMELINE: self._timeline_page,
            MINDMAP: self._mind_map_panel,
            RESOURCES: self._resources_page,
            DETAIL_PAGE: self._detail_page,
        }
        self._notes_boxes: dict[str, NotesBox] = {
            page.notes_box.key: page.notes_box
            for section_id, page in self._pages.items()
            if section_id != DETAIL_PAGE
        }

        self._stack = QStackedWidget()
        for page in self._pages.values():
            self._stack.addWidget(page)
        self.setCentralWidget(self._stack)

        self._build_toolbar()

        # Status bar
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        # Toasts and load overlay
        self._toast = ToastManager(self)
        self._overlay = LoadingOverlay(self._stack)

        self._connect_bus()
        self._setup_shortcuts()
        self._set_navigation_enabled(False)

        self._restore_layout()

    # ------------------------------------------------------------------
    # Toolbar
    # ------------------------------------------------------------------

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Sections")
        toolbar.setObjectName("toolbar_sections")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._section_actions: dict[str, QAction] = {}
        group = QActionGroup(self)
        group.setExclusive(True)
        for section_id, label in SECTIONS:
            action = QAction(label, self)
            action.setCheckable(True)
            action.triggered.connect(
                lambda _checked=False, s=section_id: self._bus.section_requested.emit(s)
            )
            group.addAction(action)
            toolbar.addAction(action)
            self._section_actions[section_id] = action

        toolbar.addSeparator()

        self._search = QLineEdit()
        self._search.setPlaceholderText("Search names, summaries, key terms...")
        self._search.setClearButtonEnabled(True)
        self._search.setMaximumWidth(320)
        toolbar.addWidget(self._search)

        self._search_timer = QTimer(self)
        self._search_timer.setSingleShot(True)
        self._search_timer.setInterval(SEARCH_DEBOUNCE_MS)
        self._search_timer.timeout.connect(
            lambda: self._bus.search_changed.emit(self._search.text())
        )
        self._search.textChanged.connect(lambda _: self._search_timer.start())

    def _set_navigation_enabled(self, enabled: bool) -> None:
        for action in self._section_actions.values():
            action.setEnabled(enabled)
        self._search.setEnabled(enabled)

    # ------------------------------------------------------------------
    # Signal wiring
    # ------------------------------------------------------------------

    def _connect_bus(self) -> None:
        bus = self._bus
        bus.section_requested.connect(
            lambda s: self._dispatch(Command(CommandKind.SHOW_SECTION, s))
        )
        bus.entity_selected.connect(
            lambda eid: self._dispatch(Command(CommandKind.OPEN_DETAIL, eid))
        )
        bus.detail_closed.connect(lambda: self._dispatch(Command(CommandKind.CLOSE_DETAIL)))
        bus.search_changed.connect(
            lambda q: self._dispatch(Command(CommandKind.SEARCH, text=q))
        )
        bus.notes_edited.connect(
            lambda key, text: self._dispatch(Command(CommandKind.EDIT_NOTES, key, text))
        )
        bus.notes_copy_requested.connect(
            lambda key: self._dispatch(Command(CommandKind.COPY_NOTES, key))
        )
        bus.mind_map_reset_requested.connect(
            lambda: self._dispatch(Command(CommandKind.RESET_MIND_MAP))
        )
        bus.mind_map_export_requested.connect(
            lambda path: self._dispatch(Command(CommandKind.EXPORT_MIND_MAP, path))
        )
        bus.error_occurred.connect(self._on_error)

    def _dispatch(self, command: Command) -> None:
        if self._controller is None:
            logger.debug("Ignoring %s before the archive is loaded", command.kind)
            return
        self._controller.dispatch(command)

    # ------------------------------------------------------------------
    # Keyboard shortcuts
    # ------------------------------------------------------------------

    def _setup_shortcuts(self) -> None:
        # Ctrl+F -- focus search
        search_action = QAction("Search", self)
        search_action.setShortcut(QKeySequence("Ctrl+F"))
        search_action.triggered.connect(self._search.setFocus)
        self.addAction(search_action)

        # Escape -- leave the detail page
        back_action = QAction("Back", self)
        back_action.setShortcut(QKeySequence("Escape"))
        back_action.triggered.connect(self._on_escape)
        self.addAction(back_action)

    def _on_escape(self) -> None:
        if self._controller is not None and self._controller.current_view == DETAIL_PAGE:
            self._bus.detail_closed.emit()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def controller(self) -> NavigationController | None:
        return self._controller

    def begin_load(self, store: EntityStore) -> None:
        """Load *store* on a worker thread; the UI stays empty until it resolves."""
        self._overlay.show_loading("Loading archive...")
        self._status_bar.showMessage(f"Loading {store.source}")
        self._loader = LoaderWorker(store, parent=self)
        self._loader.loaded.connect(self._on_loaded)
        self._loader.failed.connect(self.show_load_error)
        self._loader.start()

    def _on_loaded(self, count: int) -> None:
        logger.info("Archive loaded: %d entries", count)
        self.attach(self._loader.store)

    def attach(self, store: EntityStore) -> None:
        """Build the interface from a loaded store and show home."""
        self._controller = NavigationController(store, self._notes, self)
        self._controller.start()
        self._set_navigation_enabled(True)
        self._overlay.hide_loading()
        self._status_bar.showMessage(f"{len(store)} entries loaded", 5000)
        self._home_page.welcome.start()

    def show_load_error(self, error: LoadError) -> None:
        """Show a persistent error; nothing else is ever built."""
        logger.error("Archive unavailable: %s", error)
        self._overlay.show_error(
            f"{error.user_message}\n\n{error.reason}\n\nReload the application to try again."
        )
        self._status_bar.showMessage(f"Error: {error}")
        self._set_navigation_enabled(False)

    # ------------------------------------------------------------------
    # ViewSink
    # ------------------------------------------------------------------

    def show_section(self, section_id: str) -> None:
        page = self._pages.get(section_id)
        if page is None:
            logger.warning("No page for section %r", section_id)
            return
        self._stack.setCurrentWidget(page)
        action = self._section_actions.get(section_id)
        if action is not None:
            action.setChecked(True)

    def show_grids(self, grids: GridViews) -> None:
        self._persons_page.show_bucket(grids.persons)
        self._movements_page.show_bucket(grids.movements)

    def show_timeline(self, entries: Sequence[TimelineEntry]) -> None:
        self._timeline_page.show_entries(entries)

    def show_daily(self, card: DailyCard | None) -> None:
        self._home_page.show_daily(card)

    def show_detail(self, detail: DetailView, note_text: str) -> None:
        self._detail_page.show_detail(detail, note_text)

    def show_mind_map(self, mind_map: MindMap) -> None:
        self._mind_map_panel.show_mind_map(mind_map)

    def show_notes(self, key: str, text: str) -> None:
        box = self._notes_boxes.get(key)
        if box is not None:
            box.set_text(text)

    def copy_to_clipboard(self, key: str, text: str) -> None:
        QGuiApplication.clipboard().setText(text)
        box = self._notes_boxes.get(key)
        if box is None and key == self._detail_page.notes_box.key:
            box = self._detail_page.notes_box
        if box is not None:
            box.flash_copied()

    def export_mind_map(self, path: str) -> None:
        self._mind_map_panel.export_image(path)

    def notify(self, message: str, level: NoticeLevel) -> None:
        self._status_bar.showMessage(message, 5000)
        self._toast.show_notice(message, level)

    # ------------------------------------------------------------------
    # Page access
    # ------------------------------------------------------------------

    def current_page(self) -> QWidget:
        return self._stack.currentWidget()

    def page(self, section_id: str) -> QWidget:
        return self._pages[section_id]

    @property
    def search_box(self) -> QLineEdit:
        return self._search

    @property
    def overlay(self) -> LoadingOverlay:
        return self._overlay

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_error(self, message: str) -> None:
        self._status_bar.showMessage(f"Error: {message}", 10000)
        self._toast.show_error(message)

    # ------------------------------------------------------------------
    # Layout save / restore
    # ------------------------------------------------------------------

    def _save_layout(self) -> None:
        self._settings.setValue("geometry", self.saveGeometry())
        self._settings.setValue("windowState", self.saveState())

    def _restore_layout(self) -> None:
        geometry = self._settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

        state = self._settings.value("windowState")
        if state:
            self.restoreState(state)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def closeEvent(self, event: QCloseEvent) -> None:
        """Save layout and wait for a still-running load on close."""
        self._save_layout()
        if self._loader is not None and self._loader.isRunning():
            self._loader.wait()
        logger.info("Main window closing, layout saved")
        super().closeEvent(event)
