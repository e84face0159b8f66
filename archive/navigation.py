"""
archive/navigation.py -- View-state controller.

The controller is the single owner of the view state.  It decides which
section is visible, remembers the last list section for the detail page's
Back action, rebuilds derived views (daily pick, mind map) on activation
and routes note reads and writes through the note store.

It never touches widgets.  Everything visible goes through a ``ViewSink``,
which the GUI implements and tests replace with a recorder.

Usage::

    from archive.navigation import Command, CommandKind, NavigationController

    nav = NavigationController(store, notes, sink)
    nav.start()                                   # shows "home"
    nav.dispatch(Command(CommandKind.OPEN_DETAIL, "ann-001"))
    nav.dispatch(Command(CommandKind.CLOSE_DETAIL))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from archive.errors import EntityNotFoundError, GraphExportError
from archive.models import Entity
from archive.notes import NoteStore, section_key
from archive.render import (
    DailyCard,
    DetailView,
    GridViews,
    MindMap,
    TimelineEntry,
    daily_pick,
    render_daily,
    render_detail,
    render_grids,
    render_mind_map,
    render_timeline,
)
from archive.search import filter_entities, is_blank
from archive.store import EntityStore

logger = logging.getLogger(__name__)

# Section identifiers.  The set is open-ended: any string is a valid
# section, these are the ones the viewer ships with.
HOME = "home"
PERSONS = "persons"
MOVEMENTS = "movements"
TIMELINE = "timeline"
MINDMAP = "mindmap"
RESOURCES = "resources"
DETAIL_PAGE = "detailPage"

LIST_SECTIONS = (HOME, PERSONS, MOVEMENTS, TIMELINE, MINDMAP, RESOURCES)

NOTHING_TO_COPY_MESSAGE = "Nothing to copy yet!"
COPIED_MESSAGE = "Copied!"
MIND_MAP_NOT_READY_MESSAGE = "Wait for the map to load before saving!"


class NoticeLevel(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


class CommandKind(Enum):
    SHOW_SECTION = auto()
    SEARCH = auto()
    OPEN_DETAIL = auto()
    CLOSE_DETAIL = auto()
    EDIT_NOTES = auto()
    COPY_NOTES = auto()
    RESET_MIND_MAP = auto()
    EXPORT_MIND_MAP = auto()


@dataclass(frozen=True)
class Command:
    """A user action.

    ``target`` is the section id, entity id, note key or export path
    depending on ``kind``; ``text`` carries the search query or note text.
    """

    kind: CommandKind
    target: str = ""
    text: str = ""


@dataclass
class ViewState:
    current_view: str = HOME
    last_list_view: str = HOME


class ViewSink(Protocol):
    """Presentation surface driven by the controller."""

    def show_section(self, section_id: str) -> None: ...

    def show_grids(self, grids: GridViews) -> None: ...

    def show_timeline(self, entries: Sequence[TimelineEntry]) -> None: ...

    def show_daily(self, card: DailyCard | None) -> None: ...

    def show_detail(self, detail: DetailView, note_text: str) -> None: ...

    def show_mind_map(self, mind_map: MindMap) -> None: ...

    def show_notes(self, key: str, text: str) -> None: ...

    def copy_to_clipboard(self, key: str, text: str) -> None: ...

    def export_mind_map(self, path: str) -> None:
        """Write the current mind map rendering to *path*.

        Raises ``GraphExportError`` if the layout is not ready.
        """
        ...

    def notify(self, message: str, level: NoticeLevel) -> None: ...


class NavigationController:
    """State machine over the visible section.

    Parameters
    ----------
    store : EntityStore
        A loaded store.  The controller never reads it before ``start()``.
    notes : NoteStore
        Note persistence.
    sink : ViewSink
        Presentation surface.
    clock : callable, optional
        Returns the current Unix time in seconds (default ``time.time``).
    """

    def __init__(
        self,
        store: EntityStore,
        notes: NoteStore,
        sink: ViewSink,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._notes = notes
        self._sink = sink
        self._clock = clock
        self._state = ViewState()
        self._detail_note_key: str | None = None
        self._mind_map: MindMap | None = None

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewState:
        return ViewState(self._state.current_view, self._state.last_list_view)

    @property
    def current_view(self) -> str:
        return self._state.current_view

    @property
    def last_list_view(self) -> str:
        return self._state.last_list_view

    @property
    def detail_note_key(self) -> str | None:
        """Note key of the entity on the detail page, if one is open."""
        return self._detail_note_key

    @property
    def mind_map(self) -> MindMap | None:
        return self._mind_map

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Build the list views from the full collection and show home."""
        entities = self._store.entities
        self._sink.show_grids(render_grids(entities))
        self._sink.show_timeline(render_timeline(entities))
        self.activate(HOME)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self, section_id: str) -> None:
        """Make *section_id* the visible section and refresh what it shows."""
        previous = self._state.current_view
        self._state.current_view = section_id
        if section_id != DETAIL_PAGE:
            self._state.last_list_view = section_id
            self._detail_note_key = None
        logger.debug("View %s -> %s", previous, section_id)

        self._sink.show_section(section_id)

        key = section_key(section_id)
        if key is not None:
            self._sink.show_notes(key, self._notes.load(key))

        if section_id == HOME:
            self._refresh_daily()
        elif section_id == MINDMAP:
            self._rebuild_mind_map()

    def open_detail(self, entity_id: str) -> bool:
        """Show the detail page for *entity_id*.

        An unknown id is ignored.  Returns True if the page was opened.
        """
        try:
            entity = self._store.get(entity_id)
        except EntityNotFoundError:
            logger.debug("Ignoring detail request for unknown entity %r", entity_id)
            return False

        self.activate(DETAIL_PAGE)
        detail = render_detail(entity)
        self._detail_note_key = detail.note_key
        self._sink.show_detail(detail, self._notes.load(detail.note_key))
        return True

    def close_detail(self) -> None:
        self.activate(self._state.last_list_view)

    def search(self, query: str) -> list[Entity]:
        """Filter the grids by *query*.

        A non-blank query also switches to the persons section so results
        are visible.  A blank query restores every entry and stays put.
        """
        filtered = filter_entities(self._store.entities, query)
        self._sink.show_grids(render_grids(filtered))
        if not is_blank(query):
            self.activate(PERSONS)
        return filtered

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def _refresh_daily(self) -> None:
        entities = self._store.entities
        if not entities:
            self._sink.show_daily(None)
            return
        self._sink.show_daily(render_daily(daily_pick(entities, self._clock())))

    def _rebuild_mind_map(self) -> None:
        self._mind_map = None
        mind_map = render_mind_map(self._store.entities)
        self._mind_map = mind_map
        self._sink.show_mind_map(mind_map)

    def reset_mind_map(self) -> None:
        """Discard the mind map and build it again."""
        self._rebuild_mind_map()

    def export_mind_map(self, path: str) -> bool:
        """Save the mind map rendering to *path*.

        Returns False, after telling the user, if the map is not ready.
        """
        try:
            if self._mind_map is None:
                raise GraphExportError("mind map has not been built")
            self._sink.export_mind_map(path)
        except GraphExportError as e:
            logger.info("Mind map export refused: %s", e)
            self._sink.notify(MIND_MAP_NOT_READY_MESSAGE, NoticeLevel.WARNING)
            return False
        except OSError as e:
            logger.error("Mind map export to %s failed: %s", path, e)
            self._sink.notify(f"Could not save the mind map: {e}", NoticeLevel.WARNING)
            return False
        self._sink.notify(f"Mind map saved to {path}", NoticeLevel.SUCCESS)
        return True

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def save_note(self, key: str, text: str) -> None:
        self._notes.save(key, text)

    def copy_notes(self, key: str) -> bool:
        """Put the notes under *key* on the clipboard.

        Returns False, after telling the user, when there is nothing to copy.
        """
        text = self._notes.load(key)
        if not text:
            self._sink.notify(NOTHING_TO_COPY_MESSAGE, NoticeLevel.WARNING)
            return False
        self._sink.copy_to_clipboard(key, text)
        self._sink.notify(COPIED_MESSAGE, NoticeLevel.SUCCESS)
        return True

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> None:
        """Route a user command to the matching operation."""
        kind = command.kind
        if kind == CommandKind.SHOW_SECTION:
            self.activate(command.target)
        elif kind == CommandKind.SEARCH:
            self.search(command.text)
        elif kind == CommandKind.OPEN_DETAIL:
            self.open_detail(command.target)
        elif kind == CommandKind.CLOSE_DETAIL:
            self.close_detail()
        elif kind == CommandKind.EDIT_NOTES:
            self.save_note(command.target, command.text)
        elif kind == CommandKind.COPY_NOTES:
            self.copy_notes(command.target)
        elif kind == CommandKind.RESET_MIND_MAP:
            self.reset_mind_map()
        elif kind == CommandKind.EXPORT_MIND_MAP:
            self.export_mind_map(command.target)
        else:
            logger.warning("Unhandled command: %s", kind)
