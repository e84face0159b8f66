"""
Tests for archive/navigation.py -- NavigationController state machine.

The controller is driven against a recording sink; no Qt is involved.
"""

import pytest

from archive.errors import GraphExportError
from archive.navigation import (
    COPIED_MESSAGE,
    DETAIL_PAGE,
    HOME,
    MIND_MAP_NOT_READY_MESSAGE,
    MINDMAP,
    MOVEMENTS,
    NOTHING_TO_COPY_MESSAGE,
    PERSONS,
    RESOURCES,
    TIMELINE,
    Command,
    CommandKind,
    NavigationController,
    NoticeLevel,
)
from archive.render import SECONDS_PER_DAY
from archive.store import EntityStore

FIXED_NOW = 20000 * SECONDS_PER_DAY + 42


class RecordingSink:
    """ViewSink that remembers every call."""

    def __init__(self):
        self.calls = []
        self.sections = []
        self.grids = []
        self.timelines = []
        self.dailies = []
        self.details = []
        self.mind_maps = []
        self.notes = {}
        self.clipboard = []
        self.exports = []
        self.notices = []
        self.export_error = None

    def show_section(self, section_id):
        self.calls.append("show_section")
        self.sections.append(section_id)

    def show_grids(self, grids):
        self.calls.append("show_grids")
        self.grids.append(grids)

    def show_timeline(self, entries):
        self.calls.append("show_timeline")
        self.timelines.append(list(entries))

    def show_daily(self, card):
        self.calls.append("show_daily")
        self.dailies.append(card)

    def show_detail(self, detail, note_text):
        self.calls.append("show_detail")
        self.details.append((detail, note_text))

    def show_mind_map(self, mind_map):
        self.calls.append("show_mind_map")
        self.mind_maps.append(mind_map)

    def show_notes(self, key, text):
        self.notes[key] = text

    def copy_to_clipboard(self, key, text):
        self.clipboard.append((key, text))

    def export_mind_map(self, path):
        if self.export_error is not None:
            raise self.export_error
        self.exports.append(path)

    def notify(self, message, level):
        self.notices.append((message, level))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def nav(sample_store, memory_notes, sink):
    controller = NavigationController(sample_store, memory_notes, sink, clock=lambda: FIXED_NOW)
    controller.start()
    return controller


# ==================================================================
# Startup
# ==================================================================


class TestStart:
    def test_starts_on_home(self, nav, sink):
        assert nav.current_view == HOME
        assert nav.last_list_view == HOME
        assert sink.sections == [HOME]

    def test_builds_list_views(self, nav, sink, sample_store):
        assert len(sink.grids) == 1
        assert len(sink.timelines) == 1
        assert len(sink.timelines[0]) == len(sample_store)

    def test_daily_card_shown(self, nav, sink, sample_store):
        expected = sample_store.entities[20000 % len(sample_store)]
        assert sink.dailies[-1].entity_id == expected.id

    def test_home_notes_pushed(self, sample_store, sink):
        from archive.notes import MemoryBackend, NoteStore
        notes = NoteStore(MemoryBackend({"homeNotes": "remember"}))
        NavigationController(sample_store, notes, sink).start()
        assert sink.notes["homeNotes"] == "remember"

    def test_empty_collection(self, memory_notes, sink):
        nav = NavigationController(EntityStore.from_entities([]), memory_notes, sink)
        nav.start()
        assert sink.dailies == [None]
        assert sink.grids[0].persons.is_empty
        assert sink.grids[0].movements.is_empty


# ==================================================================
# Section transitions
# ==================================================================


class TestActivate:
    @pytest.mark.parametrize("section", [PERSONS, MOVEMENTS, TIMELINE, RESOURCES])
    def test_list_sections_update_last_list_view(self, nav, section):
        nav.activate(section)
        assert nav.current_view == section
        assert nav.last_list_view == section

    def test_section_notes_pushed(self, nav, sink, memory_notes):
        memory_notes.save("timelineNotes", "check 1905")
        nav.activate(TIMELINE)
        assert sink.notes["timelineNotes"] == "check 1905"

    def test_unknown_section_accepted(self, nav, sink):
        nav.activate("gallery")
        assert nav.current_view == "gallery"
        assert sink.sections[-1] == "gallery"

    def test_home_refreshes_daily(self, nav, sink):
        before = len(sink.dailies)
        nav.activate(PERSONS)
        nav.activate(HOME)
        assert len(sink.dailies) == before + 1

    def test_state_is_a_copy(self, nav):
        state = nav.state
        state.current_view = "tampered"
        assert nav.current_view == HOME


# ==================================================================
# Detail page
# ==================================================================


class TestDetail:
    def test_open_detail(self, nav, sink):
        nav.activate(MOVEMENTS)
        assert nav.open_detail("niagara") is True
        assert nav.current_view == DETAIL_PAGE
        assert nav.last_list_view == MOVEMENTS
        detail, note_text = sink.details[-1]
        assert detail.title == "Niagara Movement"
        assert note_text == ""
        assert nav.detail_note_key == "notes-niagara"

    def test_open_detail_loads_saved_note(self, nav, sink, memory_notes):
        memory_notes.save("notes-du-bois", "read Souls of Black Folk")
        nav.open_detail("du-bois")
        assert sink.details[-1][1] == "read Souls of Black Folk"

    def test_close_returns_to_last_list_view(self, nav):
        nav.activate(TIMELINE)
        nav.open_detail("ida-wells")
        nav.close_detail()
        assert nav.current_view == TIMELINE
        assert nav.detail_note_key is None

    def test_detail_to_detail_keeps_return_target(self, nav):
        nav.activate(PERSONS)
        nav.open_detail("ida-wells")
        nav.open_detail("niagara")
        nav.close_detail()
        assert nav.current_view == PERSONS

    def test_open_from_home_returns_home(self, nav):
        nav.open_detail("montgomery")
        nav.close_detail()
        assert nav.current_view == HOME

    def test_missing_entity_is_noop(self, nav, sink):
        nav.activate(PERSONS)
        sections_before = list(sink.sections)
        assert nav.open_detail("missing") is False
        assert nav.current_view == PERSONS
        assert nav.last_list_view == PERSONS
        assert sink.sections == sections_before
        assert sink.details == []


# ==================================================================
# Search
# ==================================================================


class TestSearch:
    def test_non_blank_goes_to_persons(self, nav, sink):
        nav.activate(TIMELINE)
        result = nav.search("boycott")
        assert [e.id for e in result] == ["montgomery"]
        assert nav.current_view == PERSONS
        grids = sink.grids[-1]
        assert grids.persons.is_empty
        assert [c.entity_id for c in grids.movements.cards] == ["montgomery"]

    def test_blank_restores_all_and_stays(self, nav, sink, sample_store):
        nav.activate(TIMELINE)
        nav.search("boycott")
        nav.activate(TIMELINE)
        result = nav.search("   ")
        assert len(result) == len(sample_store)
        assert nav.current_view == TIMELINE
        assert len(sink.grids[-1].persons) == 2

    def test_no_match_shows_empty_messages(self, nav, sink):
        nav.search("zzzz")
        grids = sink.grids[-1]
        assert grids.persons.is_empty
        assert grids.movements.is_empty

    def test_search_does_not_touch_timeline(self, nav, sink):
        nav.search("boycott")
        assert len(sink.timelines) == 1

    def test_search_returns_matches_in_order(self, nav):
        assert [e.id for e in nav.search("du bois")] == ["niagara", "du-bois"]


# ==================================================================
# Mind map
# ==================================================================


class TestMindMap:
    def test_each_activation_rebuilds(self, nav, sink):
        nav.activate(MINDMAP)
        nav.activate(PERSONS)
        nav.activate(MINDMAP)
        assert len(sink.mind_maps) == 2
        assert sink.mind_maps[0] is not sink.mind_maps[1]

    def test_built_from_full_collection(self, nav, sink, sample_store):
        nav.search("boycott")
        nav.activate(MINDMAP)
        assert nav.mind_map.node_count == len(sample_store)
        assert nav.mind_map.edge_count == 3

    def test_reset_rebuilds(self, nav, sink):
        nav.activate(MINDMAP)
        nav.reset_mind_map()
        assert len(sink.mind_maps) == 2
        assert nav.mind_map is sink.mind_maps[-1]

    def test_export_before_build_refused(self, nav, sink):
        assert nav.export_mind_map("/tmp/map.png") is False
        assert sink.exports == []
        assert sink.notices[-1] == (MIND_MAP_NOT_READY_MESSAGE, NoticeLevel.WARNING)

    def test_export_when_sink_not_ready(self, nav, sink):
        nav.activate(MINDMAP)
        sink.export_error = GraphExportError("layout pending")
        assert nav.export_mind_map("/tmp/map.png") is False
        assert sink.notices[-1] == (MIND_MAP_NOT_READY_MESSAGE, NoticeLevel.WARNING)

    def test_export_write_failure(self, nav, sink):
        nav.activate(MINDMAP)
        sink.export_error = OSError("disk full")
        assert nav.export_mind_map("/tmp/map.png") is False
        message, level = sink.notices[-1]
        assert "disk full" in message
        assert level == NoticeLevel.WARNING

    def test_export_success(self, nav, sink):
        nav.activate(MINDMAP)
        assert nav.export_mind_map("/tmp/map.png") is True
        assert sink.exports == ["/tmp/map.png"]
        assert sink.notices[-1][1] == NoticeLevel.SUCCESS


# ==================================================================
# Notes
# ==================================================================


class TestNotes:
    def test_save_and_read(self, nav, memory_notes):
        nav.save_note("personsNotes", "compare journalists")
        assert memory_notes.load("personsNotes") == "compare journalists"

    def test_copy_empty_warns(self, nav, sink):
        assert nav.copy_notes("homeNotes") is False
        assert sink.clipboard == []
        assert sink.notices[-1] == (NOTHING_TO_COPY_MESSAGE, NoticeLevel.WARNING)

    def test_copy(self, nav, sink):
        nav.save_note("notes-niagara", "founded 1905")
        assert nav.copy_notes("notes-niagara") is True
        assert sink.clipboard == [("notes-niagara", "founded 1905")]
        assert sink.notices[-1] == (COPIED_MESSAGE, NoticeLevel.SUCCESS)


# ==================================================================
# Command dispatch
# ==================================================================


class TestDispatch:
    def test_show_section(self, nav):
        nav.dispatch(Command(CommandKind.SHOW_SECTION, TIMELINE))
        assert nav.current_view == TIMELINE

    def test_open_and_close_detail(self, nav):
        nav.dispatch(Command(CommandKind.SHOW_SECTION, MOVEMENTS))
        nav.dispatch(Command(CommandKind.OPEN_DETAIL, "montgomery"))
        assert nav.current_view == DETAIL_PAGE
        nav.dispatch(Command(CommandKind.CLOSE_DETAIL))
        assert nav.current_view == MOVEMENTS

    def test_search(self, nav, sink):
        nav.dispatch(Command(CommandKind.SEARCH, text="journalism"))
        assert nav.current_view == PERSONS
        assert [c.entity_id for c in sink.grids[-1].persons.cards] == ["ida-wells"]

    def test_edit_and_copy_notes(self, nav, sink):
        nav.dispatch(Command(CommandKind.EDIT_NOTES, "mindmapNotes", "clusters"))
        nav.dispatch(Command(CommandKind.COPY_NOTES, "mindmapNotes"))
        assert sink.clipboard == [("mindmapNotes", "clusters")]

    def test_mind_map_commands(self, nav, sink):
        nav.dispatch(Command(CommandKind.SHOW_SECTION, MINDMAP))
        nav.dispatch(Command(CommandKind.RESET_MIND_MAP))
        nav.dispatch(Command(CommandKind.EXPORT_MIND_MAP, "/tmp/out.png"))
        assert len(sink.mind_maps) == 2
        assert sink.exports == ["/tmp/out.png"]


# ==================================================================
# Ann/Bob walkthrough
# ==================================================================


def test_ann_bob_scenario(ann_bob, memory_notes, sink):
    nav = NavigationController(EntityStore.from_entities(ann_bob), memory_notes, sink)
    nav.start()
    assert [t.name for t in sink.timelines[0]] == ["Bob", "Ann"]

    nav.activate(MINDMAP)
    assert nav.mind_map.node_count == 2
    assert [(e.source, e.target) for e in nav.mind_map.edges] == [("a", "b")]

    nav.activate(TIMELINE)
    nav.open_detail("a")
    nav.save_note(nav.detail_note_key, "married Bob?")
    nav.close_detail()
    assert nav.current_view == TIMELINE
    assert memory_notes.load("notes-a") == "married Bob?"
