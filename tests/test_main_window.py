"""
Tests for viewer/main_window.py -- loading, section switching and the
EventBus-to-controller wiring.

Each window gets its own ini-file QSettings and an in-memory note store.
"""

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtGui import QGuiApplication

from archive.navigation import DETAIL_PAGE, HOME, MINDMAP, PERSONS, TIMELINE
from archive.store import EntityStore
from viewer.main_window import SECTIONS, MainWindow
from viewer.services.event_bus import EventBus


@pytest.fixture(autouse=True)
def _reset_event_bus():
    EventBus.reset()
    yield
    EventBus.reset()


@pytest.fixture
def settings(tmp_path):
    return QSettings(str(tmp_path / "viewer.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def window(qtbot, memory_notes, settings):
    win = MainWindow(notes=memory_notes, settings=settings)
    qtbot.addWidget(win)
    return win


@pytest.fixture
def loaded(window, sample_store):
    window.attach(sample_store)
    return window


class TestLoading:
    def test_navigation_disabled_before_load(self, window):
        assert window.controller is None
        assert not window.search_box.isEnabled()
        assert not any(window._section_actions[s].isEnabled() for s, _ in SECTIONS)

    def test_attach_shows_home(self, loaded):
        assert loaded.controller.current_view == HOME
        assert loaded.current_page() is loaded.page(HOME)
        assert loaded.search_box.isEnabled()
        assert loaded.page(HOME).daily_entity_id

    def test_begin_load_success(self, qtbot, window, data_file):
        window.begin_load(EntityStore(data_file))
        qtbot.waitUntil(lambda: window.controller is not None, timeout=5000)
        assert window.page(PERSONS).entity_ids() == ["ida-wells", "du-bois"]
        assert not window.overlay.is_error

    def test_begin_load_failure(self, qtbot, window, tmp_path):
        window.begin_load(EntityStore(str(tmp_path / "missing.json")))
        qtbot.waitUntil(lambda: window.overlay.is_error, timeout=5000)
        assert "Please check the data file path." in window.overlay.text()
        assert window.controller is None
        assert not window.search_box.isEnabled()

    def test_begin_load_malformed(self, qtbot, window, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"not": "a list"}', encoding="utf-8")
        window.begin_load(EntityStore(str(path)))
        qtbot.waitUntil(lambda: window.overlay.is_error, timeout=5000)
        assert "Please check the data file format." in window.overlay.text()

    def test_bus_ignored_before_load(self, window):
        EventBus.instance().section_requested.emit(TIMELINE)
        assert window.controller is None


class TestNavigation:
    def test_toolbar_action(self, loaded):
        loaded._section_actions[TIMELINE].trigger()
        assert loaded.controller.current_view == TIMELINE
        assert loaded.current_page() is loaded.page(TIMELINE)

    def test_open_and_close_detail(self, loaded):
        bus = EventBus.instance()
        bus.section_requested.emit(PERSONS)
        bus.entity_selected.emit("ida-wells")
        assert loaded.current_page() is loaded.page(DETAIL_PAGE)
        assert loaded.page(DETAIL_PAGE).title() == "Ida B. Wells"
        bus.detail_closed.emit()
        assert loaded.current_page() is loaded.page(PERSONS)

    def test_escape_closes_detail(self, loaded):
        EventBus.instance().entity_selected.emit("niagara")
        loaded._on_escape()
        assert loaded.controller.current_view == HOME

    def test_unknown_entity_ignored(self, loaded):
        EventBus.instance().entity_selected.emit("missing")
        assert loaded.current_page() is loaded.page(HOME)

    def test_search_debounced(self, qtbot, loaded):
        loaded.search_box.setText("boycott")
        qtbot.waitUntil(lambda: loaded.controller.current_view == PERSONS, timeout=2000)
        assert loaded.page(PERSONS).card_count() == 0
        assert loaded.page("movements").entity_ids() == ["montgomery"]

    def test_mind_map_built_on_activation(self, loaded):
        EventBus.instance().section_requested.emit(MINDMAP)
        panel = loaded.page(MINDMAP)
        assert panel.is_ready
        assert len(panel.node_ids) == 5


class TestNotes:
    def test_typing_saves(self, loaded, memory_notes):
        loaded.page(TIMELINE).notes_box._edit.setPlainText("check dates")
        assert memory_notes.load("timelineNotes") == "check dates"

    def test_saved_notes_shown_on_activation(self, loaded, memory_notes):
        memory_notes.save("personsNotes", "from last time")
        EventBus.instance().section_requested.emit(PERSONS)
        assert loaded.page(PERSONS).notes_box.text() == "from last time"

    def test_detail_notes_saved_under_entity_key(self, loaded, memory_notes):
        EventBus.instance().entity_selected.emit("du-bois")
        loaded.page(DETAIL_PAGE).notes_box._edit.setPlainText("Souls of Black Folk")
        assert memory_notes.load("notes-du-bois") == "Souls of Black Folk"

    def test_copy_to_clipboard(self, loaded, memory_notes):
        memory_notes.save("homeNotes", "copy me")
        EventBus.instance().notes_copy_requested.emit("homeNotes")
        assert QGuiApplication.clipboard().text() == "copy me"
        assert loaded.page(HOME).notes_box._copy_btn.text() == "Copied!"

    def test_copy_empty_warns(self, loaded):
        EventBus.instance().notes_copy_requested.emit("resourcesNotes")
        assert loaded.statusBar().currentMessage() == "Nothing to copy yet!"


class TestMindMapExport:
    def test_export(self, loaded, tmp_path):
        bus = EventBus.instance()
        bus.section_requested.emit(MINDMAP)
        path = tmp_path / "map.png"
        bus.mind_map_export_requested.emit(str(path))
        assert path.exists()
        assert "Mind map saved" in loaded.statusBar().currentMessage()

    def test_export_before_visit(self, loaded, tmp_path):
        EventBus.instance().mind_map_export_requested.emit(str(tmp_path / "map.png"))
        assert loaded.statusBar().currentMessage() == "Wait for the map to load before saving!"


class TestLayout:
    def test_geometry_saved_on_close(self, qtbot, memory_notes, settings):
        win = MainWindow(notes=memory_notes, settings=settings)
        qtbot.addWidget(win)
        win.close()
        assert settings.value("geometry") is not None


class TestErrors:
    def test_layout_failure_shown_to_user(self, loaded, monkeypatch):
        def broken_layout(mind_map):
            raise ModuleNotFoundError("No module named 'numpy'")

        monkeypatch.setattr("viewer.panels.mind_map.compute_layout", broken_layout)
        EventBus.instance().section_requested.emit(MINDMAP)
        assert loaded.controller.current_view == MINDMAP
        assert not loaded.page(MINDMAP).is_ready
        assert loaded.statusBar().currentMessage().startswith("Error: ")
        assert "numpy" in loaded.statusBar().currentMessage()
        assert "error" in [t.level for t in loaded._toast.active]
