"""
Tests for viewer/services/event_bus.py -- EventBus singleton and signals.
"""

import threading
from unittest.mock import MagicMock

import pytest

from viewer.services.event_bus import EventBus


@pytest.fixture(autouse=True)
def _reset_event_bus():
    """Ensure each test starts with a fresh EventBus."""
    EventBus.reset()
    yield
    EventBus.reset()


# ------------------------------------------------------------------
# Singleton tests
# ------------------------------------------------------------------


class TestSingletonPattern:
    def test_instance_returns_same_object(self, qapp):
        assert EventBus.instance() is EventBus.instance()

    def test_reset_clears_instance(self, qapp):
        bus1 = EventBus.instance()
        EventBus.reset()
        bus2 = EventBus.instance()
        assert bus1 is not bus2

    def test_thread_safe_creation(self, qapp):
        """Multiple threads racing to create the instance should all get the same object."""
        results = []
        barrier = threading.Barrier(4)

        def _grab():
            barrier.wait()
            results.append(id(EventBus.instance()))

        threads = [threading.Thread(target=_grab) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 1, "All threads should get the same instance"


# ------------------------------------------------------------------
# Signal tests
# ------------------------------------------------------------------


class TestSignals:
    def test_section_requested(self, qapp):
        bus = EventBus.instance()
        receiver = MagicMock()
        bus.section_requested.connect(receiver)
        bus.section_requested.emit("timeline")
        receiver.assert_called_once_with("timeline")

    def test_entity_selected(self, qapp):
        bus = EventBus.instance()
        receiver = MagicMock()
        bus.entity_selected.connect(receiver)
        bus.entity_selected.emit("ann-001")
        receiver.assert_called_once_with("ann-001")

    def test_detail_closed(self, qapp):
        bus = EventBus.instance()
        receiver = MagicMock()
        bus.detail_closed.connect(receiver)
        bus.detail_closed.emit()
        receiver.assert_called_once_with()

    def test_notes_edited_two_args(self, qapp):
        bus = EventBus.instance()
        receiver = MagicMock()
        bus.notes_edited.connect(receiver)
        bus.notes_edited.emit("homeNotes", "text")
        receiver.assert_called_once_with("homeNotes", "text")

    def test_mind_map_export_requested(self, qapp):
        bus = EventBus.instance()
        receiver = MagicMock()
        bus.mind_map_export_requested.connect(receiver)
        bus.mind_map_export_requested.emit("/tmp/map.png")
        receiver.assert_called_once_with("/tmp/map.png")

    def test_signals_do_not_leak_across_reset(self, qapp):
        receiver = MagicMock()
        EventBus.instance().search_changed.connect(receiver)
        EventBus.reset()
        EventBus.instance().search_changed.emit("x")
        receiver.assert_not_called()
