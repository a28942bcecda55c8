"""Tests for softkeys.core.editing — the bridge to the host editor."""

from __future__ import annotations

from conftest import find_widget, tap
from softkeys.core.editing import EditingBridge
from softkeys.core.events import EventType
from softkeys.core.states import KeyRole


class TestEditingBridge:
    def test_insert_forwards(self, editor):
        EditingBridge(editor).insert_text("ab")
        assert editor.calls == [("insert", "ab")]

    def test_delete_forwards(self, editor):
        EditingBridge(editor).delete_one_unit()
        assert editor.calls == [("delete",)]

    def test_host_failure_is_swallowed(self, editor):
        editor.fail = True
        bridge = EditingBridge(editor)
        bridge.insert_text("x")
        bridge.delete_one_unit()

    def test_events_report_outcome(self, editor, bus):
        seen = []
        bus.subscribe(EventType.TEXT_INSERTED, seen.append)
        bus.subscribe(EventType.TEXT_DELETED, seen.append)
        bridge = EditingBridge(editor, bus)
        bridge.insert_text("x")
        editor.fail = True
        bridge.delete_one_unit()
        assert [(e.type, e.data.text, e.data.ok) for e in seen] == [
            (EventType.TEXT_INSERTED, "x", True),
            (EventType.TEXT_DELETED, "", False),
        ]


class TestFailureKeepsKeyboardState:
    def test_failed_insert_still_releases_key(self, controller, editor):
        editor.fail = True
        widget = find_widget(controller, text="a")
        tap(widget)
        assert widget.state.pressed is False

    def test_failed_repeat_keeps_repeating_until_release(self, controller, scheduler, editor):
        editor.fail = True
        widget = find_widget(controller, role=KeyRole.BACKSPACE)
        widget.on_activation_start()
        scheduler.advance(1.6)
        assert len(scheduler.active) == 1
        widget.on_activation_end()
        assert scheduler.active == []
