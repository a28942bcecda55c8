"""Shared fixtures: in-memory host surface, virtual-clock scheduler, recording editor."""

from __future__ import annotations

import pytest

from softkeys.core.controller import KeyboardController
from softkeys.core.default_layout import DEFAULT_LAYOUT
from softkeys.core.editing import EditingBridge
from softkeys.core.event_bus import EventBus
from softkeys.core.focus import FocusTracker
from softkeys.core.states import KeyRole, LayoutMode
from softkeys.platform.host import HostSurface
from softkeys.platform.scheduler import Scheduler, TimerHandle
from softkeys.platform.text_editor import TextEditor


# ---------------------------------------------------------------------------
# Scheduler with a virtual clock
# ---------------------------------------------------------------------------

class FakeTimer(TimerHandle):
    def __init__(self, due, period, callback):
        self.due = due
        self.period = period
        self.callback = callback
        self.cancelled = False
        self.fired = 0

    def cancel(self):
        self.cancelled = True


class FakeScheduler(Scheduler):
    EPS = 1e-9

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self.now + delay, None, callback)
        self.timers.append(timer)
        return timer

    def call_every(self, period, callback):
        timer = FakeTimer(self.now + period, period, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.active if t.due <= target + self.EPS]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.period is None:
                timer.cancelled = True
            else:
                timer.due += timer.period
            timer.fired += 1
            timer.callback()
        self.now = target


# ---------------------------------------------------------------------------
# Host surface
# ---------------------------------------------------------------------------

class FakeNode:
    """Keyboard-side element created through the surface."""

    def __init__(self, kind, key=None):
        self.kind = kind
        self.key = key
        self.children: list = []
        self.displayed = True
        self.classes: set[str] = set()
        self.text = None
        self.alt = None
        self.on_press = None
        self.on_release = None

    def press(self):
        self.on_press()

    def release(self):
        self.on_release()


class FakeElement:
    """Document-side element (or text node when ``is_element`` is False)."""

    def __init__(self, tag, type="", children=(), is_element=True):
        self.tag = tag
        self.type = type
        self.children = list(children)
        self.is_element = is_element
        self.listeners: list = []

    def __repr__(self):
        return f"<{self.tag} type={self.type!r}>"


class FakeHost(HostSurface):
    KEYBOARD_HEIGHT = 250

    def __init__(self, body=None):
        self.body = body or FakeElement("body")
        self.focused = None
        self.reserved = "8px"
        self.scrolled: list = []
        self.keyboards: list[FakeNode] = []
        self.observers: list = []

    # -- keyboard tree -----------------------------------------------------

    def create_keyboard(self):
        node = FakeNode("keyboard")
        node.displayed = False
        self.keyboards.append(node)
        return node

    def create_layout(self, keyboard):
        node = FakeNode("layout")
        keyboard.children.append(node)
        return node

    def create_row(self, layout):
        node = FakeNode("row")
        layout.children.append(node)
        return node

    def create_key(self, row, key):
        node = FakeNode("key", key)
        row.children.append(node)
        return node

    def remove_keyboard(self, keyboard):
        self.keyboards.remove(keyboard)

    def set_key_glyphs(self, key_element, text, alt_text):
        key_element.text = text
        key_element.alt = alt_text

    def set_displayed(self, element, displayed):
        element.displayed = displayed

    def set_class(self, element, name, enabled):
        if enabled:
            element.classes.add(name)
        else:
            element.classes.discard(name)

    def bind_key(self, key_element, on_press, on_release):
        key_element.on_press = on_press
        key_element.on_release = on_release

    def keyboard_height(self, keyboard):
        return self.KEYBOARD_HEIGHT

    # -- document ------------------------------------------------------------

    def root(self):
        return self.body

    def active_element(self):
        return self.focused

    def blur_active_element(self):
        element, self.focused = self.focused, None
        if element is not None:
            for _, on_blur in list(element.listeners):
                on_blur()

    def focus(self, element):
        if self.focused is not None:
            self.blur_active_element()
        self.focused = element
        for on_focus, _ in list(element.listeners):
            on_focus()

    def is_element(self, node):
        return isinstance(node, FakeElement) and node.is_element

    def tag_name(self, element):
        return element.tag

    def input_type(self, element):
        return element.type

    def children(self, element):
        return list(element.children)

    def scroll_into_view(self, element):
        self.scrolled.append(element)

    def reservation(self):
        return self.reserved

    def set_reservation(self, value):
        self.reserved = value

    # -- listeners -----------------------------------------------------------

    def add_focus_listeners(self, element, on_focus, on_blur):
        token = (on_focus, on_blur)
        element.listeners.append(token)
        return token

    def remove_focus_listeners(self, element, token):
        element.listeners.remove(token)

    def observe_mutations(self, root, on_added, on_removed):
        token = (root, on_added, on_removed)
        self.observers.append(token)
        return token

    def disconnect_mutations(self, token):
        self.observers.remove(token)

    def append_child(self, parent, child):
        parent.children.append(child)
        for _, on_added, _ in list(self.observers):
            on_added(child)

    def remove_child(self, parent, child):
        parent.children.remove(child)
        for _, _, on_removed in list(self.observers):
            on_removed(child)


# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------

class RecordingEditor(TextEditor):
    def __init__(self):
        self.calls: list[tuple] = []
        self.fail = False

    def insert_text(self, text):
        if self.fail:
            raise RuntimeError("host refused insert")
        self.calls.append(("insert", text))

    def delete_backward(self):
        if self.fail:
            raise RuntimeError("host refused delete")
        self.calls.append(("delete",))

    @property
    def inserted(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "insert"]

    @property
    def deletes(self) -> int:
        return sum(1 for c in self.calls if c[0] == "delete")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def find_widget(controller, mode=LayoutMode.ALPHAMERIC, text=None, role=None):
    """First key widget of *mode* matching *text* (primary glyph) or *role*."""
    for widget in controller.widgets[mode]:
        if text is not None and widget.key.text == text:
            return widget
        if role is not None and widget.key.role is role:
            return widget
    raise LookupError(f"No key text={text!r} role={role!r} in {mode}")


def tap(widget):
    widget.on_activation_start()
    widget.on_activation_end()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def mock_uinput(monkeypatch):
    """Replace real evdev.UInput so no test can grab /dev/uinput."""
    try:
        import evdev  # noqa: F401
    except ImportError:
        yield
        return

    class DummyUInput:
        def __init__(self, *args, **kwargs):
            pass
        def write(self, *a, **k):
            pass
        def syn(self):
            pass
        def close(self):
            pass

    monkeypatch.setattr('evdev.UInput', DummyUInput)
    yield


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def editor():
    return RecordingEditor()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def controller(host, scheduler, editor, bus):
    bridge = EditingBridge(editor, bus)
    return KeyboardController(DEFAULT_LAYOUT, host, bridge, scheduler, event_bus=bus)


@pytest.fixture
def tracker(controller, host):
    return FocusTracker(controller)


@pytest.fixture
def text_input():
    return FakeElement("input", "text")


@pytest.fixture
def textarea():
    return FakeElement("textarea")


@pytest.fixture
def backspace(controller):
    return find_widget(controller, role=KeyRole.BACKSPACE)
