"""PyQt5 host: renders the keyboard inside a window and edits Qt text widgets.

``install_keyboard(window)`` is the entry point: it docks a keyboard along
the bottom edge of *window*, tracks every editable widget below it
(including widgets added later) and returns the controller and tracker.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from PyQt5 import sip
from PyQt5.QtCore import QEvent, QObject, Qt, QTimer
from PyQt5.QtGui import QIcon, QKeyEvent, QPixmap
from PyQt5.QtWidgets import (
    QAbstractSpinBox,
    QApplication,
    QDateEdit,
    QDateTimeEdit,
    QDoubleSpinBox,
    QFrame,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QSpinBox,
    QTextEdit,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

import softkeys.log  # registers TRACE level and logger.trace()
from softkeys.core.default_layout import DEFAULT_LAYOUT, ICONS
from softkeys.core.editing import EditingBridge
from softkeys.core.event_bus import EventBus
from softkeys.core.controller import KeyboardController
from softkeys.core.focus import FocusTracker
from softkeys.core.layout import KeyDescriptor, Layout
from softkeys.core.states import KeyRole
from softkeys.platform.host import HostSurface
from softkeys.platform.scheduler import Scheduler, TimerHandle
from softkeys.platform.text_editor import TextEditor

logger = logging.getLogger(__name__)

KEY_HEIGHT = 56

# Shown when an icon cannot be rendered (no SVG image plugin)
ICON_FALLBACK_TEXT: dict[str, str] = {
    "backspace": "⌫",
    "capslock": "⇧",
    "enter": "⏎",
    "done": "✓",
}

# Width of special keys relative to a letter key
ROLE_STRETCH: dict[KeyRole, int] = {
    KeyRole.SPACE: 6,
    KeyRole.MODE_SWITCH: 2,
    KeyRole.DONE: 2,
}

KEYBOARD_QSS = """
QFrame#softkeys-keyboard { background: #2e2e33; }
QFrame#softkeys-keyboard QPushButton {
    background: #4a4a52; color: #ffffff; border: none; border-radius: 6px;
    font-size: 20px; min-height: %dpx;
}
QFrame#softkeys-keyboard QPushButton[kb_pressed="true"] { background: #7a7a85; }
QFrame#softkeys-keyboard QPushButton[kb_disabled="true"] { color: #77777f; background: #3a3a40; }
""" % KEY_HEIGHT


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------

class _QtTimerHandle(TimerHandle):
    def __init__(self, timer: QTimer):
        self._timer = timer
        self._finished = False

    def finish(self) -> None:
        if not self._finished:
            self._finished = True
            if not sip.isdeleted(self._timer):
                self._timer.stop()
                self._timer.deleteLater()

    def cancel(self) -> None:
        self.finish()


class QtScheduler(Scheduler):
    """QTimer-based scheduler; timers are owned by a QObject so Qt deletes them."""

    def __init__(self, parent: Optional[QObject] = None):
        self._owner = QObject(parent)

    def _start(self, delay: float, callback: Callable[[], None], single_shot: bool) -> _QtTimerHandle:
        timer = QTimer(self._owner)
        timer.setSingleShot(single_shot)
        handle = _QtTimerHandle(timer)

        def fire():
            if single_shot:
                handle.finish()
            callback()

        timer.timeout.connect(fire)
        timer.start(max(0, int(delay * 1000)))
        return handle

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return self._start(delay, callback, single_shot=True)

    def call_every(self, period: float, callback: Callable[[], None]) -> TimerHandle:
        return self._start(period, callback, single_shot=False)


# ---------------------------------------------------------------------------
# Text editing
# ---------------------------------------------------------------------------

class QtTextEditor(TextEditor):
    """Synthesises key events for the application's focus widget."""

    def _send(self, key: int, text: str = "") -> bool:
        target = QApplication.focusWidget()
        if target is None:
            return False
        for event_type in (QEvent.KeyPress, QEvent.KeyRelease):
            QApplication.sendEvent(target, QKeyEvent(event_type, key, Qt.NoModifier, text))
        return True

    def insert_text(self, text: str) -> None:
        if text == "\n":
            self._send(Qt.Key_Return, "\r")
            return
        upper = text.upper()
        # "ß".upper() is "SS": such glyphs go as text only
        key = ord(upper) if len(upper) == 1 else 0
        self._send(key, text)

    def delete_backward(self) -> None:
        self._send(Qt.Key_Backspace)


# ---------------------------------------------------------------------------
# Event filters
# ---------------------------------------------------------------------------

class _FocusFilter(QObject):
    def __init__(self, on_focus: Callable[[], None], on_blur: Callable[[], None]):
        super().__init__()
        self._on_focus = on_focus
        self._on_blur = on_blur

    def eventFilter(self, obj, event) -> bool:
        if event.type() == QEvent.FocusIn:
            self._on_focus()
        elif event.type() == QEvent.FocusOut:
            self._on_blur()
        return False


class _TreeObserver(QObject):
    """Reports widgets added (once polished) and removed under a root widget."""

    def __init__(self, on_added: Callable[[Any], None], on_removed: Callable[[Any], None]):
        super().__init__()
        self._on_added = on_added
        self._on_removed = on_removed
        self._watched: set = set()

    def watch(self, widget: QWidget) -> None:
        if widget in self._watched:
            return
        widget.installEventFilter(self)
        self._watched.add(widget)
        for child in widget.findChildren(QWidget, options=Qt.FindDirectChildrenOnly):
            self.watch(child)

    def stop(self) -> None:
        for widget in list(self._watched):
            if not sip.isdeleted(widget):
                widget.removeEventFilter(self)
        self._watched.clear()

    def eventFilter(self, obj, event) -> bool:
        etype = event.type()
        if etype == QEvent.ChildPolished:
            child = event.child()
            if isinstance(child, QWidget) and child not in self._watched:
                self.watch(child)
                self._on_added(child)
        elif etype == QEvent.ChildRemoved:
            child = event.child()
            if isinstance(child, QWidget):
                self._watched.discard(child)
                self._on_removed(child)
        return False


# ---------------------------------------------------------------------------
# Keyboard widgets
# ---------------------------------------------------------------------------

class QtKeyboardWidget(QFrame):
    """Keyboard container, kept along the bottom edge of its parent window."""

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setObjectName("softkeys-keyboard")
        self.setFocusPolicy(Qt.NoFocus)
        self.setStyleSheet(KEYBOARD_QSS)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(6)
        parent.installEventFilter(self)
        self.hide()

    def reposition(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        height = self.sizeHint().height()
        self.setGeometry(0, parent.height() - height, parent.width(), height)
        self.raise_()

    def eventFilter(self, obj, event) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Resize and self.isVisible():
            self.reposition()
        return False


class QtKeyButton(QPushButton):
    def __init__(self, key: KeyDescriptor, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.key = key
        self.setFocusPolicy(Qt.NoFocus)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setFixedHeight(KEY_HEIGHT)
        if key.icon:
            self._set_icon(key.icon)

    def _set_icon(self, name: str) -> None:
        pixmap = QPixmap()
        source = ICONS.get(name, name)
        if pixmap.loadFromData(source.encode("utf-8"), "SVG"):
            self.setIcon(QIcon(pixmap))
        else:
            self.setText(ICON_FALLBACK_TEXT.get(name, name))


# ---------------------------------------------------------------------------
# Host surface
# ---------------------------------------------------------------------------

class QtHostSurface(HostSurface):
    """:class:`HostSurface` over a top-level ``QWidget``.

    The reservation is the bottom contents margin of the window.
    """

    def __init__(self, window: QWidget):
        self.window = window

    # -- keyboard element tree ---------------------------------------------

    def create_keyboard(self) -> QtKeyboardWidget:
        return QtKeyboardWidget(self.window)

    def create_layout(self, keyboard: QWidget) -> QWidget:
        page = QWidget(keyboard)
        page.setFocusPolicy(Qt.NoFocus)
        rows = QVBoxLayout(page)
        rows.setContentsMargins(0, 0, 0, 0)
        rows.setSpacing(6)
        keyboard.layout().addWidget(page)
        return page

    def create_row(self, layout: QWidget) -> QWidget:
        row = QWidget(layout)
        keys = QHBoxLayout(row)
        keys.setContentsMargins(0, 0, 0, 0)
        keys.setSpacing(6)
        layout.layout().addWidget(row)
        return row

    def create_key(self, row: QWidget, key: KeyDescriptor) -> QtKeyButton:
        button = QtKeyButton(key, row)
        row.layout().addWidget(button, ROLE_STRETCH.get(key.role, 1))
        return button

    def remove_keyboard(self, keyboard: QWidget) -> None:
        keyboard.hide()
        keyboard.deleteLater()

    def set_key_glyphs(self, key_element: QPushButton, text: Optional[str], alt_text: Optional[str]) -> None:
        if text is not None:
            key_element.setText(text)
        key_element.setToolTip(alt_text or "")

    def set_displayed(self, element: QWidget, displayed: bool) -> None:
        element.setVisible(displayed)
        if displayed and isinstance(element, QtKeyboardWidget):
            element.reposition()

    def set_class(self, element: QWidget, name: str, enabled: bool) -> None:
        element.setProperty(f"kb_{name}", enabled)
        style = element.style()
        style.unpolish(element)
        style.polish(element)

    def bind_key(self, key_element: QPushButton, on_press: Callable[[], None], on_release: Callable[[], None]) -> None:
        key_element.pressed.connect(on_press)
        key_element.released.connect(on_release)

    def keyboard_height(self, keyboard: QtKeyboardWidget) -> int:
        keyboard.reposition()
        return keyboard.height()

    # -- focused document ----------------------------------------------------

    def root(self) -> QWidget:
        return self.window

    def active_element(self) -> Optional[QWidget]:
        return QApplication.focusWidget()

    def blur_active_element(self) -> None:
        widget = QApplication.focusWidget()
        if widget is not None:
            widget.clearFocus()

    def is_element(self, node: Any) -> bool:
        return isinstance(node, QWidget) and not sip.isdeleted(node)

    def tag_name(self, element: QWidget) -> str:
        if isinstance(element, (QTextEdit, QPlainTextEdit)):
            return "textarea"
        if isinstance(element, (QLineEdit, QAbstractSpinBox)):
            return "input"
        return type(element).__name__.lower()

    def input_type(self, element: QWidget) -> str:
        if isinstance(element, QLineEdit):
            if element.echoMode() in (QLineEdit.Password, QLineEdit.PasswordEchoOnEdit):
                return "password"
            # Apps may tag a line edit, e.g. setProperty("inputType", "email")
            declared = element.property("inputType")
            return str(declared).lower() if declared else "text"
        if isinstance(element, (QSpinBox, QDoubleSpinBox)):
            return "number"
        # QDateEdit and QTimeEdit both derive from QDateTimeEdit
        if isinstance(element, QDateEdit):
            return "date"
        if isinstance(element, QTimeEdit):
            return "time"
        if isinstance(element, QDateTimeEdit):
            return "datetime-local"
        return ""

    def children(self, element: QWidget) -> Iterable[QWidget]:
        # editors' internals (viewports, embedded line edits) are not separate targets
        if self.tag_name(element) in ("input", "textarea") or isinstance(element, QtKeyboardWidget):
            return []
        return [
            child for child in element.findChildren(QWidget, options=Qt.FindDirectChildrenOnly)
            if not isinstance(child, QtKeyboardWidget)
        ]

    def scroll_into_view(self, element: QWidget) -> None:
        parent = element.parentWidget()
        while parent is not None:
            if isinstance(parent, QScrollArea):
                parent.ensureWidgetVisible(element)
                return
            parent = parent.parentWidget()

    def reservation(self) -> int:
        return self.window.contentsMargins().bottom()

    def set_reservation(self, value: Any) -> None:
        m = self.window.contentsMargins()
        self.window.setContentsMargins(m.left(), m.top(), m.right(), int(value or 0))

    # -- listeners -----------------------------------------------------------

    def add_focus_listeners(self, element: QWidget, on_focus: Callable[[], None], on_blur: Callable[[], None]) -> _FocusFilter:
        token = _FocusFilter(on_focus, on_blur)
        element.installEventFilter(token)
        return token

    def remove_focus_listeners(self, element: QWidget, token: _FocusFilter) -> None:
        if not sip.isdeleted(element):
            element.removeEventFilter(token)

    def observe_mutations(self, root: QWidget, on_added: Callable[[Any], None], on_removed: Callable[[Any], None]) -> _TreeObserver:
        observer = _TreeObserver(on_added, on_removed)
        observer.watch(root)
        return observer

    def disconnect_mutations(self, token: _TreeObserver) -> None:
        token.stop()


def install_keyboard(
    window: QWidget,
    config: Optional[dict] = None,
    layout: Optional[Layout] = None,
    editor: Optional[TextEditor] = None,
    event_bus: Optional[EventBus] = None,
) -> tuple[KeyboardController, FocusTracker]:
    """Dock a keyboard in *window* and start tracking its editable widgets."""
    config = config or {}
    surface = QtHostSurface(window)
    scheduler = QtScheduler(window)
    bridge = EditingBridge(editor or QtTextEditor(), event_bus)
    controller = KeyboardController(
        layout or DEFAULT_LAYOUT,
        surface,
        bridge,
        scheduler,
        config=config,
        event_bus=event_bus,
    )
    tracker = FocusTracker(
        controller,
        event_bus=event_bus,
        detach_removed=config.get('detach_removed', True),
    )
    tracker.start()
    logger.info("Keyboard installed in %s (%d tracked)", type(window).__name__, len(tracker.tracked))
    return controller, tracker
