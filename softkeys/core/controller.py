"""KeyboardController — owns mode, caps lock and visibility."""

from __future__ import annotations

import logging
from typing import Any, Optional

import softkeys.log  # registers TRACE level and logger.trace()
from softkeys.config import DEFAULT_CONFIG
from softkeys.core.editing import EditingBridge
from softkeys.core.event_bus import EventBus
from softkeys.core.events import EventType
from softkeys.core.key_widget import KeyWidget
from softkeys.core.layout import Layout
from softkeys.core.states import ControllerState, KeyRole, LayoutMode
from softkeys.platform.host import CLASS_CAP, CLASS_DISABLED, HostSurface
from softkeys.platform.scheduler import Scheduler

logger = logging.getLogger(__name__)

MULTILINE_TAG = "textarea"


class KeyboardController:
    """Builds the key widgets for both layout modes and drives the keyboard.

    One instance per surface, created at startup and handed to the
    :class:`~softkeys.core.focus.FocusTracker` and to every key widget.
    All methods run on the host's UI thread.
    """

    def __init__(
        self,
        layout: Layout,
        surface: HostSurface,
        editing: EditingBridge,
        scheduler: Scheduler,
        config: Optional[dict] = None,
        event_bus: Optional[EventBus] = None,
    ):
        config = config or {}
        self.layout = layout
        self.surface = surface
        self.editing = editing
        self.scheduler = scheduler
        self.bus = event_bus
        self.long_press_delay: float = config.get('long_press_delay', DEFAULT_CONFIG['long_press_delay'])
        self.repeat_interval: float = config.get('repeat_interval', DEFAULT_CONFIG['repeat_interval'])

        self.state = ControllerState()
        self.widgets: dict[LayoutMode, list[KeyWidget]] = {}
        self.enter_widgets: list[KeyWidget] = []
        self.layout_elements: dict[LayoutMode, Any] = {}

        self.keyboard_element = surface.create_keyboard()
        for mode in LayoutMode:
            self._build_mode(mode)
        self._apply_mode(self.state.mode)

    def _build_mode(self, mode: LayoutMode) -> None:
        layout_element = self.surface.create_layout(self.keyboard_element)
        self.layout_elements[mode] = layout_element
        widgets = self.widgets.setdefault(mode, [])
        for row in self.layout.rows(mode):
            row_element = self.surface.create_row(layout_element)
            for key in row:
                widget = KeyWidget(key, self.surface.create_key(row_element, key), self)
                widgets.append(widget)
                if key.role is KeyRole.ENTER:
                    self.enter_widgets.append(widget)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def mode(self) -> LayoutMode:
        return self.state.mode

    @property
    def caps_locked(self) -> bool:
        return self.state.caps_locked

    @property
    def visible(self) -> bool:
        return self.state.visible

    def all_widgets(self) -> list[KeyWidget]:
        return [w for mode in LayoutMode for w in self.widgets.get(mode, [])]

    def set_mode(self, mode: LayoutMode) -> None:
        """Display the rows of *mode*; the other row set stays built."""
        if mode is not self.state.mode:
            logger.debug("Mode: %s → %s", self.state.mode.value, mode.value)
        self._apply_mode(mode)
        if self.bus is not None:
            self.bus.emit(EventType.MODE_CHANGED, mode.value)

    def _apply_mode(self, mode: LayoutMode) -> None:
        for m, element in self.layout_elements.items():
            self.surface.set_displayed(element, m is mode)
        self.state.mode = mode

    def set_caps_locked(self, caps_locked: bool) -> None:
        if caps_locked != self.state.caps_locked:
            logger.debug("Caps lock: %s → %s", self.state.caps_locked, caps_locked)
        self.surface.set_class(self.keyboard_element, CLASS_CAP, caps_locked)
        self.state.caps_locked = caps_locked
        for widget in self.all_widgets():
            widget.refresh()
        if self.bus is not None:
            self.bus.emit(EventType.CAPS_CHANGED, caps_locked)

    # ------------------------------------------------------------------
    # Focus-dependent helpers
    # ------------------------------------------------------------------

    def focused_is_multiline(self) -> bool:
        """True when the focused element accepts line breaks."""
        element = self.surface.active_element()
        if element is None:
            return False
        return self.surface.tag_name(element) == MULTILINE_TAG

    def update_enter_keys(self) -> None:
        multiline = self.focused_is_multiline()
        for widget in self.enter_widgets:
            if not widget.key.disabled:
                self.surface.set_class(widget.element, CLASS_DISABLED, not multiline)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def show(self) -> None:
        """Reset to alphameric / lowercase and reveal the keyboard.

        Re-running while visible repeats the reset.
        """
        self.set_mode(LayoutMode.ALPHAMERIC)
        self.set_caps_locked(False)
        self.update_enter_keys()

        self.surface.set_displayed(self.keyboard_element, True)
        self.state.visible = True

        self.state.saved_reservation = self.surface.reservation()
        self.surface.set_reservation(self.surface.keyboard_height(self.keyboard_element))

        element = self.surface.active_element()
        if element is not None:
            self.surface.scroll_into_view(element)

        logger.debug("Keyboard shown (reserved %s)", self.surface.reservation())
        if self.bus is not None:
            self.bus.emit(EventType.KEYBOARD_SHOWN, None)

    def hide(self) -> None:
        self.surface.set_displayed(self.keyboard_element, False)
        self.state.visible = False
        self.surface.set_reservation(self.state.saved_reservation)
        logger.debug("Keyboard hidden (reservation restored to %r)", self.state.saved_reservation)
        if self.bus is not None:
            self.bus.emit(EventType.KEYBOARD_HIDDEN, None)

    def done(self) -> None:
        """Remove focus from the focused element; the host decides what follows."""
        self.surface.blur_active_element()

    def close(self) -> None:
        """Cancel every key timer and remove the keyboard from the surface."""
        for widget in self.all_widgets():
            widget.destroy()
        if self.state.visible:
            self.hide()
        self.surface.remove_keyboard(self.keyboard_element)

    # ------------------------------------------------------------------
    # Editing (forwarded to the bridge)
    # ------------------------------------------------------------------

    def insert_text(self, text: str) -> None:
        self.editing.insert_text(text)

    def delete_text(self) -> None:
        self.editing.delete_one_unit()
