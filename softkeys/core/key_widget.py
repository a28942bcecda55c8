"""KeyWidget — one interactive key: press state, tap vs. long press."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

import softkeys.log  # registers TRACE level and logger.trace()
from softkeys.core.events import EventType, KeyEventData
from softkeys.core.layout import KeyDescriptor, alt_glyph, display_glyph
from softkeys.core.states import KeyRole
from softkeys.core.transitions import toggled_mode
from softkeys.platform.host import CLASS_DISABLED, CLASS_PRESSED
from softkeys.platform.scheduler import TimerSlot

if TYPE_CHECKING:
    from softkeys.core.controller import KeyboardController

logger = logging.getLogger(__name__)


@dataclass
class KeyWidgetState:
    pressed: bool = False
    long_press: TimerSlot = field(default_factory=TimerSlot)
    repeat: TimerSlot = field(default_factory=TimerSlot)

    def clear_timers(self) -> None:
        self.long_press.clear()
        self.repeat.clear()


class KeyWidget:
    """Binds one :class:`KeyDescriptor` to its element on the host surface.

    The long-press timer and the backspace repeat interval belong to this
    key only and are both cancelled on every release.
    """

    def __init__(self, key: KeyDescriptor, element: Any, controller: KeyboardController):
        self.key = key
        self.element = element
        self.controller = controller
        self.state = KeyWidgetState()

        surface = controller.surface
        surface.bind_key(element, self.on_activation_start, self.on_activation_end)
        if key.disabled:
            surface.set_class(element, CLASS_DISABLED, True)
        self.refresh()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def glyph(self) -> Optional[str]:
        return display_glyph(self.key, self.controller.caps_locked)

    @property
    def alt(self) -> Optional[str]:
        return alt_glyph(self.key, self.controller.caps_locked)

    def refresh(self) -> None:
        """Re-render the glyphs for the current shift state."""
        self.controller.surface.set_key_glyphs(self.element, self.glyph, self.alt)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_activation_start(self) -> None:
        if self.key.disabled:
            logger.trace("Ignored press on disabled key %r", self.key.label)  # type: ignore[attr-defined]
            return

        self.state.pressed = True
        self.controller.surface.set_class(self.element, CLASS_PRESSED, True)
        self._publish(EventType.KEY_PRESS)

        alt = self.alt
        if self.key.role is KeyRole.BACKSPACE or alt:
            delay = self.controller.long_press_delay
            logger.trace("Arm long press on %r (%.2fs)", self.key.label, delay)  # type: ignore[attr-defined]
            self.state.long_press.arm(
                self.controller.scheduler.call_later(delay, lambda: self._on_long_press(alt))
            )

    def on_activation_end(self) -> None:
        if self.key.disabled:
            return

        if self.state.pressed:
            _EFFECTS[self.key.role](self)

        self.state.pressed = False
        self.controller.surface.set_class(self.element, CLASS_PRESSED, False)
        self.state.clear_timers()
        self._publish(EventType.KEY_RELEASE)

    def _on_long_press(self, alt: Optional[str]) -> None:
        self.state.long_press.release()
        self._publish(EventType.KEY_LONG_PRESS)
        if self.key.role is KeyRole.BACKSPACE:
            interval = self.controller.repeat_interval
            logger.trace("Backspace repeat every %.2fs", interval)  # type: ignore[attr-defined]
            self.state.repeat.arm(
                self.controller.scheduler.call_every(interval, self.controller.delete_text)
            )
        else:
            self.controller.insert_text(alt)
            # the release that follows must not insert the primary glyph too
            self.state.pressed = False

    def destroy(self) -> None:
        """Tear down: cancels any pending timer."""
        self.state.pressed = False
        self.state.clear_timers()

    # ------------------------------------------------------------------
    # Activation effects, one per role
    # ------------------------------------------------------------------

    def _activate_done(self) -> None:
        self.controller.done()

    def _activate_caps_lock(self) -> None:
        self.controller.set_caps_locked(not self.controller.caps_locked)

    def _activate_mode_switch(self) -> None:
        self.controller.set_mode(toggled_mode(self.controller.mode))

    def _activate_backspace(self) -> None:
        self.controller.delete_text()

    def _activate_enter(self) -> None:
        if self.controller.focused_is_multiline():
            self.controller.insert_text("\n")

    def _activate_space(self) -> None:
        self.controller.insert_text(" ")

    def _activate_literal(self) -> None:
        glyph = self.glyph
        if glyph:
            self.controller.insert_text(glyph)

    def _publish(self, event_type: EventType) -> None:
        bus = self.controller.bus
        if bus is None:
            return
        bus.emit(event_type, KeyEventData(
            label=self.key.label,
            role=self.key.role.value,
            mode=self.controller.mode.value,
            caps_locked=self.controller.caps_locked,
        ))


_EFFECTS: dict[KeyRole, Callable[[KeyWidget], None]] = {
    KeyRole.DONE: KeyWidget._activate_done,
    KeyRole.CAPS_LOCK: KeyWidget._activate_caps_lock,
    KeyRole.MODE_SWITCH: KeyWidget._activate_mode_switch,
    KeyRole.BACKSPACE: KeyWidget._activate_backspace,
    KeyRole.ENTER: KeyWidget._activate_enter,
    KeyRole.SPACE: KeyWidget._activate_space,
    KeyRole.NONE: KeyWidget._activate_literal,
}

_missing = set(KeyRole) - set(_EFFECTS)
if _missing:
    raise RuntimeError(f"No activation effect for role(s): {sorted(r.value for r in _missing)}")
