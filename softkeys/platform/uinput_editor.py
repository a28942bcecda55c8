"""UInputTextEditor — types through an evdev UInput virtual keyboard.

Used when the focused surface lives outside this process: keystrokes go
to whichever window has focus system-wide.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import softkeys.log  # registers TRACE level and logger.trace()
from softkeys.platform.key_mapper import KEY_BACKSPACE, KEY_LEFTSHIFT, char_to_keycode
from softkeys.platform.text_editor import TextEditor

logger = logging.getLogger(__name__)

# EV_KEY type constant (used when evdev is not importable)
EV_KEY = 1


class UInputTextEditor(TextEditor):
    """Creates and manages a UInput virtual keyboard device."""

    DEVICE_NAME = "softkeys Virtual Keyboard"

    # Delay between press and release, and between successive key taps.
    # Without a pause many applications (GTK, Qt, X terminals) drop events
    # when they arrive faster than the input processing loop runs.
    KEY_PRESS_DELAY = 0.001   # 1 ms between press and release
    KEY_REPEAT_DELAY = 0.001  # 1 ms between successive key taps

    def __init__(self, uinput: Any = None, debug: bool = False):
        self.debug = debug
        self._uinput: Any = uinput
        self._ev_key = EV_KEY
        if self._uinput is None:
            self._open()

    def _open(self) -> None:
        try:
            import evdev
            self._uinput = evdev.UInput(name=self.DEVICE_NAME)
            self._ev_key = evdev.ecodes.EV_KEY
        except Exception as e:
            logger.warning("Cannot create UInput device: %s", e)

    @property
    def available(self) -> bool:
        return self._uinput is not None

    # ------------------------------------------------------------------
    # TextEditor
    # ------------------------------------------------------------------

    def insert_text(self, text: str) -> None:
        for ch in text:
            mapped = char_to_keycode(ch)
            if mapped is None:
                logger.debug("No key for %r, skipped", ch)
                continue
            code, shifted = mapped
            if shifted:
                self._write(KEY_LEFTSHIFT, 1)
                time.sleep(self.KEY_PRESS_DELAY)
            self.tap_key(code)
            if shifted:
                self._write(KEY_LEFTSHIFT, 0)
            time.sleep(self.KEY_REPEAT_DELAY)

    def delete_backward(self) -> None:
        self.tap_key(KEY_BACKSPACE)

    # ------------------------------------------------------------------
    # Device
    # ------------------------------------------------------------------

    def tap_key(self, keycode: int, n_times: int = 1) -> None:
        """Press and release a keycode n times."""
        for i in range(n_times):
            self._write(keycode, 1)
            time.sleep(self.KEY_PRESS_DELAY)
            self._write(keycode, 0)
            if i < n_times - 1:
                time.sleep(self.KEY_REPEAT_DELAY)

    def _write(self, code: int, value: int) -> None:
        if self._uinput is None:
            return
        try:
            self._uinput.write(self._ev_key, code, value)
            self._uinput.syn()
        except Exception as e:
            logger.debug("UInput write error: %s", e)

    def close(self) -> None:
        if self._uinput is not None:
            try:
                self._uinput.close()
            except Exception as e:
                logger.debug("UInput close error: %s", e)
            self._uinput = None
