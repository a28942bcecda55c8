"""char → keycode mapping helpers (US QWERTY, evdev keycodes)."""

from __future__ import annotations

from typing import Optional, Tuple

# evdev keycodes (avoid hard dependency on evdev at import time)
KEY_BACKSPACE = 14
KEY_ENTER = 28
KEY_LEFTSHIFT = 42

# Basic QWERTY keycode → char map
KEYCODE_TO_CHAR_EN: dict[int, str] = {
    2: "1", 3: "2", 4: "3", 5: "4", 6: "5", 7: "6", 8: "7", 9: "8", 10: "9", 11: "0",
    12: "-", 13: "=",
    16: "q", 17: "w", 18: "e", 19: "r", 20: "t", 21: "y", 22: "u", 23: "i", 24: "o",
    25: "p", 26: "[", 27: "]",
    30: "a", 31: "s", 32: "d", 33: "f", 34: "g", 35: "h", 36: "j", 37: "k", 38: "l",
    39: ";", 40: "'", 41: "`", 43: "\\",
    44: "z", 45: "x", 46: "c", 47: "v", 48: "b", 49: "n", 50: "m", 51: ",", 52: ".", 53: "/",
    57: " ",
}

# Same keys with Shift held (letters are handled by upper())
KEYCODE_TO_SHIFTED_EN: dict[int, str] = {
    2: "!", 3: "@", 4: "#", 5: "$", 6: "%", 7: "^", 8: "&", 9: "*", 10: "(", 11: ")",
    12: "_", 13: "+", 26: "{", 27: "}", 39: ":", 40: '"', 41: "~", 43: "|",
    51: "<", 52: ">", 53: "?",
}


def _build_char_map() -> dict[str, Tuple[int, bool]]:
    out: dict[str, Tuple[int, bool]] = {"\n": (KEY_ENTER, False)}
    for code, ch in KEYCODE_TO_CHAR_EN.items():
        out[ch] = (code, False)
        if ch.isalpha():
            out[ch.upper()] = (code, True)
    for code, ch in KEYCODE_TO_SHIFTED_EN.items():
        out[ch] = (code, True)
    return out


CHAR_TO_KEY_EN: dict[str, Tuple[int, bool]] = _build_char_map()


def char_to_keycode(ch: str) -> Optional[Tuple[int, bool]]:
    """Return ``(keycode, needs_shift)`` for *ch*, or None if it has no key."""
    return CHAR_TO_KEY_EN.get(ch)
