"""State definitions: layout modes, key roles and the controller context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LayoutMode(Enum):
    ALPHAMERIC = "alphameric"
    PUNCTUATION = "punctuation"


class KeyRole(Enum):
    NONE = "none"
    ENTER = "enter"
    BACKSPACE = "backspace"
    SPACE = "space"
    MODE_SWITCH = "mode-switch"
    CAPS_LOCK = "caps-lock"
    DONE = "done"


@dataclass
class ControllerState:
    mode: LayoutMode = LayoutMode.ALPHAMERIC
    caps_locked: bool = False
    visible: bool = False

    # Host reservation captured by the most recent show()
    saved_reservation: Any = None
