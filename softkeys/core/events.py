"""Typed event definitions (dataclasses)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    # Key lifecycle
    KEY_PRESS = auto()
    KEY_RELEASE = auto()
    KEY_LONG_PRESS = auto()
    # Editing
    TEXT_INSERTED = auto()
    TEXT_DELETED = auto()
    # Controller state
    MODE_CHANGED = auto()
    CAPS_CHANGED = auto()
    KEYBOARD_SHOWN = auto()
    KEYBOARD_HIDDEN = auto()
    # Focus registry
    ELEMENT_ATTACHED = auto()
    ELEMENT_DETACHED = auto()


@dataclass
class Event:
    type: EventType
    data: Any
    timestamp: float


@dataclass
class KeyEventData:
    label: str
    role: str
    mode: str
    caps_locked: bool = False


@dataclass
class TextEventData:
    text: str = ""
    ok: bool = True     # False when the host primitive raised
