"""Layout model — static key rows for each layout mode.

A layout payload is a mapping ``{"alphameric": [row, ...], "punctuation":
[row, ...]}`` where each row is a list of key objects::

    {"text": "s", "capText": "S", "altText": "ß"}
    {"role": "backspace", "icon": "backspace"}
    {"role": "caps-lock", "icon": "capslock", "disabled": true}

Glyph fields are ``text``, ``capText``, ``altText`` and ``altCapText``
(snake_case spellings are accepted too).  ``role`` is one of the
:class:`~softkeys.core.states.KeyRole` values and defaults to ``"none"``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence, Tuple

from softkeys.config import parse_json_text
from softkeys.core.states import KeyRole, LayoutMode

logger = logging.getLogger(__name__)


class LayoutError(ValueError):
    """Raised for a malformed layout payload."""


@dataclass(frozen=True)
class KeyDescriptor:
    text: Optional[str] = None
    cap_text: Optional[str] = None
    alt_text: Optional[str] = None
    alt_cap_text: Optional[str] = None
    icon: Optional[str] = None
    role: KeyRole = KeyRole.NONE
    disabled: bool = False

    @property
    def label(self) -> str:
        """Short human-readable name, used in logs and events."""
        return self.text or self.icon or self.role.value


KeyRow = Tuple[KeyDescriptor, ...]


def display_glyph(key: KeyDescriptor, caps_locked: bool) -> Optional[str]:
    """Glyph shown (and inserted on tap) for the current shift state."""
    if caps_locked and key.cap_text:
        return key.cap_text
    return key.text


def alt_glyph(key: KeyDescriptor, caps_locked: bool) -> Optional[str]:
    """Glyph inserted by a long press, or None when the key has none."""
    if caps_locked and key.alt_cap_text:
        return key.alt_cap_text
    return key.alt_text


# payload field -> KeyDescriptor attribute
_GLYPH_FIELDS = {
    'text': 'text',
    'capText': 'cap_text',
    'cap_text': 'cap_text',
    'altText': 'alt_text',
    'alt_text': 'alt_text',
    'altCapText': 'alt_cap_text',
    'alt_cap_text': 'alt_cap_text',
    'icon': 'icon',
}
_KNOWN_FIELDS = set(_GLYPH_FIELDS) | {'role', 'disabled', 'isDisabled'}


def key_from_dict(raw: Mapping, where: str = "key") -> KeyDescriptor:
    """Build one :class:`KeyDescriptor` from its payload mapping."""
    if not isinstance(raw, Mapping):
        raise LayoutError(f"{where}: expected an object, got {type(raw).__name__}")

    unknown = set(raw) - _KNOWN_FIELDS
    if unknown:
        raise LayoutError(f"{where}: unknown field(s) {', '.join(sorted(unknown))}")

    kwargs: dict = {}
    for field_name, attr in _GLYPH_FIELDS.items():
        if field_name not in raw or raw[field_name] is None:
            continue
        value = raw[field_name]
        if not isinstance(value, str):
            raise LayoutError(f"{where}: {field_name!r} must be a string")
        kwargs[attr] = value

    role_raw = raw.get('role', KeyRole.NONE.value)
    try:
        kwargs['role'] = KeyRole(role_raw)
    except ValueError:
        raise LayoutError(f"{where}: unknown role {role_raw!r}")

    disabled = raw.get('disabled', raw.get('isDisabled', False))
    if not isinstance(disabled, bool):
        raise LayoutError(f"{where}: 'disabled' must be boolean")
    kwargs['disabled'] = disabled

    return KeyDescriptor(**kwargs)


class Layout:
    """Immutable mapping from :class:`LayoutMode` to ordered key rows."""

    def __init__(self, rows: Mapping[LayoutMode, Sequence[Sequence[KeyDescriptor]]]):
        missing = [m.value for m in LayoutMode if m not in rows]
        if missing:
            raise LayoutError(f"Layout is missing mode(s): {', '.join(missing)}")
        self._rows: dict[LayoutMode, Tuple[KeyRow, ...]] = {
            mode: tuple(tuple(row) for row in rows[mode]) for mode in LayoutMode
        }

    def __call__(self, mode: LayoutMode) -> Tuple[KeyRow, ...]:
        return self.rows(mode)

    def rows(self, mode: LayoutMode) -> Tuple[KeyRow, ...]:
        return self._rows[mode]

    def keys(self, mode: LayoutMode) -> Iterator[KeyDescriptor]:
        for row in self._rows[mode]:
            yield from row

    def __eq__(self, other) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        sizes = {m.value: len(r) for m, r in self._rows.items()}
        return f"Layout({sizes})"

    @classmethod
    def from_dict(cls, payload: Mapping) -> "Layout":
        """Build a layout from the JSON-style payload described in the module docstring."""
        if not isinstance(payload, Mapping):
            raise LayoutError("Layout payload must be an object")

        unknown = set(payload) - {m.value for m in LayoutMode}
        if unknown:
            raise LayoutError(f"Unknown layout mode(s): {', '.join(sorted(unknown))}")

        rows: dict[LayoutMode, list] = {}
        for mode in LayoutMode:
            raw_rows = payload.get(mode.value)
            if raw_rows is None:
                continue
            if not isinstance(raw_rows, Sequence) or isinstance(raw_rows, str):
                raise LayoutError(f"{mode.value}: rows must be a list")
            mode_rows = []
            for r, raw_row in enumerate(raw_rows):
                if not isinstance(raw_row, Sequence) or isinstance(raw_row, str):
                    raise LayoutError(f"{mode.value}[{r}]: row must be a list")
                mode_rows.append([
                    key_from_dict(raw_key, where=f"{mode.value}[{r}][{k}]")
                    for k, raw_key in enumerate(raw_row)
                ])
            rows[mode] = mode_rows
        return cls(rows)


def load_layout(path: str) -> Layout:
    """Read a layout payload from a JSON file (comments and trailing commas allowed).

    Raises ``LayoutError`` for unreadable or malformed files.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        raise LayoutError(f"Cannot read layout {path}: {exc}") from exc

    try:
        payload = parse_json_text(raw)
    except json.JSONDecodeError as exc:
        raise LayoutError(f"JSON parse error in {path}: {exc}") from exc

    layout = Layout.from_dict(payload)
    logger.debug("Loaded layout %r from %s", layout, path)
    return layout
