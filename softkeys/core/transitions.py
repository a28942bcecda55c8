"""Mode transition table."""

from __future__ import annotations

from softkeys.core.states import LayoutMode


# The mode-switch key flips between the two layouts
MODE_TOGGLE: dict[LayoutMode, LayoutMode] = {
    LayoutMode.ALPHAMERIC: LayoutMode.PUNCTUATION,
    LayoutMode.PUNCTUATION: LayoutMode.ALPHAMERIC,
}


def toggled_mode(mode: LayoutMode) -> LayoutMode:
    try:
        return MODE_TOGGLE[mode]
    except KeyError:
        raise ValueError(f"No mode transition from {mode!r}")
