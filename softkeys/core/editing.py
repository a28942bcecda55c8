"""EditingBridge — the only caller of the host text editing primitive."""

from __future__ import annotations

import logging
from typing import Optional

import softkeys.log  # registers TRACE level and logger.trace()
from softkeys.core.event_bus import EventBus
from softkeys.core.events import EventType, TextEventData
from softkeys.platform.text_editor import TextEditor

logger = logging.getLogger(__name__)


class EditingBridge:
    """Fire-and-forget text operations on whatever holds focus.

    Does not check that an editable element is focused.  Host failures
    are logged and dropped so they never reach keyboard state.
    """

    def __init__(self, editor: TextEditor, event_bus: Optional[EventBus] = None):
        self.editor = editor
        self.bus = event_bus

    def insert_text(self, text: str) -> None:
        logger.trace("insert %r", text)  # type: ignore[attr-defined]
        try:
            self.editor.insert_text(text)
            ok = True
        except Exception as e:
            logger.debug("insert_text(%r) failed: %s", text, e)
            ok = False
        if self.bus is not None:
            self.bus.emit(EventType.TEXT_INSERTED, TextEventData(text=text, ok=ok))

    def delete_one_unit(self) -> None:
        logger.trace("delete one unit")  # type: ignore[attr-defined]
        try:
            self.editor.delete_backward()
            ok = True
        except Exception as e:
            logger.debug("delete_backward() failed: %s", e)
            ok = False
        if self.bus is not None:
            self.bus.emit(EventType.TEXT_DELETED, TextEventData(ok=ok))
