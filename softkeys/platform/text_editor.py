"""ITextEditor interface — the host's native text editing primitive."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextEditor(ABC):
    """Edits whatever element currently holds input focus."""

    @abstractmethod
    def insert_text(self, text: str) -> None:
        """Insert *text* at the caret."""

    @abstractmethod
    def delete_backward(self) -> None:
        """Delete one unit before the caret."""
