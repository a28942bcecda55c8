"""IHostSurface interface — the rendering surface the keyboard lives in.

Elements and nodes are opaque objects owned by the host; the core only
passes them back to the surface.  Element objects must be hashable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

if TYPE_CHECKING:
    from softkeys.core.layout import KeyDescriptor

# Class names toggled on keyboard elements
CLASS_PRESSED = "pressed"
CLASS_DISABLED = "disabled"
CLASS_CAP = "cap"


class HostSurface(ABC):

    # -- keyboard element tree ---------------------------------------------

    @abstractmethod
    def create_keyboard(self) -> Any:
        """Create the (hidden) keyboard container docked at the bottom edge."""

    @abstractmethod
    def create_layout(self, keyboard: Any) -> Any: ...

    @abstractmethod
    def create_row(self, layout: Any) -> Any: ...

    @abstractmethod
    def create_key(self, row: Any, key: KeyDescriptor) -> Any:
        """Create a key element, appended to *row*; renders the icon if any."""

    @abstractmethod
    def remove_keyboard(self, keyboard: Any) -> None: ...

    @abstractmethod
    def set_key_glyphs(self, key_element: Any, text: Optional[str], alt_text: Optional[str]) -> None:
        """Show *text* as the key face and *alt_text* as its long-press hint."""

    @abstractmethod
    def set_displayed(self, element: Any, displayed: bool) -> None: ...

    @abstractmethod
    def set_class(self, element: Any, name: str, enabled: bool) -> None: ...

    @abstractmethod
    def bind_key(
        self,
        key_element: Any,
        on_press: Callable[[], None],
        on_release: Callable[[], None],
    ) -> None:
        """Route press-start / press-end input on *key_element* to the callbacks.

        The host consumes the input events so they never move focus.
        """

    @abstractmethod
    def keyboard_height(self, keyboard: Any) -> int: ...

    # -- focused document ----------------------------------------------------

    @abstractmethod
    def root(self) -> Any:
        """Top of the element tree that is scanned and observed."""

    @abstractmethod
    def active_element(self) -> Any:
        """Element holding input focus, or None."""

    @abstractmethod
    def blur_active_element(self) -> None: ...

    @abstractmethod
    def is_element(self, node: Any) -> bool: ...

    @abstractmethod
    def tag_name(self, element: Any) -> str:
        """Lower-case tag, e.g. ``"input"`` or ``"textarea"``."""

    @abstractmethod
    def input_type(self, element: Any) -> str:
        """Lower-case ``type`` of an input element ("" when not applicable)."""

    @abstractmethod
    def children(self, element: Any) -> Iterable[Any]: ...

    @abstractmethod
    def scroll_into_view(self, element: Any) -> None: ...

    @abstractmethod
    def reservation(self) -> Any:
        """Space currently reserved at the bottom of the surface."""

    @abstractmethod
    def set_reservation(self, value: Any) -> None: ...

    # -- listeners -----------------------------------------------------------

    @abstractmethod
    def add_focus_listeners(
        self,
        element: Any,
        on_focus: Callable[[], None],
        on_blur: Callable[[], None],
    ) -> Any:
        """Install focus/blur listeners; returns a token for removal."""

    @abstractmethod
    def remove_focus_listeners(self, element: Any, token: Any) -> None: ...

    @abstractmethod
    def observe_mutations(
        self,
        root: Any,
        on_added: Callable[[Any], None],
        on_removed: Callable[[Any], None],
    ) -> Any:
        """Report nodes added to / removed from the subtree under *root*.

        Returns a token for :meth:`disconnect_mutations`.
        """

    @abstractmethod
    def disconnect_mutations(self, token: Any) -> None: ...
