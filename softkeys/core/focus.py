"""FocusTracker — shows the keyboard while an editable element has focus."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Optional

import softkeys.log  # registers TRACE level and logger.trace()
from softkeys.core.controller import KeyboardController
from softkeys.core.event_bus import EventBus
from softkeys.core.events import EventType
from softkeys.platform.host import HostSurface

logger = logging.getLogger(__name__)

EDITABLE_INPUT_TYPES = frozenset({
    "date",
    "datetime-local",
    "email",
    "month",
    "number",
    "password",
    "search",
    "tel",
    "text",
    "time",
    "url",
    "week",
})


def is_editable(surface: HostSurface, element: Any) -> bool:
    """Editability predicate: text areas, and inputs of a text-like type."""
    tag = surface.tag_name(element)
    if tag == "textarea":
        return True
    if tag == "input":
        return surface.input_type(element) in EDITABLE_INPUT_TYPES
    return False


class FocusTracker:
    """Keeps a registry of tracked elements and their listener tokens.

    ``attach`` consults the registry, so an element is never wired twice.
    With ``detach_removed`` (the default) nodes reported as removed from
    the tree are detached together with their tracked descendants.
    """

    def __init__(
        self,
        controller: KeyboardController,
        surface: Optional[HostSurface] = None,
        event_bus: Optional[EventBus] = None,
        detach_removed: bool = True,
    ):
        self.controller = controller
        self.surface = surface or controller.surface
        self.bus = event_bus if event_bus is not None else controller.bus
        self.detach_removed = detach_removed
        self._registry: dict[Any, Any] = {}
        self._observer_token: Any = None

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def is_tracked(self, element: Any) -> bool:
        return element in self._registry

    @property
    def tracked(self) -> list:
        return list(self._registry)

    def attach(self, element: Any) -> bool:
        """Wire focus → show() and blur → hide(). Returns False if already tracked."""
        if element in self._registry:
            logger.trace("Already tracked: %r", element)  # type: ignore[attr-defined]
            return False
        token = self.surface.add_focus_listeners(element, self._on_focus, self._on_blur)
        self._registry[element] = token
        logger.debug("Attached %s element %r", self.surface.tag_name(element), element)
        self._publish(EventType.ELEMENT_ATTACHED, element)
        return True

    def detach(self, element: Any) -> bool:
        """Remove the listeners installed by :meth:`attach`."""
        if element not in self._registry:
            return False
        token = self._registry.pop(element)
        self.surface.remove_focus_listeners(element, token)
        logger.debug("Detached %r", element)
        self._publish(EventType.ELEMENT_DETACHED, element)
        return True

    # ------------------------------------------------------------------
    # Tree walking
    # ------------------------------------------------------------------

    def iter_elements(self, node: Any) -> Iterator[Any]:
        """Yield *node* and every element below it, depth first."""
        if not self.surface.is_element(node):
            return
        yield node
        for child in self.surface.children(node):
            yield from self.iter_elements(child)

    def _for_each_editable(self, node: Any, callback: Callable[[Any], Any]) -> int:
        count = 0
        for element in self.iter_elements(node):
            if is_editable(self.surface, element):
                if callback(element):
                    count += 1
        return count

    def scan(self, root: Any = None) -> int:
        """Attach to every editable element already in the tree. Returns the number attached."""
        if root is None:
            root = self.surface.root()
        count = self._for_each_editable(root, self.attach)
        logger.debug("Initial scan attached %d element(s)", count)
        return count

    def observe_mutations(self, root: Any = None) -> None:
        """Track editable elements added under *root* from now on."""
        if root is None:
            root = self.surface.root()
        if self._observer_token is not None:
            self.surface.disconnect_mutations(self._observer_token)
        self._observer_token = self.surface.observe_mutations(
            root, self.on_node_added, self.on_node_removed,
        )

    def on_node_added(self, node: Any) -> None:
        self._for_each_editable(node, self.attach)

    def on_node_removed(self, node: Any) -> None:
        if not self.detach_removed:
            return
        # The subtree may already be partially torn down: match the registry
        # against what is still reachable, then the node itself.
        for element in list(self.iter_elements(node)):
            self.detach(element)
        self.detach(node)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, root: Any = None) -> None:
        """scan + observe_mutations + show the keyboard if focus is already on an editable element."""
        self.scan(root)
        self.observe_mutations(root)
        self.show_if_needed()

    def show_if_needed(self) -> bool:
        element = self.surface.active_element()
        if element is not None and is_editable(self.surface, element):
            self.controller.show()
            return True
        return False

    def close(self) -> None:
        """Stop observing and detach every tracked element."""
        if self._observer_token is not None:
            self.surface.disconnect_mutations(self._observer_token)
            self._observer_token = None
        for element in list(self._registry):
            self.detach(element)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def _on_focus(self) -> None:
        self.controller.show()

    def _on_blur(self) -> None:
        self.controller.hide()

    def _publish(self, event_type: EventType, element: Any) -> None:
        if self.bus is not None:
            self.bus.emit(event_type, element)
