"""Registry of the elements currently on the canvas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import ElementNotFoundError, InconsistentGraphError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    import drawsvg as draw

    from .models import Element


class ElementRegistry:
    """Maps element ids to the visible elements and their graphics.

    Only elements that are on the canvas are registered, so a lookup doubles
    as a visibility check. Iteration follows registration order.
    """

    def __init__(self) -> None:
        self._elements: dict[str, tuple[Element, draw.Group]] = {}

    def add(self, element: Element, gfx: draw.Group) -> None:
        if element.id in self._elements:
            raise InconsistentGraphError(element.id, "element is already registered")
        self._elements[element.id] = (element, gfx)

    def remove(self, element: Element | str) -> None:
        element_id = element if isinstance(element, str) else element.id
        if element_id not in self._elements:
            raise ElementNotFoundError(element_id, "canvas")
        del self._elements[element_id]

    def get(self, element_id: str) -> Element | None:
        """Return the visible element with this id, or None."""
        entry = self._elements.get(element_id)
        return entry[0] if entry else None

    def get_graphics(self, element: Element | str) -> draw.Group | None:
        element_id = element if isinstance(element, str) else element.id
        entry = self._elements.get(element_id)
        return entry[1] if entry else None

    def filter(self, predicate: Callable[[Element], bool]) -> list[Element]:
        return [element for element, _ in self._elements.values() if predicate(element)]

    def get_all(self) -> list[Element]:
        return [element for element, _ in self._elements.values()]

    def __contains__(self, element: object) -> bool:
        element_id = element if isinstance(element, str) else getattr(element, "id", None)
        entry = self._elements.get(element_id)
        if entry is None:
            return False
        return isinstance(element, str) or entry[0] is element

    def __iter__(self) -> Iterator[Element]:
        return iter(self.get_all())

    def __len__(self) -> int:
        return len(self._elements)
