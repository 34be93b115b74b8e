"""Notes attached to diagram elements."""

from __future__ import annotations

import html
import itertools
import logging
from typing import TYPE_CHECKING

from .config import ViewerConfig
from .dsl import as_element
from .exceptions import ElementNotFoundError
from .models import ElementKind, Overlay
from .position import get_position

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .canvas import Canvas
    from .models import Element, OverlayPosition

logger = logging.getLogger(__name__)


class Overlays:
    """Keeps the overlays attached to visible elements of a canvas."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        self._overlays: dict[str, Overlay] = {}
        self._ids = itertools.count(1)

    def add(self, element: Element, position: OverlayPosition, html: str, text: str = "") -> str:
        """Attach an overlay to a visible element and return its id."""
        element = as_element(element)
        if not self.canvas.is_visible(element):
            raise ElementNotFoundError(element.id, "canvas")
        overlay_id = f"ov-{next(self._ids)}"
        self._overlays[overlay_id] = Overlay(
            id=overlay_id,
            element=element,
            position=position,
            html=html,
            text=text,
        )
        return overlay_id

    def get(self, id: str | None = None, element: Element | None = None) -> list[Overlay]:
        """Return overlays filtered by overlay id and/or element."""
        if element is not None:
            element = as_element(element)
        return [
            overlay for overlay in self._overlays.values()
            if (id is None or overlay.id == id)
            and (element is None or overlay.element is element)
        ]

    def remove_hidden(self) -> None:
        """Drop the overlays of elements that are no longer on the canvas."""
        for overlay in list(self._overlays.values()):
            if not self.canvas.is_visible(overlay.element):
                logger.debug("Dropped overlay %s of hidden %s", overlay.id, overlay.element.id)
                del self._overlays[overlay.id]

    def clear(self) -> None:
        self._overlays.clear()

    def __iter__(self) -> Iterator[Overlay]:
        return iter(list(self._overlays.values()))

    def __len__(self) -> int:
        return len(self._overlays)


def overlay_label(element: Element) -> str:
    """Name shown for an element's kind; participants are shown as pools."""
    if element.kind is ElementKind.PARTICIPANT:
        return "Pool"
    return element.kind.local_name


def add_overlay(overlays: Overlays, element: Element, content: str, config: ViewerConfig | None = None) -> str:
    """Add a note with ``content`` to ``element``, positioned by its kind.

    Returns:
        The overlay id
    """
    if config is None:
        config = ViewerConfig()
    position = get_position(element, content, config)
    markup = f'<div class="{config.note_class}">{html.escape(content)}</div>'
    return overlays.add(element, position=position, html=markup, text=content)


def add_overlays(overlays: Overlays, elements: Iterable[Element], config: ViewerConfig | None = None) -> None:
    """Add a note naming its kind to every element.

    An element that cannot be annotated is logged and skipped.
    """
    for element in map(as_element, elements):
        try:
            add_overlay(overlays, element, overlay_label(element), config)
        except Exception:
            logger.warning("Could not add overlay to %s", element.id, exc_info=True)


def clear_overlays(overlays: Overlays) -> None:
    """Remove all overlays."""
    overlays.clear()
