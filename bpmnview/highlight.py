"""Highlighting elements by changing their fill."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .dsl import as_element
from .models import DEFAULT_FILL, HIGHLIGHT_FILL

if TYPE_CHECKING:
    from .canvas import Canvas
    from .models import Element


def _set_fill(canvas: Canvas, element: Element, fill: str) -> None:
    element = as_element(element)
    element.di.set("fill", fill)
    gfx = canvas.registry.get_graphics(element)
    if gfx is None:
        # Hidden; drawn with the new fill once added again
        return
    kind = "connection" if element.is_connection else "shape"
    canvas.graphics_factory.update(kind, element, gfx)


def highlight_element(canvas: Canvas, element: Element, fill: str = HIGHLIGHT_FILL) -> None:
    """Fill the element (typically a pool or lane) with the highlight color."""
    _set_fill(canvas, element, fill)


def remove_highlight_element(canvas: Canvas, element: Element, fill: str = DEFAULT_FILL) -> None:
    """Reset the element's fill to white."""
    _set_fill(canvas, element, fill)
