"""Hiding and showing elements together with their connections.

Removal takes an element's connections off the canvas before its shape.
Addition puts the shapes of a batch back first and then every connection
whose endpoints are both visible again. Either way a visible connection
always has both of its endpoints visible.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .dsl import as_element
from .models import ElementKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .canvas import Canvas
    from .models import Element

logger = logging.getLogger(__name__)


def _remove_label(canvas: Canvas, element: Element) -> None:
    if element.label is not None and canvas.is_visible(element.label):
        canvas.remove_shape(element.label)


def _add_label(canvas: Canvas, element: Element) -> None:
    if element.label is not None and canvas.registry.get(element.label.id) is None:
        canvas.add_shape(element.label)


def remove_connections(canvas: Canvas, connections: Iterable[Element]) -> None:
    """Remove connections (and their labels) that are still on the canvas."""
    for connection in list(connections):
        if not canvas.is_visible(connection):
            continue
        _remove_label(canvas, connection)
        if connection.kind is ElementKind.LABEL:
            canvas.remove_shape(connection)
        else:
            canvas.remove_connection(connection)


def add_connections(canvas: Canvas, connections: Iterable[Element]) -> None:
    """Add connections that are missing from the canvas.

    Connections whose source or target is hidden are left out; they come
    back with the endpoint. A ``label`` entry is added as a shape.
    """
    for connection in list(connections):
        if canvas.registry.get(connection.id) is not None:
            continue
        if connection.kind is ElementKind.LABEL:
            canvas.add_shape(connection)
            continue
        if not (canvas.is_visible(connection.source) and canvas.is_visible(connection.target)):
            logger.debug("Skipped connection %s, an endpoint is hidden", connection.id)
            continue
        canvas.add_connection(connection)
        _add_label(canvas, connection)


def remove_elements(canvas: Canvas, elements: Iterable[Element]) -> None:
    """Remove elements with their labels and incoming/outgoing connections.

    Every element must be on the canvas. Connections shared by two elements
    of the batch are removed once.
    """
    elements = [as_element(e) for e in elements]
    for element in elements:
        if element.is_connection:
            remove_connections(canvas, [element])
            continue
        _remove_label(canvas, element)
        remove_connections(canvas, element.incoming)
        remove_connections(canvas, element.outgoing)
        canvas.remove_shape(element)
    logger.debug("Removed %d elements", len(elements))


def add_elements(canvas: Canvas, elements: Iterable[Element]) -> None:
    """Add elements that are not on the canvas, restoring their connections.

    Elements already present are skipped. A connection of an added element
    comes back as soon as both of its endpoints are visible, so elements of
    the same batch may be given in any order.
    """
    added = []
    pending = []
    for element in map(as_element, elements):
        if element.is_connection:
            pending.append(element)
            continue
        if canvas.registry.get(element.id) is not None:
            continue
        canvas.add_shape(element)
        _add_label(canvas, element)
        added.append(element)

    for element in added:
        add_connections(canvas, element.incoming)
        add_connections(canvas, element.outgoing)
    add_connections(canvas, pending)
    logger.debug("Added %d elements", len(added))
