"""Selecting elements by structural kind."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .models import ElementKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import Element


@dataclass
class ElementGroups:
    """Element selections computed once after a document is imported."""

    first_elements: list[Element] = field(default_factory=list)
    pools: list[Element] = field(default_factory=list)
    lanes: list[Element] = field(default_factory=list)
    annotations: list[Element] = field(default_factory=list)
    data_objects: list[Element] = field(default_factory=list)
    data_stores: list[Element] = field(default_factory=list)
    message_flows: list[Element] = field(default_factory=list)


def select_by_kind(elements: Iterable[Element], kind: ElementKind | str) -> list[Element]:
    """Select all elements of exactly the given kind, in registry order.

    Args:
        elements: Elements in registry order
        kind: "Participant", "bpmn:Participant" or ElementKind.PARTICIPANT

    Returns:
        Matching elements, empty if there are none
    """
    kind = ElementKind.parse(kind)
    return [element for element in elements if element.kind is kind]


def select_first_occurrences(elements: Iterable[Element]) -> list[Element]:
    """Select the first element of every BPMN kind present.

    Labels and the root Collaboration are skipped. The result keeps the
    order in which each kind was first seen, whether shape or connection.
    """
    seen: set[ElementKind] = set()
    result = []
    for element in elements:
        if not element.kind.is_bpmn or element.kind is ElementKind.COLLABORATION:
            continue
        if element.kind in seen:
            continue
        seen.add(element.kind)
        result.append(element)
    return result


def group_elements(elements: Iterable[Element]) -> ElementGroups:
    """Compute the selections offered to the user for a document."""
    elements = list(elements)
    return ElementGroups(
        first_elements=select_first_occurrences(elements),
        pools=select_by_kind(elements, ElementKind.PARTICIPANT),
        lanes=select_by_kind(elements, ElementKind.LANE),
        annotations=select_by_kind(elements, ElementKind.TEXT_ANNOTATION),
        data_objects=select_by_kind(elements, ElementKind.DATA_OBJECT_REFERENCE),
        data_stores=select_by_kind(elements, ElementKind.DATA_STORE_REFERENCE),
        message_flows=select_by_kind(elements, ElementKind.MESSAGE_FLOW),
    )
