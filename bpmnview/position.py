"""Overlay positioning relative to the element it annotates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import ViewerConfig
from .models import ElementKind, OverlayPosition

if TYPE_CHECKING:
    from .models import Element


def estimate_text_width(text: str, char_width: float) -> float:
    """Estimate width of text based on character count."""
    return len(text) * char_width


def get_position(element: Element, content: str, config: ViewerConfig | None = None) -> OverlayPosition:
    """Compute where a note with ``content`` goes on ``element``.

    Offsets are relative to the top-left corner of the element bounds:

    * pools: above the top edge, right of the vertical name band
    * lanes: inside the top-left corner, right of the name band
    * connections: centered below the middle of the path
    * other shapes: centered above the shape, clear of its own label
    """
    if config is None:
        config = ViewerConfig()

    note_width = estimate_text_width(content, config.char_width) + config.note_padding
    note_height = config.overlay_height
    gap = config.overlay_gap

    min_x, min_y, max_x, max_y = element.bounds
    width, height = max_x - min_x, max_y - min_y

    if element.kind is ElementKind.PARTICIPANT:
        return OverlayPosition(top=-(note_height + gap), left=config.pool_label_band)

    if element.kind is ElementKind.LANE:
        return OverlayPosition(top=gap, left=config.lane_label_band + gap)

    if element.is_connection:
        return OverlayPosition(top=height / 2 + gap, left=width / 2 - note_width / 2)

    return OverlayPosition(top=-(note_height + gap), left=width / 2 - note_width / 2)
