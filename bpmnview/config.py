"""Configuration for the viewer."""

from __future__ import annotations

from dataclasses import dataclass

from .models import DEFAULT_FILL, HIGHLIGHT_FILL


@dataclass
class ViewerConfig:
    """Configuration for viewport, highlight and overlay calculations."""

    # Size of the container the diagram is shown in
    width: float = 1200
    height: float = 800
    padding: float = 40  # Space kept around the content on fit-viewport

    highlight_fill: str = HIGHLIGHT_FILL
    default_fill: str = DEFAULT_FILL

    # Overlay note metrics
    char_width: float = 7.0  # Average character width of the note font
    note_padding: float = 8  # Horizontal padding inside the note (both sides)
    overlay_height: float = 24
    overlay_gap: float = 4  # Distance between note and element edge
    note_class: str = "diagram-note p-1"

    # Vertical label bands drawn on the left side of pools and lanes
    pool_label_band: float = 30
    lane_label_band: float = 30
