"""SVG rendering of the visible diagram using drawsvg."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import drawsvg as draw

from .models import ElementKind

if TYPE_CHECKING:
    from .canvas import Canvas
    from .dsl import Document
    from .models import Element, Overlay, Viewbox
    from .overlays import Overlays


class Theme:
    """Color theme for diagrams."""

    def __init__(
        self,
        background: str = "#ffffff",
        stroke: str = "#22242a",
        text_color: str = "#22242a",
        label_band_fill: str = "#f3f4f6",
        connection_color: str = "#22242a",
        note_fill: str = "#fff7d6",
        note_stroke: str = "#d4a017",
        note_text: str = "#4a3b00",
        font_family: str = "Arial, sans-serif",
        font_size: float = 12,
    ):
        self.background = background
        self.stroke = stroke
        self.text_color = text_color
        self.label_band_fill = label_band_fill
        self.connection_color = connection_color
        self.note_fill = note_fill
        self.note_stroke = note_stroke
        self.note_text = note_text
        self.font_family = font_family
        self.font_size = font_size


DEFAULT_THEME = Theme()

DASHED_KINDS = frozenset({
    ElementKind.MESSAGE_FLOW,
    ElementKind.ASSOCIATION,
    ElementKind.DATA_INPUT_ASSOCIATION,
    ElementKind.DATA_OUTPUT_ASSOCIATION,
})


class GraphicsFactory:
    """Creates and redraws the SVG group that represents an element."""

    def __init__(self, theme: Theme | None = None, label_band: float = 30):
        self.theme = theme or DEFAULT_THEME
        self.label_band = label_band

    def create(self, kind: str, element: Element) -> draw.Group:
        gfx = draw.Group(id=element.id, data_element_type=element.type)
        self.update(kind, element, gfx)
        return gfx

    def update(self, kind: str, element: Element, gfx: draw.Group) -> None:
        """Redraw ``element`` into ``gfx`` as a "shape" or "connection"."""
        gfx.children.clear()
        if kind == "connection":
            self._draw_connection(gfx, element)
        elif kind == "shape":
            self._draw_shape(gfx, element)
        else:
            raise ValueError(f"Unknown graphics type '{kind}'")

    def _text(self, text: str, x: float, y: float, **kwargs) -> draw.Text:
        return draw.Text(
            text,
            self.theme.font_size,
            x, y,
            fill=self.theme.text_color,
            font_family=self.theme.font_family,
            text_anchor="middle",
            dominant_baseline="middle",
            **kwargs,
        )

    def _draw_shape(self, gfx: draw.Group, element: Element) -> None:
        kind = element.kind
        x, y, w, h = element.x, element.y, element.width, element.height
        fill = element.di.fill
        stroke = element.di.stroke

        if kind in (ElementKind.COLLABORATION, ElementKind.PROCESS):
            return

        if kind is ElementKind.LABEL:
            if element.name:
                gfx.append(self._text(element.name, x + w / 2, y + h / 2))
            return

        if kind in (ElementKind.PARTICIPANT, ElementKind.LANE):
            gfx.append(draw.Rectangle(x, y, w, h, fill=fill, stroke=stroke, stroke_width=1.5))
            band = self.label_band
            gfx.append(draw.Line(x + band, y, x + band, y + h, stroke=stroke, stroke_width=1.5))
            if element.name:
                # Vertical label inside the band
                cx, cy = x + band / 2, y + h / 2
                gfx.append(self._text(element.name, cx, cy, transform=f"rotate(-90 {cx} {cy})"))
            return

        if kind.is_event:
            r = min(w, h) / 2
            width = 4 if kind is ElementKind.END_EVENT else 1.5
            gfx.append(draw.Circle(x + w / 2, y + h / 2, r, fill=fill, stroke=stroke, stroke_width=width))
            if kind in (ElementKind.INTERMEDIATE_CATCH_EVENT, ElementKind.INTERMEDIATE_THROW_EVENT,
                        ElementKind.BOUNDARY_EVENT):
                gfx.append(draw.Circle(x + w / 2, y + h / 2, r - 3, fill="none", stroke=stroke, stroke_width=1))
            return

        if kind.is_gateway:
            gfx.append(draw.Lines(
                x + w / 2, y,
                x + w, y + h / 2,
                x + w / 2, y + h,
                x, y + h / 2,
                close=True,
                fill=fill,
                stroke=stroke,
                stroke_width=1.5,
            ))
            return

        if kind is ElementKind.TEXT_ANNOTATION:
            gfx.append(draw.Lines(x + 10, y, x, y, x, y + h, x + 10, y + h,
                                  close=False, fill="none", stroke=stroke, stroke_width=1))
            if element.name:
                gfx.append(self._text(element.name, x + w / 2, y + h / 2))
            return

        if kind is ElementKind.DATA_OBJECT_REFERENCE:
            fold = min(w, h) / 3
            gfx.append(draw.Lines(
                x, y,
                x + w - fold, y,
                x + w, y + fold,
                x + w, y + h,
                x, y + h,
                close=True,
                fill=fill,
                stroke=stroke,
                stroke_width=1.5,
            ))
            return

        if kind is ElementKind.DATA_STORE_REFERENCE:
            ry = h / 8
            gfx.append(draw.Rectangle(x, y + ry, w, h - 2 * ry, fill=fill, stroke="none"))
            gfx.append(draw.Ellipse(x + w / 2, y + h - ry, w / 2, ry, fill=fill, stroke=stroke, stroke_width=1.5))
            gfx.append(draw.Line(x, y + ry, x, y + h - ry, stroke=stroke, stroke_width=1.5))
            gfx.append(draw.Line(x + w, y + ry, x + w, y + h - ry, stroke=stroke, stroke_width=1.5))
            gfx.append(draw.Ellipse(x + w / 2, y + ry, w / 2, ry, fill=fill, stroke=stroke, stroke_width=1.5))
            return

        if kind is ElementKind.GROUP:
            gfx.append(draw.Rectangle(x, y, w, h, fill="none", stroke=stroke, stroke_width=1,
                                      stroke_dasharray="8,3,1,3", rx=10, ry=10))
            return

        # Tasks, sub processes, call activities
        width = 4 if kind is ElementKind.CALL_ACTIVITY else 1.5
        gfx.append(draw.Rectangle(x, y, w, h, fill=fill, stroke=stroke, stroke_width=width, rx=10, ry=10))
        if element.name:
            gfx.append(self._text(element.name, x + w / 2, y + h / 2))

    def _draw_connection(self, gfx: draw.Group, element: Element) -> None:
        points = element.waypoints or []
        if len(points) < 2:
            return

        color = element.di.stroke or self.theme.connection_color
        flat = [coord for point in points for coord in point]
        extra = {}
        if element.kind in DASHED_KINDS:
            extra["stroke_dasharray"] = "6,4" if element.kind is ElementKind.MESSAGE_FLOW else "2,3"
        gfx.append(draw.Lines(*flat, close=False, fill="none", stroke=color, stroke_width=1.5, **extra))

        if element.kind is ElementKind.MESSAGE_FLOW:
            sx, sy = points[0]
            gfx.append(draw.Circle(sx, sy, 3.5, fill=element.di.fill, stroke=color, stroke_width=1))
            self._draw_arrowhead(gfx, points[-2], points[-1], fill=element.di.fill, stroke=color)
        elif element.kind in (ElementKind.SEQUENCE_FLOW, ElementKind.DATA_INPUT_ASSOCIATION,
                              ElementKind.DATA_OUTPUT_ASSOCIATION):
            self._draw_arrowhead(gfx, points[-2], points[-1], fill=color, stroke=color)

    def _draw_arrowhead(
        self,
        gfx: draw.Group,
        start: tuple[float, float],
        end: tuple[float, float],
        fill: str,
        stroke: str,
        size: float = 10,
    ) -> None:
        """Draw an arrowhead at ``end`` pointing away from ``start``."""
        angle = math.atan2(end[1] - start[1], end[0] - start[0])
        spread = math.pi / 7
        x1 = end[0] - size * math.cos(angle - spread)
        y1 = end[1] - size * math.sin(angle - spread)
        x2 = end[0] - size * math.cos(angle + spread)
        y2 = end[1] - size * math.sin(angle + spread)
        gfx.append(draw.Lines(end[0], end[1], x1, y1, x2, y2, close=True,
                              fill=fill, stroke=stroke, stroke_width=1))


class DiagramRenderer:
    """Composes the visible element graphics and overlays into a drawing."""

    def __init__(self, theme: Theme | None = None, char_width: float = 7.0,
                 note_padding: float = 8, overlay_height: float = 24):
        self.theme = theme or DEFAULT_THEME
        self.char_width = char_width
        self.note_padding = note_padding
        self.overlay_height = overlay_height

    def render(self, canvas: Canvas, overlays: Overlays | None = None) -> draw.Drawing:
        """Render the canvas at its current viewbox to an SVG Drawing."""
        viewbox = canvas.viewbox()
        outer_w, outer_h = canvas.size

        d = draw.Drawing(outer_w, outer_h)
        d.append(draw.Rectangle(0, 0, outer_w, outer_h, fill=self.theme.background))

        viewport = draw.Group(id="viewport", transform=self._transform(viewbox))

        # Shapes first, connections on top so arrowheads stay visible
        registry = canvas.registry
        visible = [e for e in registry if e is not canvas.root]
        for element in visible:
            if not element.is_connection:
                viewport.append(registry.get_graphics(element))
        for element in visible:
            if element.is_connection:
                viewport.append(registry.get_graphics(element))

        if overlays is not None:
            for overlay in overlays:
                if not canvas.is_visible(overlay.element):
                    continue
                viewport.append(self._render_overlay(overlay))

        d.append(viewport)
        return d

    @staticmethod
    def _transform(viewbox: Viewbox) -> str:
        s = viewbox.scale
        return f"matrix({s} 0 0 {s} {-viewbox.x * s} {-viewbox.y * s})"

    def _render_overlay(self, overlay: Overlay) -> draw.Group:
        min_x, min_y, _, _ = overlay.element.bounds
        x = min_x + overlay.position.left
        y = min_y + overlay.position.top
        width = len(overlay.text) * self.char_width + self.note_padding
        height = self.overlay_height

        group = draw.Group(id=overlay.id, data_container_id=overlay.element.id)
        group.append(draw.Rectangle(x, y, width, height, fill=self.theme.note_fill,
                                    stroke=self.theme.note_stroke, stroke_width=1, rx=4, ry=4))
        group.append(draw.Text(
            overlay.text,
            self.theme.font_size,
            x + width / 2, y + height / 2,
            fill=self.theme.note_text,
            font_family=self.theme.font_family,
            text_anchor="middle",
            dominant_baseline="middle",
        ))
        return group


def render_to_svg(document: Document, filename: str | None = None) -> str:
    """Import a document and render the whole diagram to SVG.

    Args:
        document: The document to render
        filename: Optional filename to save to (without extension)

    Returns:
        SVG content as string
    """
    import asyncio

    from .viewer import Viewer

    viewer = Viewer()
    asyncio.run(viewer.import_document(document))

    if filename:
        viewer.save_svg(f"{filename}.svg")

    return viewer.to_svg()
