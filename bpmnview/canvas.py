"""The render surface: visible element graph and viewport."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import networkx as nx

from .config import ViewerConfig
from .exceptions import ElementNotFoundError, InconsistentGraphError
from .models import Viewbox
from .registry import ElementRegistry
from .renderer import GraphicsFactory

if TYPE_CHECKING:
    from .models import Element

logger = logging.getLogger(__name__)


class Canvas:
    """Holds the visible elements and the viewbox they are shown through.

    Shapes are nodes and connections are keyed edges of ``graph``, so a
    connection can only exist while both endpoints are on the canvas. The
    canvas refuses any mutation that would break that, rather than repair it.
    """

    def __init__(
        self,
        config: ViewerConfig | None = None,
        graphics_factory: GraphicsFactory | None = None,
    ):
        self.config = config or ViewerConfig()
        self.graphics_factory = graphics_factory or GraphicsFactory(
            label_band=self.config.pool_label_band,
        )
        self.registry = ElementRegistry()
        self.graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self.root: Element | None = None
        self._viewbox = self._default_viewbox()

    @property
    def size(self) -> tuple[float, float]:
        return self.config.width, self.config.height

    def _default_viewbox(self) -> Viewbox:
        return Viewbox(0, 0, self.config.width, self.config.height, 1.0)

    def set_root_element(self, element: Element) -> None:
        """Register the invisible root (Collaboration or Process)."""
        if self.root is not None:
            self.registry.remove(self.root)
        self.registry.add(element, self.graphics_factory.create("shape", element))
        self.root = element

    def is_visible(self, element: Element) -> bool:
        return element in self.registry

    def add_shape(self, element: Element) -> None:
        if element.is_connection:
            raise InconsistentGraphError(element.id, "connections must be added with add_connection")
        gfx = self.graphics_factory.create("shape", element)
        self.registry.add(element, gfx)
        self.graph.add_node(element.id)
        logger.debug("Added shape %s (%s)", element.id, element.type)

    def add_connection(self, connection: Element) -> None:
        if connection.id in self.registry:
            raise InconsistentGraphError(connection.id, "element is already registered")
        for end in (connection.source, connection.target):
            if end is None or not self.is_visible(end):
                end_id = end.id if end is not None else None
                raise InconsistentGraphError(
                    connection.id, f"endpoint '{end_id}' is not on the canvas"
                )
        gfx = self.graphics_factory.create("connection", connection)
        self.registry.add(connection, gfx)
        self.graph.add_edge(connection.source.id, connection.target.id, key=connection.id)
        logger.debug(
            "Added connection %s (%s -> %s)",
            connection.id, connection.source.id, connection.target.id,
        )

    def remove_shape(self, element: Element) -> None:
        if not self.is_visible(element):
            raise ElementNotFoundError(element.id, "canvas")
        attached = [
            key for _, _, key in self.graph.in_edges(element.id, keys=True)
        ] + [
            key for _, _, key in self.graph.out_edges(element.id, keys=True)
        ]
        if attached:
            raise InconsistentGraphError(
                element.id, f"connections {attached} are still on the canvas"
            )
        self.registry.remove(element)
        self.graph.remove_node(element.id)
        logger.debug("Removed shape %s", element.id)

    def remove_connection(self, connection: Element) -> None:
        if not self.is_visible(connection):
            raise ElementNotFoundError(connection.id, "canvas")
        self.registry.remove(connection)
        self.graph.remove_edge(connection.source.id, connection.target.id, key=connection.id)
        logger.debug("Removed connection %s", connection.id)

    def content_bounds(self) -> tuple[float, float, float, float] | None:
        """Bounding box (min_x, min_y, max_x, max_y) of everything visible."""
        boxes = [e.bounds for e in self.registry if e is not self.root]
        if not boxes:
            return None
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def viewbox(self) -> Viewbox:
        vb = self._viewbox
        return Viewbox(vb.x, vb.y, vb.width, vb.height, vb.scale, self.content_bounds())

    def zoom(self, new_scale: float | str = "fit-viewport", center: str | tuple[float, float] | None = None) -> float:
        """Set the zoom level and return the resulting scale.

        Args:
            new_scale: A scale factor, or "fit-viewport" to frame all
                visible elements (never zooming in beyond 1)
            center: "auto" to center the content when fitting, or a
                (x, y) diagram point to keep fixed when scaling

        Returns:
            The new scale
        """
        if new_scale == "fit-viewport":
            self._viewbox = self._fit_viewport(center)
        else:
            self._viewbox = self._scale_viewbox(float(new_scale), center)
        return self._viewbox.scale

    def _fit_viewport(self, center: str | tuple[float, float] | None) -> Viewbox:
        bounds = self.content_bounds()
        if bounds is None:
            return self._default_viewbox()

        pad = self.config.padding
        outer_w, outer_h = self.size
        inner_x, inner_y = bounds[0] - pad, bounds[1] - pad
        inner_w = bounds[2] - bounds[0] + 2 * pad
        inner_h = bounds[3] - bounds[1] + 2 * pad

        scale = min(1.0, outer_w / inner_w, outer_h / inner_h)
        width, height = outer_w / scale, outer_h / scale

        if center == "auto":
            x = inner_x + inner_w / 2 - width / 2
            y = inner_y + inner_h / 2 - height / 2
        else:
            x, y = inner_x, inner_y

        logger.debug("Fit viewport to %s at scale %.3f", bounds, scale)
        return Viewbox(x, y, width, height, scale)

    def _scale_viewbox(self, scale: float, center: str | tuple[float, float] | None) -> Viewbox:
        if scale <= 0:
            raise ValueError(f"Zoom scale must be positive, got {scale}")
        vb = self._viewbox
        if isinstance(center, tuple):
            cx, cy = center
        else:
            cx, cy = vb.x + vb.width / 2, vb.y + vb.height / 2
        outer_w, outer_h = self.size
        width, height = outer_w / scale, outer_h / scale
        return Viewbox(cx - width / 2, cy - height / 2, width, height, scale)
