"""Viewer: imports a document and exposes the diagram operations."""

from __future__ import annotations

import asyncio
import functools
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from . import highlight, overlays, visibility
from .canvas import Canvas
from .classifier import ElementGroups, group_elements, select_by_kind, select_first_occurrences
from .config import ViewerConfig
from .exceptions import ElementNotFoundError, NotReadyError
from .overlays import Overlays
from .renderer import DiagramRenderer, GraphicsFactory, Theme

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .dsl import Document
    from .models import Element, ElementKind

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="Callable[..., Any]")


class ViewerState(Enum):
    """Lifecycle of a viewer."""

    LOADING = "loading"
    READY = "ready"


def _requires_ready(method: F) -> F:
    @functools.wraps(method)
    def wrapper(self: Viewer, *args: Any, **kwargs: Any) -> Any:
        if self.state is not ViewerState.READY:
            raise NotReadyError(method.__name__)
        return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class Viewer:
    """Shows one document at a time and lets callers hide, show, annotate
    and highlight its elements.

    Usage:
        viewer = Viewer()
        await viewer.import_document(doc)
        viewer.remove_elements(viewer.groups.pools)
        viewer.reset_viewport()

    Every operation other than ``import_document`` raises NotReadyError
    until an import has completed.
    """

    def __init__(self, config: ViewerConfig | None = None, theme: Theme | None = None):
        self.config = config or ViewerConfig()
        self.theme = theme
        self.state = ViewerState.LOADING
        self.document: Document | None = None
        self.groups = ElementGroups()
        self.canvas = self._create_canvas()
        self.overlays = Overlays(self.canvas)

    def _create_canvas(self) -> Canvas:
        factory = GraphicsFactory(theme=self.theme, label_band=self.config.pool_label_band)
        return Canvas(self.config, graphics_factory=factory)

    @property
    def ready(self) -> bool:
        return self.state is ViewerState.READY

    async def import_document(self, document: Document) -> None:
        """Put every element of ``document`` on a fresh canvas.

        The viewer stays LOADING while the import runs and becomes READY
        once groupings are computed and the viewport is fitted.
        """
        self.state = ViewerState.LOADING
        document.validate()

        canvas = self._create_canvas()
        canvas.set_root_element(document.root)
        for element in document.shapes:
            canvas.add_shape(element)

        # Let the event loop run between drawing shapes and connections
        await asyncio.sleep(0)

        for connection in document.connections:
            canvas.add_connection(connection)

        self.document = document
        self.canvas = canvas
        self.overlays = Overlays(canvas)
        self.groups = group_elements(document.elements)
        canvas.zoom("fit-viewport", "auto")
        self.state = ViewerState.READY
        logger.info(
            "Imported document with %d shapes and %d connections",
            len(document.shapes), len(document.connections),
        )

    @_requires_ready
    def get(self, element_id: str) -> Element:
        """Look up an element of the document, visible or not."""
        element = self.document.get(element_id)
        if element is None:
            raise ElementNotFoundError(element_id)
        return element

    @_requires_ready
    def visible_elements(self) -> list[Element]:
        return [e for e in self.canvas.registry if e is not self.canvas.root]

    @_requires_ready
    def select_elements(self, kind: ElementKind | str) -> list[Element]:
        """All elements of the given kind, visible or not, in document order."""
        return select_by_kind(self.document.elements, kind)

    @_requires_ready
    def select_all_first_elems(self) -> list[Element]:
        """One element per kind, in the order kinds first appear."""
        return select_first_occurrences(self.document.elements)

    @_requires_ready
    def remove_elements(self, elements: Iterable[Element]) -> None:
        visibility.remove_elements(self.canvas, elements)
        self.overlays.remove_hidden()

    @_requires_ready
    def add_elements(self, elements: Iterable[Element]) -> None:
        visibility.add_elements(self.canvas, elements)

    @_requires_ready
    def remove_connections(self, connections: Iterable[Element]) -> None:
        visibility.remove_connections(self.canvas, connections)
        self.overlays.remove_hidden()

    @_requires_ready
    def add_connections(self, connections: Iterable[Element]) -> None:
        visibility.add_connections(self.canvas, connections)

    @_requires_ready
    def add_overlays(self, elements: Iterable[Element]) -> None:
        overlays.add_overlays(self.overlays, elements, self.config)

    @_requires_ready
    def remove_overlays(self) -> None:
        overlays.clear_overlays(self.overlays)

    @_requires_ready
    def highlight_element(self, element: Element) -> None:
        highlight.highlight_element(self.canvas, element, self.config.highlight_fill)

    @_requires_ready
    def remove_highlight_element(self, element: Element) -> None:
        highlight.remove_highlight_element(self.canvas, element, self.config.default_fill)

    @_requires_ready
    def reset_viewport(self) -> None:
        """Center the visible elements and zoom so they fit the container."""
        self.canvas.zoom("fit-viewport", "auto")

    @_requires_ready
    def to_svg(self) -> str:
        renderer = DiagramRenderer(
            theme=self.theme,
            char_width=self.config.char_width,
            note_padding=self.config.note_padding,
            overlay_height=self.config.overlay_height,
        )
        return renderer.render(self.canvas, self.overlays).as_svg()

    @_requires_ready
    def save_svg(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_svg())
