"""bpmnview - Show, hide, annotate and highlight parts of BPMN diagrams.

Example usage:
    import asyncio

    from bpmnview import Viewer, document, flow, pool, task

    with document() as doc:
        with pool("P1", name="Customer", width=600, height=250):
            order = task("T1", name="Order", x=100, y=80)
        with pool("P2", name="Kitchen", y=300, width=600, height=250):
            cook = task("T2", name="Cook", x=100, y=380)
        flow(order, cook, kind="MessageFlow")

    viewer = Viewer()
    asyncio.run(viewer.import_document(doc))
    viewer.add_overlays(viewer.select_all_first_elems())
    viewer.remove_elements(viewer.groups.pools[1:])
    viewer.reset_viewport()
"""

from .canvas import Canvas
from .classifier import (
    ElementGroups,
    group_elements,
    select_by_kind,
    select_first_occurrences,
)
from .config import ViewerConfig
from .dsl import (
    Document,
    ShapeContext,
    annotation,
    data_object,
    data_store,
    document,
    event,
    flow,
    gateway,
    lane,
    pool,
    shape,
    task,
)
from .exceptions import (
    BpmnViewError,
    DocumentError,
    ElementNotFoundError,
    InconsistentGraphError,
    NotReadyError,
)
from .highlight import highlight_element, remove_highlight_element
from .models import (
    DEFAULT_FILL,
    HIGHLIGHT_FILL,
    Element,
    ElementKind,
    Overlay,
    OverlayPosition,
    Style,
    Viewbox,
)
from .overlays import Overlays, add_overlay, add_overlays, clear_overlays, overlay_label
from .position import get_position
from .registry import ElementRegistry
from .renderer import (
    DEFAULT_THEME,
    DiagramRenderer,
    GraphicsFactory,
    Theme,
    render_to_svg,
)
from .viewer import Viewer, ViewerState
from .visibility import add_connections, add_elements, remove_connections, remove_elements

__version__ = "0.1.0"

__all__ = [
    # DSL functions
    "document",
    "shape",
    "pool",
    "lane",
    "task",
    "event",
    "gateway",
    "annotation",
    "data_object",
    "data_store",
    "flow",
    "Document",
    "ShapeContext",
    # Models
    "Element",
    "ElementKind",
    "Overlay",
    "OverlayPosition",
    "Style",
    "Viewbox",
    "HIGHLIGHT_FILL",
    "DEFAULT_FILL",
    # Viewer
    "Viewer",
    "ViewerState",
    "ViewerConfig",
    "Canvas",
    "ElementRegistry",
    # Operations
    "select_by_kind",
    "select_first_occurrences",
    "group_elements",
    "ElementGroups",
    "remove_elements",
    "add_elements",
    "remove_connections",
    "add_connections",
    "Overlays",
    "add_overlay",
    "add_overlays",
    "clear_overlays",
    "overlay_label",
    "get_position",
    "highlight_element",
    "remove_highlight_element",
    # Rendering
    "render_to_svg",
    "DiagramRenderer",
    "GraphicsFactory",
    "Theme",
    "DEFAULT_THEME",
    # Errors
    "BpmnViewError",
    "DocumentError",
    "ElementNotFoundError",
    "InconsistentGraphError",
    "NotReadyError",
    # Version
    "__version__",
]
