"""Python DSL for building diagram documents."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from .exceptions import DocumentError
from .models import Element, ElementKind

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterator

# Default (width, height) per kind, used when a shape is created without a size
DEFAULT_SIZES: dict[ElementKind, tuple[float, float]] = {
    ElementKind.PARTICIPANT: (600, 250),
    ElementKind.LANE: (570, 125),
    ElementKind.TEXT_ANNOTATION: (100, 30),
    ElementKind.DATA_OBJECT_REFERENCE: (36, 50),
    ElementKind.DATA_STORE_REFERENCE: (50, 50),
    ElementKind.GROUP: (300, 300),
    ElementKind.SUB_PROCESS: (350, 200),
}
ACTIVITY_SIZE = (100, 80)
EVENT_SIZE = (36, 36)
GATEWAY_SIZE = (50, 50)

# External label box (events, gateways, data and connections carry one)
LABEL_WIDTH = 90
LABEL_HEIGHT = 20

# Context stacks for nested shape creation
_document_stack: list[Document] = []
_parent_stack: list[Element] = []


class Document:
    """An in-memory diagram: every element in import order.

    The first element is the root (a Collaboration by default). Shapes,
    their labels and connections follow in the order they were created.
    """

    def __init__(self, root: ElementKind | str = ElementKind.COLLABORATION, root_id: str | None = None):
        kind = ElementKind.parse(root)
        self.elements: list[Element] = []
        self._by_id: dict[str, Element] = {}
        self.root = self.add(Element(id=root_id or f"{kind.local_name}_1", kind=kind))

    def add(self, element: Element) -> Element:
        """Append an element, rejecting duplicate ids."""
        if element.id in self._by_id:
            raise DocumentError(f"Duplicate element id '{element.id}'")
        element._document = self
        self.elements.append(element)
        self._by_id[element.id] = element
        return element

    def get(self, element_id: str) -> Element | None:
        return self._by_id.get(element_id)

    def filter(self, predicate: Callable[[Element], bool]) -> list[Element]:
        return [e for e in self.elements if predicate(e)]

    @property
    def shapes(self) -> list[Element]:
        return [
            e for e in self.elements
            if e is not self.root and not e.is_connection
        ]

    @property
    def connections(self) -> list[Element]:
        return [e for e in self.elements if e.is_connection]

    def validate(self) -> None:
        """Check that every reference points at an element of this document."""
        for element in self.elements:
            refs = [element.parent, element.label, element.label_target]
            if element.is_connection:
                if element.source is None or element.target is None:
                    raise DocumentError(
                        f"Connection '{element.id}' needs a source and a target"
                    )
                refs += [element.source, element.target]
            refs += element.incoming + element.outgoing
            for ref in refs:
                if ref is not None and self._by_id.get(ref.id) is not ref:
                    raise DocumentError(
                        f"Element '{element.id}' references '{ref.id}', "
                        f"which is not part of the document"
                    )

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __contains__(self, element: object) -> bool:
        return isinstance(element, Element) and self._by_id.get(element.id) is element


def _current_document() -> Document | None:
    """Get the current document context."""
    return _document_stack[-1] if _document_stack else None


def _current_parent() -> Element | None:
    """Get the current parent shape context."""
    return _parent_stack[-1] if _parent_stack else None


def as_element(value: Element | ShapeContext) -> Element:
    """Return the Element behind a shape handle."""
    return value.element if isinstance(value, ShapeContext) else value


def _has_external_label(kind: ElementKind) -> bool:
    return (
        kind.is_event
        or kind.is_gateway
        or kind.is_connection
        or kind in (ElementKind.DATA_OBJECT_REFERENCE, ElementKind.DATA_STORE_REFERENCE)
    )


def _default_size(kind: ElementKind) -> tuple[float, float]:
    if kind in DEFAULT_SIZES:
        return DEFAULT_SIZES[kind]
    if kind.is_event:
        return EVENT_SIZE
    if kind.is_gateway:
        return GATEWAY_SIZE
    return ACTIVITY_SIZE


def _add_label(doc: Document, owner: Element) -> Element:
    """Create the external label element for a named shape or connection."""
    cx, cy = owner.center
    if owner.is_connection:
        x, y = cx - LABEL_WIDTH / 2, cy - LABEL_HEIGHT - 5
    else:
        x, y = cx - LABEL_WIDTH / 2, owner.y + owner.height + 5
    label = Element(
        id=f"{owner.id}_label",
        kind=ElementKind.LABEL,
        name=owner.name,
        x=x,
        y=y,
        width=LABEL_WIDTH,
        height=LABEL_HEIGHT,
        parent=owner.parent,
        label_target=owner,
    )
    doc.add(label)
    owner.label = label
    return label


@contextmanager
def document(
        root: ElementKind | str = ElementKind.COLLABORATION,
        root_id: str | None = None,
) -> Generator[Document]:
    """Create a document context.

    Usage:
        with document() as doc:
            with pool("P1", name="Customer", x=0, y=0) as p1:
                start = event("S1", name="Hungry", x=80, y=100)
                order = task("T1", name="Order", x=160, y=78)
            start >> order

    Args:
        root: Kind of the root element (Collaboration or Process)
        root_id: Id of the root element, derived from the kind if omitted

    Yields:
        The Document object
    """
    doc = Document(root=root, root_id=root_id)
    _document_stack.append(doc)
    try:
        yield doc
    finally:
        _document_stack.pop()


class ShapeContext:
    """A shape that can be used with or without context manager.

    Usage:
        # Without context manager (no children)
        lane("L1", name="Back office")

        # With context manager (has children)
        with pool("P1", name="Customer") as p1:
            task("T1", name="Order")
    """

    def __init__(self, element: Element):
        self._element = element
        self._entered = False

    @property
    def element(self) -> Element:
        return self._element

    def __enter__(self) -> Element:
        """Enter context manager - push shape onto stack for children."""
        _parent_stack.append(self._element)
        self._entered = True
        return self._element

    def __exit__(self, *args: Any) -> None:
        """Exit context manager - pop shape from stack."""
        if self._entered:
            _parent_stack.pop()

    # Delegate all attribute access to the underlying element
    def __getattr__(self, name: str) -> Any:
        return getattr(self._element, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            setattr(self._element, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Element, ShapeContext)):
            return NotImplemented
        return self._element is as_element(other)

    def __hash__(self) -> int:
        return id(self._element)

    # Support >> operator for sequence flows
    def __rshift__(self, other: Element | ShapeContext) -> Element:
        return self._element >> as_element(other)

    def __repr__(self) -> str:
        return repr(self._element)


def shape(
        id: str,
        kind: ElementKind | str,
        name: str | None = None,
        x: float = 0,
        y: float = 0,
        width: float | None = None,
        height: float | None = None,
        label: bool = True,
        fill: str | None = None,
) -> ShapeContext:
    """Create a shape, optionally as a context for child shapes.

    Args:
        id: Unique element id
        kind: Structural kind ("Task", "bpmn:Task" or an ElementKind)
        name: Display name
        x, y: Top-left corner
        width, height: Size, defaulting per kind
        label: Create an external label for named events, gateways and data
        fill: Initial fill color

    Returns:
        ShapeContext that can be used with or without 'with' statement
    """
    kind = ElementKind.parse(kind)
    if kind.is_connection or kind is ElementKind.LABEL:
        raise ValueError(f"'{kind.value}' is not a shape kind, use flow()")

    default_w, default_h = _default_size(kind)
    element = Element(
        id=id,
        kind=kind,
        name=name,
        x=x,
        y=y,
        width=default_w if width is None else width,
        height=default_h if height is None else height,
    )
    if fill is not None:
        element.di.fill = fill

    doc = _current_document()
    parent = _current_parent() or (doc.root if doc else None)
    element.parent = parent
    if doc is not None:
        doc.add(element)
    if parent is not None:
        parent.children.append(element)
    if doc is not None and label and name and _has_external_label(kind):
        _add_label(doc, element)

    return ShapeContext(element)


def pool(id: str, name: str | None = None, **kwargs: Any) -> ShapeContext:
    """Create a pool (participant)."""
    return shape(id, ElementKind.PARTICIPANT, name=name, **kwargs)


def lane(id: str, name: str | None = None, **kwargs: Any) -> ShapeContext:
    """Create a lane inside the current pool."""
    return shape(id, ElementKind.LANE, name=name, **kwargs)


def task(id: str, name: str | None = None, kind: ElementKind | str = ElementKind.TASK, **kwargs: Any) -> Element:
    return shape(id, kind, name=name, **kwargs).element


def event(id: str, name: str | None = None, kind: ElementKind | str = ElementKind.START_EVENT, **kwargs: Any) -> Element:
    return shape(id, kind, name=name, **kwargs).element


def gateway(id: str, name: str | None = None, kind: ElementKind | str = ElementKind.EXCLUSIVE_GATEWAY, **kwargs: Any) -> Element:
    return shape(id, kind, name=name, **kwargs).element


def annotation(id: str, text: str | None = None, **kwargs: Any) -> Element:
    return shape(id, ElementKind.TEXT_ANNOTATION, name=text, **kwargs).element


def data_object(id: str, name: str | None = None, **kwargs: Any) -> Element:
    return shape(id, ElementKind.DATA_OBJECT_REFERENCE, name=name, **kwargs).element


def data_store(id: str, name: str | None = None, **kwargs: Any) -> Element:
    return shape(id, ElementKind.DATA_STORE_REFERENCE, name=name, **kwargs).element


def flow(
        source: Element | ShapeContext,
        target: Element | ShapeContext,
        kind: ElementKind | str = ElementKind.SEQUENCE_FLOW,
        id: str | None = None,
        name: str | None = None,
        waypoints: list[tuple[float, float]] | None = None,
        label: bool = True,
        document: Document | None = None,
) -> Element:
    """Create a connection between two shapes.

    Usage:
        flow(order, kitchen, kind="MessageFlow", id="M1", name="order")
        flow(note, order, kind="Association")

    Args:
        source: Source shape
        target: Target shape
        kind: Connection kind (SequenceFlow, MessageFlow, Association, ...)
        id: Unique element id, generated from the kind if omitted
        name: Optional connection name
        waypoints: Path points, defaults to the straight line between centers
        label: Create an external label when the connection is named
        document: Target document, defaults to the current document context

    Returns:
        The connection Element
    """
    source = as_element(source)
    target = as_element(target)
    kind = ElementKind.parse(kind)
    if not kind.is_connection:
        raise ValueError(f"'{kind.value}' is not a connection kind")

    doc = document or _current_document() or source._document
    if id is None:
        count = len(doc.connections) + 1 if doc else 1
        id = f"{kind.local_name}_{count}"

    connection = Element(
        id=id,
        kind=kind,
        name=name,
        waypoints=list(waypoints) if waypoints else [source.center, target.center],
        source=source,
        target=target,
        parent=source.parent,
    )
    if doc is not None:
        doc.add(connection)
    source.outgoing.append(connection)
    target.incoming.append(connection)
    if doc is not None and label and name:
        _add_label(doc, connection)

    return connection
