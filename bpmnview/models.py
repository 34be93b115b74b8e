"""Data models for bpmnview diagrams."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dsl import Document

BPMN_PREFIX = "bpmn:"

HIGHLIGHT_FILL = "rgba(60, 176, 67, 1)"
DEFAULT_FILL = "rgba(255, 255, 255, 1)"


class ElementKind(str, Enum):
    """Structural kinds an element can have."""

    COLLABORATION = "bpmn:Collaboration"
    PROCESS = "bpmn:Process"
    PARTICIPANT = "bpmn:Participant"
    LANE = "bpmn:Lane"

    TASK = "bpmn:Task"
    USER_TASK = "bpmn:UserTask"
    SERVICE_TASK = "bpmn:ServiceTask"
    SCRIPT_TASK = "bpmn:ScriptTask"
    SEND_TASK = "bpmn:SendTask"
    RECEIVE_TASK = "bpmn:ReceiveTask"
    MANUAL_TASK = "bpmn:ManualTask"
    BUSINESS_RULE_TASK = "bpmn:BusinessRuleTask"
    SUB_PROCESS = "bpmn:SubProcess"
    CALL_ACTIVITY = "bpmn:CallActivity"

    START_EVENT = "bpmn:StartEvent"
    END_EVENT = "bpmn:EndEvent"
    INTERMEDIATE_CATCH_EVENT = "bpmn:IntermediateCatchEvent"
    INTERMEDIATE_THROW_EVENT = "bpmn:IntermediateThrowEvent"
    BOUNDARY_EVENT = "bpmn:BoundaryEvent"

    EXCLUSIVE_GATEWAY = "bpmn:ExclusiveGateway"
    PARALLEL_GATEWAY = "bpmn:ParallelGateway"
    INCLUSIVE_GATEWAY = "bpmn:InclusiveGateway"
    EVENT_BASED_GATEWAY = "bpmn:EventBasedGateway"
    COMPLEX_GATEWAY = "bpmn:ComplexGateway"

    TEXT_ANNOTATION = "bpmn:TextAnnotation"
    DATA_OBJECT_REFERENCE = "bpmn:DataObjectReference"
    DATA_STORE_REFERENCE = "bpmn:DataStoreReference"
    GROUP = "bpmn:Group"

    SEQUENCE_FLOW = "bpmn:SequenceFlow"
    MESSAGE_FLOW = "bpmn:MessageFlow"
    ASSOCIATION = "bpmn:Association"
    DATA_INPUT_ASSOCIATION = "bpmn:DataInputAssociation"
    DATA_OUTPUT_ASSOCIATION = "bpmn:DataOutputAssociation"

    # Rendering-internal, not part of the BPMN namespace
    LABEL = "label"

    @classmethod
    def parse(cls, value: ElementKind | str) -> ElementKind:
        """Convert "Task", "bpmn:Task" or a member to an ElementKind."""
        if isinstance(value, ElementKind):
            return value
        if value == cls.LABEL.value:
            return cls.LABEL
        name = value if value.startswith(BPMN_PREFIX) else BPMN_PREFIX + value
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown element kind '{value}'") from None

    @property
    def is_bpmn(self) -> bool:
        return self.value.startswith(BPMN_PREFIX)

    @property
    def local_name(self) -> str:
        """Kind name without namespace, e.g. "Participant"."""
        return self.value.split(":")[-1]

    @property
    def is_connection(self) -> bool:
        return self in CONNECTION_KINDS

    @property
    def is_event(self) -> bool:
        return self.local_name.endswith("Event")

    @property
    def is_gateway(self) -> bool:
        return self.local_name.endswith("Gateway")

    @property
    def is_activity(self) -> bool:
        return self.local_name.endswith("Task") or self in (
            ElementKind.SUB_PROCESS,
            ElementKind.CALL_ACTIVITY,
        )


CONNECTION_KINDS = frozenset({
    ElementKind.SEQUENCE_FLOW,
    ElementKind.MESSAGE_FLOW,
    ElementKind.ASSOCIATION,
    ElementKind.DATA_INPUT_ASSOCIATION,
    ElementKind.DATA_OUTPUT_ASSOCIATION,
})


@dataclass
class Style:
    """Diagram interchange attributes of an element."""

    fill: str = DEFAULT_FILL
    stroke: str = "#22242a"

    def set(self, name: str, value: str) -> None:
        if not hasattr(self, name):
            raise AttributeError(f"Unknown style attribute '{name}'")
        setattr(self, name, value)


@dataclass(eq=False)
class Element:
    """A shape, connection or label in the diagram.

    Elements compare by identity. Connections carry ``waypoints`` and
    ``source``/``target``; shapes carry ``x``/``y``/``width``/``height``.
    """

    id: str
    kind: ElementKind
    name: str | None = None
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    waypoints: list[tuple[float, float]] | None = None
    source: Element | None = field(default=None, repr=False)
    target: Element | None = field(default=None, repr=False)
    incoming: list[Element] = field(default_factory=list, repr=False)
    outgoing: list[Element] = field(default_factory=list, repr=False)
    parent: Element | None = field(default=None, repr=False)
    children: list[Element] = field(default_factory=list, repr=False)
    label: Element | None = field(default=None, repr=False)
    label_target: Element | None = field(default=None, repr=False)
    di: Style = field(default_factory=Style, repr=False)
    _document: Document | None = field(default=None, repr=False)

    @property
    def type(self) -> str:
        """Namespaced kind string, e.g. "bpmn:Task"."""
        return self.kind.value

    @property
    def is_connection(self) -> bool:
        return self.waypoints is not None

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the shape or of the waypoints."""
        if self.waypoints:
            xs = [p[0] for p in self.waypoints]
            ys = [p[1] for p in self.waypoints]
            return min(xs), min(ys), max(xs), max(ys)
        return self.x, self.y, self.x + self.width, self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        min_x, min_y, max_x, max_y = self.bounds
        return (min_x + max_x) / 2, (min_y + max_y) / 2

    def __rshift__(self, other: Element) -> Element:
        """Create a sequence flow from this element to another (a >> b)."""
        from .dsl import flow

        return flow(self, other, document=self._document)


@dataclass(frozen=True)
class OverlayPosition:
    """Overlay offset relative to the top-left corner of its element."""

    top: float = 0
    left: float = 0


@dataclass
class Overlay:
    """An HTML note attached to an element."""

    id: str
    element: Element = field(repr=False)
    position: OverlayPosition
    html: str
    text: str = ""


@dataclass
class Viewbox:
    """The visible diagram region and the scale it is shown at."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    scale: float = 1.0
    inner: tuple[float, float, float, float] | None = None
