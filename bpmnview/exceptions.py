"""Exceptions raised by bpmnview."""

from __future__ import annotations


class BpmnViewError(Exception):
    """Base class for all bpmnview errors."""


class ElementNotFoundError(BpmnViewError):
    """An element id is not known where it was expected.

    Attributes:
        element_id: The id that could not be resolved
        where: What was searched ("document", "canvas", ...)
        message: Human-readable error message
    """

    def __init__(self, element_id: str, where: str = "document") -> None:
        self.element_id = element_id
        self.where = where
        self.message = f"Element '{element_id}' not found in {where}"
        super().__init__(self.message)


class InconsistentGraphError(BpmnViewError):
    """A canvas mutation would break the visible graph.

    Raised when adding a connection whose endpoint is not visible, removing a
    shape that still has visible connections, or adding an element twice.
    Work already done by the surrounding batch is not rolled back.

    Attributes:
        element_id: The element the rejected mutation was about
        reason: Why the mutation was rejected
        message: Human-readable error message
    """

    def __init__(self, element_id: str, reason: str) -> None:
        self.element_id = element_id
        self.reason = reason
        self.message = f"Cannot update '{element_id}': {reason}"
        super().__init__(self.message)


class NotReadyError(BpmnViewError):
    """A viewer operation was called before a document finished importing.

    Attributes:
        operation: Name of the rejected operation
        message: Human-readable error message
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.message = (
            f"Cannot call '{operation}' before a document has been imported"
        )
        super().__init__(self.message)


class DocumentError(BpmnViewError):
    """A document is malformed (duplicate ids, dangling connections)."""
