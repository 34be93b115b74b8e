"""Shared fixtures for bpmnview tests.

This module provides:
1. Documents used across test modules (a minimal collaboration and a
   restaurant order process with flows, labels and associations)
2. Helpers that put a document on a bare Canvas
3. A Canvas subclass that records the order of surface mutations
"""

import asyncio

import pytest

from bpmnview import (
    Canvas,
    Viewer,
    annotation,
    document,
    event,
    flow,
    lane,
    pool,
    task,
)


# =============================================================================
# Documents
# =============================================================================

def make_collaboration():
    """Pool P1 with lane L1 and tasks T1/T2, annotation A1, and a message
    flow M1 from T1 to a task in a second pool."""
    with document() as doc:
        with pool("P1", name="Customer", x=0, y=0, width=600, height=250):
            lane("L1", name="Desk", x=30, y=0, width=570, height=250)
            t1 = task("T1", name="Order", x=100, y=80)
            task("T2", name="Pay", x=300, y=80)
        annotation("A1", "Rush hour", x=450, y=20)
        with pool("P2", name="Kitchen", x=0, y=300, width=600, height=200):
            ext = task("EXT", name="Cook", x=100, y=360)
        flow(t1, ext, kind="MessageFlow", id="M1")
    return doc


def make_order_process():
    """Like the collaboration, but T1 has an incoming sequence flow from a
    named start event and an outgoing, named message flow."""
    with document() as doc:
        with pool("P1", name="Restaurant", x=0, y=0, width=600, height=250):
            lane("L1", name="Front", x=30, y=0, width=570, height=250)
            start = event("S1", name="Hungry", x=60, y=102)
            t1 = task("T1", name="Take order", x=160, y=80)
            t2 = task("T2", name="Serve", x=320, y=80)
        with pool("P2", name="Kitchen", x=0, y=300, width=600, height=200):
            cook = task("T3", name="Cook", x=160, y=360)
        note = annotation("A1", "Peak hours", x=450, y=20)
        flow(start, t1, id="F1")
        flow(t1, cook, kind="MessageFlow", id="M1", name="order")
        flow(note, t2, kind="Association", id="AS1")
    return doc


@pytest.fixture
def collaboration():
    return make_collaboration()


@pytest.fixture
def order_process():
    return make_order_process()


# =============================================================================
# Canvas helpers
# =============================================================================

def load(doc, canvas_cls=Canvas):
    """Put every element of ``doc`` on a new canvas, like an import does."""
    canvas = canvas_cls()
    canvas.set_root_element(doc.root)
    for element in doc.shapes:
        canvas.add_shape(element)
    for connection in doc.connections:
        canvas.add_connection(connection)
    return canvas


def visible_ids(canvas):
    return {e.id for e in canvas.registry if e is not canvas.root}


def assert_consistent(canvas):
    """Every visible connection has both endpoints visible."""
    for element in canvas.registry:
        if element.is_connection:
            assert canvas.is_visible(element.source), element.id
            assert canvas.is_visible(element.target), element.id
    connections = [e for e in canvas.registry if e.is_connection]
    assert canvas.graph.number_of_edges() == len(connections)


class RecordingCanvas(Canvas):
    """Canvas that records every surface mutation as (operation, id)."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def add_shape(self, element):
        self.calls.append(("add_shape", element.id))
        super().add_shape(element)

    def add_connection(self, connection):
        self.calls.append(("add_connection", connection.id))
        super().add_connection(connection)

    def remove_shape(self, element):
        self.calls.append(("remove_shape", element.id))
        super().remove_shape(element)

    def remove_connection(self, connection):
        self.calls.append(("remove_connection", connection.id))
        super().remove_connection(connection)


@pytest.fixture
def canvas(order_process):
    return load(order_process)


@pytest.fixture
def recording_canvas(order_process):
    canvas = load(order_process, RecordingCanvas)
    canvas.calls.clear()
    return canvas


# =============================================================================
# Viewer
# =============================================================================

def open_viewer(doc, **kwargs):
    viewer = Viewer(**kwargs)
    asyncio.run(viewer.import_document(doc))
    return viewer


@pytest.fixture
def viewer(order_process):
    return open_viewer(order_process)
