"""Tests for the Viewer lifecycle and its operations end to end."""

import pytest

from bpmnview import (
    DEFAULT_FILL,
    HIGHLIGHT_FILL,
    DocumentError,
    ElementNotFoundError,
    NotReadyError,
    Viewer,
    ViewerConfig,
    ViewerState,
    document,
    flow,
    lane,
    pool,
    remove_elements,
    render_to_svg,
    task,
)
from tests.conftest import assert_consistent, make_collaboration, make_order_process, open_viewer


def ids(elements):
    return [e.id for e in elements]


class TestLifecycle:
    """Operations are only allowed once a document is imported."""

    def test_new_viewer_is_loading(self):
        viewer = Viewer()
        assert viewer.state is ViewerState.LOADING
        assert not viewer.ready

    @pytest.mark.parametrize("operation,args", [
        ("select_elements", ("Task",)),
        ("select_all_first_elems", ()),
        ("remove_elements", ([],)),
        ("add_elements", ([],)),
        ("add_overlays", ([],)),
        ("remove_overlays", ()),
        ("reset_viewport", ()),
        ("to_svg", ()),
    ])
    def test_operations_before_import_raise(self, operation, args):
        viewer = Viewer()
        with pytest.raises(NotReadyError) as exc_info:
            getattr(viewer, operation)(*args)
        assert exc_info.value.operation == operation

    @pytest.mark.asyncio
    async def test_import_makes_viewer_ready(self):
        viewer = Viewer()
        await viewer.import_document(make_collaboration())
        assert viewer.state is ViewerState.READY
        assert ids(viewer.groups.pools) == ["P1", "P2"]

    @pytest.mark.asyncio
    async def test_failed_import_stays_loading(self):
        with document():
            stranger = task("X")
        with document() as doc:
            a = task("A")
        flow(a, stranger, document=doc)

        viewer = Viewer()
        with pytest.raises(DocumentError):
            await viewer.import_document(doc)
        assert viewer.state is ViewerState.LOADING

    @pytest.mark.asyncio
    async def test_reimport_replaces_document(self):
        viewer = Viewer()
        await viewer.import_document(make_order_process())
        viewer.add_overlays(viewer.select_all_first_elems())

        await viewer.import_document(make_collaboration())
        assert viewer.ready
        assert len(viewer.overlays) == 0
        assert viewer.get("EXT").id == "EXT"
        assert ids(viewer.visible_elements()) == [
            "P1", "L1", "T1", "T2", "A1", "P2", "EXT", "M1",
        ]


class TestSelection:
    """Test the selection scenarios on an imported collaboration."""

    def test_select_elements(self):
        viewer = open_viewer(make_collaboration())
        assert ids(viewer.select_elements("Participant")) == ["P1", "P2"]
        assert ids(viewer.select_elements("Lane")) == ["L1"]

    def test_select_all_first_elems(self):
        viewer = open_viewer(make_collaboration())
        assert ids(viewer.select_all_first_elems()) == ["P1", "L1", "T1", "A1", "M1"]

    def test_selection_ignores_visibility(self, viewer):
        """Hidden elements are still offered for selection."""
        pools = viewer.select_elements("Participant")
        viewer.remove_elements(pools)
        assert viewer.select_elements("Participant") == pools
        assert viewer.select_all_first_elems()[0].id == "P1"

    def test_get_unknown_raises(self, viewer):
        with pytest.raises(ElementNotFoundError, match="nope"):
            viewer.get("nope")


class TestOperations:
    """Test hiding, annotating and highlighting through the viewer."""

    def test_hide_and_show_message_flows(self, viewer):
        flows = viewer.groups.message_flows
        viewer.remove_connections(flows)
        assert "M1" not in ids(viewer.visible_elements())
        viewer.add_connections(flows)
        assert "M1" in ids(viewer.visible_elements())

    def test_round_trip_keeps_framing(self, viewer):
        before = viewer.canvas.viewbox()
        t1 = viewer.get("T1")
        viewer.remove_elements([t1])
        viewer.add_elements([t1])
        viewer.reset_viewport()
        assert viewer.canvas.viewbox() == before
        assert_consistent(viewer.canvas)

    def test_overlay_labels(self, viewer):
        viewer.add_overlays([viewer.get("P1")])
        viewer.add_overlays([viewer.get("T1")])
        assert [o.text for o in viewer.overlays] == ["Pool", "Task"]

    def test_remove_overlays_twice(self, viewer):
        viewer.add_overlays(viewer.groups.first_elements)
        viewer.remove_overlays()
        assert len(viewer.overlays) == 0
        viewer.remove_overlays()
        assert len(viewer.overlays) == 0

    def test_highlight_uses_config(self, order_process):
        viewer = open_viewer(order_process, config=ViewerConfig(highlight_fill="#ff0000"))
        p1 = viewer.get("P1")
        viewer.highlight_element(p1)
        viewer.highlight_element(p1)
        assert p1.di.fill == "#ff0000"
        viewer.remove_highlight_element(p1)
        assert p1.di.fill == DEFAULT_FILL


class TestSvg:
    """Test rendering of the visible set."""

    def test_svg_contains_visible_elements(self, viewer):
        svg = viewer.to_svg()
        assert "<svg" in svg
        assert 'id="T1"' in svg
        assert 'id="M1"' in svg

    def test_hidden_elements_are_not_rendered(self, viewer):
        viewer.remove_elements([viewer.get("T1")])
        svg = viewer.to_svg()
        assert 'id="T1"' not in svg
        assert 'id="M1"' not in svg
        assert 'id="T2"' in svg

    def test_overlays_are_rendered(self, viewer):
        viewer.add_overlays([viewer.get("P1")])
        assert ">Pool<" in viewer.to_svg()

    def test_highlight_is_rendered(self, viewer):
        viewer.highlight_element(viewer.get("L1"))
        assert HIGHLIGHT_FILL in viewer.to_svg()

    def test_save_svg(self, viewer, tmp_path):
        path = tmp_path / "diagram.svg"
        viewer.save_svg(str(path))
        assert 'id="T1"' in path.read_text(encoding="utf-8")

    def test_render_to_svg(self, tmp_path):
        svg = render_to_svg(make_collaboration(), str(tmp_path / "collab"))
        assert 'id="EXT"' in svg
        assert (tmp_path / "collab.svg").exists()


class TestShapeHandles:
    """Handles returned by pool() and lane() work like their elements."""

    @pytest.fixture
    def handles(self):
        with document() as doc:
            with pool("P1", name="Customer", x=0, y=0, width=600, height=250):
                l1 = lane("L1", name="Desk", x=30, y=0, width=570, height=250)
                task("T1", name="Order", x=100, y=80)
            p2 = pool("P2", name="Kitchen", x=0, y=300, width=600, height=200)
        return open_viewer(doc), l1, p2

    def test_remove_and_add_lane_handle(self, handles):
        viewer, l1, _ = handles
        viewer.remove_elements([l1])
        assert not viewer.canvas.is_visible(viewer.get("L1"))

        viewer.add_elements([l1])
        assert viewer.canvas.is_visible(viewer.get("L1"))
        assert viewer.canvas.registry.get("L1") is viewer.get("L1")
        assert_consistent(viewer.canvas)

    def test_overlay_and_highlight_on_handle(self, handles):
        viewer, _, p2 = handles
        viewer.add_overlays([p2])
        viewer.highlight_element(p2)
        assert [o.element for o in viewer.overlays] == [viewer.get("P2")]
        assert viewer.get("P2").di.fill == HIGHLIGHT_FILL


class TestOverlaysOfHiddenElements:
    """Notes disappear together with their elements."""

    def test_hidden_element_loses_its_overlay(self, viewer):
        t2 = viewer.get("T2")
        viewer.add_overlays([viewer.get("P1"), t2])
        viewer.remove_elements([t2])
        assert [o.element.id for o in viewer.overlays] == ["P1"]
        svg = viewer.to_svg()
        assert 'data-container-id="T2"' not in svg
        assert 'data-container-id="P1"' in svg

    def test_hidden_connection_loses_its_overlay(self, viewer):
        m1 = viewer.get("M1")
        viewer.add_overlays([m1])
        viewer.remove_connections([m1])
        assert len(viewer.overlays) == 0

    def test_overlay_of_removed_endpoint_connection_is_dropped(self, viewer):
        viewer.add_overlays([viewer.get("M1")])
        viewer.remove_elements([viewer.get("T1")])
        assert len(viewer.overlays) == 0

    def test_renderer_skips_notes_of_hidden_elements(self, viewer):
        """Removing through the canvas directly leaves the overlay, but it is not drawn."""
        a1 = viewer.get("A1")
        viewer.add_overlays([a1])
        remove_elements(viewer.canvas, [a1])
        assert len(viewer.overlays) == 1
        assert 'data-container-id="A1"' not in viewer.to_svg()
