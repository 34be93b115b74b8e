"""Tests for selecting elements by kind."""

import pytest

from bpmnview import (
    ElementKind,
    document,
    event,
    gateway,
    group_elements,
    select_by_kind,
    select_first_occurrences,
    task,
)
from tests.conftest import make_collaboration, make_order_process


def ids(elements):
    return [e.id for e in elements]


class TestSelectByKind:
    """Test exact-kind filtering."""

    def test_pools(self, collaboration):
        assert ids(select_by_kind(collaboration, "Participant")) == ["P1", "P2"]

    def test_lanes(self, collaboration):
        assert ids(select_by_kind(collaboration, "Lane")) == ["L1"]

    def test_accepts_enum(self, collaboration):
        assert ids(select_by_kind(collaboration, ElementKind.MESSAGE_FLOW)) == ["M1"]

    def test_keeps_registry_order(self, collaboration):
        assert ids(select_by_kind(collaboration, "Task")) == ["T1", "T2", "EXT"]

    def test_no_match_is_empty(self, collaboration):
        assert select_by_kind(collaboration, "DataStoreReference") == []

    def test_exact_match_only(self):
        """A UserTask is not selected as a Task."""
        with document() as doc:
            task("T1")
            task("U1", kind="UserTask")
        assert ids(select_by_kind(doc, "Task")) == ["T1"]
        assert ids(select_by_kind(doc, "UserTask")) == ["U1"]

    def test_labels_are_selectable(self, order_process):
        assert ids(select_by_kind(order_process, "label")) == ["S1_label", "M1_label"]


class TestSelectFirstOccurrences:
    """Test one-element-per-kind selection."""

    def test_collaboration_scenario(self, collaboration):
        """The second task and the second pool are repeats."""
        assert ids(select_first_occurrences(collaboration)) == ["P1", "L1", "T1", "A1", "M1"]

    def test_skips_labels_and_collaboration(self, order_process):
        first = select_first_occurrences(order_process)
        kinds = [e.kind for e in first]
        assert ElementKind.LABEL not in kinds
        assert ElementKind.COLLABORATION not in kinds

    def test_keeps_process_root(self):
        """Only the Collaboration root is excluded."""
        with document(root="Process") as doc:
            task("T1")
        assert ids(select_first_occurrences(doc)) == ["Process_1", "T1"]

    def test_first_seen_order_not_grouped(self):
        with document() as doc:
            a = task("A")
            b = gateway("G")
            c = task("B")
            d = event("E", kind="EndEvent")
            a >> b
            b >> c
            c >> d
        assert ids(select_first_occurrences(doc)) == ["A", "G", "E", "SequenceFlow_1"]

    @pytest.mark.parametrize("make", [make_collaboration, make_order_process])
    def test_one_per_kind(self, make):
        doc = make()
        first = select_first_occurrences(doc)
        kinds = [e.kind for e in first]
        assert len(kinds) == len(set(kinds))
        expected = {
            e.kind for e in doc
            if e.kind.is_bpmn and e.kind is not ElementKind.COLLABORATION
        }
        assert set(kinds) == expected
        # Each representative is the first element of its kind
        for element in first:
            assert select_by_kind(doc, element.kind)[0] is element

    def test_empty(self):
        assert select_first_occurrences([]) == []


class TestGroupElements:
    """Test the selections computed for a document."""

    def test_groups(self, order_process):
        groups = group_elements(order_process)
        assert ids(groups.pools) == ["P1", "P2"]
        assert ids(groups.lanes) == ["L1"]
        assert ids(groups.annotations) == ["A1"]
        assert ids(groups.message_flows) == ["M1"]
        assert groups.data_objects == []
        assert groups.data_stores == []
        assert ids(groups.first_elements) == ids(select_first_occurrences(order_process))
