"""Tests for DependencyGraph construction, detachment and traversal.

Validates vertex merging, child-vertex edges, cycle rejection, detachment
without cascading, reachability queries, topological order, copying and
equality.
"""

from __future__ import annotations

import pytest

from lockgraph.core.graph import DependencyGraph, Edge
from lockgraph.core.requirement import Requirement, parse_requirement
from lockgraph.exceptions import CircularDependencyError, GraphError


# ===========================================================================
# Helpers: Build common graph topologies for test reuse
# ===========================================================================


def _build_chain() -> DependencyGraph:
    """Build A -> B -> C."""
    g = DependencyGraph()
    g.add_vertex("A")
    g.add_child_vertex("B", None, ["A"])
    g.add_child_vertex("C", None, ["B"])
    return g


def _build_diamond() -> DependencyGraph:
    """Build a diamond: A -> B, A -> C, B -> D, C -> D."""
    g = DependencyGraph()
    g.add_vertex("A")
    g.add_child_vertex("B", None, ["A"])
    g.add_child_vertex("C", None, ["A"])
    g.add_child_vertex("D", None, ["B", "C"])
    return g


# ===========================================================================
# Vertices
# ===========================================================================


class TestVertices:
    """Tests for adding and merging vertices."""

    def test_add_vertex(self) -> None:
        g = DependencyGraph()
        payload = parse_requirement("A (1.0)")
        vertex = g.add_vertex("A", payload, explicit=True)
        assert vertex.name == "A"
        assert vertex.payload == payload
        assert vertex.explicit is True
        assert g.vertex_names == {"A"}
        assert "A" in g
        assert len(g) == 1

    def test_readd_adopts_payload_when_missing(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A")
        payload = parse_requirement("A (1.0)")
        g.add_vertex("A", payload)
        assert g.vertex_named("A").payload == payload

    def test_readd_keeps_existing_payload(self) -> None:
        g = DependencyGraph()
        first = parse_requirement("A (1.0)")
        g.add_vertex("A", first)
        g.add_vertex("A", parse_requirement("A (2.0)"))
        assert g.vertex_named("A").payload == first

    def test_explicit_flag_is_sticky(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A", explicit=True)
        g.add_vertex("A", explicit=False)
        assert g.vertex_named("A").explicit is True

    def test_explicit_flag_can_be_raised(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A")
        g.add_vertex("A", explicit=True)
        assert g.vertex_named("A").explicit is True

    def test_vertex_named_missing(self) -> None:
        assert DependencyGraph().vertex_named("ghost") is None

    def test_vertices_in_insertion_order(self) -> None:
        g = DependencyGraph()
        for name in ["Zeta", "Alpha", "Mu"]:
            g.add_vertex(name)
        assert [v.name for v in g.vertices] == ["Zeta", "Alpha", "Mu"]
        assert [v.name for v in g] == ["Zeta", "Alpha", "Mu"]


# ===========================================================================
# Edges
# ===========================================================================


class TestEdges:
    """Tests for child vertices and edges."""

    def test_child_vertex_creates_edges(self) -> None:
        g = _build_diamond()
        assert g.successors("A") == ["B", "C"]
        assert g.predecessors("D") == ["B", "C"]
        assert Edge("B", "D") in g.edges
        assert len(g.edges) == 4

    def test_child_vertex_without_parents(self) -> None:
        g = DependencyGraph()
        g.add_child_vertex("A", None, [])
        assert g.vertex_names == {"A"}
        assert g.edges == []

    def test_edge_requirement_recorded(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A")
        req = parse_requirement("B (~> 1.0)")
        g.add_child_vertex("B", None, ["A"], req)
        assert g.edges == [Edge("A", "B", req)]

    def test_missing_parent_raises(self) -> None:
        g = DependencyGraph()
        with pytest.raises(GraphError, match="ghost"):
            g.add_child_vertex("A", None, ["ghost"])

    def test_missing_destination_raises(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A")
        with pytest.raises(GraphError):
            g.add_edge("A", "B")

    def test_identical_edge_added_once(self) -> None:
        g = _build_chain()
        g.add_child_vertex("B", None, ["A"])
        assert g.predecessors("B") == ["A"]
        assert len(g.edges) == 2

    def test_cycle_rejected(self) -> None:
        g = _build_chain()
        with pytest.raises(CircularDependencyError) as exc_info:
            g.add_edge("C", "A")
        assert exc_info.value.cycle == ["C", "A", "B", "C"]
        assert g.successors("C") == []

    def test_self_edge_rejected(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A")
        with pytest.raises(CircularDependencyError):
            g.add_edge("A", "A")

    def test_cycle_error_is_graph_error(self) -> None:
        assert issubclass(CircularDependencyError, GraphError)


# ===========================================================================
# Detachment
# ===========================================================================


class TestDetach:
    """Tests for ``detach_vertex_named``."""

    def test_detach_removes_vertex_and_edges(self) -> None:
        g = _build_chain()
        removed = g.detach_vertex_named("B")
        assert [v.name for v in removed] == ["B"]
        assert g.vertex_names == {"A", "C"}
        assert g.edges == []
        assert g.successors("A") == []
        assert g.predecessors("C") == []

    def test_detach_does_not_cascade(self) -> None:
        g = _build_chain()
        g.detach_vertex_named("A")
        assert g.vertex_names == {"B", "C"}
        assert [v.name for v in g.roots()] == ["B"]

    def test_detach_keeps_shared_child_edges(self) -> None:
        g = _build_diamond()
        g.detach_vertex_named("B")
        assert g.predecessors("D") == ["C"]
        assert g.successors("A") == ["C"]

    def test_detach_missing_is_noop(self) -> None:
        g = _build_chain()
        assert g.detach_vertex_named("ghost") == []
        assert g.vertex_count == 3

    def test_detached_vertex_has_no_edges(self) -> None:
        g = _build_chain()
        (vertex,) = g.detach_vertex_named("B")
        assert vertex.outgoing_edges == []
        assert vertex.incoming_edges == []


# ===========================================================================
# Traversal
# ===========================================================================


class TestTraversal:
    """Tests for reachability queries and ordering."""

    def test_descendants(self) -> None:
        assert _build_diamond().descendants("A") == {"B", "C", "D"}

    def test_ancestors(self) -> None:
        assert _build_diamond().ancestors("D") == {"A", "B", "C"}

    def test_unknown_vertex_has_no_neighbours(self) -> None:
        g = _build_chain()
        assert g.successors("ghost") == []
        assert g.descendants("ghost") == set()

    def test_has_path(self) -> None:
        g = _build_chain()
        assert g.has_path("A", "C")
        assert not g.has_path("C", "A")
        assert g.has_path("B", "B")

    def test_roots(self) -> None:
        g = _build_diamond()
        g.add_vertex("E")
        assert [v.name for v in g.roots()] == ["A", "E"]

    def test_topological_order(self) -> None:
        assert _build_diamond().topological_order() == ["A", "B", "C", "D"]

    def test_topological_order_respects_edges(self) -> None:
        g = DependencyGraph()
        g.add_vertex("Leaf")
        g.add_vertex("Top")
        g.add_edge("Top", "Leaf")
        order = g.topological_order()
        assert order.index("Top") < order.index("Leaf")


# ===========================================================================
# Copying, equality and rendering
# ===========================================================================


class TestCopyAndEquality:
    """Tests for ``copy``, ``__eq__`` and ``to_dot``."""

    def test_copy_is_equal(self) -> None:
        g = _build_diamond()
        assert g.copy() == g

    def test_copy_is_independent(self) -> None:
        g = _build_diamond()
        clone = g.copy()
        clone.detach_vertex_named("B")
        clone.vertex_named("A").explicit = True
        assert g.vertex_names == {"A", "B", "C", "D"}
        assert g.vertex_named("A").explicit is False
        assert clone != g

    def test_equality_ignores_insertion_order(self) -> None:
        g1 = DependencyGraph()
        g1.add_vertex("A")
        g1.add_vertex("B")
        g2 = DependencyGraph()
        g2.add_vertex("B")
        g2.add_vertex("A")
        assert g1 == g2

    def test_equality_compares_edges(self) -> None:
        g1 = DependencyGraph()
        g1.add_vertex("A")
        g1.add_vertex("B")
        g2 = g1.copy()
        g2.add_edge("A", "B")
        assert g1 != g2

    def test_equality_compares_payload(self) -> None:
        g1 = DependencyGraph()
        g1.add_vertex("A", Requirement.name_only("A"))
        g2 = DependencyGraph()
        g2.add_vertex("A", parse_requirement("A (1.0)"))
        assert g1 != g2

    def test_not_equal_to_other_types(self) -> None:
        assert DependencyGraph() != object()

    def test_repr(self) -> None:
        assert repr(_build_chain()) == "DependencyGraph(vertices=3, edges=2)"

    def test_to_dot(self) -> None:
        g = DependencyGraph()
        g.add_vertex("A", parse_requirement("A (1.0)"), explicit=True)
        g.add_child_vertex("B", None, ["A"])
        dot = g.to_dot()
        assert dot.startswith('digraph "locking" {')
        assert '"A" [label="A (= 1.0)", style=bold];' in dot
        assert '"B" [label="B"];' in dot
        assert '"A" -> "B";' in dot
        assert dot.endswith("}")

    def test_to_dot_escapes_quotes_and_backslashes(self) -> None:
        g = DependencyGraph()
        g.add_vertex('Fo"o', parse_requirement('Fo"o (1.0)'))
        g.add_child_vertex("Ba\\r", None, ['Fo"o'])
        dot = g.to_dot(title='lock "v2"')
        assert dot.startswith('digraph "lock \\"v2\\"" {')
        assert '"Fo\\"o" [label="Fo\\"o (= 1.0)"];' in dot
        assert '"Ba\\\\r" [label="Ba\\\\r"];' in dot
        assert '"Fo\\"o" -> "Ba\\\\r";' in dot
