"""Dependency graph data structure used as the resolver's locking input.

Vertices are keyed by package name and carry an optional payload (the
``Requirement`` the resolver must honour) plus an ``explicit`` flag marking
names the caller's manifest references directly. Edges are directed
parent -> child and record that the child was a dependency of the parent.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from lockgraph.core.requirement import Requirement
from lockgraph.exceptions import CircularDependencyError, GraphError


# ---------------------------------------------------------------------------
# Edge and Vertex
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Edge:
    """A directed edge from ``origin`` to ``destination``.

    Attributes:
        origin: Name of the parent vertex.
        destination: Name of the child vertex.
        requirement: The requirement the parent placed on the child, if any.
    """

    origin: str
    destination: str
    requirement: Requirement | None = None


@dataclass
class Vertex:
    """A package vertex in the ``DependencyGraph``.

    Attributes:
        name: Unique package name (possibly qualified, e.g. "Foo/Core").
        payload: Requirement attached to the vertex, or None when the
            vertex is an unconstrained placeholder.
        explicit: True when the name is declared directly by the manifest.
        outgoing_edges: Edges to this vertex's children.
        incoming_edges: Edges from this vertex's parents.
    """

    name: str
    payload: Requirement | None = None
    explicit: bool = False
    outgoing_edges: list[Edge] = field(default_factory=list, repr=False, compare=False)
    incoming_edges: list[Edge] = field(default_factory=list, repr=False, compare=False)

    @property
    def successor_names(self) -> list[str]:
        """Names of direct children, in edge insertion order."""
        return [e.destination for e in self.outgoing_edges]

    @property
    def predecessor_names(self) -> list[str]:
        """Names of direct parents, in edge insertion order."""
        return [e.origin for e in self.incoming_edges]


# ---------------------------------------------------------------------------
# DependencyGraph
# ---------------------------------------------------------------------------


class DependencyGraph:
    """A directed acyclic graph of package vertices keyed by name.

    The graph supports:
    - Adding vertices (merging payload and explicit flag on re-insertion)
    - Adding child vertices with edges from named parents
    - Detaching a vertex together with every edge touching it
    - Reachability queries, root discovery and topological ordering

    Thread safety: This class is NOT thread-safe. External synchronization is
    required for concurrent access.
    """

    def __init__(self) -> None:
        self._vertices: dict[str, Vertex] = {}

    # -- Inspection ---------------------------------------------------------

    @property
    def vertex_names(self) -> set[str]:
        """Return the set of all vertex names."""
        return set(self._vertices)

    @property
    def vertices(self) -> list[Vertex]:
        """Return all vertices in insertion order."""
        return list(self._vertices.values())

    @property
    def edges(self) -> list[Edge]:
        """Return all edges, grouped by origin in vertex insertion order."""
        return [e for v in self._vertices.values() for e in v.outgoing_edges]

    @property
    def vertex_count(self) -> int:
        """Return the number of vertices."""
        return len(self._vertices)

    def vertex_named(self, name: str) -> Vertex | None:
        """Return the vertex called *name*, or None if absent."""
        return self._vertices.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(list(self._vertices.values()))

    def __len__(self) -> int:
        return len(self._vertices)

    # -- Mutation -----------------------------------------------------------

    def add_vertex(
        self,
        name: str,
        payload: Requirement | None = None,
        explicit: bool = False,
    ) -> Vertex:
        """Add a vertex, or merge into the existing vertex of the same name.

        When the vertex already exists its payload is kept if set (otherwise
        the new payload is adopted) and the explicit flag is OR-ed.

        Args:
            name: Package name.
            payload: Optional requirement to attach.
            explicit: Whether the manifest declares the name directly.

        Returns:
            The new or existing ``Vertex``.
        """
        existing = self._vertices.get(name)
        if existing is not None:
            if existing.payload is None:
                existing.payload = payload
            existing.explicit = existing.explicit or explicit
            return existing

        vertex = Vertex(name=name, payload=payload, explicit=explicit)
        self._vertices[name] = vertex
        return vertex

    def add_child_vertex(
        self,
        name: str,
        payload: Requirement | None,
        parent_names: Iterable[str],
        requirement: Requirement | None = None,
    ) -> Vertex:
        """Add a vertex and an edge to it from each named parent.

        Args:
            name: Package name of the child.
            payload: Optional requirement to attach to the child.
            parent_names: Names of existing vertices to link from.
            requirement: Requirement recorded on each new edge.

        Returns:
            The new or existing child ``Vertex``.

        Raises:
            GraphError: If a parent vertex does not exist.
            CircularDependencyError: If an edge would introduce a cycle.
        """
        vertex = self.add_vertex(name, payload)
        for parent_name in parent_names:
            self.add_edge(parent_name, name, requirement)
        return vertex

    def add_edge(
        self,
        origin: str,
        destination: str,
        requirement: Requirement | None = None,
    ) -> Edge:
        """Add a directed edge between two existing vertices.

        Re-adding an identical edge returns the existing one.

        Raises:
            GraphError: If either endpoint does not exist.
            CircularDependencyError: If *origin* is reachable from
                *destination* (including a self-edge).
        """
        origin_v = self._vertices.get(origin)
        dest_v = self._vertices.get(destination)
        if origin_v is None or dest_v is None:
            missing = origin if origin_v is None else destination
            raise GraphError(f"No vertex named {missing!r} in graph")

        edge = Edge(origin=origin, destination=destination, requirement=requirement)
        if edge in origin_v.outgoing_edges:
            return edge

        path = self._path(destination, origin)
        if path is not None:
            raise CircularDependencyError([origin] + path)

        origin_v.outgoing_edges.append(edge)
        dest_v.incoming_edges.append(edge)
        return edge

    def detach_vertex_named(self, name: str) -> list[Vertex]:
        """Remove a vertex and every edge touching it.

        Children are left in place even if this was their only parent; they
        become roots of the remaining graph.

        Args:
            name: Name of the vertex to remove.

        Returns:
            A list holding the removed vertex, or an empty list if no vertex
            of that name exists.
        """
        vertex = self._vertices.pop(name, None)
        if vertex is None:
            return []

        for edge in vertex.outgoing_edges:
            child = self._vertices.get(edge.destination)
            if child is not None:
                child.incoming_edges = [e for e in child.incoming_edges if e != edge]
        for edge in vertex.incoming_edges:
            parent = self._vertices.get(edge.origin)
            if parent is not None:
                parent.outgoing_edges = [e for e in parent.outgoing_edges if e != edge]

        vertex.outgoing_edges = []
        vertex.incoming_edges = []
        return [vertex]

    # -- Traversal ----------------------------------------------------------

    def successors(self, name: str) -> list[str]:
        """Return the names of the direct children of *name*."""
        vertex = self._vertices.get(name)
        return vertex.successor_names if vertex else []

    def predecessors(self, name: str) -> list[str]:
        """Return the names of the direct parents of *name*."""
        vertex = self._vertices.get(name)
        return vertex.predecessor_names if vertex else []

    def descendants(self, name: str) -> set[str]:
        """Return every vertex reachable from *name*, excluding itself."""
        return self._reachable(name, self.successors)

    def ancestors(self, name: str) -> set[str]:
        """Return every vertex that can reach *name*, excluding itself."""
        return self._reachable(name, self.predecessors)

    def has_path(self, origin: str, destination: str) -> bool:
        """True if *destination* is reachable from *origin* (or equal to it)."""
        return self._path(origin, destination) is not None

    def roots(self) -> list[Vertex]:
        """Return vertices with no incoming edges, in insertion order."""
        return [v for v in self._vertices.values() if not v.incoming_edges]

    def topological_order(self) -> list[str]:
        """Return vertex names with every parent before its children.

        Uses Kahn's algorithm; ties are broken by insertion order so the
        result is deterministic.
        """
        in_degree = {name: len(v.incoming_edges) for name, v in self._vertices.items()}
        queue: deque[str] = deque(n for n, d in in_degree.items() if d == 0)
        order: list[str] = []

        while queue:
            current = queue.popleft()
            order.append(current)
            for child in self.successors(current):
                in_degree[child] -= 1
                if in_degree[child] == 0:
                    queue.append(child)

        return order

    def _reachable(self, name: str, step) -> set[str]:
        visited: set[str] = set()
        queue: deque[str] = deque(step(name))
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            queue.extend(step(current))
        visited.discard(name)
        return visited

    def _path(self, origin: str, destination: str) -> list[str] | None:
        """BFS for a path of vertex names from *origin* to *destination*."""
        if origin not in self._vertices:
            return None
        parent: dict[str, str | None] = {origin: None}
        queue: deque[str] = deque([origin])

        while queue:
            current = queue.popleft()
            if current == destination:
                path = [current]
                prev = parent[current]
                while prev is not None:
                    path.append(prev)
                    prev = parent[prev]
                path.reverse()
                return path
            for child in self.successors(current):
                if child not in parent:
                    parent[child] = current
                    queue.append(child)

        return None

    # -- Copying, equality and rendering -----------------------------------

    def copy(self) -> DependencyGraph:
        """Return an independent copy sharing only the immutable payloads."""
        clone = DependencyGraph()
        for vertex in self._vertices.values():
            clone.add_vertex(vertex.name, vertex.payload, vertex.explicit)
        for vertex in self._vertices.values():
            for edge in vertex.outgoing_edges:
                clone._vertices[edge.origin].outgoing_edges.append(edge)
                clone._vertices[edge.destination].incoming_edges.append(edge)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        if self._vertices != other._vertices:
            return False
        return set(self.edges) == set(other.edges)

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(vertices={self.vertex_count}, "
            f"edges={len(self.edges)})"
        )

    def to_dot(self, title: str = "locking") -> str:
        """Render the graph in Graphviz dot format.

        Vertex labels show the payload when one is attached; explicit
        vertices are drawn with a bold outline.
        """
        lines = [f"digraph {_dot_quote(title)} {{"]
        for vertex in self._vertices.values():
            label = str(vertex.payload) if vertex.payload else vertex.name
            attrs = [f"label={_dot_quote(label)}"]
            if vertex.explicit:
                attrs.append("style=bold")
            lines.append(f'  {_dot_quote(vertex.name)} [{", ".join(attrs)}];')
        for edge in self.edges:
            lines.append(
                f"  {_dot_quote(edge.origin)} -> {_dot_quote(edge.destination)};"
            )
        lines.append("}")
        return "\n".join(lines)


def _dot_quote(text: str) -> str:
    """Return *text* as a double-quoted dot ID with ``\\`` and ``"`` escaped."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
