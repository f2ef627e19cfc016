"""Rich output formatting helpers for the lockgraph CLI.

Locked vertices (a payload with a version constraint) are shown in green,
floated vertices (name-only payload) in yellow and transitive placeholders
(no payload) dimmed.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lockgraph.core.graph import DependencyGraph, Vertex

console = Console()


def vertex_state(vertex: Vertex) -> str:
    """Classify a vertex as "locked", "floating" or "transitive"."""
    if vertex.payload is None:
        return "transitive"
    if vertex.payload.is_name_only:
        return "floating"
    return "locked"


_STATE_STYLES: dict[str, str] = {
    "locked": "bold green",
    "floating": "yellow",
    "transitive": "dim",
}


def print_locking_graph(graph: DependencyGraph, title: str = "Locking Graph") -> None:
    """Print one table row per vertex with its payload and neighbours.

    Args:
        graph: The locking graph to display.
        title: Table title.
    """
    if not graph.vertex_count:
        console.print("[dim]Locking graph is empty: every pod will be re-resolved.[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Pod", style="bold")
    table.add_column("Requirement")
    table.add_column("State", justify="center")
    table.add_column("Explicit", justify="center")
    table.add_column("Parents")
    table.add_column("Children")

    for vertex in graph.vertices:
        state = vertex_state(vertex)
        table.add_row(
            vertex.name,
            str(vertex.payload) if vertex.payload else "-",
            Text(state, style=_STATE_STYLES[state]),
            "yes" if vertex.explicit else "",
            ", ".join(vertex.predecessor_names),
            ", ".join(vertex.successor_names),
        )

    console.print(table)
    _print_graph_summary(graph)


def _print_graph_summary(graph: DependencyGraph) -> None:
    """Print a one-line summary after the graph table."""
    states = [vertex_state(v) for v in graph.vertices]
    parts = [
        f"[bold]{graph.vertex_count}[/bold] pods",
        f"[green]{states.count('locked')} locked[/green]",
        f"[yellow]{states.count('floating')} floating[/yellow]",
        f"{states.count('transitive')} transitive",
        f"{len(graph.edges)} edges",
    ]
    console.print(", ".join(parts))


def print_roots(graph: DependencyGraph) -> None:
    """Print the locked vertices that no other vertex depends on."""
    roots = [v for v in graph.roots() if v.payload is not None]
    console.print(
        Panel(f"[bold]{len(roots)}[/bold] locked pods with no dependents", title="Roots")
    )
    for vertex in roots:
        style = _STATE_STYLES[vertex_state(vertex)]
        console.print(Text(f"  {vertex.payload}", style=style))

