"""``lockgraph inspect <lockfile>`` - Show the locking graph for a lockfile.

Reads the lockfile, builds the version-locking graph with the requested
pods floated or removed, and renders it as a table, JSON or Graphviz dot.

Exit Codes:
    0 - Graph built and rendered.
    1 - Lock data is malformed (bad requirement or unknown record shape).
    2 - Lockfile could not be read.
"""

from __future__ import annotations

import json
import sys
from typing import Any

import click

from lockgraph.core.graph import DependencyGraph
from lockgraph.core.lockfile import LockRecordSet
from lockgraph.core.locking import locked_dependencies
from lockgraph.exceptions import LockfileError, LockGraphError


def load_records(path: str, strict: bool) -> LockRecordSet:
    """Read a lockfile, exiting with code 2 if it cannot be read.

    Malformed records exit with code 1.
    """
    try:
        return LockRecordSet.read(path, strict=strict)
    except LockfileError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)
    except LockGraphError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _graph_to_json(graph: DependencyGraph) -> dict[str, Any]:
    """Convert a locking graph to a JSON-serializable dict."""
    return {
        "vertices": [
            {
                "name": v.name,
                "payload": str(v.payload) if v.payload else None,
                "locked_version": v.payload.exact_version if v.payload else None,
                "explicit": v.explicit,
                "parents": v.predecessor_names,
                "children": v.successor_names,
            }
            for v in graph.vertices
        ],
        "edges": [
            {"from": e.origin, "to": e.destination} for e in graph.edges
        ],
    }


@click.command("inspect")
@click.argument("lockfile", type=click.Path(dir_okay=False))
@click.option(
    "--update", "-u", "update",
    multiple=True,
    help="Pod to re-resolve from scratch (removed from the graph). Repeatable.",
)
@click.option(
    "--unlock", "unlock",
    multiple=True,
    help="Pod whose version may float (kept in the graph). Repeatable.",
)
@click.option(
    "--update-all",
    is_flag=True,
    default=False,
    help="Update every pod: show the fully unlocked (empty) graph.",
)
@click.option(
    "--lenient",
    is_flag=True,
    default=False,
    help="Skip lock records of unknown shape instead of failing.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "json", "dot"]),
    default="table",
    help="Output format (default: table).",
)
def inspect_command(
    lockfile: str,
    update: tuple[str, ...],
    unlock: tuple[str, ...],
    update_all: bool,
    lenient: bool,
    output_format: str,
) -> None:
    """Show the version-locking graph the resolver would start from.

    Vertices with a version are locked, vertices with a bare name float,
    and vertices with no requirement are transitive placeholders.

    Exit code 0 on success, 1 on malformed lock data, 2 if LOCKFILE
    cannot be read.
    """
    records = load_records(lockfile, strict=not lenient)

    try:
        graph = locked_dependencies(
            records,
            update=True if update_all else list(update),
            pods_to_unlock=unlock,
        )
    except LockGraphError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(_graph_to_json(graph), indent=2))
    elif output_format == "dot":
        click.echo(graph.to_dot())
    else:
        from lockgraph.cli.output import print_locking_graph
        print_locking_graph(graph)

    sys.exit(0)
