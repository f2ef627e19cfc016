"""``lockgraph roots <lockfile>`` - List the locked pods nothing else depends on.

Exit Codes:
    0 - Roots listed.
    1 - Lock data is malformed.
    2 - Lockfile could not be read.
"""

from __future__ import annotations

import sys

import click

from lockgraph.cli.inspect_cmd import load_records
from lockgraph.core.locking import build_locking_graph
from lockgraph.exceptions import LockGraphError


@click.command("roots")
@click.argument("lockfile", type=click.Path(dir_okay=False))
@click.option(
    "--lenient",
    is_flag=True,
    default=False,
    help="Skip lock records of unknown shape instead of failing.",
)
def roots_command(lockfile: str, lenient: bool) -> None:
    """List the locked pods in LOCKFILE that no other pod depends on."""
    records = load_records(lockfile, strict=not lenient)
    try:
        graph = build_locking_graph(records)
    except LockGraphError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    from lockgraph.cli.output import print_roots
    print_roots(graph)
    sys.exit(0)
