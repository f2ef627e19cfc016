"""lockgraph CLI - Inspect the version-locking graph built from a lockfile.

Entry point for the ``lockgraph`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    inspect - Build and render the locking graph for a lockfile.
    roots   - List the locked pods nothing else depends on.

Usage::

    lockgraph inspect Podfile.lock
    lockgraph inspect Podfile.lock --update Alamofire --unlock Kingfisher
    lockgraph inspect Podfile.lock --format dot | dot -Tsvg > locks.svg
    lockgraph roots Podfile.lock
"""

from __future__ import annotations

import logging

import click

from lockgraph import __version__
from lockgraph.cli.inspect_cmd import inspect_command
from lockgraph.cli.roots_cmd import roots_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """lockgraph: Version-locking dependency graphs for incremental re-resolution.

    Shows which locked pods a resolver must keep, which may float, and
    which are dropped for re-resolution.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Register all subcommands
cli.add_command(inspect_command)
cli.add_command(roots_command)
