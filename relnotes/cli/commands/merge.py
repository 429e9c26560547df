from __future__ import annotations

from pathlib import Path

import typer

from relnotes.cli.commands._helpers import unwrap_or_exit
from relnotes.cli.context import build_context
from relnotes.notes.merger import NoteMerger


def merge(
    files: list[Path] = typer.Argument(
        ...,
        help="Release-note fragments: scalardb.md, cluster.md, graphql.md, sql.md.",
        show_default=False,
    ),
) -> None:
    """Merge per-repository release notes into one document on stdout."""
    ctx = build_context()
    merger = NoteMerger(console=ctx.console)

    for path in files:
        count = unwrap_or_exit(merger.load_file(path), ctx)
        ctx.console.debug(f"{path}: {count} release notes")

    typer.echo(merger.output(), nl=False)
