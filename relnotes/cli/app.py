from __future__ import annotations

import os

import typer

from relnotes import __version__
from relnotes.cli.commands.create import create
from relnotes.cli.commands.merge import merge
from relnotes.cli.context import DEBUG_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(merge)
app.command()(create)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
    debug: bool = typer.Option(False, "--debug", help="Trace parsing and gh calls on stderr."),
) -> None:
    if debug:
        os.environ[DEBUG_ENV_VAR] = "1"


def main() -> None:
    app()
