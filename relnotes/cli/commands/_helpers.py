"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from relnotes.core.result import Err, Result
from relnotes.notes.errors import NotesError
from relnotes.output.errors import notes_error_exit_code, print_notes_error

if TYPE_CHECKING:
    from relnotes.cli.context import CLIContext


T = TypeVar("T")


def unwrap_or_exit(result: Result[T, NotesError], ctx: CLIContext) -> T:
    """Return the value of an Ok, or report the error and exit.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_notes_error(e, ctx.console)
                raise typer.Exit(code=notes_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_notes_error(result.error, ctx.console)
        raise typer.Exit(code=notes_error_exit_code(result.error))
    return result.value
