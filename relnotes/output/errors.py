"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relnotes.core.config import ConfigError
from relnotes.core.errors import ErrorCode
from relnotes.notes.errors import NotesError
from relnotes.output.console import Style

if TYPE_CHECKING:
    from relnotes.output.console import ConsoleProtocol

__all__ = ["notes_error_exit_code", "print_config_error", "print_notes_error"]


def print_notes_error(error: NotesError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.path is not None:
        console.print(f"config: {error.path}", Style.DIM)


def notes_error_exit_code(error: NotesError) -> int:
    """Get exit code for a release-notes error."""
    match error.kind:
        case "unknown_file" | "unknown_category" | "missing_category":
            return int(ErrorCode.USER_ERROR)
        case "gh_missing":
            return int(ErrorCode.ENV_ERROR)
        case "provider_error" | "project_not_found":
            return int(ErrorCode.NETWORK_ERROR)
        case "io_error":
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
