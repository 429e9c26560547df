"""Error types for the release-notes pipelines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NotesErrorKind = Literal[
    # unrecognized input
    "unknown_file",
    "unknown_category",
    # structural violation
    "missing_category",
    # collaborator failure
    "gh_missing",
    "provider_error",
    "project_not_found",
    # unreadable input file
    "io_error",
]


@dataclass(frozen=True, slots=True)
class NotesError:
    """Canonical error payload for the merger and the builder.

    Rendered by the CLI through relnotes.output.errors; the kind decides the
    exit code.
    """

    kind: NotesErrorKind
    message: str
    hint: str | None = None
