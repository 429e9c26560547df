"""Result type for explicit error handling.

Every fallible step of the release-note pipelines returns a Result instead
of raising, so that the CLI layer is the only place where a failure turns
into a process exit code.

Usage:
    def lookup(name: str) -> Result[Category, NotesError]:
        ...

    match lookup("Enhancements"):
        case Ok(category):
            print(category.display_name)
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying an error payload."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
