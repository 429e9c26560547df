"""Line grammar of release-note fragments.

A fragment is a flat markdown document:

    ## Summary
    ## Enhancements
    - Added foo
    ## Bug fixes
    - Fixed bar (#12)

`## <text>` switches the current category (a "Summary" heading is skipped),
`- <text>` is one note in the current category, every other line is ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.taxonomy import Category, category_by_display_name
from relnotes.output.console import ConsoleProtocol

__all__ = [
    "BULLET_RE",
    "HEADING_RE",
    "ParsedNote",
    "TEXT",
    "iter_notes",
    "parse_notes",
]

SUMMARY_SECTION = "summary"

# Anything but C0/C1 control characters; VISIBLE additionally excludes space so
# that captured text is always trimmed.
_PRINTABLE = r"[^\x00-\x1f\x7f-\x9f]"
_VISIBLE = r"[^\x00-\x20\x7f-\x9f]"
TEXT = rf"{_VISIBLE}(?:{_PRINTABLE}*{_VISIBLE})?"

HEADING_RE = re.compile(rf"## *(?P<text>{TEXT}) *")
BULLET_RE = re.compile(rf" *- *(?P<text>{TEXT}) *")


@dataclass(frozen=True, slots=True)
class ParsedNote:
    category: Category
    text: str


def iter_notes(
    lines: Iterable[str],
    console: ConsoleProtocol | None = None,
) -> Iterator[Result[ParsedNote, NotesError]]:
    """Lazily parse lines into notes.

    Yields Ok(ParsedNote) per bullet. On an unknown heading or a bullet that
    precedes every heading, yields a single Err and stops.
    """
    category: Category | None = None

    for raw in lines:
        line = raw.rstrip("\r\n")
        if console is not None:
            console.debug(f"read line: {line}")

        if m := HEADING_RE.fullmatch(line):
            heading = m["text"]
            if heading.lower() == SUMMARY_SECTION:
                continue
            match category_by_display_name(heading):
                case Ok(found):
                    category = found
                case Err(error):
                    yield Err(error)
                    return
            continue

        if m := BULLET_RE.fullmatch(line):
            text = m["text"]
            if category is None:
                yield Err(
                    NotesError(
                        kind="missing_category",
                        message=f"release note before any category heading: {text!r}",
                        hint="add a '## <Category>' heading above the first bullet",
                    )
                )
                return
            yield Ok(ParsedNote(category=category, text=text))


def parse_notes(
    lines: Iterable[str],
    console: ConsoleProtocol | None = None,
) -> Result[list[ParsedNote], NotesError]:
    """Parse every line; fail on the first error without partial results."""
    notes: list[ParsedNote] = []
    for result in iter_notes(lines, console):
        if isinstance(result, Err):
            return result
        notes.append(result.value)
    return Ok(notes)
