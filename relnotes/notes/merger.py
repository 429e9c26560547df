"""Merge per-repository release notes into one document.

Each input fragment belongs to one (edition, repository) pair, derived from
its file name. Notes are grouped by edition, then category, then repository,
and rendered in taxonomy order:

    ## Summary

    ## Community edition
    ### Enhancements
    - Added foo

    ## Enterprise edition
    ### Enhancements
    #### ScalarDB Cluster
    - Added bar

Enterprise fragments are generated with trailing PR references such as
"(#12 #13)", which point into private repositories; they are removed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.parser import parse_notes
from relnotes.notes.taxonomy import Category, Edition, Repository
from relnotes.output.console import ConsoleProtocol

__all__ = [
    "FILE_SOURCES",
    "MergedEntry",
    "NoteMerger",
    "source_for_file",
    "strip_pr_references",
]

FILE_SOURCES: dict[str, tuple[Edition, Repository]] = {
    "scalardb.md": (Edition.COMMUNITY, Repository.DB),
    "cluster.md": (Edition.ENTERPRISE, Repository.CLUSTER),
    "graphql.md": (Edition.ENTERPRISE, Repository.GRAPHQL),
    "sql.md": (Edition.ENTERPRISE, Repository.SQL),
}

_PR_REFERENCES_SUFFIX_RE = re.compile(r"(?P<body>.+?) +\((?:#[0-9]+ *)+\)")

IndexKey = tuple[Edition, Category, Repository]


@dataclass(frozen=True, slots=True)
class MergedEntry:
    edition: Edition
    category: Category
    repository: Repository
    text: str


def source_for_file(path: Path) -> Result[tuple[Edition, Repository], NotesError]:
    """Map a fragment file name (e.g. cluster.md) to its edition and repository."""
    source = FILE_SOURCES.get(path.name)
    if source is None:
        return Err(
            NotesError(
                kind="unknown_file",
                message=f"unknown file name: {path.name}",
                hint=f"expected one of: {', '.join(FILE_SOURCES)}",
            )
        )
    return Ok(source)


def strip_pr_references(text: str) -> str:
    """Drop a trailing "(#12 #34)" parenthetical; anything else is left as is."""
    if m := _PR_REFERENCES_SUFFIX_RE.fullmatch(text):
        return m["body"]
    return text


class NoteMerger:
    """Accumulates fragments and renders the merged release note."""

    def __init__(self, console: ConsoleProtocol | None = None) -> None:
        self._console = console
        self._index: dict[IndexKey, list[MergedEntry]] = {}

    def load(
        self,
        edition: Edition,
        repository: Repository,
        lines: Iterable[str],
    ) -> Result[int, NotesError]:
        """Parse one fragment and add its notes to the index.

        Returns the number of notes added. A fragment that fails to parse
        adds nothing.
        """
        parsed = parse_notes(lines, self._console)
        if isinstance(parsed, Err):
            return parsed

        for note in parsed.value:
            text = note.text
            if edition is Edition.ENTERPRISE:
                text = strip_pr_references(text)
                if self._console is not None and text != note.text:
                    self._console.debug(f"stripped PR references: {note.text!r} -> {text!r}")

            entry = MergedEntry(
                edition=edition,
                category=note.category,
                repository=repository,
                text=text,
            )
            self._index.setdefault((edition, entry.category, repository), []).append(entry)

        return Ok(len(parsed.value))

    def load_file(self, path: Path) -> Result[int, NotesError]:
        source = source_for_file(path)
        if isinstance(source, Err):
            return source
        edition, repository = source.value

        try:
            with path.open(encoding="utf-8") as f:
                return self.load(edition, repository, f)
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                NotesError(
                    kind="io_error",
                    message=f"failed to read {path}: {e}",
                    hint=str(path),
                )
            )

    def entries(
        self,
        edition: Edition,
        category: Category,
        repository: Repository,
    ) -> list[MergedEntry]:
        return list(self._index.get((edition, category, repository), ()))

    def _has_entries(self, edition: Edition, category: Category | None = None) -> bool:
        return any(
            key[0] is edition and (category is None or key[1] is category)
            for key, entries in self._index.items()
            if entries
        )

    def output(self) -> str:
        """Render the merged document (deterministic for the same loads)."""
        parts: list[str] = ["## Summary\n\n"]

        for edition in Edition:
            if not self._has_entries(edition):
                continue

            parts.append(f"## {edition.display_name} edition\n")
            for category in Category:
                if not self._has_entries(edition, category):
                    continue

                parts.append(f"### {category.display_name}\n")
                for repository in Repository:
                    entries = self._index.get((edition, category, repository))
                    if not entries:
                        continue
                    if not repository.is_primary:
                        parts.append(f"#### {repository.display_name}\n")
                    parts.extend(f"- {entry.text}\n" for entry in entries)
            parts.append("\n")

        return "".join(parts)
