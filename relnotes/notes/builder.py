"""Build a repository's release note from the PRs on a project board.

Each merged pull request may carry a section in its description:

    ## Release notes
    - Added support for foo.

The section ends at the next `##` heading. Its last text line is the note.
A PR that duplicates another one declares `Same as #123` instead; its PR
number (and any text it has) is folded into #123's note. A section reading
`N/A` marks the PR as not user-facing.

The category comes from the PR labels (enhancement, improvement, bugfix,
documentation, miscellaneous).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.parser import TEXT
from relnotes.notes.provider import PullRequestProvider, RepoSlug
from relnotes.notes.taxonomy import Category, category_from_labels
from relnotes.output.console import ConsoleProtocol

__all__ = ["NoteBuilder", "ReleaseNoteEntry"]

RELEASE_NOTES_HEADING_RE = re.compile(r"## *release *notes? *", re.IGNORECASE)
SECTION_PREFIX = "##"
NOT_APPLICABLE_RE = re.compile(r" *-? *N/?A *", re.IGNORECASE)
SAME_AS_RE = re.compile(r" *-? *[Ss]ame ?[Aa]s +#?(?P<number>[0-9]+) *")
TEXT_LINE_RE = re.compile(rf" *-? *(?P<text>{TEXT}) *")


def _empty_numbers() -> list[str]:
    return []


@dataclass(slots=True)
class ReleaseNoteEntry:
    category: Category
    text: str | None = None
    pr_numbers: list[str] = field(default_factory=_empty_numbers)

    @property
    def owner(self) -> str:
        """The PR this note was written in."""
        return self.pr_numbers[0]

    def absorb(self, other: ReleaseNoteEntry) -> None:
        if other.text:
            self.text = f"{self.text} {other.text}" if self.text else other.text
        self.pr_numbers.extend(other.pr_numbers)

    def render(self) -> str:
        refs = " ".join(f"#{n}" for n in self.pr_numbers)
        return f"- {self.text} ({refs})"


class NoteBuilder:
    """Collects release notes of one repository.

    Entries live in a single list; the category and same-as indices refer to
    them by position, so merging always mutates exactly one target.
    """

    def __init__(
        self,
        provider: PullRequestProvider,
        repo: RepoSlug,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._provider = provider
        self._repo = repo
        self._console = console
        self._entries: list[ReleaseNoteEntry] = []
        self._by_category: dict[Category, list[int]] = {}
        self._same_as: dict[str, list[int]] = {}
        self._resolved = False

    def _debug(self, message: str) -> None:
        if self._console is not None:
            self._console.debug(message)

    def _warn(self, message: str) -> None:
        if self._console is not None:
            self._console.warning(message)

    def run(self, title_prefix: str, version: str) -> Result[str, NotesError]:
        """Scan the project board for `version` and render the release note."""
        project = self._provider.resolve_project(self._repo.owner, title_prefix, version)
        if isinstance(project, Err):
            return project
        self._debug(f"project: {project.value}")

        numbers = self._provider.list_pull_requests(project.value, self._repo)
        if isinstance(numbers, Err):
            return numbers

        for pr_number in dict.fromkeys(numbers.value):
            extracted = self.extract(pr_number)
            if isinstance(extracted, Err):
                return extracted

        self.resolve_cross_references()
        return Ok(self.output())

    def extract(self, pr_number: str) -> Result[None, NotesError]:
        """Read the release-notes section of one PR into the builder."""
        merged = self._provider.is_merged(self._repo, pr_number)
        if isinstance(merged, Err):
            return merged
        if not merged.value:
            self._debug(f"#{pr_number}: not merged, skipped")
            return Ok(None)

        labels = self._provider.labels(self._repo, pr_number)
        if isinstance(labels, Err):
            return labels
        category = category_from_labels(labels.value)

        body = self._provider.body(self._repo, pr_number)
        if isinstance(body, Err):
            return body

        lines = iter(body.value.splitlines())
        for line in lines:
            if RELEASE_NOTES_HEADING_RE.fullmatch(line):
                break
        else:
            self._debug(f"#{pr_number}: no release notes section")
            return Ok(None)

        entry = ReleaseNoteEntry(category=category, pr_numbers=[pr_number])
        referenced: list[str] = []
        for line in lines:
            if line.startswith(SECTION_PREFIX):
                break
            if NOT_APPLICABLE_RE.fullmatch(line):
                self._debug(f"#{pr_number}: not user-facing")
                return Ok(None)
            if m := SAME_AS_RE.fullmatch(line):
                self._debug(f"#{pr_number}: same as #{m['number']}")
                referenced.append(m["number"])
                continue
            if m := TEXT_LINE_RE.fullmatch(line):
                entry.text = m["text"]

        self._add(entry, referenced)
        return Ok(None)

    def _add(self, entry: ReleaseNoteEntry, referenced: list[str]) -> None:
        index = len(self._entries)
        self._entries.append(entry)
        if referenced:
            for number in referenced:
                self._same_as.setdefault(number, []).append(index)
            return
        self._by_category.setdefault(entry.category, []).append(index)

    def resolve_cross_references(self) -> None:
        """Fold every "same as" entry into the entry of the PR it references.

        Entries still without text afterwards are dropped with a warning.
        """
        if self._resolved:
            return
        self._resolved = True

        owners = {
            self._entries[i].owner: i for indices in self._by_category.values() for i in indices
        }
        for number, referrers in self._same_as.items():
            target = owners.get(number)
            if target is None:
                refs = ", ".join(f"#{self._entries[i].owner}" for i in referrers)
                self._warn(f"#{number} has no release note; dropping notes of {refs}")
                continue
            for i in referrers:
                self._entries[target].absorb(self._entries[i])
                self._debug(f"merged #{self._entries[i].owner} into #{number}")

        for category, indices in self._by_category.items():
            kept: list[int] = []
            for i in indices:
                if self._entries[i].text:
                    kept.append(i)
                else:
                    self._warn(f"#{self._entries[i].owner}: empty release notes section, skipped")
            self._by_category[category] = kept

    def entries(self, category: Category) -> list[ReleaseNoteEntry]:
        return [self._entries[i] for i in self._by_category.get(category, ())]

    def output(self) -> str:
        self.resolve_cross_references()
        lines = ["## Summary", ""]
        for category in Category:
            entries = self.entries(category)
            if not entries:
                continue

            lines.append(f"## {category.display_name}")
            lines.extend(entry.render() for entry in entries)
            lines.append("")
        return "\n".join(lines) + "\n"
