"""Pull-request metadata consumed by the release-note builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from relnotes.core.result import Result
from relnotes.notes.errors import NotesError

__all__ = ["PullRequestProvider", "RepoSlug"]


@dataclass(frozen=True, slots=True)
class RepoSlug:
    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class PullRequestProvider(Protocol):
    """Read-only queries against a project board and its pull requests.

    Every call is an independent snapshot; callers neither cache nor retry.
    PR numbers are passed around as strings, exactly as they appear in
    "#<number>" references.
    """

    def resolve_project(
        self, owner: str, title_prefix: str, version: str
    ) -> Result[str, NotesError]:
        """Return the identifier of the project whose title matches prefix and version."""
        ...

    def list_pull_requests(self, project_id: str, repo: RepoSlug) -> Result[list[str], NotesError]:
        """Return the numbers of the repo's pull requests on the project, in board order."""
        ...

    def is_merged(self, repo: RepoSlug, pr_number: str) -> Result[bool, NotesError]: ...

    def labels(self, repo: RepoSlug, pr_number: str) -> Result[list[str], NotesError]: ...

    def body(self, repo: RepoSlug, pr_number: str) -> Result[str, NotesError]: ...
