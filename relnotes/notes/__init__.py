"""Release-note merging and building."""

from .builder import NoteBuilder, ReleaseNoteEntry
from .errors import NotesError
from .merger import MergedEntry, NoteMerger
from .provider import PullRequestProvider, RepoSlug
from .taxonomy import Category, Edition, Repository

__all__ = [
    "Category",
    "Edition",
    "MergedEntry",
    "NoteBuilder",
    "NoteMerger",
    "NotesError",
    "PullRequestProvider",
    "ReleaseNoteEntry",
    "RepoSlug",
    "Repository",
]
