"""Edition, category and repository taxonomy shared by both pipelines.

Member order is significant: the generated documents list editions,
categories and repositories in declaration order.
"""

from __future__ import annotations

from enum import Enum

from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError

__all__ = [
    "Category",
    "Edition",
    "Repository",
    "category_by_display_name",
    "category_by_name",
    "category_from_labels",
]


class Edition(Enum):
    COMMUNITY = "Community"
    ENTERPRISE = "Enterprise"

    @property
    def display_name(self) -> str:
        return self.value


class Category(Enum):
    """Classification bucket of a change.

    The value is the heading text used in release-note documents; the
    lowercased member name is the pull-request label that selects it.
    """

    ENHANCEMENT = "Enhancements"
    IMPROVEMENT = "Improvements"
    BUGFIX = "Bug fixes"
    DOCUMENTATION = "Documentation"
    MISCELLANEOUS = "Miscellaneous"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name.lower()


class Repository(Enum):
    DB = "ScalarDB"
    CLUSTER = "ScalarDB Cluster"
    GRAPHQL = "ScalarDB GraphQL"
    SQL = "ScalarDB SQL"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_primary(self) -> bool:
        """The primary repository's notes are listed without a sub-heading."""
        return self is Repository.DB


_CATEGORIES_BY_DISPLAY_NAME = {c.display_name: c for c in Category}
_CATEGORIES_BY_LABEL = {c.label: c for c in Category}


def category_by_display_name(display_name: str) -> Result[Category, NotesError]:
    """Look up a category by its exact heading text (e.g. "Bug fixes")."""
    category = _CATEGORIES_BY_DISPLAY_NAME.get(display_name)
    if category is None:
        return Err(
            NotesError(
                kind="unknown_category",
                message=f"unknown category heading: {display_name!r}",
                hint=f"expected one of: {', '.join(_CATEGORIES_BY_DISPLAY_NAME)}",
            )
        )
    return Ok(category)


def category_by_name(name: str) -> Result[Category, NotesError]:
    """Look up a category by identity name, ignoring case (e.g. "bugfix")."""
    category = _CATEGORIES_BY_LABEL.get(name.strip().lower())
    if category is None:
        return Err(
            NotesError(
                kind="unknown_category",
                message=f"unknown category name: {name!r}",
                hint=f"expected one of: {', '.join(_CATEGORIES_BY_LABEL)}",
            )
        )
    return Ok(category)


def category_from_labels(labels: list[str]) -> Category:
    """Return the category of the first label naming one, else Miscellaneous."""
    for label in labels:
        match category_by_name(label):
            case Ok(category):
                return category
            case Err(_):
                continue
    return Category.MISCELLANEOUS
