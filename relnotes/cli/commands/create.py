from __future__ import annotations

import typer

from relnotes.cli.commands._helpers import unwrap_or_exit
from relnotes.cli.context import build_context
from relnotes.notes.builder import NoteBuilder
from relnotes.notes.gh import GhProvider, ensure_gh_available
from relnotes.notes.provider import RepoSlug


def create(
    owner: str = typer.Argument(..., help="GitHub organization, e.g. scalar-labs."),
    project_title_prefix: str = typer.Argument(..., help="Project title prefix, e.g. ScalarDB."),
    version: str = typer.Argument(..., help="Release version in the project title, e.g. 4.0.0."),
    repository: str = typer.Argument(..., help="Repository name, e.g. scalardb."),
) -> None:
    """Build a repository's release note from the PRs on its release project."""
    ctx = build_context()
    unwrap_or_exit(ensure_gh_available(ctx.config.gh.executable), ctx)

    provider = GhProvider(cwd=ctx.cwd, config=ctx.config.gh, console=ctx.console)
    builder = NoteBuilder(provider, RepoSlug(owner=owner, name=repository), console=ctx.console)
    document = unwrap_or_exit(builder.run(project_title_prefix, version), ctx)

    typer.echo(document, nl=False)
