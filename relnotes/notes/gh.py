from __future__ import annotations

import json
import shutil
from pathlib import Path

from relnotes.core.config import GhConfig
from relnotes.core.result import Err, Ok, Result
from relnotes.core.structured import as_obj_list, as_str_dict, get_list, get_str, get_table
from relnotes.notes.errors import NotesError, NotesErrorKind
from relnotes.notes.provider import RepoSlug
from relnotes.output.console import ConsoleProtocol
from relnotes.platform.process import run as run_process

__all__ = ["GhProvider", "ensure_gh_available"]

MERGED_STATE = "merged"
PULL_REQUEST_ITEM = "PullRequest"


def ensure_gh_available(executable: str = "gh") -> Result[None, NotesError]:
    if shutil.which(executable) is None:
        return Err(
            NotesError(
                kind="gh_missing",
                message=f"{executable}: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


class GhProvider:
    """PullRequestProvider backed by the gh CLI in JSON mode."""

    def __init__(
        self,
        *,
        cwd: Path,
        config: GhConfig | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._cwd = cwd
        self._config = config or GhConfig()
        self._console = console

    def _gh_json(
        self,
        args: list[str],
        *,
        message: str,
        kind: NotesErrorKind = "provider_error",
    ) -> Result[dict[str, object], NotesError]:
        cmd = [self._config.executable, *args]
        if self._console is not None:
            self._console.debug(f"executing: {' '.join(cmd)}")

        result = run_process(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            error = result.error
            return Err(
                NotesError(kind=kind, message=message, hint=error.stderr.strip() or str(error))
            )

        try:
            obj: object = json.loads(result.value)
        except json.JSONDecodeError as e:
            return Err(
                NotesError(
                    kind="provider_error",
                    message=f"{message}: invalid JSON from gh: {e}",
                    hint=" ".join(args),
                )
            )

        data = as_str_dict(obj)
        if data is None:
            return Err(
                NotesError(
                    kind="provider_error",
                    message=f"{message}: unexpected payload from gh",
                    hint=" ".join(args),
                )
            )
        return Ok(data)

    def resolve_project(
        self, owner: str, title_prefix: str, version: str
    ) -> Result[str, NotesError]:
        data = self._gh_json(
            ["project", "list", "--owner", owner, "--format", "json"],
            message=f"failed to list projects of {owner}",
        )
        if isinstance(data, Err):
            return data

        for item in get_list(data.value, "projects") or []:
            project = as_str_dict(item)
            if project is None:
                continue
            title = get_str(project, "title") or ""
            number = project.get("number")
            if title_prefix in title and version in title and isinstance(number, int):
                return Ok(str(number))

        return Err(
            NotesError(
                kind="project_not_found",
                message=f"no project of {owner} titled like '{title_prefix} ... {version}'",
                hint=f"gh project list --owner {owner}",
            )
        )

    def list_pull_requests(self, project_id: str, repo: RepoSlug) -> Result[list[str], NotesError]:
        data = self._gh_json(
            [
                "project",
                "item-list",
                project_id,
                "--owner",
                repo.owner,
                "--limit",
                str(self._config.item_limit),
                "--format",
                "json",
            ],
            message=f"failed to list items of project {project_id}",
        )
        if isinstance(data, Err):
            return data

        items = get_list(data.value, "items")
        if items is None:
            return Err(
                NotesError(
                    kind="provider_error",
                    message=f"missing items in project {project_id} payload",
                )
            )

        numbers: list[str] = []
        for item in items:
            d = as_str_dict(item)
            if d is None:
                continue
            content = get_table(d, "content")
            if content is None or get_str(content, "type") != PULL_REQUEST_ITEM:
                continue
            if get_str(content, "repository") not in (str(repo), repo.name):
                continue
            number = content.get("number")
            if isinstance(number, int):
                numbers.append(str(number))
        return Ok(numbers)

    def _pr_view(
        self, repo: RepoSlug, pr_number: str, field: str
    ) -> Result[dict[str, object], NotesError]:
        return self._gh_json(
            ["pr", "view", pr_number, "--repo", str(repo), "--json", field],
            message=f"failed to read {field} of {repo}#{pr_number}",
        )

    def is_merged(self, repo: RepoSlug, pr_number: str) -> Result[bool, NotesError]:
        data = self._pr_view(repo, pr_number, "state")
        if isinstance(data, Err):
            return data

        state = get_str(data.value, "state")
        if state is None:
            return Err(
                NotesError(kind="provider_error", message=f"missing state of {repo}#{pr_number}")
            )
        return Ok(state.lower() == MERGED_STATE)

    def labels(self, repo: RepoSlug, pr_number: str) -> Result[list[str], NotesError]:
        data = self._pr_view(repo, pr_number, "labels")
        if isinstance(data, Err):
            return data

        names: list[str] = []
        for item in as_obj_list(data.value.get("labels")) or []:
            label = as_str_dict(item)
            if label is None:
                continue
            name = get_str(label, "name")
            if name is not None:
                names.append(name)
        return Ok(names)

    def body(self, repo: RepoSlug, pr_number: str) -> Result[str, NotesError]:
        data = self._pr_view(repo, pr_number, "body")
        if isinstance(data, Err):
            return data

        body = data.value.get("body")
        if not isinstance(body, str):
            return Err(
                NotesError(kind="provider_error", message=f"missing body of {repo}#{pr_number}")
            )
        return Ok(body)
