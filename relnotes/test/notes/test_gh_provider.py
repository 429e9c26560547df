from __future__ import annotations

import json
from pathlib import Path

import pytest

from relnotes.core.config import GhConfig
from relnotes.core.result import Err, Ok, Result
from relnotes.notes import gh as gh_mod
from relnotes.notes.gh import GhProvider, ensure_gh_available
from relnotes.notes.provider import RepoSlug
from relnotes.platform.process import ProcessError

REPO = RepoSlug(owner="scalar-labs", name="scalardb")


def _err(*, stderr: str, returncode: int = 1) -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=("gh", "pr", "view"),
            returncode=returncode,
            stdout="",
            stderr=stderr,
        )
    )


class FakeGh:
    def __init__(self, *responses: Result[str, ProcessError]) -> None:
        self.responses = list(responses)
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        del cwd
        self.calls.append(cmd)
        return self.responses.pop(0)


def _provider(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    *responses: Result[str, ProcessError],
    config: GhConfig | None = None,
) -> tuple[GhProvider, FakeGh]:
    fake = FakeGh(*responses)
    monkeypatch.setattr(gh_mod, "run_process", fake)
    return GhProvider(cwd=tmp_path, config=config), fake


def test_resolve_project_matches_prefix_and_version(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    payload = {
        "projects": [
            {"number": 3, "title": "ScalarDB 3.12.0"},
            {"number": 5, "title": "ScalarDL 4.0.0"},
            {"number": 8, "title": "ScalarDB 4.0.0"},
        ],
        "totalCount": 3,
    }
    provider, fake = _provider(monkeypatch, tmp_path, Ok(json.dumps(payload)))

    assert provider.resolve_project("scalar-labs", "ScalarDB", "4.0.0") == Ok("8")
    assert fake.calls == [["gh", "project", "list", "--owner", "scalar-labs", "--format", "json"]]


def test_resolve_project_not_found(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    provider, _ = _provider(monkeypatch, tmp_path, Ok('{"projects": []}'))

    result = provider.resolve_project("scalar-labs", "ScalarDB", "4.0.0")
    assert isinstance(result, Err)
    assert result.error.kind == "project_not_found"


def test_list_pull_requests_filters_repository(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    payload = {
        "items": [
            {
                "content": {
                    "type": "PullRequest",
                    "number": 12,
                    "repository": "scalar-labs/scalardb",
                }
            },
            {"content": {"type": "Issue", "number": 13, "repository": "scalar-labs/scalardb"}},
            {
                "content": {
                    "type": "PullRequest",
                    "number": 14,
                    "repository": "scalar-labs/scalardl",
                }
            },
            {"content": {"type": "DraftIssue", "title": "todo"}},
            {
                "content": {
                    "type": "PullRequest",
                    "number": 10,
                    "repository": "scalar-labs/scalardb",
                }
            },
        ]
    }
    provider, fake = _provider(
        monkeypatch, tmp_path, Ok(json.dumps(payload)), config=GhConfig(item_limit=50)
    )

    assert provider.list_pull_requests("8", REPO) == Ok(["12", "10"])
    assert fake.calls[0] == [
        "gh",
        "project",
        "item-list",
        "8",
        "--owner",
        "scalar-labs",
        "--limit",
        "50",
        "--format",
        "json",
    ]


def test_list_pull_requests_missing_items(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    provider, _ = _provider(monkeypatch, tmp_path, Ok("{}"))

    result = provider.list_pull_requests("8", REPO)
    assert isinstance(result, Err)
    assert result.error.kind == "provider_error"


@pytest.mark.parametrize(
    ("state", "merged"), [("MERGED", True), ("OPEN", False), ("CLOSED", False)]
)
def test_is_merged(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, state: str, merged: bool
) -> None:
    provider, fake = _provider(monkeypatch, tmp_path, Ok(json.dumps({"state": state})))

    assert provider.is_merged(REPO, "12") == Ok(merged)
    assert fake.calls[0] == [
        "gh",
        "pr",
        "view",
        "12",
        "--repo",
        "scalar-labs/scalardb",
        "--json",
        "state",
    ]


def test_labels(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    payload = {"labels": [{"id": "x", "name": "bugfix"}, {"name": "java"}, {"id": "y"}]}
    provider, _ = _provider(monkeypatch, tmp_path, Ok(json.dumps(payload)))

    assert provider.labels(REPO, "12") == Ok(["bugfix", "java"])


def test_labels_empty(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    provider, _ = _provider(monkeypatch, tmp_path, Ok('{"labels": []}'))

    assert provider.labels(REPO, "12") == Ok([])


def test_body_keeps_text(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    body = "## Description\r\nfoo\r\n\r\n## Release notes\r\n- Did X\r\n"
    provider, _ = _provider(monkeypatch, tmp_path, Ok(json.dumps({"body": body})))

    assert provider.body(REPO, "12") == Ok(body)


def test_empty_body_is_not_an_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    provider, _ = _provider(monkeypatch, tmp_path, Ok('{"body": ""}'))

    assert provider.body(REPO, "12") == Ok("")


def test_gh_failure_is_provider_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    provider, _ = _provider(
        monkeypatch, tmp_path, _err(stderr="GraphQL: Could not resolve to a PullRequest")
    )

    result = provider.is_merged(REPO, "999")
    assert isinstance(result, Err)
    assert result.error.kind == "provider_error"
    assert result.error.hint == "GraphQL: Could not resolve to a PullRequest"


def test_invalid_json_is_provider_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    provider, _ = _provider(monkeypatch, tmp_path, Ok("not json"))

    result = provider.labels(REPO, "12")
    assert isinstance(result, Err)
    assert "invalid JSON" in result.error.message


def test_configured_executable(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    provider, fake = _provider(
        monkeypatch,
        tmp_path,
        Ok('{"state": "MERGED"}'),
        config=GhConfig(executable="/opt/gh/bin/gh"),
    )

    provider.is_merged(REPO, "1")
    assert fake.calls[0][0] == "/opt/gh/bin/gh"


def test_ensure_gh_available_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gh_mod.shutil, "which", lambda name: None)

    result = ensure_gh_available()
    assert isinstance(result, Err)
    assert result.error.kind == "gh_missing"


def test_ensure_gh_available_present(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gh_mod.shutil, "which", lambda name: f"/usr/bin/{name}")

    assert ensure_gh_available() == Ok(None)
