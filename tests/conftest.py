from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from covgate.render.annotations import Annotator

LinesSpec = Sequence[int | None]

_ENV_NAMES = (
    "MINIMUM_SUITE_COVERAGE",
    "MINIMUM_FILE_COVERAGE",
    "COVERAGE_PATH",
    "DEBUG_MODE",
    "ON_FAIL_STATUS",
    "POST_COMMENT",
    "UPDATE_COMMENT",
    "GITHUB_TOKEN",
)
_GITHUB_NAMES = (
    "GITHUB_STEP_SUMMARY",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a CI runner's own variables out of the tests."""
    for name in (*_ENV_NAMES, *_GITHUB_NAMES):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"INPUT_{name}", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


class RecordingAnnotator(Annotator):
    def __init__(self, *, debug: bool = False) -> None:
        self.lines: list[str] = []
        super().__init__(self.lines.append, debug=debug)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def annotator() -> RecordingAnnotator:
    return RecordingAnnotator()


@pytest.fixture
def resultset_content() -> Callable[..., dict[str, Any]]:
    def build(mapping: Mapping[str, LinesSpec], *, key: str = "RSpec") -> dict[str, Any]:
        coverage = {path: {"lines": list(lines)} for path, lines in mapping.items()}
        return {key: {"coverage": coverage, "timestamp": 1700000000}}

    return build


@pytest.fixture
def resultset_file(
    tmp_path: Path,
    resultset_content: Callable[..., dict[str, Any]],
) -> Callable[..., Path]:
    def write(
        mapping: Mapping[str, LinesSpec] | None = None,
        *,
        raw: object = None,
        filename: str = "coverage/.resultset.json",
    ) -> Path:
        data = raw if raw is not None else resultset_content(mapping or {})
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return write


@pytest.fixture
def pull_request_env(tmp_path: Path) -> dict[str, str]:
    """Environment of a workflow triggered by pull request #7 of octo/repo."""
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"action": "opened", "pull_request": {"number": 7}}), encoding="utf-8")
    return {
        "GITHUB_EVENT_PATH": str(event),
        "GITHUB_REPOSITORY": "octo/repo",
        "GITHUB_API_URL": "https://api.example.test",
    }
