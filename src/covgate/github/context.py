"""Pull-request context taken from the Actions event payload."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from covgate.core.config import DEFAULT_API_URL
from covgate.errors import RemoteReportError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class PullRequestContext:
    repository: str
    number: int
    api_url: str = DEFAULT_API_URL

    @property
    def comments_url(self) -> str:
        return f"{self.api_url}/repos/{self.repository}/issues/{self.number}/comments"

    def comment_url(self, comment_id: int) -> str:
        return f"{self.api_url}/repos/{self.repository}/issues/comments/{comment_id}"


def resolve_pull_request(environ: Mapping[str, str]) -> PullRequestContext | None:
    """Return the pull request the workflow runs for, or ``None`` for other events.

    Raises :class:`RemoteReportError` when the event payload is missing or
    does not identify the pull request and repository.
    """
    event_path = environ.get("GITHUB_EVENT_PATH")
    if not event_path or not Path(event_path).is_file():
        msg = "Could not find GITHUB_EVENT_PATH or file does not exist"
        raise RemoteReportError(msg)

    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Could not read event payload at {event_path}: {exc}"
        raise RemoteReportError(msg) from exc

    pull_request = event.get("pull_request") if isinstance(event, dict) else None
    if not pull_request:
        return None

    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    repository = environ.get("GITHUB_REPOSITORY")
    if not isinstance(number, int) or isinstance(number, bool) or not repository:
        msg = "Could not determine PR number or repository from event data"
        raise RemoteReportError(msg)

    api_url = (environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
    return PullRequestContext(repository=repository, number=number, api_url=api_url)


__all__ = ["PullRequestContext", "resolve_pull_request"]
