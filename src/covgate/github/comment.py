"""Create or update the coverage comment on a pull request.

:func:`publish_comment` never raises for remote problems: every outcome,
including failures, comes back as a :class:`CommentOutcome` for the caller to
report.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import httpx

from covgate._meta import logger
from covgate.core.config import COMMENT_MARKER
from covgate.errors import RemoteReportError
from covgate.github.context import resolve_pull_request

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from covgate.github.context import PullRequestContext


class CommentStatus(StrEnum):
    POSTED = "posted"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CommentOutcome:
    status: CommentStatus
    message: str
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not CommentStatus.FAILED


def _headers(token: str) -> dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def _check(response: httpx.Response, action: str) -> httpx.Response:
    if not response.is_success:
        msg = f"Failed to {action}. Response: {response.status_code} {response.reason_phrase}"
        raise RemoteReportError(msg)
    return response


def _comment_pages(client: httpx.Client, pr: PullRequestContext, *, token: str) -> Iterator[list[dict[str, Any]]]:
    url: str | None = pr.comments_url
    params: dict[str, Any] | None = {"per_page": 100}
    while url:
        response = _check(client.get(url, params=params, headers=_headers(token)), "list PR comments")
        page = response.json()
        if not isinstance(page, list) or not all(isinstance(item, dict) for item in page):
            msg = "Failed to list PR comments. Response was not a list of comments"
            raise RemoteReportError(msg)
        yield page
        # The next link already carries the query string.
        url = response.links.get("next", {}).get("url")
        params = None


def find_previous_comment(client: httpx.Client, pr: PullRequestContext, *, token: str) -> int | None:
    """Return the id of the newest comment carrying the report marker, across all pages."""
    found: int | None = None
    for page in _comment_pages(client, pr, token=token):
        for comment in page:
            if COMMENT_MARKER in str(comment.get("body") or ""):
                found = int(comment["id"])
    return found


def _submit(client: httpx.Client, pr: PullRequestContext, body: str, *, token: str, update: bool) -> CommentStatus:
    headers = _headers(token)
    existing = find_previous_comment(client, pr, token=token) if update else None
    if existing is not None:
        logger.debug("updating comment %d on PR #%d", existing, pr.number)
        _check(client.patch(pr.comment_url(existing), json={"body": body}, headers=headers), "update comment on PR")
        return CommentStatus.UPDATED

    logger.debug("posting comment to PR #%d in %s", pr.number, pr.repository)
    _check(client.post(pr.comments_url, json={"body": body}, headers=headers), "post comment to PR")
    return CommentStatus.POSTED


def publish_comment(
    body: str,
    *,
    token: str,
    environ: Mapping[str, str],
    update: bool = False,
    client: httpx.Client | None = None,
) -> CommentOutcome:
    """Publish *body* on the pull request described by *environ*."""
    try:
        pr = resolve_pull_request(environ)
        if pr is None:
            return CommentOutcome(CommentStatus.SKIPPED, "Not a pull request - skipping comment")

        owns_client = client is None
        http = client or httpx.Client()
        try:
            status = _submit(http, pr, body, token=token, update=update)
        finally:
            if owns_client:
                http.close()
    except RemoteReportError as exc:
        return CommentOutcome(CommentStatus.FAILED, str(exc))
    except httpx.HTTPError as exc:
        return CommentOutcome(CommentStatus.FAILED, f"Error posting comment to PR: {exc}", detail=repr(exc))
    except (ValueError, KeyError, TypeError) as exc:
        # Unexpected response payload while looking for the previous comment.
        return CommentOutcome(CommentStatus.FAILED, f"Error posting comment to PR: {exc}", detail=repr(exc))

    verb = "updated the coverage comment" if status is CommentStatus.UPDATED else "posted coverage results as a comment"
    return CommentOutcome(status, f"Successfully {verb} on PR #{pr.number}")


__all__ = ["CommentOutcome", "CommentStatus", "find_previous_comment", "publish_comment"]
