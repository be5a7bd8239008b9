"""Reporting results back to GitHub pull requests."""

from covgate.github.comment import CommentOutcome, CommentStatus, publish_comment
from covgate.github.context import PullRequestContext, resolve_pull_request

__all__ = ["CommentOutcome", "CommentStatus", "PullRequestContext", "publish_comment", "resolve_pull_request"]
