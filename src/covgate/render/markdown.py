"""Markdown documents for the step summary and the pull-request comment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate.core.config import COMMENT_MARKER
from covgate.core.model.metrics import format_pct
from covgate.render.table import format_table

if TYPE_CHECKING:
    from covgate.core.model.thresholds import EvaluationResult

TITLE = "SimpleCov Coverage Results"
PASS_MARK = "✅"
FAIL_MARK = "❌"


def _status(passed: bool) -> str:  # noqa: FBT001
    return PASS_MARK if passed else FAIL_MARK


def _totals_table(result: EvaluationResult) -> str:
    return format_table(
        ["Metric", "Expected", "Actual", "Status"],
        [
            [
                "Total Coverage",
                format_pct(result.minimum_suite_coverage),
                format_pct(result.total_coverage),
                _status(result.suite_passed),
            ]
        ],
    )


def _failing_table(result: EvaluationResult) -> str:
    expected = format_pct(result.minimum_file_coverage)
    rows = [
        [unit.name, expected, format_pct(unit.coverage_percent), format_pct(unit.deficit)]
        for unit in result.failing_files
    ]
    return format_table(["File", "Expected", "Actual", "Missing"], rows)


def _files_section(result: EvaluationResult, *, heading: str) -> list[str]:
    if result.failing_files:
        return ["", f"{heading} Files Below Minimum Coverage", "", _failing_table(result)]
    return [
        "",
        f"{PASS_MARK} All files meet the minimum coverage requirement of {format_pct(result.minimum_file_coverage)}",
    ]


def render_summary(result: EvaluationResult) -> str:
    """Render the job step summary."""
    parts = [f"## {TITLE}", "", _totals_table(result), *_files_section(result, heading="##")]
    return "\n".join(parts) + "\n"


def render_comment(result: EvaluationResult) -> str:
    """Render the pull-request comment body, including the hidden marker used to find it again."""
    banner = (
        f"{PASS_MARK} **Coverage check passed successfully!**"
        if result.passed
        else f"{FAIL_MARK} **Coverage check failed!**"
    )
    parts = [
        COMMENT_MARKER,
        f"## {TITLE}",
        banner,
        "",
        _totals_table(result),
        *_files_section(result, heading="###"),
    ]
    return "\n".join(parts) + "\n"


__all__ = ["render_comment", "render_summary"]
