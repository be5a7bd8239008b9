"""The coverage gate: load, aggregate, evaluate and report.

Nothing in here exits the process. :func:`run_gate` returns a
:class:`PipelineResult`; the CLI turns its status into an exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from covgate._meta import logger
from covgate.core.aggregate import aggregate
from covgate.core.model.metrics import format_pct
from covgate.core.model.thresholds import EvaluationResult, evaluate
from covgate.core.settings import parse_settings
from covgate.errors import ConfigError, LoadError
from covgate.github.comment import CommentStatus, publish_comment
from covgate.inputs.resultset import load_resultset
from covgate.io import write_step_summary
from covgate.render.markdown import render_comment, render_summary
from covgate.render.tty_summary import render_tty_summary

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    import httpx

    from covgate.core.settings import Settings
    from covgate.render.annotations import Annotator

_SECRET_HINTS = ("TOKEN", "SECRET")


class PipelineStatus(StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    # Coverage failed but on_fail_status=warn keeps the job green.
    WARNED = "warned"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class PipelineResult:
    status: PipelineStatus
    evaluation: EvaluationResult | None = None
    summary: str | None = None

    @property
    def failed(self) -> bool:
        """Whether the job should fail: a fatal error, or a coverage failure under ``fail``."""
        return self.status in {PipelineStatus.FAILED, PipelineStatus.ERROR}


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Presentation knobs that are not part of the gate configuration."""

    show_table: bool = False
    color: bool = False
    base_path: Path | None = None


def report_diagnostics(result: EvaluationResult, annotator: Annotator) -> None:
    """Emit the workflow-command lines describing *result*."""
    total = format_pct(result.total_coverage)
    suite_min = format_pct(result.minimum_suite_coverage)
    file_min = format_pct(result.minimum_file_coverage)

    annotator.line("SimpleCov Coverage Results:")
    annotator.line(f"- Expected total coverage: {suite_min}")
    annotator.line(f"- Actual total coverage:   {total}")

    if result.suite_passed:
        annotator.notice("✅ Total coverage meets minimum requirement")
    else:
        annotator.error(f"❌ Total coverage ({total}) is below the minimum required ({suite_min})")

    if not result.failing_files:
        annotator.notice(f"✅ All files meet the minimum coverage requirement of {file_min}")
        return

    annotator.line()
    annotator.line(f"Files below minimum coverage ({file_min}):")
    for unit in result.failing_files:
        annotator.error(
            f"Coverage {format_pct(unit.coverage_percent)} below threshold {file_min} "
            f"(missing {format_pct(unit.deficit)})",
            file=unit.name,
        )
    annotator.error(f"{len(result.failing_files)} files have coverage below the minimum required ({file_min})")


def _post_comment(
    result: EvaluationResult,
    settings: Settings,
    *,
    environ: Mapping[str, str],
    annotator: Annotator,
    client: httpx.Client | None,
) -> None:
    if not settings.post_comment or settings.github_token is None:
        return
    outcome = publish_comment(
        render_comment(result),
        token=settings.github_token,
        environ=environ,
        update=settings.update_comment,
        client=client,
    )
    if outcome.status is CommentStatus.FAILED:
        annotator.warning(outcome.message)
        if outcome.detail:
            annotator.debug(outcome.detail)
    else:
        annotator.notice(outcome.message)


def run_gate(
    settings: Settings,
    *,
    environ: Mapping[str, str],
    annotator: Annotator,
    options: RunOptions | None = None,
    client: httpx.Client | None = None,
) -> PipelineResult:
    """Gate the coverage results described by *settings*."""
    opts = options or RunOptions()
    annotator.debug(
        "Inputs: "
        f"minimum_suite_coverage={settings.minimum_suite_coverage}, "
        f"minimum_file_coverage={settings.minimum_file_coverage}"
    )
    annotator.debug(f"Options: on_fail_status={settings.on_fail_status}, post_comment={settings.post_comment}")

    try:
        report = load_resultset(settings.coverage_path)
        annotator.debug(f"Found results file with {len(report.run_keys)} results")
        annotator.debug(f"Using result key: {report.selected_key}")

        totals = aggregate(report.selected, base=opts.base_path)
        result = evaluate(totals, settings)
        annotator.debug(f"Total lines: {totals.executable_lines}, Covered lines: {totals.covered_lines}")
        annotator.debug(f"Raw total coverage: {result.total_coverage}")

        if opts.show_table:
            annotator.line(render_tty_summary(result, color=opts.color))
        report_diagnostics(result, annotator)

        summary = render_summary(result)
        if write_step_summary(summary, environ) is None:
            logger.debug("GITHUB_STEP_SUMMARY not set; skipping step summary")

        _post_comment(result, settings, environ=environ, annotator=annotator, client=client)
    except LoadError as exc:
        annotator.error(str(exc))
        return PipelineResult(PipelineStatus.ERROR)
    except Exception as exc:
        logger.exception("unexpected failure")
        annotator.error(f"Error processing SimpleCov results: {exc}")
        return PipelineResult(PipelineStatus.ERROR)

    total = format_pct(result.total_coverage)
    if result.passed:
        annotator.notice(f"✅ Code coverage check passed successfully! Total coverage: {total}")
        return PipelineResult(PipelineStatus.PASSED, result, summary)

    annotator.error(f"❌ Code coverage check failed! Total coverage: {total}")
    if settings.fails_job:
        return PipelineResult(PipelineStatus.FAILED, result, summary)
    annotator.warning("Coverage requirements not met, but continuing due to on_fail_status=warn")
    return PipelineResult(PipelineStatus.WARNED, result, summary)


def run_from_environment(
    environ: Mapping[str, str],
    *,
    annotator: Annotator,
    overrides: Mapping[str, str] | None = None,
    options: RunOptions | None = None,
    client: httpx.Client | None = None,
) -> PipelineResult:
    """Parse settings from *environ* (plus CLI *overrides*) and run the gate."""
    merged = {**environ, **(overrides or {})}
    try:
        settings, warnings = parse_settings(merged)
    except ConfigError as exc:
        annotator.error(str(exc))
        return PipelineResult(PipelineStatus.ERROR)

    annotator.debug_enabled = annotator.debug_enabled or settings.debug_mode
    visible = sorted(k for k in merged if not any(hint in k for hint in _SECRET_HINTS))
    annotator.debug(f"Environment variables: {', '.join(visible)}")
    for warning in warnings:
        annotator.warning(warning)

    return run_gate(settings, environ=merged, annotator=annotator, options=options, client=client)


__all__ = ["PipelineResult", "PipelineStatus", "RunOptions", "report_diagnostics", "run_from_environment", "run_gate"]
