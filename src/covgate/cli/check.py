from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Annotated

import click.utils as click_utils
import typer

from covgate._meta import logger
from covgate.cli._shared import resolve_show_table
from covgate.cli.exit_codes import exit_code_for
from covgate.core.config import LOG_FORMAT
from covgate.core.pipeline import RunOptions, run_from_environment
from covgate.io import write_output
from covgate.render.annotations import Annotator

_BOOL_FALSE = False


def _is_tty_stdout() -> bool:
    try:
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    except OSError:
        return False


def _configure_runtime(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)


def _overrides(**values: object) -> dict[str, str]:
    # Only options given on the command line override the environment variables of the same name.
    out: dict[str, str] = {}
    for name, value in values.items():
        if value is None or value is False:
            continue
        if value is True:
            out[name.upper()] = "true"
        else:
            out[name.upper()] = str(value)
    return out


def check_cmd(
    minimum_suite_coverage: Annotated[
        str | None,
        typer.Option("--minimum-suite-coverage", help="Minimum total line coverage % (0-100)."),
    ] = None,
    minimum_file_coverage: Annotated[
        str | None,
        typer.Option("--minimum-file-coverage", help="Minimum line coverage % for every file (0-100)."),
    ] = None,
    coverage_path: Annotated[
        str | None,
        typer.Option("--coverage-path", help="Path to the SimpleCov .resultset.json file."),
    ] = None,
    on_fail_status: Annotated[
        str | None,
        typer.Option("--on-fail-status", help="'fail' to exit non-zero on failure, 'warn' to only report."),
    ] = None,
    post_comment: Annotated[
        bool,
        typer.Option("--post-comment", help="Post the results on the pull request."),
    ] = _BOOL_FALSE,
    update_comment: Annotated[
        bool,
        typer.Option("--update-comment", help="Edit the previous results comment instead of adding one."),
    ] = _BOOL_FALSE,
    debug_mode: Annotated[
        bool,
        typer.Option("--debug", help="Emit ::debug:: workflow commands."),
    ] = _BOOL_FALSE,
    table: Annotated[
        bool,
        typer.Option("--table", help="Print a per-file table even when stdout is not a TTY."),
    ] = _BOOL_FALSE,
    no_table: Annotated[
        bool,
        typer.Option("--no-table", help="Never print the per-file table."),
    ] = _BOOL_FALSE,
    markdown: Annotated[
        Path | None,
        typer.Option("--markdown", help="Also write the Markdown summary to PATH (use '-' for stdout)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Emit diagnostic logging."),
    ] = _BOOL_FALSE,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Only log errors."),
    ] = _BOOL_FALSE,
) -> None:
    """Check coverage against the configured minimums."""
    _configure_runtime(quiet=quiet, verbose=verbose)

    overrides = _overrides(
        minimum_suite_coverage=minimum_suite_coverage,
        minimum_file_coverage=minimum_file_coverage,
        coverage_path=coverage_path,
        on_fail_status=on_fail_status,
        post_comment=post_comment,
        update_comment=update_comment,
        debug_mode=debug_mode,
    )

    is_tty = _is_tty_stdout()
    show_table = resolve_show_table(table=table, no_table=no_table, is_tty=is_tty)
    color = bool(is_tty and not click_utils.should_strip_ansi(sys.stdout))

    annotator = Annotator(typer.echo)
    result = run_from_environment(
        os.environ,
        annotator=annotator,
        overrides=overrides,
        options=RunOptions(show_table=show_table, color=color),
    )

    if markdown is not None and result.summary is not None:
        write_output(result.summary, markdown)

    raise typer.Exit(code=exit_code_for(result))


def register(app: typer.Typer) -> None:
    app.command("check")(check_cmd)


__all__ = ["check_cmd", "register"]
