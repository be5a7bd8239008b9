"""Per-file and total line counts for a selected run."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from covgate._meta import logger
from covgate.core.model.coverage import CoverageTotals, FileStats
from covgate.core.model.metrics import display_pct

if TYPE_CHECKING:
    from covgate.core.model.coverage import RunResult


def display_name(path: str, base: Path | None = None) -> str:
    """Return *path* relative to *base* (the working directory by default).

    Relative paths are returned unchanged, as are absolute paths that cannot
    be expressed relative to *base* (for example on another drive).
    """
    if not Path(path).is_absolute():
        return path
    try:
        return Path(os.path.relpath(path, base or Path.cwd())).as_posix()
    except ValueError:
        return path


def aggregate(run: RunResult, *, base: Path | None = None) -> CoverageTotals:
    """Count executable and covered lines per file and in total.

    Malformed entries and files without executable lines are skipped: they
    appear neither in the per-file list nor in the totals.
    """
    files: list[FileStats] = []
    total_lines = 0
    covered_lines = 0

    for path, coverage in run.files.items():
        if coverage is None:
            continue
        executable = coverage.executable_line_count
        if executable == 0:
            continue
        stats = FileStats(
            name=display_name(path, base),
            executable_lines=executable,
            covered_lines=coverage.covered_line_count,
        )
        logger.debug(
            "file %s: %s%% (%d/%d lines)",
            stats.name,
            display_pct(stats.coverage_percent),
            stats.covered_lines,
            stats.executable_lines,
        )
        files.append(stats)
        total_lines += stats.executable_lines
        covered_lines += stats.covered_lines

    return CoverageTotals(files=tuple(files), executable_lines=total_lines, covered_lines=covered_lines)


__all__ = ["aggregate", "display_name"]
