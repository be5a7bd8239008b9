"""Reading SimpleCov ``.resultset.json`` files."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from covgate._meta import logger
from covgate.core.model.coverage import CoverageReport, FileCoverage, RunResult
from covgate.errors import CoverageResultsNotFoundError, InvalidCoverageResultsError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def _is_sequence_number(key: str) -> bool:
    # Only the canonical spelling counts: "10" yes, "010", "+1" or "-1" no.
    return key.isascii() and key.isdigit() and str(int(key)) == key


def select_run_key(keys: Iterable[str]) -> str:
    """Return the key of the run to gate on.

    When every key is a non-negative integer the numerically largest wins
    (sequence numbers); otherwise the lexicographically greatest key wins
    (timestamps and opaque command names).
    """
    candidates = list(keys)
    if not candidates:
        msg = "cannot select a run from an empty result set"
        raise ValueError(msg)
    if all(_is_sequence_number(k) for k in candidates):
        return max(candidates, key=int)
    return max(candidates)


def _parse_lines(payload: object) -> FileCoverage | None:
    if not isinstance(payload, dict):
        return None
    lines = payload.get("lines")
    if not isinstance(lines, list):
        return None
    hits: list[int | None] = []
    for entry in lines:
        if entry is None:
            hits.append(None)
        elif isinstance(entry, int) and not isinstance(entry, bool) and entry >= 0:
            hits.append(entry)
        else:
            return None
    return FileCoverage(lines=tuple(hits))


def parse_run(payload: object, *, key: str) -> RunResult:
    """Validate the shape of a single run and convert it into a :class:`RunResult`."""
    if not isinstance(payload, dict) or not isinstance(payload.get("coverage"), dict):
        msg = f"run {key!r} has invalid format: expected an object with a 'coverage' object"
        raise InvalidCoverageResultsError(msg)

    files: dict[str, FileCoverage | None] = {}
    for path, file_payload in payload["coverage"].items():
        parsed = _parse_lines(file_payload)
        if parsed is None:
            logger.debug("skipping %s: no well-formed line coverage", path)
        files[str(path)] = parsed
    return RunResult(files=files)


def parse_resultset(data: Any) -> CoverageReport:
    if not isinstance(data, dict) or not data:
        msg = "coverage results file is empty or invalid"
        raise InvalidCoverageResultsError(msg)
    keys = tuple(str(k) for k in data)
    selected_key = select_run_key(keys)
    logger.debug("found %d result(s), using %r", len(keys), selected_key)
    run = parse_run(data[selected_key], key=selected_key)
    return CoverageReport(run_keys=keys, selected_key=selected_key, selected=run)


def load_resultset(path: Path) -> CoverageReport:
    """Load and validate the SimpleCov results file at *path*."""
    if not path.is_file():
        msg = f"SimpleCov results file not found at {path}"
        raise CoverageResultsNotFoundError(msg)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"SimpleCov results file is not valid UTF-8: {exc}"
        raise InvalidCoverageResultsError(msg) from exc
    if not text.strip():
        msg = f"SimpleCov results file is empty: {path}"
        raise InvalidCoverageResultsError(msg)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"SimpleCov results file is not valid JSON: {exc}"
        raise InvalidCoverageResultsError(msg) from exc
    return parse_resultset(data)


__all__ = ["load_resultset", "parse_resultset", "parse_run", "select_run_key"]
