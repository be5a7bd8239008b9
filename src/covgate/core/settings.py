"""Gate configuration read from the environment.

Every option is parsed on its own. The two numeric thresholds are required to
be valid and raise :class:`~covgate.errors.ConfigError`; every other option
falls back to its default and contributes a warning message instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from covgate.core.config import DEFAULT_COVERAGE_PATH, FULL_COVERAGE
from covgate.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

_TRUE_VALUES = frozenset({"true", "1"})
_FALSE_VALUES = frozenset({"false", "0", ""})


class OnFailStatus(StrEnum):
    """What to do with the job when coverage requirements are not met."""

    FAIL = "fail"
    WARN = "warn"


@dataclass(frozen=True, slots=True)
class Settings:
    """Typed gate configuration.

    Fields
    ------
    minimum_suite_coverage:
        Minimum total line coverage percentage (0..100).
    minimum_file_coverage:
        Minimum line coverage percentage of every file (0..100).
    on_fail_status:
        ``fail`` exits non-zero on a failed gate, ``warn`` only reports it.
    post_comment / update_comment:
        Publish the results on the pull request, editing the previous
        report comment when ``update_comment`` is set.
    """

    minimum_suite_coverage: float = 0.0
    minimum_file_coverage: float = 0.0
    coverage_path: Path = Path(DEFAULT_COVERAGE_PATH)
    debug_mode: bool = False
    on_fail_status: OnFailStatus = OnFailStatus.FAIL
    post_comment: bool = False
    update_comment: bool = False
    github_token: str | None = None

    @property
    def fails_job(self) -> bool:
        return self.on_fail_status is OnFailStatus.FAIL


def _lookup(environ: Mapping[str, str], name: str) -> str | None:
    # GitHub passes action inputs as INPUT_<NAME>; an explicit variable wins.
    key = name.upper()
    value = environ.get(key)
    if value is None:
        value = environ.get(f"INPUT_{key}")
    return value


def _parse_percentage(raw: str | None, *, name: str) -> float:
    if raw is None or not raw.strip():
        return 0.0
    try:
        value = float(raw.strip().rstrip("%"))
    except ValueError as exc:
        msg = f"`{name}` must be a number between 0 and 100, got {raw!r}"
        raise ConfigError(msg) from exc
    # NaN fails both comparisons, so check the accepted range positively.
    if not 0 <= value <= float(FULL_COVERAGE):
        msg = f"`{name}` must be between 0 and 100, got {value}"
        raise ConfigError(msg)
    return value


def _parse_flag(raw: str | None, *, name: str, warnings: list[str]) -> bool:
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value not in _FALSE_VALUES:
        warnings.append(f"`{name}` should be 'true' or 'false', got '{raw}'. Using default (false).")
    return False


def _parse_fail_status(raw: str | None, *, warnings: list[str]) -> OnFailStatus:
    if raw is None or not raw.strip():
        return OnFailStatus.FAIL
    try:
        return OnFailStatus(raw.strip().lower())
    except ValueError:
        warnings.append(f"`on_fail_status` should be 'fail' or 'warn', got '{raw}'. Using default (fail).")
        return OnFailStatus.FAIL


def parse_settings(environ: Mapping[str, str]) -> tuple[Settings, list[str]]:
    """Build :class:`Settings` from *environ*, returning it with any warnings."""
    warnings: list[str] = []

    suite = _parse_percentage(_lookup(environ, "minimum_suite_coverage"), name="minimum_suite_coverage")
    per_file = _parse_percentage(_lookup(environ, "minimum_file_coverage"), name="minimum_file_coverage")

    raw_path = _lookup(environ, "coverage_path")
    coverage_path = Path(raw_path.strip()) if raw_path and raw_path.strip() else Path(DEFAULT_COVERAGE_PATH)

    debug_mode = _parse_flag(_lookup(environ, "debug_mode"), name="debug_mode", warnings=warnings)
    on_fail_status = _parse_fail_status(_lookup(environ, "on_fail_status"), warnings=warnings)
    post_comment = _parse_flag(_lookup(environ, "post_comment"), name="post_comment", warnings=warnings)
    update_comment = _parse_flag(_lookup(environ, "update_comment"), name="update_comment", warnings=warnings)

    token = (_lookup(environ, "github_token") or "").strip() or None
    if post_comment and token is None:
        warnings.append("`post_comment` is enabled but no `github_token` was provided. Comments won't be posted.")
        post_comment = False

    settings = Settings(
        minimum_suite_coverage=suite,
        minimum_file_coverage=per_file,
        coverage_path=coverage_path,
        debug_mode=debug_mode,
        on_fail_status=on_fail_status,
        post_comment=post_comment,
        update_comment=update_comment,
        github_token=token,
    )
    return settings, warnings


__all__ = ["OnFailStatus", "Settings", "parse_settings"]
