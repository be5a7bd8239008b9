"""Central configuration and constants for ``covgate``."""

from __future__ import annotations

# Default location of the SimpleCov results file.
DEFAULT_COVERAGE_PATH = "coverage/.resultset.json"

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

# Hidden line embedded in PR comments so a later run can find and update them.
COMMENT_MARKER = "<!-- covgate: coverage report -->"

DEFAULT_API_URL = "https://api.github.com"

FULL_COVERAGE: int = 100


__all__ = ["COMMENT_MARKER", "DEFAULT_API_URL", "DEFAULT_COVERAGE_PATH", "FULL_COVERAGE", "LOG_FORMAT"]
