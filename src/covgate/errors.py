"""Centralised exception hierarchy for covgate."""

from __future__ import annotations


class CovgateError(Exception):
    """Base class for all custom covgate exceptions."""


class ConfigError(CovgateError):
    """A required configuration value is invalid."""


class LoadError(CovgateError):
    """Base class for errors related to loading the coverage results file."""


class CoverageResultsNotFoundError(LoadError):
    """Coverage results file could not be located on disk."""


class InvalidCoverageResultsError(LoadError):
    """Coverage results file was found but does not contain a usable report."""


class RemoteReportError(CovgateError):
    """Publishing results to the review system failed."""


__all__ = [
    "ConfigError",
    "CovgateError",
    "CoverageResultsNotFoundError",
    "InvalidCoverageResultsError",
    "LoadError",
    "RemoteReportError",
]
