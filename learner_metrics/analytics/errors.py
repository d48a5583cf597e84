"""Project-native typed exceptions for learner metrics report failures."""

from __future__ import annotations


class LearnerMetricsError(Exception):
    """Base exception for report-level failures surfaced to callers.

    Attributes:
        error_code: Stable machine-readable error code.
    """

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.error_code = error_code


class LearnerMetricsValidationError(LearnerMetricsError, ValueError):
    """Required report parameter is missing or blank."""


class LearnerMetricsNotFoundError(LearnerMetricsError, LookupError):
    """A valid filter matched no records where that outcome is reported distinctly."""
