"""Typed interfaces for analytics-layer aggregations."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class AggregationEntry:
    """One labelled count in an aggregation result.

    Attributes:
        description: Human-readable group label.
        value: Group count.
    """

    description: str
    value: int


@dataclass(frozen=True)
class AggregationResult:
    """Ordered aggregation entries with optional whole-result metadata.

    Attributes:
        entries: Entries sorted by descending value.
        metadata: Optional metadata describing the whole result, not any single entry.
    """

    entries: tuple[AggregationEntry, ...]
    metadata: Mapping[str, object] | None = None


@dataclass(frozen=True)
class PercentageSummary:
    """Ratio of matched records to all records.

    Attributes:
        matched: Records satisfying the predicate.
        total: All records considered.
        percentage: One-decimal percentage text such as `12.5%`.
    """

    matched: int
    total: int
    percentage: str


class LearnerMetricsPort(Protocol):
    """Port definition for learner metrics report assembly."""

    def metrics_learners_by_center(self) -> AggregationResult:
        """Count learners per formation center."""

    def metrics_instructors_by_center(self, center: str | None) -> AggregationResult:
        """Count recommended instructors among learners of one center.

        Args:
            center: Formation center name.

        Returns:
            AggregationResult: Instructor counts.

        Raises:
            LearnerMetricsValidationError: Raised when center is missing or blank.
            LearnerMetricsNotFoundError: Raised when the center has no instructor recommendations.
        """

    def metrics_learners_by_center_program(self) -> AggregationResult:
        """Count learners per center and program, keeping the top programs per center."""

    def metrics_learners_by_department(self) -> AggregationResult:
        """Count survey-completed learners per department."""

    def metrics_learners_with_github(self) -> AggregationResult:
        """Count learners with a GitHub account and their share of all learners."""

    def metrics_english_by_center(self) -> AggregationResult:
        """Count B1/B2 English learners per center and their share of all learners."""
