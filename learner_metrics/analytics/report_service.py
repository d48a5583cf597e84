"""Learner metrics report assembly over a read-only record store."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

import logging
from functools import partial

from learner_metrics.db import LearnerRecordStorePort
from learner_metrics.domain import EnglishLevel, LearnerQueryFilter, domain_learner_filter_matches

from .aggregation import (
    analytics_expanded_group_count,
    analytics_filtered_group_count,
    analytics_filtered_level_group_percentage,
    analytics_group_count,
    analytics_nested_top_n,
    analytics_percentage_from_counts,
)
from .errors import LearnerMetricsNotFoundError, LearnerMetricsValidationError
from .interfaces import AggregationEntry, AggregationResult, LearnerMetricsPort

logger = logging.getLogger(__name__)

REPORT_ENGLISH_LEVELS = (EnglishLevel.B1, EnglishLevel.B2)
DEFAULT_PROGRAM_TOP_LIMIT = 4


class LearnerMetricsReportService(LearnerMetricsPort):
    """Build the six learner metrics reports from store scans and counts.

    Each report pushes its filter down to the store and applies the same
    filter again in memory before aggregating. Reports are all-or-nothing:
    store failures propagate as `LearnerStoreError`.
    """

    def __init__(self, store: LearnerRecordStorePort, program_top_limit: int = DEFAULT_PROGRAM_TOP_LIMIT):
        """Initialize report service dependencies.

        Args:
            store: Read-only learner record store.
            program_top_limit: Programs kept per center in the center/program report.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when store is None or limit is below one.
        """

        if store is None:
            raise ValueError("store must not be None")
        if program_top_limit < 1:
            raise ValueError("program_top_limit must be greater than or equal to 1")
        self._store = store
        self._program_top_limit = program_top_limit

    def metrics_learners_by_center(self) -> AggregationResult:
        """Count learners per formation center.

        Returns:
            AggregationResult: `Learners at {center}` entries.

        Raises:
            LearnerStoreError: Raised when the store scan fails.
        """

        records = self._store.db_learner_scan()
        logger.debug("building learners-by-center report from %d records", len(records))
        return analytics_group_count(records, "formation_center", lambda center: f"Learners at {center}")

    def metrics_instructors_by_center(self, center: str | None) -> AggregationResult:
        """Count recommended instructors among learners of one center.

        Args:
            center: Formation center name; surrounding whitespace is ignored.

        Returns:
            AggregationResult: `Instructor {name} at {center}` entries.

        Raises:
            LearnerMetricsValidationError: Raised when center is missing or blank.
            LearnerMetricsNotFoundError: Raised when no learner of the center recommends an instructor.
            LearnerStoreError: Raised when the store scan fails.
        """

        normalized_center = (center or "").strip()
        if not normalized_center:
            raise LearnerMetricsValidationError('parameter "center" is required', "MISSING_CENTER_PARAM")

        query_filter = LearnerQueryFilter(formation_center=normalized_center, require_instructors=True)
        records = self._store.db_learner_scan(query_filter)
        logger.debug("building instructors report for center=%s from %d records", normalized_center, len(records))
        try:
            return analytics_expanded_group_count(
                records,
                partial(domain_learner_filter_matches, query_filter),
                "recommended_instructors",
                lambda instructor: f"Instructor {instructor} at {normalized_center}",
            )
        except LearnerMetricsNotFoundError as error:
            raise LearnerMetricsNotFoundError(
                f"no instructors found for center: {normalized_center}", "NO_INSTRUCTORS_FOUND"
            ) from error

    def metrics_learners_by_center_program(self) -> AggregationResult:
        """Count learners per center and program, keeping the top programs per center.

        Returns:
            AggregationResult: `{program} at {center}` entries.

        Raises:
            LearnerStoreError: Raised when the store scan fails.
        """

        records = self._store.db_learner_scan()
        return analytics_nested_top_n(records, "formation_center", "formation_program", self._program_top_limit)

    def metrics_learners_by_department(self) -> AggregationResult:
        """Count survey-completed learners per department.

        An empty result is valid when no learner completed the survey.

        Returns:
            AggregationResult: `Learners in {department}` entries.

        Raises:
            LearnerStoreError: Raised when the store scan fails.
        """

        query_filter = LearnerQueryFilter(survey_completed=True, require_department=True)
        records = self._store.db_learner_scan(query_filter)
        return analytics_filtered_group_count(
            records,
            partial(domain_learner_filter_matches, query_filter),
            "department",
            lambda department: f"Learners in {department}",
        )

    def metrics_learners_with_github(self) -> AggregationResult:
        """Count learners with a GitHub account and their share of all learners.

        Returns:
            AggregationResult: One entry with metadata `percentage` and `total_learners`.

        Raises:
            LearnerStoreError: Raised when a store count fails.
            ValueError: Raised when the store reports more matches than learners.
        """

        matched_count = self._store.db_learner_count(LearnerQueryFilter(has_github=True))
        total_count = self._store.db_learner_count()
        summary = analytics_percentage_from_counts(matched_count, total_count)
        return AggregationResult(
            entries=(AggregationEntry(description="Learners with a GitHub username", value=summary.matched),),
            metadata={"percentage": summary.percentage, "total_learners": summary.total},
        )

    def metrics_english_by_center(self) -> AggregationResult:
        """Count B1/B2 English learners per center and their share of all learners.

        Returns:
            AggregationResult: `Learners with B1/B2 English at {center}` entries with metadata
            `total_english_b1_b2`, `percentage_of_total` and `total_learners`.

        Raises:
            LearnerStoreError: Raised when a store call fails.
            ValueError: Raised when the store reports more matches than learners.
        """

        records = self._store.db_learner_scan(LearnerQueryFilter(english_levels=REPORT_ENGLISH_LEVELS))
        total_count = self._store.db_learner_count()
        grouped = analytics_filtered_level_group_percentage(
            records,
            REPORT_ENGLISH_LEVELS,
            "formation_center",
            lambda center: f"Learners with B1/B2 English at {center}",
            total_learners=total_count,
        )
        metadata = grouped.metadata or {}
        return AggregationResult(
            entries=grouped.entries,
            metadata={
                "total_english_b1_b2": metadata["total_matched"],
                "percentage_of_total": metadata["percentage"],
                "total_learners": metadata["total_learners"],
            },
        )


def analytics_serialize_result(result: AggregationResult) -> dict[str, object]:
    """Serialize one aggregation result to a JSON-compatible payload.

    Args:
        result: Aggregation result.

    Returns:
        dict[str, object]: `{"entries": [...], "metadata": {...} | None}` payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "entries": [{"description": entry.description, "value": entry.value} for entry in result.entries],
        "metadata": None if result.metadata is None else dict(result.metadata),
    }
