"""Analytics layer package for learner report aggregation boundaries."""

from .aggregation import (
	analytics_count_by_key,
	analytics_expanded_group_count,
	analytics_filtered_group_count,
	analytics_filtered_level_group_percentage,
	analytics_flag_percentage,
	analytics_format_percentage,
	analytics_group_count,
	analytics_group_label,
	analytics_nested_top_n,
	analytics_percentage_from_counts,
)
from .errors import LearnerMetricsError, LearnerMetricsNotFoundError, LearnerMetricsValidationError
from .interfaces import AggregationEntry, AggregationResult, LearnerMetricsPort, PercentageSummary
from .report_service import LearnerMetricsReportService, analytics_serialize_result

__all__ = [
	"AggregationEntry",
	"AggregationResult",
	"LearnerMetricsError",
	"LearnerMetricsNotFoundError",
	"LearnerMetricsPort",
	"LearnerMetricsReportService",
	"LearnerMetricsValidationError",
	"PercentageSummary",
	"analytics_count_by_key",
	"analytics_expanded_group_count",
	"analytics_filtered_group_count",
	"analytics_filtered_level_group_percentage",
	"analytics_flag_percentage",
	"analytics_format_percentage",
	"analytics_group_count",
	"analytics_group_label",
	"analytics_nested_top_n",
	"analytics_percentage_from_counts",
	"analytics_serialize_result",
]
