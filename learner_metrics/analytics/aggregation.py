"""Pure aggregation primitives over learner record sequences.

Grouping is backed by insertion-ordered dicts and sorting by the stable
`sorted` builtin, so groups with equal counts keep the order in which their
key was first seen in the input. Callers that need reproducible output must
therefore pass records in a stable order (stores scan by creation time).

Percentages use `decimal.Decimal` with `ROUND_HALF_UP` at one decimal place,
which rounds .x5 boundaries away from zero for the non-negative ratios
handled here (1/16 renders as `6.3%`, never `6.2%`).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import fields
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import get_origin, get_type_hints

from learner_metrics.domain import EnglishLevel, LearnerRecord

from .errors import LearnerMetricsNotFoundError
from .interfaces import AggregationEntry, AggregationResult, PercentageSummary

LearnerPredicate = Callable[[LearnerRecord], bool]

_ANALYTICS_RECORD_FIELDS = frozenset(record_field.name for record_field in fields(LearnerRecord))
_ANALYTICS_SEQUENCE_FIELDS = frozenset(
    field_name for field_name, field_type in get_type_hints(LearnerRecord).items() if get_origin(field_type) is tuple
)
_ANALYTICS_PERCENT_QUANTUM = Decimal("0.1")
_ANALYTICS_ZERO_PERCENTAGE = "0.0%"


def analytics_group_label(value: object) -> str:
    """Render one grouping key as display text.

    Args:
        value: Raw field value.

    Returns:
        str: Enum value for enum members, else `str(value)`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def analytics_count_by_key(values: Iterable[str]) -> list[tuple[str, int]]:
    """Count values and sort them by descending count with first-seen tie-break.

    Args:
        values: Group labels, one per counted unit.

    Returns:
        list[tuple[str, int]]: `(label, count)` pairs sorted by count descending.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return sorted(counts.items(), key=lambda item: -item[1])


def _analytics_require_field(field_name: str) -> None:
    if field_name not in _ANALYTICS_RECORD_FIELDS:
        raise ValueError(f"unsupported learner field: {field_name}")


def _analytics_build_result(
    counted_groups: Sequence[tuple[str, int]],
    describe: Callable[[str], str],
) -> AggregationResult:
    return AggregationResult(
        entries=tuple(AggregationEntry(description=describe(label), value=count) for label, count in counted_groups)
    )


def analytics_group_count(
    records: Iterable[LearnerRecord],
    key_field: str,
    describe: Callable[[str], str] = str,
) -> AggregationResult:
    """Count records per distinct value of one field.

    Args:
        records: Learner records in stable scan order.
        key_field: Record field to group by.
        describe: Builds an entry description from a group label.

    Returns:
        AggregationResult: One entry per distinct value, sorted by count descending.
        Empty input yields empty entries.

    Raises:
        ValueError: Raised when key_field is not a learner record field.
    """

    _analytics_require_field(key_field)
    counted_groups = analytics_count_by_key(analytics_group_label(getattr(record, key_field)) for record in records)
    return _analytics_build_result(counted_groups, describe)


def analytics_filtered_group_count(
    records: Iterable[LearnerRecord],
    predicate: LearnerPredicate,
    key_field: str,
    describe: Callable[[str], str] = str,
) -> AggregationResult:
    """Count records satisfying a predicate per distinct value of one field.

    Args:
        records: Learner records in stable scan order.
        predicate: Record filter applied before grouping.
        key_field: Record field to group by.
        describe: Builds an entry description from a group label.

    Returns:
        AggregationResult: Sorted group counts; empty entries when nothing matches.

    Raises:
        ValueError: Raised when key_field is not a learner record field.
    """

    return analytics_group_count((record for record in records if predicate(record)), key_field, describe)


def analytics_expanded_group_count(
    records: Iterable[LearnerRecord],
    predicate: LearnerPredicate,
    list_field: str,
    describe: Callable[[str], str] = str,
) -> AggregationResult:
    """Count list-field elements across filtered records.

    Each element is one unit, so a record listing the same value twice adds
    two to that group.

    Args:
        records: Learner records in stable scan order.
        predicate: Record filter applied before expansion.
        list_field: Record field holding a sequence of values.
        describe: Builds an entry description from a group label.

    Returns:
        AggregationResult: Sorted element counts.

    Raises:
        ValueError: Raised when list_field is not a sequence-valued learner record field.
        LearnerMetricsNotFoundError: Raised when no record satisfies the predicate.
    """

    _analytics_require_field(list_field)
    if list_field not in _ANALYTICS_SEQUENCE_FIELDS:
        raise ValueError(f"learner field is not a list: {list_field}")
    matched_records = [record for record in records if predicate(record)]
    if not matched_records:
        raise LearnerMetricsNotFoundError("no learner records matched the expansion filter", "NO_MATCHING_RECORDS")

    counted_groups = analytics_count_by_key(
        analytics_group_label(element) for record in matched_records for element in getattr(record, list_field)
    )
    return _analytics_build_result(counted_groups, describe)


def analytics_nested_top_n(
    records: Iterable[LearnerRecord],
    outer_field: str,
    inner_field: str,
    limit: int,
    describe: Callable[[str, str], str] = lambda inner_label, outer_label: f"{inner_label} at {outer_label}",
) -> AggregationResult:
    """Count inner groups within each outer group and keep the top `limit` per outer group.

    Outer groups appear in first-seen order. Within an outer group, inner
    groups are sorted by count descending with first-seen tie-break, and an
    outer group with fewer than `limit` inner groups contributes all of them.

    Args:
        records: Learner records in stable scan order.
        outer_field: Record field for the first partition (e.g. center).
        inner_field: Record field counted within each outer group (e.g. program).
        limit: Maximum entries per outer group.
        describe: Builds an entry description from `(inner_label, outer_label)`.

    Returns:
        AggregationResult: Flattened entries across outer groups.

    Raises:
        ValueError: Raised when a field is unknown or limit is below one.
    """

    _analytics_require_field(outer_field)
    _analytics_require_field(inner_field)
    if limit < 1:
        raise ValueError("limit must be greater than or equal to 1")

    inner_labels_by_outer: dict[str, list[str]] = {}
    for record in records:
        outer_label = analytics_group_label(getattr(record, outer_field))
        inner_labels_by_outer.setdefault(outer_label, []).append(analytics_group_label(getattr(record, inner_field)))

    entries: list[AggregationEntry] = []
    for outer_label, inner_labels in inner_labels_by_outer.items():
        for inner_label, count in analytics_count_by_key(inner_labels)[:limit]:
            entries.append(AggregationEntry(description=describe(inner_label, outer_label), value=count))
    return AggregationResult(entries=tuple(entries))


def analytics_format_percentage(matched: int, total: int) -> str:
    """Format `matched / total * 100` with one decimal place and a percent sign.

    Args:
        matched: Numerator count.
        total: Denominator count.

    Returns:
        str: Text such as `33.3%`; `0.0%` when total is zero.

    Raises:
        ValueError: Raised when counts are negative or matched exceeds total.
    """

    if matched < 0 or total < 0:
        raise ValueError("counts must not be negative")
    if matched > total:
        raise ValueError(f"matched count {matched} exceeds total count {total}")
    if total == 0:
        return _ANALYTICS_ZERO_PERCENTAGE

    ratio = (Decimal(matched) * 100 / Decimal(total)).quantize(_ANALYTICS_PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
    return f"{ratio}%"


def analytics_percentage_from_counts(matched: int, total: int) -> PercentageSummary:
    """Build a percentage summary from precomputed counts.

    Args:
        matched: Records satisfying the predicate.
        total: All records.

    Returns:
        PercentageSummary: Counts and formatted percentage.

    Raises:
        ValueError: Raised when counts are inconsistent.
    """

    return PercentageSummary(matched=matched, total=total, percentage=analytics_format_percentage(matched, total))


def analytics_flag_percentage(records: Iterable[LearnerRecord], predicate: LearnerPredicate) -> PercentageSummary:
    """Compute the share of records satisfying a boolean predicate.

    Args:
        records: Learner records.
        predicate: Flag predicate such as `has_github`.

    Returns:
        PercentageSummary: Matched count, total count and percentage; `0.0%` for empty input.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    matched = 0
    total = 0
    for record in records:
        total += 1
        if predicate(record):
            matched += 1
    return analytics_percentage_from_counts(matched, total)


def analytics_filtered_level_group_percentage(
    records: Iterable[LearnerRecord],
    levels: Iterable[EnglishLevel],
    key_field: str,
    describe: Callable[[str], str] = str,
    total_learners: int | None = None,
) -> AggregationResult:
    """Group learners with an English level in `levels` and attach their share of all learners.

    Args:
        records: Learner records in stable scan order.
        levels: Accepted English levels.
        key_field: Record field to group matching learners by.
        describe: Builds an entry description from a group label.
        total_learners: Population size when `records` is already a filtered scan;
            defaults to the number of records passed in.

    Returns:
        AggregationResult: Sorted group counts with metadata keys `total_matched`,
        `total_learners` and `percentage`.

    Raises:
        ValueError: Raised when key_field is unknown or counts are inconsistent.
    """

    accepted_levels = frozenset(levels)
    record_list = list(records)
    grouped = analytics_filtered_group_count(
        record_list,
        lambda record: record.english_level in accepted_levels,
        key_field,
        describe,
    )
    total_matched = sum(entry.value for entry in grouped.entries)
    resolved_total = len(record_list) if total_learners is None else total_learners
    summary = analytics_percentage_from_counts(total_matched, resolved_total)
    return AggregationResult(
        entries=grouped.entries,
        metadata={
            "total_matched": summary.matched,
            "total_learners": summary.total,
            "percentage": summary.percentage,
        },
    )
