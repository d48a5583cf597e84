"""Database service for read-only learner record scans and counts."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from learner_metrics.domain import LearnerQueryFilter, LearnerRecord, domain_learner_build_record

from .interfaces import LearnerRecordStorePort, LearnerStoreError

_LEARNER_SELECT_COLUMNS = (
    "name, email, formation_center, formation_program, department, has_github, github_username, "
    "english_level, recommended_instructors, survey_completed, created_at"
)

_LEARNER_WHERE_FRAGMENTS = {
    "formation_center": "formation_center = :formation_center",
    "has_github": "has_github = :has_github",
    "survey_completed": "survey_completed = :survey_completed",
    "english_levels": "english_level = ANY(:english_levels)",
    "require_department": "department <> ''",
    "require_instructors": "jsonb_array_length(recommended_instructors) > 0",
}


class SQLAlchemyLearnerRecordService(LearnerRecordStorePort):
    """SQLAlchemy-backed learner record store.

    Queries are assembled only from the fixed fragments above with bound
    parameters, so filter values never reach SQL text.
    """

    def __init__(self, engine: Engine):
        """Initialize learner record store.

        Args:
            engine: SQLAlchemy engine used for all read operations.

        Returns:
            None: This initializer does not return a value.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_learner_scan(self, query_filter: LearnerQueryFilter | None = None) -> list[LearnerRecord]:
        """Return learner records matching a filter in stable creation order.

        Args:
            query_filter: Optional structured filter; None selects all records.

        Returns:
            list[LearnerRecord]: Matching records ordered by creation time then email.

        Raises:
            LearnerStoreError: Raised when the query fails or a row is invalid.
        """

        where_clause, parameters = self._build_where_clause(query_filter)
        statement = text(f"SELECT {_LEARNER_SELECT_COLUMNS} FROM learners{where_clause} ORDER BY created_at ASC, email ASC")

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(statement, parameters).mappings().all()
        except SQLAlchemyError as error:
            raise LearnerStoreError("failed to scan learner records") from error

        return [self._map_learner_row(row) for row in rows]

    def db_learner_count(self, query_filter: LearnerQueryFilter | None = None) -> int:
        """Count learner records matching a filter.

        Args:
            query_filter: Optional structured filter; None counts all records.

        Returns:
            int: Number of matching records.

        Raises:
            LearnerStoreError: Raised when the query fails.
        """

        where_clause, parameters = self._build_where_clause(query_filter)
        statement = text(f"SELECT COUNT(*) AS learner_count FROM learners{where_clause}")

        try:
            with self._engine.connect() as connection:
                count_row = connection.execute(statement, parameters).mappings().one()
        except SQLAlchemyError as error:
            raise LearnerStoreError("failed to count learner records") from error

        return int(count_row["learner_count"])

    @staticmethod
    def _build_where_clause(query_filter: LearnerQueryFilter | None) -> tuple[str, dict[str, Any]]:
        """Build a WHERE clause from fixed fragments and bound parameters.

        Args:
            query_filter: Optional structured filter.

        Returns:
            tuple[str, dict[str, Any]]: Clause text (empty or leading space) and parameters.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if query_filter is None:
            return "", {}

        conditions: list[str] = []
        parameters: dict[str, Any] = {}
        if query_filter.formation_center is not None:
            conditions.append(_LEARNER_WHERE_FRAGMENTS["formation_center"])
            parameters["formation_center"] = query_filter.formation_center
        if query_filter.has_github is not None:
            conditions.append(_LEARNER_WHERE_FRAGMENTS["has_github"])
            parameters["has_github"] = query_filter.has_github
        if query_filter.survey_completed is not None:
            conditions.append(_LEARNER_WHERE_FRAGMENTS["survey_completed"])
            parameters["survey_completed"] = query_filter.survey_completed
        if query_filter.english_levels is not None:
            conditions.append(_LEARNER_WHERE_FRAGMENTS["english_levels"])
            parameters["english_levels"] = [level.value for level in query_filter.english_levels]
        if query_filter.require_department:
            conditions.append(_LEARNER_WHERE_FRAGMENTS["require_department"])
        if query_filter.require_instructors:
            conditions.append(_LEARNER_WHERE_FRAGMENTS["require_instructors"])

        if not conditions:
            return "", parameters
        return " WHERE " + " AND ".join(conditions), parameters

    @staticmethod
    def _map_learner_row(row: Any) -> LearnerRecord:
        """Map one row mapping into a validated learner record.

        Args:
            row: SQLAlchemy row mapping.

        Returns:
            LearnerRecord: Validated record.

        Raises:
            LearnerStoreError: Raised when the stored row violates record rules.
        """

        try:
            instructors = row["recommended_instructors"]
            if isinstance(instructors, str):
                instructors = json.loads(instructors)
            return domain_learner_build_record(
                name=row["name"],
                email=row["email"],
                formation_center=row["formation_center"],
                formation_program=row["formation_program"],
                department=row["department"],
                has_github=bool(row["has_github"]),
                github_username=row["github_username"],
                english_level=row["english_level"],
                recommended_instructors=instructors,
                survey_completed=bool(row["survey_completed"]),
                created_at=row["created_at"],
            )
        except ValueError as error:
            raise LearnerStoreError(f"invalid learner row for email={row['email']}") from error
