"""Regression tests for fixed SQL templates in the learner record store."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from learner_metrics.db import LearnerStoreError, SQLAlchemyLearnerRecordService
from learner_metrics.domain import EnglishLevel, FormationProgram, LearnerQueryFilter


class _MappingResultStub:
    """Stub mapping result wrapper for SQLAlchemy-like query responses."""

    def __init__(self, rows: list[dict]):
        self._rows = rows

    def mappings(self) -> _MappingResultStub:
        """Return self to emulate SQLAlchemy mappings chain."""

        return self

    def all(self) -> list[dict]:
        """Return all row mappings."""

        return self._rows

    def one(self) -> dict:
        """Return the single row mapping."""

        return self._rows[0]


class _ConnectionStub:
    """Connection stub capturing executed SQL and parameters."""

    def __init__(self, rows: list[dict], error: Exception | None = None):
        """Initialize connection capture state.

        Args:
            rows: Query rows returned by execute().
            error: Optional error raised by execute().

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: This stub does not raise value errors.
        """

        self._rows = rows
        self._error = error
        self.executed_queries: list[str] = []
        self.executed_parameters: list[dict] = []

    def __enter__(self) -> _ConnectionStub:
        return self

    def __exit__(self, exc_type, exc, traceback) -> bool:
        _ = (exc_type, exc, traceback)
        return False

    def execute(self, statement, parameters: dict):
        """Capture execute input and return deterministic row result.

        Args:
            statement: SQLAlchemy text clause.
            parameters: Bound query parameters.

        Returns:
            _MappingResultStub: Query result stub.

        Raises:
            Exception: Raises the configured error when present.
        """

        self.executed_queries.append(getattr(statement, "text", str(statement)))
        self.executed_parameters.append(parameters)
        if self._error is not None:
            raise self._error
        return _MappingResultStub(rows=self._rows)


class _EngineStub:
    """Engine stub that returns a predefined connection object."""

    def __init__(self, connection: _ConnectionStub):
        self._connection = connection

    def connect(self) -> _ConnectionStub:
        """Return connection stub."""

        return self._connection


def _build_learner_row(**overrides) -> dict:
    """Build one learners row mapping.

    Args:
        **overrides: Column values replacing defaults.

    Returns:
        dict: Mapping row with every selected column.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    row = {
        "name": "Ana",
        "email": "ana@example.com",
        "formation_center": "Centro Norte",
        "formation_program": "Electrónica",
        "department": "Antioquia",
        "has_github": True,
        "github_username": "anap",
        "english_level": "B1",
        "recommended_instructors": ["Luis", "Marta"],
        "survey_completed": False,
        "created_at": datetime(2026, 5, 4, 12, 0, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


def test_db_learner_scan_without_filter_selects_all_in_creation_order() -> None:
    """Scan all learners ordered by creation time then email.

    Returns:
        None: Assertions validate SQL template and row mapping.

    Raises:
        AssertionError: Raised when query or mapping differs.
    """

    connection = _ConnectionStub(rows=[_build_learner_row()])
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    records = service.db_learner_scan()

    assert "WHERE" not in connection.executed_queries[0]
    assert connection.executed_queries[0].endswith("FROM learners ORDER BY created_at ASC, email ASC")
    assert connection.executed_parameters == [{}]
    assert len(records) == 1
    assert records[0].formation_program is FormationProgram.ELECTRONICS
    assert records[0].english_level is EnglishLevel.B1
    assert records[0].recommended_instructors == ("Luis", "Marta")


def test_db_learner_scan_binds_filter_values_as_parameters() -> None:
    """Translate a structured filter into fixed fragments with bound values.

    Returns:
        None: Assertions validate WHERE clause and parameters.

    Raises:
        AssertionError: Raised when filter values reach SQL text.
    """

    connection = _ConnectionStub(rows=[])
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    service.db_learner_scan(
        LearnerQueryFilter(
            formation_center="Centro'; DROP TABLE learners; --",
            english_levels=(EnglishLevel.B1, EnglishLevel.B2),
            require_instructors=True,
        )
    )

    executed_query = connection.executed_queries[0]
    assert (
        " WHERE formation_center = :formation_center "
        "AND english_level = ANY(:english_levels) "
        "AND jsonb_array_length(recommended_instructors) > 0 "
    ) in executed_query
    assert "DROP TABLE" not in executed_query
    assert connection.executed_parameters == [
        {"formation_center": "Centro'; DROP TABLE learners; --", "english_levels": ["B1", "B2"]}
    ]


def test_db_learner_count_returns_integer_count() -> None:
    """Count learners with flag filters.

    Returns:
        None: Assertions validate count query.

    Raises:
        AssertionError: Raised when count query differs.
    """

    connection = _ConnectionStub(rows=[{"learner_count": 7}])
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    learner_count = service.db_learner_count(
        LearnerQueryFilter(has_github=True, survey_completed=False, require_department=True)
    )

    assert learner_count == 7
    assert connection.executed_queries == [
        "SELECT COUNT(*) AS learner_count FROM learners "
        "WHERE has_github = :has_github AND survey_completed = :survey_completed AND department <> ''"
    ]
    assert connection.executed_parameters == [{"has_github": True, "survey_completed": False}]


def test_db_learner_count_with_empty_filter_has_no_where_clause() -> None:
    """Count every learner when the filter sets nothing.

    Returns:
        None: Assertions validate unfiltered count.

    Raises:
        AssertionError: Raised when a WHERE clause is emitted.
    """

    connection = _ConnectionStub(rows=[{"learner_count": 0}])
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    assert service.db_learner_count(LearnerQueryFilter()) == 0
    assert connection.executed_queries == ["SELECT COUNT(*) AS learner_count FROM learners"]


def test_db_learner_scan_decodes_json_text_instructors() -> None:
    """Decode instructor arrays returned as JSON text by some drivers.

    Returns:
        None: Assertions validate JSON decoding.

    Raises:
        AssertionError: Raised when JSON text is not decoded.
    """

    connection = _ConnectionStub(rows=[_build_learner_row(recommended_instructors='["Luis", "Luis"]')])
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    assert service.db_learner_scan()[0].recommended_instructors == ("Luis", "Luis")


def test_db_learner_scan_wraps_database_errors() -> None:
    """Surface SQLAlchemy failures as store errors.

    Returns:
        None: Assertions validate error translation.

    Raises:
        AssertionError: Raised when errors are not translated.
    """

    connection = _ConnectionStub(rows=[], error=OperationalError("SELECT", {}, Exception("connection refused")))
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    with pytest.raises(LearnerStoreError, match="failed to scan"):
        service.db_learner_scan()
    with pytest.raises(LearnerStoreError, match="failed to count"):
        service.db_learner_count()


def test_db_learner_scan_rejects_rows_outside_enumerations() -> None:
    """Surface stored rows violating record rules as store errors.

    Returns:
        None: Assertions validate invalid-row handling.

    Raises:
        AssertionError: Raised when invalid rows are mapped.
    """

    connection = _ConnectionStub(rows=[_build_learner_row(formation_program="Cocina")])
    service = SQLAlchemyLearnerRecordService(engine=_EngineStub(connection))

    with pytest.raises(LearnerStoreError, match="ana@example.com"):
        service.db_learner_scan()


def test_db_learner_store_requires_engine() -> None:
    """Reject construction without an engine.

    Returns:
        None: Assertions validate dependency guard.

    Raises:
        AssertionError: Raised when None is accepted.
    """

    with pytest.raises(ValueError, match="engine"):
        SQLAlchemyLearnerRecordService(engine=None)
