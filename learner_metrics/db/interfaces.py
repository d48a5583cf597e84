"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from typing import Protocol

from learner_metrics.domain import HealthStatus, LearnerQueryFilter, LearnerRecord


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class LearnerStoreError(RuntimeError):
    """Raised when the learner record store cannot serve a scan or count."""


class LearnerRecordStorePort(Protocol):
    """Port definition for read-only learner record access."""

    def db_learner_scan(self, query_filter: LearnerQueryFilter | None = None) -> list[LearnerRecord]:
        """Return learner records matching a filter in stable creation order.

        Args:
            query_filter: Optional structured filter; None selects all records.

        Returns:
            list[LearnerRecord]: Matching records ordered by creation time then email.

        Raises:
            LearnerStoreError: Raised when the store read fails.
        """

    def db_learner_count(self, query_filter: LearnerQueryFilter | None = None) -> int:
        """Count learner records matching a filter.

        Args:
            query_filter: Optional structured filter; None counts all records.

        Returns:
            int: Number of matching records.

        Raises:
            LearnerStoreError: Raised when the store read fails.
        """
