"""Learner metrics API router composition for the six aggregation reports."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from learner_metrics.analytics import (
    AggregationResult,
    LearnerMetricsNotFoundError,
    LearnerMetricsPort,
    LearnerMetricsValidationError,
    analytics_serialize_result,
)
from learner_metrics.config import AppSettings
from learner_metrics.db import LearnerStoreError

logger = logging.getLogger(__name__)


def api_create_learner_metrics_router(
    settings: AppSettings,
    report_service: LearnerMetricsPort,
) -> APIRouter:
    """Create learner metrics router exposing report endpoints.

    Args:
        settings: Runtime settings used to decide whether error details are exposed.
        report_service: Analytics-layer report service.

    Returns:
        APIRouter: Router exposing `/learners-metrics/*` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if report_service is None:
        raise ValueError("report_service must not be None")

    router = APIRouter(prefix="/learners-metrics", tags=["learners-metrics"])

    def api_run_report(build_report: Callable[[], AggregationResult], error_code: str) -> JSONResponse:
        """Run one report and map its outcome to an HTTP response.

        Args:
            build_report: Zero-argument report builder.
            error_code: Code returned when the store fails.

        Returns:
            JSONResponse: Report payload or error envelope.

        Raises:
            RuntimeError: Unexpected errors propagate to the framework.
        """

        try:
            result = build_report()
        except LearnerMetricsValidationError as error:
            return api_error_response(status.HTTP_400_BAD_REQUEST, error.error_code, str(error))
        except LearnerMetricsNotFoundError as error:
            return api_error_response(status.HTTP_404_NOT_FOUND, error.error_code, str(error))
        except (LearnerStoreError, ValueError) as error:
            logger.exception("learner metrics report failed [%s]", error_code)
            details = str(error) if settings.config_is_development() else None
            return api_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_code,
                "internal server error",
                details=details,
            )
        return JSONResponse(content=analytics_serialize_result(result), status_code=status.HTTP_200_OK)

    @router.get("/by-center")
    def api_learners_by_center() -> JSONResponse:
        """Return learner counts per formation center."""

        return api_run_report(report_service.metrics_learners_by_center, "LEARNERS_BY_CENTER_ERROR")

    @router.get("/instructors-by-center/{center}")
    def api_instructors_by_center(center: str) -> JSONResponse:
        """Return recommended instructor counts for one center.

        Args:
            center: URL-decoded formation center name.

        Returns:
            JSONResponse: Instructor counts, 400 for a blank center, 404 when nothing matches.
        """

        return api_run_report(
            lambda: report_service.metrics_instructors_by_center(center),
            "INSTRUCTORS_BY_CENTER_ERROR",
        )

    @router.get("/by-center-program")
    def api_learners_by_center_program() -> JSONResponse:
        """Return learner counts for the top programs of every center."""

        return api_run_report(report_service.metrics_learners_by_center_program, "CENTER_PROGRAM_ERROR")

    @router.get("/by-department")
    def api_learners_by_department() -> JSONResponse:
        """Return survey-completed learner counts per department."""

        return api_run_report(report_service.metrics_learners_by_department, "DEPARTMENT_QUERY_ERROR")

    @router.get("/with-github")
    def api_learners_with_github() -> JSONResponse:
        """Return GitHub learner count with its share of all learners."""

        return api_run_report(report_service.metrics_learners_with_github, "GITHUB_QUERY_ERROR")

    @router.get("/english-by-center")
    def api_english_by_center() -> JSONResponse:
        """Return B1/B2 English learner counts per center with totals."""

        return api_run_report(report_service.metrics_english_by_center, "ENGLISH_LEVEL_ERROR")

    return router


def api_error_response(status_code: int, error_code: str, message: str, details: str | None = None) -> JSONResponse:
    """Build the shared error envelope.

    Args:
        status_code: HTTP status code.
        error_code: Stable machine-readable code.
        message: Caller-safe message.
        details: Optional diagnostic detail, only set in development.

    Returns:
        JSONResponse: Error response.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    payload: dict[str, object] = {
        "status": "error",
        "code": error_code,
        "message": message,
    }
    if details is not None:
        payload["details"] = details
    return JSONResponse(content=payload, status_code=status_code)


__all__ = ["api_create_learner_metrics_router", "api_error_response"]
