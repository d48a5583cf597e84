"""FastAPI application factory for the learner metrics service."""

from fastapi import FastAPI

from learner_metrics.analytics import LearnerMetricsPort
from learner_metrics.config import AppSettings
from learner_metrics.db import DatabaseHealthPort

from .routers import api_create_health_router, api_create_learner_metrics_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    report_service: LearnerMetricsPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        report_service: Learner metrics report service.

    Returns:
        FastAPI: Framework application instance with all routers mounted.
    """
    application = FastAPI(title="Learner Metrics")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service identification payload."""

        return {
            "service": "learner-metrics",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(
        api_create_learner_metrics_router(settings=settings, report_service=report_service)
    )

    return application
