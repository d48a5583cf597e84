"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI
from sqlalchemy import Engine

from learner_metrics.analytics import LearnerMetricsReportService
from learner_metrics.api import create_api_application
from learner_metrics.config import AppSettings, config_load_settings
from learner_metrics.db import SQLAlchemyDatabaseHealthService, SQLAlchemyLearnerRecordService, db_create_engine


def bootstrap_create_report_service(
    settings: AppSettings,
    engine: Engine | None = None,
) -> LearnerMetricsReportService:
    """Build the report service over the configured learner database.

    Args:
        settings: Validated runtime settings.
        engine: Optional shared engine; created from `settings.database_url` when omitted.

    Returns:
        LearnerMetricsReportService: Report service backed by the SQLAlchemy store.

    Raises:
        ValueError: Raised when the database URL is blank.
    """

    engine = engine or db_create_engine(database_url=settings.database_url)
    return LearnerMetricsReportService(
        store=SQLAlchemyLearnerRecordService(engine=engine),
        program_top_limit=settings.metrics_program_top_limit,
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional preloaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        report_service=bootstrap_create_report_service(resolved_settings, engine),
    )
