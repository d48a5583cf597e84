"""Main module entrypoint for local runtime execution.

This module validates startup configuration, configures logging and either
launches the FastAPI service or prints one report.
"""

import argparse
import json
import logging

import uvicorn

from learner_metrics.analytics import (
    LearnerMetricsNotFoundError,
    LearnerMetricsPort,
    LearnerMetricsValidationError,
    analytics_serialize_result,
)
from learner_metrics.bootstrap import bootstrap_create_application, bootstrap_create_report_service
from learner_metrics.config import config_load_settings
from learner_metrics.db import LearnerStoreError
from learner_metrics.logging_config import configure_logging

logger = logging.getLogger(__name__)

MAIN_REPORT_NAMES = (
    "by-center",
    "instructors-by-center",
    "by-center-program",
    "by-department",
    "with-github",
    "english-by-center",
)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 2 for invalid report input and 1 for store or aggregation failures.
    """

    argument_parser = argparse.ArgumentParser(description="Learner metrics runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "report"),
        help="Runtime command: `api` starts server, `report` prints one report as JSON",
        type=str,
    )
    argument_parser.add_argument(
        "--report-name",
        dest="report_name",
        choices=MAIN_REPORT_NAMES,
        default="by-center",
        help="Report printed by the `report` command",
    )
    argument_parser.add_argument(
        "--center",
        dest="center",
        type=str,
        help="Formation center for the `instructors-by-center` report",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    configure_logging(settings.log_level)

    if parsed_arguments.command == "report":
        report_service = bootstrap_create_report_service(settings)
        try:
            payload = main_build_report_payload(report_service, parsed_arguments.report_name, parsed_arguments.center)
        except (LearnerMetricsValidationError, LearnerMetricsNotFoundError) as error:
            logger.error("report %s rejected [%s]: %s", parsed_arguments.report_name, error.error_code, error)
            raise SystemExit(2) from error
        except (LearnerStoreError, ValueError) as error:
            logger.exception("report %s failed", parsed_arguments.report_name)
            raise SystemExit(1) from error
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_build_report_payload(
    report_service: LearnerMetricsPort,
    report_name: str,
    center: str | None = None,
) -> dict[str, object]:
    """Build one named report payload.

    Args:
        report_service: Report service.
        report_name: One of `MAIN_REPORT_NAMES`.
        center: Center for the instructors report.

    Returns:
        dict[str, object]: Serialized report payload.

    Raises:
        ValueError: Raised when report_name is unknown.
        LearnerMetricsValidationError: Raised when center is missing for the instructors report.
    """

    builders = {
        "by-center": report_service.metrics_learners_by_center,
        "instructors-by-center": lambda: report_service.metrics_instructors_by_center(center),
        "by-center-program": report_service.metrics_learners_by_center_program,
        "by-department": report_service.metrics_learners_by_department,
        "with-github": report_service.metrics_learners_with_github,
        "english-by-center": report_service.metrics_english_by_center,
    }
    if report_name not in builders:
        raise ValueError(f"unsupported report name: {report_name}")
    return analytics_serialize_result(builders[report_name]())


if __name__ == "__main__":
    main()
