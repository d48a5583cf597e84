"""API router package for endpoint composition."""

from .health import api_create_health_router
from .learner_metrics import api_create_learner_metrics_router

__all__ = ["api_create_health_router", "api_create_learner_metrics_router"]
