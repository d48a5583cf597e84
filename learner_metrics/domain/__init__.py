"""Domain models used across application layer boundaries."""

from .learner_records import domain_learner_build_record, domain_learner_filter_matches
from .models import EnglishLevel, FormationProgram, HealthStatus, LearnerQueryFilter, LearnerRecord

__all__ = [
    "EnglishLevel",
    "FormationProgram",
    "HealthStatus",
    "LearnerQueryFilter",
    "LearnerRecord",
    "domain_learner_build_record",
    "domain_learner_filter_matches",
]
