"""Database layer package for all SQL and persistence boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import DatabaseHealthPort, LearnerRecordStorePort, LearnerStoreError
from .learner_store import SQLAlchemyLearnerRecordService
from .session import db_create_engine

__all__ = [
	"DatabaseHealthPort",
	"LearnerRecordStorePort",
	"LearnerStoreError",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyLearnerRecordService",
	"db_create_engine",
]
