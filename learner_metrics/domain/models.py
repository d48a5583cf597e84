"""Typed domain models shared across runtime layers.

This module provides the immutable learner record, its closed enumerations and
the structured query filter understood by record stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class FormationProgram(str, Enum):
    """Closed set of formation programs a learner can be enrolled in."""

    SOFTWARE_DEVELOPMENT = "Desarrollo de Software"
    INDUSTRIAL_MECHANICS = "Mecánica Industrial"
    GRAPHIC_DESIGN = "Diseño Gráfico"
    ELECTRONICS = "Electrónica"


class EnglishLevel(str, Enum):
    """Closed CEFR-like scale for self-reported English level."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


@dataclass(frozen=True)
class LearnerRecord:
    """One immutable learner enrollment entry.

    Instances should be built with `domain_learner_build_record` so field
    normalization and validation are applied.

    Attributes:
        name: Learner display name.
        email: Unique lower-cased email address.
        formation_center: Training center name.
        formation_program: Enrolled program.
        department: Department of residence.
        has_github: Whether the learner reported a GitHub account.
        github_username: Optional GitHub username, only set when `has_github` is true.
        english_level: Optional English level.
        recommended_instructors: Ordered instructor names recommended by the learner.
        survey_completed: Whether the intake survey was completed.
        created_at: Timezone-aware creation timestamp.
    """

    name: str
    email: str
    formation_center: str
    formation_program: FormationProgram
    department: str
    has_github: bool
    github_username: str | None
    english_level: EnglishLevel | None
    recommended_instructors: tuple[str, ...]
    survey_completed: bool
    created_at: datetime


@dataclass(frozen=True)
class LearnerQueryFilter:
    """Structured learner query understood by record stores.

    Unset attributes do not constrain the query, so a default instance
    selects all records.

    Attributes:
        formation_center: Exact center name match.
        has_github: Exact GitHub flag match.
        survey_completed: Exact survey flag match.
        english_levels: Allowed English levels; records without a level never match.
        require_department: Require a non-empty department.
        require_instructors: Require at least one recommended instructor.
    """

    formation_center: str | None = None
    has_github: bool | None = None
    survey_completed: bool | None = None
    english_levels: tuple[EnglishLevel, ...] | None = None
    require_department: bool = False
    require_instructors: bool = False


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str
