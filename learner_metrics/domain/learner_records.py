"""Learner record normalization, validation and in-memory filter evaluation.

Every path that materializes a `LearnerRecord` goes through
`domain_learner_build_record` so the closed enumerations and field rules hold
for stored rows and test fixtures alike.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone

from .models import EnglishLevel, FormationProgram, LearnerQueryFilter, LearnerRecord

_DOMAIN_LEARNER_EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")


def domain_learner_normalize_required_text(value: object, field_name: str) -> str:
    """Trim one required text value.

    Args:
        value: Candidate value.
        field_name: Field name used in error messages.

    Returns:
        str: Trimmed non-empty text.

    Raises:
        ValueError: Raised when value is not text or is blank.
    """

    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    normalized_value = value.strip()
    if not normalized_value:
        raise ValueError(f"{field_name} must not be blank")
    return normalized_value


def domain_learner_normalize_optional_text(value: object | None) -> str | None:
    """Trim one optional text value, mapping blanks to None.

    Args:
        value: Candidate value.

    Returns:
        str | None: Trimmed text or None when missing or blank.

    Raises:
        ValueError: Raised when a non-null value is not text.
    """

    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("optional text value must be a string")
    normalized_value = value.strip()
    return normalized_value or None


def domain_learner_normalize_email(value: object) -> str:
    """Normalize and validate one learner email address.

    Args:
        value: Candidate email.

    Returns:
        str: Trimmed lower-cased email.

    Raises:
        ValueError: Raised when the email is blank or malformed.
    """

    normalized_email = domain_learner_normalize_required_text(value, "email").lower()
    if _DOMAIN_LEARNER_EMAIL_PATTERN.match(normalized_email) is None:
        raise ValueError(f"email is invalid: {normalized_email}")
    return normalized_email


def domain_learner_parse_program(value: object) -> FormationProgram:
    """Parse one formation program value.

    Args:
        value: Program enum member or its text value.

    Returns:
        FormationProgram: Parsed program.

    Raises:
        ValueError: Raised when the value is not a known program.
    """

    if isinstance(value, FormationProgram):
        return value
    normalized_value = domain_learner_normalize_required_text(value, "formation_program")
    try:
        return FormationProgram(normalized_value)
    except ValueError as error:
        raise ValueError(f"formation_program is not supported: {normalized_value}") from error


def domain_learner_parse_english_level(value: object | None) -> EnglishLevel | None:
    """Parse one optional English level value.

    Args:
        value: Level enum member, its text value, or None.

    Returns:
        EnglishLevel | None: Parsed level or None when absent.

    Raises:
        ValueError: Raised when the value is not a known level.
    """

    if value is None or isinstance(value, EnglishLevel):
        return value
    normalized_value = domain_learner_normalize_optional_text(value)
    if normalized_value is None:
        return None
    try:
        return EnglishLevel(normalized_value.upper())
    except ValueError as error:
        raise ValueError(f"english_level is not supported: {normalized_value}") from error


def domain_learner_normalize_instructors(values: Iterable[object] | None) -> tuple[str, ...]:
    """Trim recommended instructor names, keeping their order and duplicates.

    Args:
        values: Instructor names or None.

    Returns:
        tuple[str, ...]: Trimmed instructor names.

    Raises:
        ValueError: Raised when the value is a bare string or an entry is blank.
    """

    if values is None:
        return ()
    if isinstance(values, str):
        raise ValueError("recommended_instructors must be a list of strings")
    return tuple(
        domain_learner_normalize_required_text(value, "recommended_instructors entry") for value in values
    )


def domain_learner_build_record(
    name: object,
    email: object,
    formation_center: object,
    formation_program: object,
    department: object,
    has_github: bool = False,
    github_username: object | None = None,
    english_level: object | None = None,
    recommended_instructors: Iterable[object] | None = None,
    survey_completed: bool = False,
    created_at: datetime | None = None,
) -> LearnerRecord:
    """Build one validated immutable learner record.

    Args:
        name: Learner name.
        email: Learner email.
        formation_center: Training center name.
        formation_program: Program enum member or text value.
        department: Department name.
        has_github: GitHub account flag.
        github_username: Optional GitHub username.
        english_level: Optional English level.
        recommended_instructors: Optional instructor names.
        survey_completed: Survey completion flag.
        created_at: Optional creation timestamp; naive values are read as UTC.

    Returns:
        LearnerRecord: Validated record.

    Raises:
        ValueError: Raised when any field violates record rules.
    """

    normalized_github_username = domain_learner_normalize_optional_text(github_username)
    if normalized_github_username is not None and not has_github:
        raise ValueError("github_username requires has_github to be true")

    resolved_created_at = created_at or datetime.now(timezone.utc)
    if resolved_created_at.tzinfo is None:
        resolved_created_at = resolved_created_at.replace(tzinfo=timezone.utc)

    return LearnerRecord(
        name=domain_learner_normalize_required_text(name, "name"),
        email=domain_learner_normalize_email(email),
        formation_center=domain_learner_normalize_required_text(formation_center, "formation_center"),
        formation_program=domain_learner_parse_program(formation_program),
        department=domain_learner_normalize_required_text(department, "department"),
        has_github=bool(has_github),
        github_username=normalized_github_username,
        english_level=domain_learner_parse_english_level(english_level),
        recommended_instructors=domain_learner_normalize_instructors(recommended_instructors),
        survey_completed=bool(survey_completed),
        created_at=resolved_created_at,
    )


def domain_learner_filter_matches(query_filter: LearnerQueryFilter | None, record: LearnerRecord) -> bool:
    """Evaluate one structured query filter against a record in memory.

    Args:
        query_filter: Filter to evaluate; None matches every record.
        record: Candidate record.

    Returns:
        bool: True when the record satisfies every set filter attribute.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if query_filter is None:
        return True
    if query_filter.formation_center is not None and record.formation_center != query_filter.formation_center:
        return False
    if query_filter.has_github is not None and record.has_github != query_filter.has_github:
        return False
    if query_filter.survey_completed is not None and record.survey_completed != query_filter.survey_completed:
        return False
    if query_filter.english_levels is not None and record.english_level not in query_filter.english_levels:
        return False
    if query_filter.require_department and not record.department:
        return False
    if query_filter.require_instructors and not record.recommended_instructors:
        return False
    return True
