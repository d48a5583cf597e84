"""Learners field rules

Revision ID: 20261019_02
Revises: 20261019_01
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "20261019_02"
down_revision: Union[str, Sequence[str], None] = "20261019_01"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_LEARNERS_FIELD_RULES = (
    ("ck_learners_name_not_blank", "btrim(name) <> ''"),
    ("ck_learners_formation_center_not_blank", "btrim(formation_center) <> ''"),
    ("ck_learners_department_not_blank", "btrim(department) <> ''"),
    ("ck_learners_email_format", r"email ~ '^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$'"),
    ("ck_learners_github_username_requires_flag", "github_username is null or has_github"),
    (
        "ck_learners_recommended_instructors_text",
        "not jsonb_path_exists(recommended_instructors, "
        "'$[*] ? (@.type() != \"string\" || @ like_regex \"^[[:space:]]*$\")')",
    ),
)


def upgrade() -> None:
    """Upgrade schema."""

    for constraint_name, condition in _LEARNERS_FIELD_RULES:
        op.create_check_constraint(constraint_name, "learners", condition)


def downgrade() -> None:
    """Downgrade schema."""

    for constraint_name, _ in reversed(_LEARNERS_FIELD_RULES):
        op.drop_constraint(constraint_name, "learners", type_="check")
