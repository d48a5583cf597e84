"""Learners table baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "learners",
        sa.Column("learner_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("formation_center", sa.Text(), nullable=False),
        sa.Column("formation_program", sa.Text(), nullable=False),
        sa.Column("department", sa.Text(), nullable=False),
        sa.Column("has_github", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("github_username", sa.Text(), nullable=True),
        sa.Column("english_level", sa.Text(), nullable=True),
        sa.Column(
            "recommended_instructors",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("survey_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("email", name="uq_learners_email"),
        sa.CheckConstraint("email = lower(email)", name="ck_learners_email_lowercase"),
        sa.CheckConstraint(
            "formation_program in ('Desarrollo de Software', 'Mecánica Industrial', 'Diseño Gráfico', 'Electrónica')",
            name="ck_learners_formation_program",
        ),
        sa.CheckConstraint(
            "english_level is null or english_level in ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')",
            name="ck_learners_english_level",
        ),
        sa.CheckConstraint(
            "jsonb_typeof(recommended_instructors) = 'array'",
            name="ck_learners_recommended_instructors_array",
        ),
    )
    op.create_index("ix_learners_formation_center", "learners", ["formation_center"])
    op.create_index("ix_learners_formation_program", "learners", ["formation_program"])
    op.create_index("ix_learners_department", "learners", ["department"])
    op.create_index("ix_learners_has_github", "learners", ["has_github"])
    op.create_index("ix_learners_english_level", "learners", ["english_level"])
    op.create_index("ix_learners_survey_completed", "learners", ["survey_completed"])
    op.create_index("ix_learners_created_at", "learners", [sa.text("created_at DESC")])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("learners")
