"""create course management schema

Revision ID: 3f1a9c2e7b54
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2e7b54"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create instructor, student, course, review and enrollment tables."""
    op.create_table(
        "instructor_details",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("youtube_channel", sa.String(length=255), nullable=False),
        sa.Column("hobby", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_instructor_details"),
    )

    op.create_table(
        "instructor",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("instructor_details_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(
            ["instructor_details_id"],
            ["instructor_details.id"],
            name="fk_instructor_details",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_instructor"),
        sa.UniqueConstraint(
            "instructor_details_id", name="uq_instructor_instructor_details_id"
        ),
    )
    op.create_index("ix_instructor_email", "instructor", ["email"], unique=True)

    op.create_table(
        "student",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_student"),
    )
    op.create_index("ix_student_email", "student", ["email"], unique=True)

    op.create_table(
        "course",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("instructor_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["instructor_id"], ["instructor.id"], name="fk_course_instructor_id"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_course"),
    )
    op.create_index("ix_course_title", "course", ["title"], unique=False)
    op.create_index("ix_course_instructor_id", "course", ["instructor_id"], unique=False)

    op.create_table(
        "review",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Uuid(), nullable=False),
        sa.Column("student_id", sa.Uuid(), nullable=True),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["course.id"],
            name="fk_review_course_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["student_id"],
            ["student.id"],
            name="fk_review_student_id",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_review"),
    )
    op.create_index("ix_review_course_id", "review", ["course_id"], unique=False)
    op.create_index("ix_review_student_id", "review", ["student_id"], unique=False)

    op.create_table(
        "student_course",
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("course_id", sa.Uuid(), nullable=False),
        sa.Column(
            "enrolled_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["student_id"],
            ["student.id"],
            name="fk_student_course_student_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["course.id"],
            name="fk_student_course_course_id",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("student_id", "course_id", name="pk_student_course"),
    )
    op.create_index(
        "ix_student_course_course_id", "student_course", ["course_id"], unique=False
    )


def downgrade() -> None:
    """Drop all course management tables."""
    op.drop_index("ix_student_course_course_id", table_name="student_course")
    op.drop_table("student_course")
    op.drop_index("ix_review_student_id", table_name="review")
    op.drop_index("ix_review_course_id", table_name="review")
    op.drop_table("review")
    op.drop_index("ix_course_instructor_id", table_name="course")
    op.drop_index("ix_course_title", table_name="course")
    op.drop_table("course")
    op.drop_index("ix_student_email", table_name="student")
    op.drop_table("student")
    op.drop_index("ix_instructor_email", table_name="instructor")
    op.drop_table("instructor")
    op.drop_table("instructor_details")
