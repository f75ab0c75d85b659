"""Student-course enrollment join table."""

from sqlalchemy import Column, DateTime, ForeignKey, Table, Uuid, func

from app.models.base import utcnow
from app.utils.db import Base

# Rows are written with explicit INSERT/DELETE statements by StudentService;
# the ORM relationships over this table are read-only.
student_course = Table(
    "student_course",
    Base.metadata,
    Column(
        "student_id",
        Uuid,
        ForeignKey("student.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "course_id",
        Uuid,
        ForeignKey("course.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column(
        "enrolled_at",
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    ),
)
