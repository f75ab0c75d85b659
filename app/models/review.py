"""Review model holding feedback left on a course."""

import uuid
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.models.course import Course
    from app.models.student import Student

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Review(BaseModel):
    """Review of a course, optionally attributed to a student.

    Reviews have no lifecycle of their own: they are created under an
    existing course, never move to another course, and are removed when the
    course is removed.

    Attributes:
        comment: Review text
        rating: Integer score from 1 to 5
        course_id: FK to the reviewed course (required)
        student_id: FK to the authoring student (nullable)
    """

    __tablename__ = "review"

    comment: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    course_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("course.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("student.id", ondelete="SET NULL"), nullable=True, index=True
    )

    course: Mapped["Course"] = relationship("Course", back_populates="reviews")
    student: Mapped[Optional["Student"]] = relationship(
        "Student", back_populates="reviews"
    )

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )

    def __repr__(self) -> str:
        return f"Review(id={self.id}, course_id={self.course_id}, rating={self.rating})"
