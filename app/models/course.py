"""Course model representing a class taught by one instructor."""

import uuid
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from app.models.instructor import Instructor
    from app.models.review import Review
    from app.models.student import Student

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel
from app.models.enrollment import student_course


class Course(BaseModel):
    """Course model owned by an instructor, reviewed and attended by students.

    (title, instructor_id) is intentionally not a database constraint; the
    service layer decides whether duplicates are rejected.

    Attributes:
        title: Course title
        description: Optional long description
        instructor_id: FK to the teaching instructor (required)
        instructor: Teaching Instructor
        students: Enrolled students (through student_course)
        reviews: Reviews of this course, removed together with it
    """

    __tablename__ = "course"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    instructor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("instructor.id"), nullable=False, index=True
    )

    instructor: Mapped["Instructor"] = relationship(
        "Instructor", back_populates="courses"
    )
    students: Mapped[List["Student"]] = relationship(
        "Student",
        secondary=student_course,
        back_populates="courses",
        viewonly=True,
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"Course(id={self.id}, title={self.title!r})"
