"""Instructor model representing course owners."""

import uuid
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from app.models.course import Course
    from app.models.instructor_details import InstructorDetails

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Instructor(BaseModel):
    """Instructor model for storing people who teach courses.

    Email is unique across instructors. The instructor row owns the
    one-to-one link to InstructorDetails through ``instructor_details_id``;
    the column is unique so a details record belongs to at most one
    instructor.

    Attributes:
        first_name: Given name
        last_name: Family name
        email: Unique contact address
        instructor_details_id: FK to the owned details record (nullable)
        instructor_details: Owned InstructorDetails, if linked
        courses: Courses taught by the instructor (inverse side)
        full_name: "first_name last_name", usable in queries
    """

    __tablename__ = "instructor"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    instructor_details_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("instructor_details.id", name="fk_instructor_details"),
        nullable=True,
        unique=True,
    )

    instructor_details: Mapped[Optional["InstructorDetails"]] = relationship(
        "InstructorDetails",
        back_populates="instructor",
        foreign_keys=[instructor_details_id],
    )
    courses: Mapped[List["Course"]] = relationship(
        "Course", back_populates="instructor"
    )

    @hybrid_property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @full_name.inplace.expression
    @classmethod
    def _full_name_expression(cls):
        return cls.first_name + " " + cls.last_name

    def __repr__(self) -> str:
        return f"Instructor(id={self.id}, email={self.email!r})"
