"""Student model representing learners enrolled in courses."""

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from app.models.course import Course
    from app.models.review import Review

from sqlalchemy import String
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel
from app.models.enrollment import student_course


class Student(BaseModel):
    """Student model for storing learners.

    Email is unique across students only; an instructor may share it.

    Attributes:
        first_name: Given name
        last_name: Family name
        email: Unique contact address
        courses: Courses the student is enrolled in (through student_course)
        reviews: Reviews authored by the student
    """

    __tablename__ = "student"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )

    courses: Mapped[List["Course"]] = relationship(
        "Course",
        secondary=student_course,
        back_populates="students",
        viewonly=True,
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review", back_populates="student", passive_deletes=True
    )

    @hybrid_property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @full_name.inplace.expression
    @classmethod
    def _full_name_expression(cls):
        return cls.first_name + " " + cls.last_name

    def __repr__(self) -> str:
        return f"Student(id={self.id}, email={self.email!r})"
