"""Data models package."""

from app.exceptions import (
    DatabaseConnectionError,
    IntegrityViolationError,
    ModelError,
    RecordNotFoundError,
)
from app.models.base import BaseModel
from app.models.course import Course
from app.models.enrollment import student_course
from app.models.instructor import Instructor
from app.models.instructor_details import InstructorDetails
from app.models.review import Review
from app.models.student import Student

__all__ = [
    "BaseModel",
    "ModelError",
    "RecordNotFoundError",
    "IntegrityViolationError",
    "DatabaseConnectionError",
    "Instructor",
    "InstructorDetails",
    "Student",
    "Course",
    "Review",
    "student_course",
]
