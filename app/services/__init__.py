"""Business logic services package."""

from app.services.base import BaseService
from app.services.course_service import CourseService
from app.services.instructor_details_service import InstructorDetailsService
from app.services.instructor_service import InstructorService
from app.services.review_service import ReviewService
from app.services.student_service import EnrollmentChange, StudentService

__all__ = [
    "BaseService",
    "CourseService",
    "EnrollmentChange",
    "InstructorDetailsService",
    "InstructorService",
    "ReviewService",
    "StudentService",
]
