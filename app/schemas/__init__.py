"""Pydantic schemas for API request/response models."""

from app.schemas.common import CountResponse, DeletionResponse, ExistsResponse
from app.schemas.course import CourseRequest, CourseResponse
from app.schemas.instructor import InstructorRequest, InstructorResponse
from app.schemas.instructor_details import (
    InstructorDetailsRequest,
    InstructorDetailsResponse,
)
from app.schemas.review import ReviewRequest, ReviewResponse
from app.schemas.student import (
    EnrollmentRequest,
    EnrollmentResponse,
    EnrollmentStatusResponse,
    StudentRequest,
    StudentResponse,
)

__all__ = [
    "CountResponse",
    "CourseRequest",
    "CourseResponse",
    "DeletionResponse",
    "EnrollmentRequest",
    "EnrollmentResponse",
    "EnrollmentStatusResponse",
    "ExistsResponse",
    "InstructorDetailsRequest",
    "InstructorDetailsResponse",
    "InstructorRequest",
    "InstructorResponse",
    "ReviewRequest",
    "ReviewResponse",
    "StudentRequest",
    "StudentResponse",
]
