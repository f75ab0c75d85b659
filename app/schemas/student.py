"""Student and enrollment schemas for API request/response models."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.student import Student
from app.schemas.common import CourseInfo, StudentInfo, is_loaded
from app.services.student_service import EnrollmentChange


class StudentRequest(BaseModel):
    """Schema for creating or updating a student.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        email: Unique contact address.
    """

    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr


class StudentResponse(BaseModel):
    """Response schema for student.

    ``courses`` is only present for endpoints that load enrollments.
    """

    id: uuid.UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    created_at: datetime
    updated_at: datetime
    courses: Optional[List[CourseInfo]] = None

    @classmethod
    def from_model(cls, student: Student) -> "StudentResponse":
        courses = None
        if is_loaded(student, "courses"):
            ordered = sorted(student.courses, key=lambda c: (c.title, str(c.id)))
            courses = [CourseInfo.from_model(course) for course in ordered]
        return cls(
            id=student.id,
            first_name=student.first_name,
            last_name=student.last_name,
            full_name=student.full_name,
            email=student.email,
            created_at=student.created_at,
            updated_at=student.updated_at,
            courses=courses,
        )


class EnrollmentRequest(BaseModel):
    """Schema for enrolling or unenrolling a student."""

    course_id: uuid.UUID


class EnrollmentResponse(BaseModel):
    """Response schema for enroll and unenroll."""

    message: str
    timestamp: datetime
    student: StudentInfo
    course: CourseInfo

    @classmethod
    def from_change(cls, change: EnrollmentChange, message: str) -> "EnrollmentResponse":
        return cls(
            message=message,
            timestamp=change.changed_at,
            student=StudentInfo.from_model(change.student),
            course=CourseInfo.from_model(change.course),
        )


class EnrollmentStatusResponse(BaseModel):
    """Whether a student is enrolled in a course."""

    student_id: uuid.UUID
    course_id: uuid.UUID
    enrolled: bool
