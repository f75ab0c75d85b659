"""Course schemas for API request/response models."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.course import Course
from app.schemas.common import InstructorInfo, is_loaded
from app.schemas.review import ReviewResponse


class CourseRequest(BaseModel):
    """Schema for creating or updating a course.

    Attributes:
        title: Course title, unique per instructor.
        description: Optional long description.
        instructor_id: Teaching instructor.
    """

    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    instructor_id: uuid.UUID


class CourseResponse(BaseModel):
    """Response schema for course.

    ``reviews`` is only present for the with-reviews endpoints.
    """

    id: uuid.UUID
    title: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    instructor: Optional[InstructorInfo] = None
    reviews: Optional[List[ReviewResponse]] = None

    @classmethod
    def from_model(cls, course: Course) -> "CourseResponse":
        instructor = None
        if is_loaded(course, "instructor") and course.instructor is not None:
            instructor = InstructorInfo.from_model(course.instructor)
        reviews = None
        if is_loaded(course, "reviews"):
            ordered = sorted(course.reviews, key=lambda r: (r.created_at, str(r.id)))
            reviews = [ReviewResponse.from_model(review) for review in ordered]
        return cls(
            id=course.id,
            title=course.title,
            description=course.description,
            created_at=course.created_at,
            updated_at=course.updated_at,
            instructor=instructor,
            reviews=reviews,
        )
