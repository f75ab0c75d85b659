"""Review schemas for API request/response models."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.review import Review
from app.schemas.common import CourseInfo, StudentInfo, is_loaded
from app.utils.validation import RATING_MAX, RATING_MIN


class ReviewRequest(BaseModel):
    """Schema for creating or updating a review.

    The course is taken from the URL on creation. On update, a
    ``course_id`` different from the review's course is rejected.

    Attributes:
        comment: Review text.
        rating: Score from 1 to 5.
        course_id: Optional course ID, must match the review's course.
        student_id: Optional authoring student.
    """

    comment: str = Field(..., min_length=1)
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    course_id: Optional[uuid.UUID] = None
    student_id: Optional[uuid.UUID] = None


class ReviewResponse(BaseModel):
    """Response schema for review."""

    id: uuid.UUID
    comment: str
    rating: int
    created_at: datetime
    updated_at: datetime
    course: Optional[CourseInfo] = None
    student: Optional[StudentInfo] = None

    @classmethod
    def from_model(cls, review: Review) -> "ReviewResponse":
        course = None
        if is_loaded(review, "course") and review.course is not None:
            course = CourseInfo.from_model(review.course)
        student = None
        if is_loaded(review, "student") and review.student is not None:
            student = StudentInfo.from_model(review.student)
        return cls(
            id=review.id,
            comment=review.comment,
            rating=review.rating,
            created_at=review.created_at,
            updated_at=review.updated_at,
            course=course,
            student=student,
        )
