"""Instructor schemas for API request/response models."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.instructor import Instructor
from app.schemas.common import is_loaded
from app.schemas.instructor_details import (
    InstructorDetailsRequest,
    InstructorDetailsResponse,
)


class InstructorRequest(BaseModel):
    """Schema for creating or updating an instructor.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        email: Unique contact address.
        instructor_details: Optional nested details, created or updated
            together with the instructor.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    instructor_details: Optional[InstructorDetailsRequest] = None


class InstructorResponse(BaseModel):
    """Response schema for instructor."""

    id: uuid.UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    created_at: datetime
    updated_at: datetime
    instructor_details: Optional[InstructorDetailsResponse] = None

    @classmethod
    def from_model(cls, instructor: Instructor) -> "InstructorResponse":
        details = None
        if (
            is_loaded(instructor, "instructor_details")
            and instructor.instructor_details is not None
        ):
            details = InstructorDetailsResponse.from_model(
                instructor.instructor_details
            ).model_copy(update={"instructor_id": instructor.id})
        return cls(
            id=instructor.id,
            first_name=instructor.first_name,
            last_name=instructor.last_name,
            full_name=instructor.full_name,
            email=instructor.email,
            created_at=instructor.created_at,
            updated_at=instructor.updated_at,
            instructor_details=details,
        )
