"""InstructorDetails schemas for API request/response models."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.instructor_details import InstructorDetails
from app.schemas.common import is_loaded


class InstructorDetailsRequest(BaseModel):
    """Schema for creating or updating instructor details.

    Attributes:
        youtube_channel: Channel URL or handle.
        hobby: Optional free-text hobby.
    """

    youtube_channel: str = Field(..., min_length=1, max_length=255)
    hobby: Optional[str] = Field(default=None, max_length=500)


class InstructorDetailsResponse(BaseModel):
    """Response schema for instructor details.

    ``instructor_id`` is set when the owning instructor was loaded and is
    None for orphaned details.
    """

    id: uuid.UUID
    youtube_channel: str
    hobby: Optional[str] = None
    instructor_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, details: InstructorDetails) -> "InstructorDetailsResponse":
        instructor_id = None
        if is_loaded(details, "instructor") and details.instructor is not None:
            instructor_id = details.instructor.id
        return cls(
            id=details.id,
            youtube_channel=details.youtube_channel,
            hobby=details.hobby,
            instructor_id=instructor_id,
            created_at=details.created_at,
            updated_at=details.updated_at,
        )
