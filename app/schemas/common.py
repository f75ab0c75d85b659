"""Shared response schemas and helpers for building nested responses."""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field
from sqlalchemy import inspect

from app.models.base import utcnow


def is_loaded(instance: Any, attribute: str) -> bool:
    """Tell whether a relationship was eager-loaded, without triggering IO."""
    return attribute not in inspect(instance).unloaded


class CountResponse(BaseModel):
    """Response schema for counting queries.

    Attributes:
        count: Number of matching records.
        resource_type: Counted entity name.
        description: Human-readable description of what was counted.
    """

    count: int
    resource_type: str
    description: Optional[str] = None


class ExistsResponse(BaseModel):
    """Response schema for existence probes."""

    exists: bool
    resource_type: str


class DeletionResponse(BaseModel):
    """Response schema confirming a deletion.

    Attributes:
        deleted_id: ID of the removed record.
        resource_type: Removed entity name.
        message: Human-readable confirmation.
        deletion_timestamp: When the deletion was committed.
        success: Always True; failures are reported as error bodies.
    """

    deleted_id: uuid.UUID
    resource_type: str
    message: str
    deletion_timestamp: datetime = Field(default_factory=utcnow)
    success: bool = True

    @classmethod
    def for_record(
        cls, deleted_id: uuid.UUID, resource_type: str, message: Optional[str] = None
    ) -> "DeletionResponse":
        return cls(
            deleted_id=deleted_id,
            resource_type=resource_type,
            message=message or f"{resource_type} deleted successfully",
        )


class InstructorInfo(BaseModel):
    """Instructor summary embedded in course responses."""

    id: uuid.UUID
    full_name: str
    email: str

    @classmethod
    def from_model(cls, instructor: Any) -> "InstructorInfo":
        return cls(
            id=instructor.id, full_name=instructor.full_name, email=instructor.email
        )


class StudentInfo(BaseModel):
    """Student summary embedded in review and enrollment responses."""

    id: uuid.UUID
    full_name: str
    email: str

    @classmethod
    def from_model(cls, student: Any) -> "StudentInfo":
        return cls(id=student.id, full_name=student.full_name, email=student.email)


class CourseInfo(BaseModel):
    """Course summary embedded in student, review and enrollment responses."""

    id: uuid.UUID
    title: str
    instructor_name: Optional[str] = None

    @classmethod
    def from_model(cls, course: Any) -> "CourseInfo":
        instructor_name = None
        if is_loaded(course, "instructor") and course.instructor is not None:
            instructor_name = course.instructor.full_name
        return cls(id=course.id, title=course.title, instructor_name=instructor_name)
