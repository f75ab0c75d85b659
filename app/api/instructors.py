"""Instructors API endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status

from app.schemas.common import DeletionResponse, ExistsResponse
from app.schemas.instructor import InstructorRequest, InstructorResponse
from app.services.instructor_service import InstructorService
from app.utils.dependencies import dependencies

router = APIRouter(
    prefix="/instructors",
    tags=["Instructors"],
)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_instructor(
    data: InstructorRequest,
    service: InstructorService = Depends(dependencies.instructor),
) -> InstructorResponse:
    """Create a new instructor, optionally with nested details.

    Args:
        data: Instructor creation data.
        service: InstructorService instance.

    Returns:
        Created instructor.
    """
    instructor = await service.create(**data.model_dump())
    return InstructorResponse.from_model(instructor)


@router.get("")
async def list_instructors(
    limit: Optional[int] = Query(default=None, ge=1, description="Max results"),
    offset: Optional[int] = Query(default=None, ge=0, description="Rows to skip"),
    service: InstructorService = Depends(dependencies.instructor),
) -> list[InstructorResponse]:
    instructors = await service.get_all(limit=limit, offset=offset)
    return [InstructorResponse.from_model(i) for i in instructors]


@router.get("/search")
async def search_instructors(
    name: str = Query(..., min_length=1, description="Part of first, last or full name"),
    service: InstructorService = Depends(dependencies.instructor),
) -> list[InstructorResponse]:
    """Search instructors by name, ignoring case.

    Args:
        name: Substring of the first name, last name or "first last".
        service: InstructorService instance.

    Returns:
        Matching instructors.
    """
    instructors = await service.search_by_name(name)
    return [InstructorResponse.from_model(i) for i in instructors]


@router.get("/with-details")
async def list_instructors_with_details(
    service: InstructorService = Depends(dependencies.instructor),
) -> list[InstructorResponse]:
    instructors = await service.get_with_details()
    return [InstructorResponse.from_model(i) for i in instructors]


@router.get("/without-details")
async def list_instructors_without_details(
    service: InstructorService = Depends(dependencies.instructor),
) -> list[InstructorResponse]:
    instructors = await service.get_without_details()
    return [InstructorResponse.from_model(i) for i in instructors]


@router.get("/email/{email}")
async def get_instructor_by_email(
    email: str,
    service: InstructorService = Depends(dependencies.instructor),
) -> InstructorResponse:
    instructor = await service.get_by_email(email)
    return InstructorResponse.from_model(instructor)


@router.get("/email/{email}/exists")
async def instructor_email_exists(
    email: str,
    service: InstructorService = Depends(dependencies.instructor),
) -> ExistsResponse:
    exists = await service.exists_by_email(email)
    return ExistsResponse(exists=exists, resource_type="Instructor")


@router.get("/{instructor_id}")
async def get_instructor(
    instructor_id: uuid.UUID,
    service: InstructorService = Depends(dependencies.instructor),
) -> InstructorResponse:
    instructor = await service.get_by_id_or_fail(instructor_id)
    return InstructorResponse.from_model(instructor)


@router.put("/{instructor_id}")
async def update_instructor(
    instructor_id: uuid.UUID,
    data: InstructorRequest,
    service: InstructorService = Depends(dependencies.instructor),
) -> InstructorResponse:
    """Update an instructor.

    Omitting ``instructor_details`` leaves the linked details untouched.

    Args:
        instructor_id: Instructor ID.
        data: New instructor values.
        service: InstructorService instance.

    Returns:
        Updated instructor.
    """
    instructor = await service.update(instructor_id, **data.model_dump(exclude_none=True))
    return InstructorResponse.from_model(instructor)


@router.delete("/{instructor_id}")
async def delete_instructor(
    instructor_id: uuid.UUID,
    service: InstructorService = Depends(dependencies.instructor),
) -> DeletionResponse:
    await service.delete(instructor_id)
    return DeletionResponse.for_record(instructor_id, "Instructor")


@router.put("/{instructor_id}/details/{details_id}")
async def attach_instructor_details(
    instructor_id: uuid.UUID,
    details_id: uuid.UUID,
    service: InstructorService = Depends(dependencies.instructor),
) -> InstructorResponse:
    instructor = await service.attach_details(instructor_id, details_id)
    return InstructorResponse.from_model(instructor)


@router.delete("/{instructor_id}/details")
async def detach_instructor_details(
    instructor_id: uuid.UUID,
    service: InstructorService = Depends(dependencies.instructor),
) -> InstructorResponse:
    instructor = await service.detach_details(instructor_id)
    return InstructorResponse.from_model(instructor)


@router.get("/{instructor_id}/exists")
async def instructor_exists(
    instructor_id: uuid.UUID,
    service: InstructorService = Depends(dependencies.instructor),
) -> ExistsResponse:
    exists = await service.exists_by_id(instructor_id)
    return ExistsResponse(exists=exists, resource_type="Instructor")
