"""Instructor details API endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status

from app.schemas.common import DeletionResponse, ExistsResponse
from app.schemas.instructor_details import (
    InstructorDetailsRequest,
    InstructorDetailsResponse,
)
from app.services.instructor_details_service import InstructorDetailsService
from app.utils.dependencies import dependencies

router = APIRouter(
    prefix="/instructor-details",
    tags=["Instructor Details"],
)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_instructor_details(
    data: InstructorDetailsRequest,
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> InstructorDetailsResponse:
    """Create standalone instructor details.

    Args:
        data: Details creation data.
        service: InstructorDetailsService instance.

    Returns:
        Created details, not yet linked to an instructor.
    """
    details = await service.create(**data.model_dump())
    return InstructorDetailsResponse.from_model(details)


@router.get("")
async def list_instructor_details(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> list[InstructorDetailsResponse]:
    records = await service.get_all(limit=limit, offset=offset)
    return [InstructorDetailsResponse.from_model(d) for d in records]


@router.get("/search/youtube")
async def search_by_youtube_channel(
    channel: str = Query(..., min_length=1),
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> list[InstructorDetailsResponse]:
    records = await service.search_by_youtube_channel(channel)
    return [InstructorDetailsResponse.from_model(d) for d in records]


@router.get("/search/hobby")
async def search_by_hobby(
    hobby: str = Query(..., min_length=1),
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> list[InstructorDetailsResponse]:
    records = await service.search_by_hobby(hobby)
    return [InstructorDetailsResponse.from_model(d) for d in records]


@router.get("/orphaned")
async def list_orphaned_details(
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> list[InstructorDetailsResponse]:
    records = await service.get_orphaned()
    return [InstructorDetailsResponse.from_model(d) for d in records]


@router.get("/{details_id}")
async def get_instructor_details(
    details_id: uuid.UUID,
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> InstructorDetailsResponse:
    details = await service.get_by_id_or_fail(details_id)
    return InstructorDetailsResponse.from_model(details)


@router.put("/{details_id}")
async def update_instructor_details(
    details_id: uuid.UUID,
    data: InstructorDetailsRequest,
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> InstructorDetailsResponse:
    details = await service.update(details_id, **data.model_dump())
    return InstructorDetailsResponse.from_model(details)


@router.delete("/{details_id}")
async def delete_instructor_details(
    details_id: uuid.UUID,
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> DeletionResponse:
    """Delete instructor details.

    Linked details must be detached from their instructor first.

    Args:
        details_id: Details ID.
        service: InstructorDetailsService instance.

    Returns:
        Deletion confirmation.
    """
    await service.delete(details_id)
    return DeletionResponse.for_record(details_id, "InstructorDetails")


@router.get("/{details_id}/exists")
async def instructor_details_exists(
    details_id: uuid.UUID,
    service: InstructorDetailsService = Depends(dependencies.instructor_details),
) -> ExistsResponse:
    exists = await service.exists_by_id(details_id)
    return ExistsResponse(exists=exists, resource_type="InstructorDetails")
