"""Courses API endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status

from app.schemas.common import CountResponse, DeletionResponse, ExistsResponse
from app.schemas.course import CourseRequest, CourseResponse
from app.services.course_service import CourseService
from app.utils.dependencies import dependencies

router = APIRouter(
    prefix="/courses",
    tags=["Courses"],
)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_course(
    data: CourseRequest,
    allow_duplicate_title: bool = Query(
        default=False,
        description="Allow a second course with the same title for this instructor",
    ),
    service: CourseService = Depends(dependencies.course),
) -> CourseResponse:
    """Create a new course.

    Args:
        data: Course creation data.
        allow_duplicate_title: Skip the per-instructor title uniqueness check.
        service: CourseService instance.

    Returns:
        Created course with its instructor.
    """
    course = await service.create(
        reject_duplicate_title=not allow_duplicate_title, **data.model_dump()
    )
    return CourseResponse.from_model(course)


@router.get("")
async def list_courses(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    service: CourseService = Depends(dependencies.course),
) -> list[CourseResponse]:
    courses = await service.get_all(limit=limit, offset=offset)
    return [CourseResponse.from_model(c) for c in courses]


@router.get("/search/title")
async def search_courses_by_title(
    title: str = Query(..., min_length=1),
    service: CourseService = Depends(dependencies.course),
) -> list[CourseResponse]:
    courses = await service.search_by_title(title)
    return [CourseResponse.from_model(c) for c in courses]


@router.get("/search/instructor")
async def search_courses_by_instructor_name(
    name: str = Query(..., min_length=1),
    service: CourseService = Depends(dependencies.course),
) -> list[CourseResponse]:
    courses = await service.search_by_instructor_name(name)
    return [CourseResponse.from_model(c) for c in courses]


@router.get("/with-reviews")
async def list_courses_with_reviews(
    service: CourseService = Depends(dependencies.course),
) -> list[CourseResponse]:
    courses = await service.get_all_with_reviews()
    return [CourseResponse.from_model(c) for c in courses]


@router.get("/exists")
async def course_title_exists(
    title: str = Query(..., min_length=1),
    instructor_id: uuid.UUID = Query(...),
    service: CourseService = Depends(dependencies.course),
) -> ExistsResponse:
    """Check whether an instructor already teaches a course with this exact title."""
    exists = await service.exists_by_title_and_instructor(title, instructor_id)
    return ExistsResponse(exists=exists, resource_type="Course")


@router.get("/instructor/{instructor_id}")
async def get_courses_by_instructor(
    instructor_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> list[CourseResponse]:
    courses = await service.get_by_instructor(instructor_id)
    return [CourseResponse.from_model(c) for c in courses]


@router.get("/instructor/{instructor_id}/with-reviews")
async def get_courses_by_instructor_with_reviews(
    instructor_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> list[CourseResponse]:
    courses = await service.get_by_instructor_with_reviews(instructor_id)
    return [CourseResponse.from_model(c) for c in courses]


@router.get("/instructor/{instructor_id}/count")
async def count_courses_by_instructor(
    instructor_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> CountResponse:
    count = await service.count_by_instructor(instructor_id)
    return CountResponse(
        count=count,
        resource_type="Course",
        description=f"Courses taught by instructor {instructor_id}",
    )


@router.get("/{course_id}")
async def get_course(
    course_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> CourseResponse:
    course = await service.get_by_id_or_fail(course_id)
    return CourseResponse.from_model(course)


@router.get("/{course_id}/with-reviews")
async def get_course_with_reviews(
    course_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> CourseResponse:
    course = await service.get_with_reviews(course_id)
    return CourseResponse.from_model(course)


@router.put("/{course_id}")
async def update_course(
    course_id: uuid.UUID,
    data: CourseRequest,
    allow_duplicate_title: bool = Query(default=False),
    service: CourseService = Depends(dependencies.course),
) -> CourseResponse:
    course = await service.update(
        course_id, reject_duplicate_title=not allow_duplicate_title, **data.model_dump()
    )
    return CourseResponse.from_model(course)


@router.delete("/{course_id}")
async def delete_course(
    course_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> DeletionResponse:
    """Delete a course together with its reviews and enrollments.

    Args:
        course_id: Course ID.
        service: CourseService instance.

    Returns:
        Deletion confirmation.
    """
    await service.delete(course_id)
    return DeletionResponse.for_record(course_id, "Course")


@router.get("/{course_id}/exists")
async def course_exists(
    course_id: uuid.UUID,
    service: CourseService = Depends(dependencies.course),
) -> ExistsResponse:
    exists = await service.exists_by_id(course_id)
    return ExistsResponse(exists=exists, resource_type="Course")
