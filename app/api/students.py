"""Students API endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status

from app.schemas.common import CourseInfo, DeletionResponse
from app.schemas.student import StudentRequest, StudentResponse
from app.services.student_service import StudentService
from app.utils.dependencies import dependencies

router = APIRouter(
    prefix="/students",
    tags=["Students"],
)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_student(
    data: StudentRequest,
    service: StudentService = Depends(dependencies.student),
) -> StudentResponse:
    """Create a new student.

    Args:
        data: Student creation data.
        service: StudentService instance.

    Returns:
        Created student.
    """
    student = await service.create(**data.model_dump())
    return StudentResponse.from_model(student)


@router.get("")
async def list_students(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    students = await service.get_all(limit=limit, offset=offset)
    return [StudentResponse.from_model(s) for s in students]


@router.get("/search/name")
async def search_students_by_name(
    name: str = Query(..., min_length=1),
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    students = await service.search_by_name(name)
    return [StudentResponse.from_model(s) for s in students]


@router.get("/search/email")
async def search_students_by_email(
    email: str = Query(..., min_length=1),
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    students = await service.search_by_email(email)
    return [StudentResponse.from_model(s) for s in students]


@router.get("/email/{email}")
async def get_student_by_email(
    email: str,
    service: StudentService = Depends(dependencies.student),
) -> StudentResponse:
    student = await service.get_by_email(email)
    return StudentResponse.from_model(student)


@router.get("/no-courses")
async def list_students_without_courses(
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    students = await service.get_without_courses()
    return [StudentResponse.from_model(s) for s in students]


@router.get("/with-courses")
async def list_students_with_courses(
    min_courses: Optional[int] = Query(
        default=None, ge=0, description="Only students with more courses than this"
    ),
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    """List students together with their enrolled courses.

    Args:
        min_courses: Keep students enrolled in strictly more courses.
            Omit to list every student.
        service: StudentService instance.

    Returns:
        Students with courses loaded.
    """
    if min_courses is None:
        students = await service.get_all_with_courses()
    else:
        students = await service.get_with_more_than_n_courses(min_courses)
    return [StudentResponse.from_model(s) for s in students]


@router.get("/{student_id}")
async def get_student(
    student_id: uuid.UUID,
    service: StudentService = Depends(dependencies.student),
) -> StudentResponse:
    student = await service.get_with_courses(student_id)
    return StudentResponse.from_model(student)


@router.put("/{student_id}")
async def update_student(
    student_id: uuid.UUID,
    data: StudentRequest,
    service: StudentService = Depends(dependencies.student),
) -> StudentResponse:
    await service.update(student_id, **data.model_dump())
    student = await service.get_with_courses(student_id)
    return StudentResponse.from_model(student)


@router.delete("/{student_id}")
async def delete_student(
    student_id: uuid.UUID,
    service: StudentService = Depends(dependencies.student),
) -> DeletionResponse:
    """Delete a student.

    Enrollments are removed; reviews written by the student are kept
    without an author.

    Args:
        student_id: Student ID.
        service: StudentService instance.

    Returns:
        Deletion confirmation.
    """
    await service.delete(student_id)
    return DeletionResponse.for_record(student_id, "Student")


@router.get("/{student_id}/courses")
async def get_student_courses(
    student_id: uuid.UUID,
    service: StudentService = Depends(dependencies.student),
) -> list[CourseInfo]:
    courses = await service.get_courses(student_id)
    return [CourseInfo.from_model(c) for c in courses]
