"""Enrollment API endpoints linking students and courses."""

import uuid

from fastapi import APIRouter, Depends, Query

from app.schemas.common import CountResponse
from app.schemas.student import (
    EnrollmentRequest,
    EnrollmentResponse,
    EnrollmentStatusResponse,
    StudentResponse,
)
from app.services.student_service import StudentService
from app.utils.dependencies import dependencies

router = APIRouter(tags=["Enrollment"])


@router.post("/students/{student_id}/enroll")
async def enroll_student(
    student_id: uuid.UUID,
    data: EnrollmentRequest,
    service: StudentService = Depends(dependencies.student),
) -> EnrollmentResponse:
    """Enroll a student in a course.

    Args:
        student_id: Student ID.
        data: Course to enroll in.
        service: StudentService instance.

    Returns:
        Enrollment confirmation. Enrolling twice is rejected with 409.
    """
    change = await service.enroll(student_id, data.course_id)
    return EnrollmentResponse.from_change(change, "Student enrolled successfully")


@router.delete("/students/{student_id}/unenroll")
async def unenroll_student(
    student_id: uuid.UUID,
    data: EnrollmentRequest,
    service: StudentService = Depends(dependencies.student),
) -> EnrollmentResponse:
    change = await service.unenroll(student_id, data.course_id)
    return EnrollmentResponse.from_change(change, "Student unenrolled successfully")


@router.get("/students/{student_id}/enrollment/courses/{course_id}")
async def get_enrollment_status(
    student_id: uuid.UUID,
    course_id: uuid.UUID,
    service: StudentService = Depends(dependencies.student),
) -> EnrollmentStatusResponse:
    enrolled = await service.is_enrolled(student_id, course_id)
    return EnrollmentStatusResponse(
        student_id=student_id, course_id=course_id, enrolled=enrolled
    )


@router.get("/courses/{course_id}/students")
async def get_course_students(
    course_id: uuid.UUID,
    enrolled: bool = Query(
        default=True, description="False lists students not enrolled in the course"
    ),
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    if enrolled:
        students = await service.get_enrolled_in_course(course_id)
    else:
        students = await service.get_not_enrolled_in_course(course_id)
    return [StudentResponse.from_model(s) for s in students]


@router.get("/courses/{course_id}/students/count")
async def count_course_students(
    course_id: uuid.UUID,
    service: StudentService = Depends(dependencies.student),
) -> CountResponse:
    count = await service.count_in_course(course_id)
    return CountResponse(
        count=count,
        resource_type="Student",
        description=f"Students enrolled in course {course_id}",
    )


@router.get("/instructors/{instructor_id}/students")
async def get_instructor_students(
    instructor_id: uuid.UUID,
    service: StudentService = Depends(dependencies.student),
) -> list[StudentResponse]:
    """List distinct students enrolled in any course of an instructor."""
    students = await service.get_by_instructor(instructor_id)
    return [StudentResponse.from_model(s) for s in students]
