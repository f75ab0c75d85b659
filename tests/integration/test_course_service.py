"""Integration tests for CourseService."""

import uuid

import pytest

from app.exceptions import (
    RecordAlreadyExistsError,
    RecordNotFoundError,
    ValidationFailedError,
)
from app.services.course_service import CourseService
from app.services.instructor_service import InstructorService
from app.services.review_service import ReviewService
from app.services.student_service import StudentService


@pytest.mark.asyncio
async def test_create_loads_instructor(course_service: CourseService, instructor):
    course = await course_service.create(title="Algorithms", instructor_id=instructor.id)

    assert course.instructor.id == instructor.id
    assert course.description is None


@pytest.mark.asyncio
async def test_create_for_unknown_instructor_is_not_found(
    course_service: CourseService,
):
    with pytest.raises(RecordNotFoundError) as exc_info:
        await course_service.create(title="Algorithms", instructor_id=uuid.uuid4())

    assert exc_info.value.model_name == "Instructor"
    assert await course_service.count() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "ab", "x" * 256])
async def test_create_rejects_bad_titles(
    course_service: CourseService, instructor, title
):
    with pytest.raises(ValidationFailedError):
        await course_service.create(title=title, instructor_id=instructor.id)


@pytest.mark.asyncio
async def test_duplicate_title_for_same_instructor(
    course_service: CourseService, instructor, course
):
    # Rejected writes roll back and expire loaded instances
    title, instructor_id, course_id = course.title, instructor.id, course.id

    with pytest.raises(RecordAlreadyExistsError) as exc_info:
        await course_service.create(title=title, instructor_id=instructor_id)
    assert exc_info.value.field == "title"

    duplicate = await course_service.create(
        title=title, instructor_id=instructor_id, reject_duplicate_title=False
    )
    assert duplicate.id != course_id
    assert await course_service.count_by_instructor(instructor_id) == 2


@pytest.mark.asyncio
async def test_same_title_for_other_instructor_is_allowed(
    course_service: CourseService, instructor_service: InstructorService, course
):
    other = await instructor_service.create(
        first_name="Ann", last_name="Lee", email="ann.lee@example.com"
    )

    created = await course_service.create(title=course.title, instructor_id=other.id)

    assert created.instructor_id == other.id
    assert await course_service.exists_by_title_and_instructor(course.title, other.id)


@pytest.mark.asyncio
async def test_update_reassigns_instructor(
    course_service: CourseService, instructor_service: InstructorService, course
):
    other = await instructor_service.create(
        first_name="Ann", last_name="Lee", email="ann.lee@example.com"
    )

    updated = await course_service.update(course.id, instructor_id=other.id)

    assert updated.instructor.id == other.id
    assert await course_service.get_by_instructor(other.id) == [updated]


@pytest.mark.asyncio
async def test_update_to_unknown_instructor_keeps_course(
    course_service: CourseService, course
):
    course_id, instructor_id = course.id, course.instructor_id

    with pytest.raises(RecordNotFoundError):
        await course_service.update(course_id, instructor_id=uuid.uuid4())

    reloaded = await course_service.get_by_id_or_fail(course_id)
    assert reloaded.instructor_id == instructor_id


@pytest.mark.asyncio
async def test_delete_removes_reviews_and_enrollments(
    course_service: CourseService,
    review_service: ReviewService,
    student_service: StudentService,
    course,
    student,
):
    # Arrange
    course_id, student_id = course.id, student.id
    await student_service.enroll(student_id, course_id)
    review_ids = [
        (
            await review_service.create(
                course_id=course_id, comment=f"Review {n}", rating=n
            )
        ).id
        for n in (3, 4, 5)
    ]

    # Act
    await course_service.delete(course_id)

    # Assert
    assert await course_service.exists_by_id(course_id) is False
    assert await review_service.count_by_course(course_id) == 0
    for review_id in review_ids:
        with pytest.raises(RecordNotFoundError):
            await review_service.get_by_id_or_fail(review_id)
    assert await student_service.is_enrolled(student_id, course_id) is False
    assert await student_service.exists_by_id(student_id) is True


@pytest.mark.asyncio
async def test_get_with_reviews(
    course_service: CourseService, review_service: ReviewService, course, student
):
    await review_service.create(
        course_id=course.id, student_id=student.id, comment="Solid", rating=5
    )

    loaded = await course_service.get_with_reviews(course.id)

    assert [r.comment for r in loaded.reviews] == ["Solid"]
    assert loaded.reviews[0].student.email == "jane.roe@example.com"


@pytest.mark.asyncio
async def test_get_by_unknown_instructor_is_not_found(course_service: CourseService):
    with pytest.raises(RecordNotFoundError):
        await course_service.get_by_instructor(uuid.uuid4())


@pytest.mark.asyncio
async def test_search_by_title_and_instructor_name(
    course_service: CourseService, instructor, course
):
    second = await course_service.create(title="Abstract Algebra", instructor_id=instructor.id)

    by_title = await course_service.search_by_title("ALGEBRA")
    by_instructor = await course_service.search_by_instructor_name("n d")

    assert [c.id for c in by_title] == [second.id, course.id]
    assert [c.id for c in by_instructor] == [second.id, course.id]
    assert await course_service.search_by_title("geometry") == []
