"""Integration tests for ReviewService."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.exceptions import IllegalStateError, RecordNotFoundError, ValidationFailedError
from app.services.course_service import CourseService
from app.services.review_service import ReviewService
from app.services.student_service import StudentService

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


async def _reviews_at(service: ReviewService, course_id: uuid.UUID, count: int):
    """Create ``count`` reviews one hour apart, oldest first."""
    reviews = []
    for n in range(count):
        reviews.append(
            await service.create(
                course_id=course_id,
                comment=f"Review {n + 1}",
                rating=n % 5 + 1,
                created_at=BASE_TIME + timedelta(hours=n),
            )
        )
    return reviews


@pytest.mark.asyncio
async def test_create_loads_course_and_author(
    review_service: ReviewService, course, student
):
    review = await review_service.create(
        course_id=course.id, student_id=student.id, comment="Great pacing", rating=5
    )

    assert review.course.title == "Linear Algebra"
    assert review.course.instructor.full_name == "John Doe"
    assert review.student.id == student.id


@pytest.mark.asyncio
async def test_create_without_author(review_service: ReviewService, course):
    review = await review_service.create(course_id=course.id, comment="Anon", rating=3)

    assert review.student is None


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6, None])
async def test_create_rejects_out_of_range_rating(
    review_service: ReviewService, course, rating
):
    with pytest.raises(ValidationFailedError) as exc_info:
        await review_service.create(course_id=course.id, comment="Hm", rating=rating)

    assert [error.field for error in exc_info.value.errors] == ["rating"]


@pytest.mark.asyncio
async def test_create_requires_existing_course(review_service: ReviewService):
    with pytest.raises(RecordNotFoundError) as exc_info:
        await review_service.create(course_id=uuid.uuid4(), comment="Hm", rating=3)

    assert exc_info.value.model_name == "Course"


@pytest.mark.asyncio
async def test_create_with_unknown_author_is_not_found(
    review_service: ReviewService, course
):
    with pytest.raises(RecordNotFoundError) as exc_info:
        await review_service.create(
            course_id=course.id, student_id=uuid.uuid4(), comment="Hm", rating=3
        )

    assert exc_info.value.model_name == "Student"
    assert await review_service.count() == 0


@pytest.mark.asyncio
async def test_course_reviews_newest_first(review_service: ReviewService, course):
    t1, t2, t3 = await _reviews_at(review_service, course.id, 3)

    newest_first = await review_service.get_by_course_ordered_by_date(course.id)
    oldest_first = await review_service.get_by_course(course.id)

    assert [r.id for r in newest_first] == [t3.id, t2.id, t1.id]
    assert [r.id for r in oldest_first] == [t1.id, t2.id, t3.id]


@pytest.mark.asyncio
async def test_get_latest_with_limit(review_service: ReviewService, course):
    _, t2, t3 = await _reviews_at(review_service, course.id, 3)

    latest = await review_service.get_latest(limit=2)

    assert [r.id for r in latest] == [t3.id, t2.id]
    assert len(await review_service.get_latest()) == 3


@pytest.mark.asyncio
async def test_update_cannot_move_review(
    review_service: ReviewService, course_service: CourseService, course
):
    other = await course_service.create(title="Calculus", instructor_id=course.instructor_id)
    review = await review_service.create(course_id=course.id, comment="Fine", rating=3)
    review_id, course_id = review.id, course.id

    with pytest.raises(IllegalStateError):
        await review_service.update(review_id, course_id=other.id, rating=1)

    reloaded = await review_service.get_by_id_or_fail(review_id)
    assert reloaded.course_id == course_id
    assert reloaded.rating == 3


@pytest.mark.asyncio
async def test_update_with_same_course_is_accepted(review_service: ReviewService, course):
    review = await review_service.create(course_id=course.id, comment="Fine", rating=3)

    updated = await review_service.update(
        review.id, course_id=course.id, comment="Better", rating=4
    )

    assert updated.comment == "Better"
    assert updated.rating == 4


@pytest.mark.asyncio
async def test_searches(review_service: ReviewService, course, student):
    review = await review_service.create(
        course_id=course.id, student_id=student.id, comment="Loved the PROOFS", rating=5
    )

    assert [r.id for r in await review_service.search_by_comment("proofs")] == [
        review.id
    ]
    assert [r.id for r in await review_service.search_by_course_title("linear")] == [
        review.id
    ]
    assert await review_service.search_by_comment("100%") == []


@pytest.mark.asyncio
async def test_by_instructor_and_student(
    review_service: ReviewService, course, student, instructor
):
    review = await review_service.create(
        course_id=course.id, student_id=student.id, comment="Good", rating=4
    )

    assert [r.id for r in await review_service.get_by_instructor(instructor.id)] == [
        review.id
    ]
    assert await review_service.get_by_instructor(uuid.uuid4()) == []
    assert [r.id for r in await review_service.get_by_student(student.id)] == [
        review.id
    ]
    assert await review_service.count_by_student(student.id) == 1
    assert await review_service.count_by_course(course.id) == 1


@pytest.mark.asyncio
async def test_by_unknown_course_or_student_is_not_found(review_service: ReviewService):
    with pytest.raises(RecordNotFoundError):
        await review_service.get_by_course(uuid.uuid4())
    with pytest.raises(RecordNotFoundError):
        await review_service.get_by_student(uuid.uuid4())


@pytest.mark.asyncio
async def test_by_course_and_student(
    review_service: ReviewService,
    course_service: CourseService,
    student_service: StudentService,
    course,
    student,
):
    # Arrange
    other_course = await course_service.create(
        title="Calculus", instructor_id=course.instructor_id
    )
    other_student = await student_service.create(
        first_name="Bob", last_name="Brown", email="bob.brown@example.com"
    )
    older = await review_service.create(
        course_id=course.id,
        student_id=student.id,
        comment="First pass",
        rating=3,
        created_at=BASE_TIME,
    )
    newer = await review_service.create(
        course_id=course.id,
        student_id=student.id,
        comment="Second pass",
        rating=5,
        created_at=BASE_TIME + timedelta(hours=1),
    )
    await review_service.create(
        course_id=other_course.id, student_id=student.id, comment="Other", rating=2
    )
    await review_service.create(
        course_id=course.id, student_id=other_student.id, comment="Bob's", rating=4
    )

    # Act
    reviews = await review_service.get_by_course_and_student(course.id, student.id)

    # Assert
    assert [r.id for r in reviews] == [newer.id, older.id]


@pytest.mark.asyncio
async def test_by_course_and_student_requires_both(
    review_service: ReviewService, course, student
):
    with pytest.raises(RecordNotFoundError) as exc_info:
        await review_service.get_by_course_and_student(uuid.uuid4(), student.id)
    assert exc_info.value.model_name == "Course"

    with pytest.raises(RecordNotFoundError) as exc_info:
        await review_service.get_by_course_and_student(course.id, uuid.uuid4())
    assert exc_info.value.model_name == "Student"


@pytest.mark.asyncio
async def test_search_by_student_email_and_name(
    review_service: ReviewService, student_service: StudentService, course, student
):
    # Arrange
    other = await student_service.create(
        first_name="Bob", last_name="Brown", email="bob.brown@example.com"
    )
    jane_review = await review_service.create(
        course_id=course.id, student_id=student.id, comment="Clear", rating=5
    )
    await review_service.create(
        course_id=course.id, student_id=other.id, comment="Fast", rating=3
    )
    await review_service.create(course_id=course.id, comment="Anonymous", rating=1)

    # Act
    by_email = await review_service.search_by_student_email("JANE.ROE@")
    by_full_name = await review_service.search_by_student_name("e R")
    by_last_name = await review_service.search_by_student_name("roe")

    # Assert
    assert [r.id for r in by_email] == [jane_review.id]
    assert [r.id for r in by_full_name] == [jane_review.id]
    assert [r.id for r in by_last_name] == [jane_review.id]
    assert await review_service.search_by_student_name("zed") == []
