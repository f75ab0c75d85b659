"""Review service providing business logic for Review model operations.

Reviews are always created under an existing course and never move to
another course afterwards.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import selectinload

from app.exceptions import IllegalStateError
from app.models.course import Course
from app.models.review import Review
from app.models.student import Student
from app.services.base import BaseService
from app.utils.search import contains_ignore_case, full_name_matches
from app.utils.validation import RATING_MAX, RATING_MIN, FieldValidator

logger = logging.getLogger(__name__)

NEWEST_FIRST = (Review.created_at.desc(), Review.id.desc())


class ReviewService(BaseService[Review]):
    """Service for managing Review entities.

    Provides CRUD operations through BaseService inheritance plus:
    - create(course_id, comment, rating, student_id=None)
    - update(id, **kwargs): refuses to move a review to another course
    - get_by_course(course_id) / get_by_course_ordered_by_date(course_id)
    - get_latest(limit=None)
    - search_by_comment(term) / search_by_course_title(term)
    - get_by_instructor(instructor_id)
    - count_by_course(course_id)
    - get_by_student(student_id) / count_by_student(student_id)
    - get_by_course_and_student(course_id, student_id)
    - search_by_student_email(term) / search_by_student_name(term)

    Every read loads the course with its instructor, and the author.

    Usage:
        service = ReviewService(db_session)
        review = await service.create(
            course_id=course.id, comment="Great pacing", rating=5
        )
        latest = await service.get_latest(limit=10)
    """

    model = Review
    load_options = (
        selectinload(Review.course).selectinload(Course.instructor),
        selectinload(Review.student),
    )

    def validate(self, values: Dict[str, Any], *, partial: bool = False) -> None:
        validator = FieldValidator()
        if not partial or "comment" in values:
            validator.text("comment", values.get("comment"))
        if not partial or "rating" in values:
            validator.int_range(
                "rating", values.get("rating"), minimum=RATING_MIN, maximum=RATING_MAX
            )
        if not partial:
            validator.required("course_id", values.get("course_id"))
        validator.raise_if_invalid()

    async def create(self, **kwargs: Any) -> Review:
        """Create a review under an existing course.

        Args:
            **kwargs: Review attributes; ``student_id`` is optional

        Raises:
            ValidationFailedError: If field values are rejected
            RecordNotFoundError: If the course, or the given author, is missing
            DatabaseConnectionError: If database operation fails
        """
        self.validate(kwargs)
        async with self.transaction("create"):
            await self.ensure_exists(kwargs["course_id"], model=Course)
            if kwargs.get("student_id") is not None:
                await self.ensure_exists(kwargs["student_id"], model=Student)
            review = Review(**kwargs)
            self.db.add(review)
            await self.db.flush()

        logger.debug(
            "Created Review",
            extra={"id": review.id, "course_id": review.course_id},
        )
        return await self.get_by_id_or_fail(review.id)

    async def update(self, record_id: uuid.UUID, **kwargs: Any) -> Review:
        """Update a review's comment, rating or author.

        A ``course_id`` equal to the current one is accepted and ignored.

        Raises:
            RecordNotFoundError: If the review, or the given author, is missing
            IllegalStateError: If a different course_id is supplied
            ValidationFailedError: If field values are rejected
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("update", record_id):
            review = await self.get_by_id_or_fail(record_id)
            course_id = kwargs.pop("course_id", None)
            if course_id is not None and course_id != review.course_id:
                raise IllegalStateError(
                    self.model_name,
                    f"Review {record_id} belongs to course {review.course_id} "
                    "and cannot be moved to another course",
                )
            self.validate(kwargs, partial=True)
            if kwargs.get("student_id") is not None:
                await self.ensure_exists(kwargs["student_id"], model=Student)
            for key, value in kwargs.items():
                setattr(review, key, value)
            await self.db.flush()

        logger.debug("Updated Review", extra={"id": record_id})
        return await self.get_by_id_or_fail(record_id)

    async def get_by_course(self, course_id: uuid.UUID) -> List[Review]:
        """Get a course's reviews, oldest first.

        Raises:
            RecordNotFoundError: If course not found
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(course_id, model=Course)
        stmt = (
            self.select()
            .where(Review.course_id == course_id)
            .order_by(Review.created_at, Review.id)
        )
        return await self.fetch_all(stmt, "get by course")

    async def get_by_course_ordered_by_date(self, course_id: uuid.UUID) -> List[Review]:
        await self.ensure_exists(course_id, model=Course)
        stmt = self.select().where(Review.course_id == course_id).order_by(*NEWEST_FIRST)
        return await self.fetch_all(stmt, "get by course ordered by date")

    async def get_latest(self, limit: Optional[int] = None) -> List[Review]:
        """Get reviews across all courses, newest first.

        Args:
            limit: Maximum number of reviews; all when None

        Raises:
            DatabaseConnectionError: If database operation fails.
        """
        stmt = self.select().order_by(*NEWEST_FIRST)
        if limit:
            stmt = stmt.limit(limit)
        return await self.fetch_all(stmt, "get latest")

    async def search_by_comment(self, term: str) -> List[Review]:
        stmt = (
            self.select()
            .where(contains_ignore_case(Review.comment, term))
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "search by comment")

    async def search_by_course_title(self, term: str) -> List[Review]:
        stmt = (
            self.select()
            .join(Course, Review.course_id == Course.id)
            .where(contains_ignore_case(Course.title, term))
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "search by course title")

    async def get_by_instructor(self, instructor_id: uuid.UUID) -> List[Review]:
        """Get reviews of every course taught by an instructor.

        An unknown instructor yields an empty list.
        """
        stmt = (
            self.select()
            .join(Course, Review.course_id == Course.id)
            .where(Course.instructor_id == instructor_id)
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "get by instructor")

    async def count_by_course(self, course_id: uuid.UUID) -> int:
        return await self.count(course_id=course_id)

    async def get_by_student(self, student_id: uuid.UUID) -> List[Review]:
        """Get reviews authored by a student, newest first.

        Raises:
            RecordNotFoundError: If student not found
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(student_id, model=Student)
        stmt = (
            self.select()
            .where(Review.student_id == student_id)
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "get by student")

    async def count_by_student(self, student_id: uuid.UUID) -> int:
        return await self.count(student_id=student_id)

    async def get_by_course_and_student(
        self, course_id: uuid.UUID, student_id: uuid.UUID
    ) -> List[Review]:
        """Get the reviews a student left on one course, newest first.

        Raises:
            RecordNotFoundError: If the course or the student is missing
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(course_id, model=Course)
        await self.ensure_exists(student_id, model=Student)
        stmt = (
            self.select()
            .where(Review.course_id == course_id, Review.student_id == student_id)
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "get by course and student")

    async def search_by_student_email(self, term: str) -> List[Review]:
        stmt = (
            self.select()
            .join(Student, Review.student_id == Student.id)
            .where(contains_ignore_case(Student.email, term))
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "search by student email")

    async def search_by_student_name(self, term: str) -> List[Review]:
        """Find reviews whose author's first, last or full name matches.

        Reviews without an author never match.
        """
        stmt = (
            self.select()
            .join(Student, Review.student_id == Student.id)
            .where(full_name_matches(Student, term))
            .order_by(*NEWEST_FIRST)
        )
        return await self.fetch_all(stmt, "search by student name")
