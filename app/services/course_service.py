"""Course service providing business logic for Course model operations.

Courses belong to one instructor and own their reviews: deleting a course
removes its reviews and enrollment rows in the same transaction.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from app.exceptions import RecordAlreadyExistsError, RecordNotFoundError
from app.models.course import Course
from app.models.enrollment import student_course
from app.models.instructor import Instructor
from app.models.review import Review
from app.services.base import BaseService
from app.utils.search import contains_ignore_case, full_name_matches
from app.utils.validation import FieldValidator

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 255

# Reviews with their author, for the course-with-reviews aggregate.
WITH_REVIEWS = selectinload(Course.reviews).selectinload(Review.student)


class CourseService(BaseService[Course]):
    """Service for managing Course entities.

    Provides CRUD operations through BaseService inheritance plus:
    - create(title, instructor_id, description=None, reject_duplicate_title=True)
    - update(id, **kwargs): may reassign the instructor
    - delete(id): removes reviews and enrollment rows first
    - get_with_reviews(id) / get_all_with_reviews()
    - get_by_instructor(instructor_id) / get_by_instructor_with_reviews(...)
    - search_by_title(term) / search_by_instructor_name(term)
    - exists_by_title_and_instructor(title, instructor_id)
    - count_by_instructor(instructor_id)

    Every read loads the teaching instructor.

    Usage:
        service = CourseService(db_session)
        course = await service.create(title="Algebra", instructor_id=instructor.id)
        course = await service.get_with_reviews(course.id)
    """

    model = Course
    load_options = (selectinload(Course.instructor),)

    def validate(self, values: Dict[str, Any], *, partial: bool = False) -> None:
        validator = FieldValidator()
        if not partial or "title" in values:
            validator.text(
                "title",
                values.get("title"),
                min_length=TITLE_MIN_LENGTH,
                max_length=TITLE_MAX_LENGTH,
            )
        if not partial or "instructor_id" in values:
            validator.required("instructor_id", values.get("instructor_id"))
        validator.raise_if_invalid()

    async def _ensure_title_available(
        self,
        title: str,
        instructor_id: uuid.UUID,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        criteria = [Course.title == title, Course.instructor_id == instructor_id]
        if exclude_id is not None:
            criteria.append(Course.id != exclude_id)
        if await self.exists_where(*criteria):
            raise RecordAlreadyExistsError(self.model_name, "title", title)

    async def create(
        self, *, reject_duplicate_title: bool = True, **kwargs: Any
    ) -> Course:
        """Create a course taught by an existing instructor.

        Args:
            reject_duplicate_title: Refuse a second course with the same
                title for the same instructor
            **kwargs: Course attributes

        Raises:
            ValidationFailedError: If field values are rejected
            RecordNotFoundError: If the instructor does not exist
            RecordAlreadyExistsError: If the title is taken for this instructor
            DatabaseConnectionError: If database operation fails
        """
        self.validate(kwargs)
        async with self.transaction("create"):
            await self.ensure_exists(kwargs["instructor_id"], model=Instructor)
            if reject_duplicate_title:
                await self._ensure_title_available(
                    kwargs["title"], kwargs["instructor_id"]
                )
            course = Course(**kwargs)
            self.db.add(course)
            await self.db.flush()

        logger.debug(
            "Created Course",
            extra={"id": course.id, "instructor_id": course.instructor_id},
        )
        return await self.get_by_id_or_fail(course.id)

    async def update(
        self,
        record_id: uuid.UUID,
        *,
        reject_duplicate_title: bool = True,
        **kwargs: Any,
    ) -> Course:
        """Update a course, optionally moving it to another instructor.

        Raises:
            RecordNotFoundError: If the course or the new instructor is missing
            ValidationFailedError: If field values are rejected
            RecordAlreadyExistsError: If the resulting title/instructor pair
                is taken by another course
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("update", record_id):
            course = await self.get_by_id_or_fail(record_id)
            self.validate(kwargs, partial=True)

            title = kwargs.get("title", course.title)
            instructor_id = kwargs.get("instructor_id", course.instructor_id)
            if instructor_id != course.instructor_id:
                await self.ensure_exists(instructor_id, model=Instructor)
            changed = title != course.title or instructor_id != course.instructor_id
            if reject_duplicate_title and changed:
                await self._ensure_title_available(
                    title, instructor_id, exclude_id=record_id
                )

            for key, value in kwargs.items():
                setattr(course, key, value)
            await self.db.flush()

        logger.debug("Updated Course", extra={"id": record_id})
        return await self.get_by_id_or_fail(record_id)

    async def delete(self, record_id: uuid.UUID) -> None:
        """Delete a course with its reviews and enrollments.

        Raises:
            RecordNotFoundError: If course not found
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("delete", record_id):
            await self.ensure_exists(record_id)
            reviews = await self.db.execute(
                delete(Review).where(Review.course_id == record_id)
            )
            await self.db.execute(
                delete(student_course).where(student_course.c.course_id == record_id)
            )
            await self.db.execute(delete(Course).where(Course.id == record_id))

        logger.debug(
            "Deleted Course",
            extra={"id": record_id, "reviews_deleted": reviews.rowcount},
        )

    async def get_with_reviews(self, course_id: uuid.UUID) -> Course:
        """Get a course with instructor and reviews fully loaded.

        Raises:
            RecordNotFoundError: If course not found
            DatabaseConnectionError: If database operation fails
        """
        course = await self.fetch_one(
            self.select().options(WITH_REVIEWS).where(Course.id == course_id),
            "get with reviews",
        )
        if course is None:
            raise RecordNotFoundError(self.model_name, "id", course_id)
        return course

    async def get_all_with_reviews(self) -> List[Course]:
        stmt = (
            self.select()
            .options(WITH_REVIEWS)
            .order_by(Course.created_at, Course.id)
        )
        return await self.fetch_all(stmt, "get all with reviews")

    async def get_by_instructor(self, instructor_id: uuid.UUID) -> List[Course]:
        """Get the courses taught by an instructor.

        Raises:
            RecordNotFoundError: If instructor not found
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(instructor_id, model=Instructor)
        stmt = (
            self.select()
            .where(Course.instructor_id == instructor_id)
            .order_by(Course.created_at, Course.id)
        )
        return await self.fetch_all(stmt, "get by instructor")

    async def get_by_instructor_with_reviews(
        self, instructor_id: uuid.UUID
    ) -> List[Course]:
        await self.ensure_exists(instructor_id, model=Instructor)
        stmt = (
            self.select()
            .options(WITH_REVIEWS)
            .where(Course.instructor_id == instructor_id)
            .order_by(Course.created_at, Course.id)
        )
        return await self.fetch_all(stmt, "get by instructor with reviews")

    async def search_by_title(self, term: str) -> List[Course]:
        stmt = (
            self.select()
            .where(contains_ignore_case(Course.title, term))
            .order_by(Course.title, Course.id)
        )
        return await self.fetch_all(stmt, "search by title")

    async def search_by_instructor_name(self, term: str) -> List[Course]:
        """Find courses whose instructor's first, last or full name matches.

        Args:
            term: Case-insensitive substring

        Raises:
            DatabaseConnectionError: If database operation fails.
        """
        stmt = (
            self.select()
            .join(Instructor, Course.instructor_id == Instructor.id)
            .where(full_name_matches(Instructor, term))
            .order_by(Course.title, Course.id)
        )
        return await self.fetch_all(stmt, "search by instructor name")

    async def exists_by_title_and_instructor(
        self, title: str, instructor_id: uuid.UUID
    ) -> bool:
        return await self.exists_where(
            Course.title == title, Course.instructor_id == instructor_id
        )

    async def count_by_instructor(self, instructor_id: uuid.UUID) -> int:
        stmt = select(func.count(Course.id)).where(
            Course.instructor_id == instructor_id
        )
        return int(await self.fetch_scalar(stmt, "count by instructor") or 0)
