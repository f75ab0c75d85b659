"""Student service providing business logic for Student model operations.

Enrollment rows in ``student_course`` are written only here, with explicit
INSERT and DELETE statements; the ORM collections over the join table are
read-only and are refreshed by the eager queries.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, exists, func, insert, select, update
from sqlalchemy.orm import selectinload

from app.exceptions import IllegalStateError, RecordAlreadyExistsError, RecordNotFoundError
from app.models.base import utcnow
from app.models.course import Course
from app.models.enrollment import student_course
from app.models.instructor import Instructor
from app.models.review import Review
from app.models.student import Student
from app.services.base import BaseService
from app.services.course_service import CourseService
from app.utils.search import contains_ignore_case, full_name_matches
from app.utils.validation import FieldValidator

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

# Enrolled courses with their instructor, for the student-with-courses aggregate.
WITH_COURSES = selectinload(Student.courses).selectinload(Course.instructor)


@dataclass
class EnrollmentChange:
    """Outcome of an enroll or unenroll call."""

    student: Student
    course: Course
    changed_at: datetime


class StudentService(BaseService[Student]):
    """Service for managing Student entities and their enrollments.

    Provides CRUD operations through BaseService inheritance plus:
    - enroll(student_id, course_id) / unenroll(student_id, course_id)
    - is_enrolled(student_id, course_id) / count_in_course(course_id)
    - get_enrolled_in_course(course_id) / get_not_enrolled_in_course(course_id)
    - get_by_instructor(instructor_id): Students of any of the instructor's courses
    - get_courses(student_id)
    - get_with_courses(id) / get_all_with_courses()
    - search_by_name(term) / search_by_email(term)
    - get_by_email(email) / exists_by_email(email)
    - get_without_courses() / get_with_more_than_n_courses(n)

    Usage:
        service = StudentService(db_session)
        student = await service.create(
            first_name="Jane", last_name="Roe", email="jane@example.com"
        )
        await service.enroll(student.id, course.id)
    """

    model = Student

    def validate(self, values: Dict[str, Any], *, partial: bool = False) -> None:
        validator = FieldValidator()
        for field in ("first_name", "last_name"):
            if not partial or field in values:
                validator.text(
                    field,
                    values.get(field),
                    min_length=NAME_MIN_LENGTH,
                    max_length=NAME_MAX_LENGTH,
                )
        if not partial or "email" in values:
            validator.email("email", values.get("email"))
        validator.raise_if_invalid()

    async def _ensure_email_available(
        self, email: str, exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        criteria = [Student.email == email]
        if exclude_id is not None:
            criteria.append(Student.id != exclude_id)
        if await self.exists_where(*criteria):
            raise RecordAlreadyExistsError(self.model_name, "email", email)

    async def create(self, **kwargs: Any) -> Student:
        """Create a student.

        Raises:
            ValidationFailedError: If field values are rejected
            RecordAlreadyExistsError: If the email is already taken
            DatabaseConnectionError: If database operation fails
        """
        self.validate(kwargs)
        async with self.transaction("create"):
            await self._ensure_email_available(kwargs["email"])
            student = Student(**kwargs)
            self.db.add(student)
            await self.db.flush()

        logger.debug("Created Student", extra={"id": student.id})
        return await self.get_by_id_or_fail(student.id)

    async def update(self, record_id: uuid.UUID, **kwargs: Any) -> Student:
        """Update a student.

        Raises:
            RecordNotFoundError: If student not found
            ValidationFailedError: If field values are rejected
            RecordAlreadyExistsError: If changing to an email already taken
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("update", record_id):
            student = await self.get_by_id_or_fail(record_id)
            self.validate(kwargs, partial=True)
            if "email" in kwargs and kwargs["email"] != student.email:
                await self._ensure_email_available(kwargs["email"], exclude_id=record_id)
            for key, value in kwargs.items():
                setattr(student, key, value)
            await self.db.flush()

        logger.debug("Updated Student", extra={"id": record_id})
        return await self.get_by_id_or_fail(record_id)

    async def delete(self, record_id: uuid.UUID) -> None:
        """Delete a student, its enrollments, and its review authorship.

        Reviews written by the student are kept without an author.

        Raises:
            RecordNotFoundError: If student not found
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("delete", record_id):
            await self.ensure_exists(record_id)
            await self.db.execute(
                update(Review)
                .where(Review.student_id == record_id)
                .values(student_id=None)
            )
            await self.db.execute(
                delete(student_course).where(student_course.c.student_id == record_id)
            )
            await self.db.execute(delete(Student).where(Student.id == record_id))

        logger.debug("Deleted Student", extra={"id": record_id})

    # -- enrollment ------------------------------------------------------

    async def is_enrolled(self, student_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        stmt = (
            select(student_course.c.student_id)
            .where(
                student_course.c.student_id == student_id,
                student_course.c.course_id == course_id,
            )
            .limit(1)
        )
        return await self.fetch_scalar(stmt, "check enrollment of") is not None

    async def enroll(
        self, student_id: uuid.UUID, course_id: uuid.UUID
    ) -> EnrollmentChange:
        """Enroll a student in a course.

        Raises:
            RecordNotFoundError: If the student or the course is missing
            IllegalStateError: If the student is already enrolled
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("enroll", student_id):
            student = await self.get_by_id_or_fail(student_id)
            course = await CourseService(self.db).get_by_id_or_fail(course_id)
            if await self.is_enrolled(student_id, course_id):
                raise IllegalStateError(
                    self.model_name,
                    f"Student {student_id} is already enrolled in course {course_id}",
                )
            enrolled_at = utcnow()
            await self.db.execute(
                insert(student_course).values(
                    student_id=student_id,
                    course_id=course_id,
                    enrolled_at=enrolled_at,
                )
            )

        logger.debug(
            "Enrolled Student",
            extra={"id": student_id, "course_id": course_id},
        )
        return EnrollmentChange(student, course, enrolled_at)

    async def unenroll(
        self, student_id: uuid.UUID, course_id: uuid.UUID
    ) -> EnrollmentChange:
        """Remove a student from a course.

        Raises:
            RecordNotFoundError: If the student or the course is missing
            IllegalStateError: If the student is not enrolled
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("unenroll", student_id):
            student = await self.get_by_id_or_fail(student_id)
            course = await CourseService(self.db).get_by_id_or_fail(course_id)
            if not await self.is_enrolled(student_id, course_id):
                raise IllegalStateError(
                    self.model_name,
                    f"Student {student_id} is not enrolled in course {course_id}",
                )
            await self.db.execute(
                delete(student_course).where(
                    student_course.c.student_id == student_id,
                    student_course.c.course_id == course_id,
                )
            )

        logger.debug(
            "Unenrolled Student",
            extra={"id": student_id, "course_id": course_id},
        )
        return EnrollmentChange(student, course, utcnow())

    async def count_in_course(self, course_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(student_course).where(
            student_course.c.course_id == course_id
        )
        return int(await self.fetch_scalar(stmt, "count in course") or 0)

    async def get_enrolled_in_course(self, course_id: uuid.UUID) -> List[Student]:
        """Get students enrolled in a course.

        Raises:
            RecordNotFoundError: If course not found
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(course_id, model=Course)
        stmt = (
            self.select()
            .join(student_course, student_course.c.student_id == Student.id)
            .where(student_course.c.course_id == course_id)
            .order_by(Student.last_name, Student.first_name, Student.id)
        )
        return await self.fetch_all(stmt, "get enrolled in course")

    async def get_not_enrolled_in_course(self, course_id: uuid.UUID) -> List[Student]:
        await self.ensure_exists(course_id, model=Course)
        enrolled = exists().where(
            student_course.c.student_id == Student.id,
            student_course.c.course_id == course_id,
        )
        stmt = (
            self.select()
            .where(~enrolled)
            .order_by(Student.last_name, Student.first_name, Student.id)
        )
        return await self.fetch_all(stmt, "get not enrolled in course")

    async def get_by_instructor(self, instructor_id: uuid.UUID) -> List[Student]:
        """Get distinct students enrolled in any course of an instructor.

        Raises:
            RecordNotFoundError: If instructor not found
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(instructor_id, model=Instructor)
        taught = (
            select(student_course.c.student_id)
            .join(Course, Course.id == student_course.c.course_id)
            .where(Course.instructor_id == instructor_id)
        )
        stmt = (
            self.select()
            .where(Student.id.in_(taught))
            .order_by(Student.last_name, Student.first_name, Student.id)
        )
        return await self.fetch_all(stmt, "get by instructor")

    async def get_courses(self, student_id: uuid.UUID) -> List[Course]:
        """Get the courses a student is enrolled in, with instructors loaded.

        Raises:
            RecordNotFoundError: If student not found
            DatabaseConnectionError: If database operation fails
        """
        await self.ensure_exists(student_id)
        stmt = (
            CourseService(self.db)
            .select()
            .join(student_course, student_course.c.course_id == Course.id)
            .where(student_course.c.student_id == student_id)
            .order_by(Course.title, Course.id)
        )
        return await self.fetch_all(stmt, "get courses of")

    # -- aggregates and searches -----------------------------------------

    async def get_with_courses(self, student_id: uuid.UUID) -> Student:
        student = await self.fetch_one(
            self.select().options(WITH_COURSES).where(Student.id == student_id),
            "get with courses",
        )
        if student is None:
            raise RecordNotFoundError(self.model_name, "id", student_id)
        return student

    async def get_all_with_courses(self) -> List[Student]:
        stmt = (
            self.select()
            .options(WITH_COURSES)
            .order_by(Student.created_at, Student.id)
        )
        return await self.fetch_all(stmt, "get all with courses")

    async def get_by_email(self, email: str) -> Student:
        """Get student by exact email.

        Raises:
            RecordNotFoundError: If no student has this email
            DatabaseConnectionError: If database operation fails
        """
        student = await self.fetch_one(
            self.select().where(Student.email == email), "get by email"
        )
        if student is None:
            raise RecordNotFoundError(self.model_name, "email", email)
        return student

    async def exists_by_email(self, email: str) -> bool:
        return await self.exists_where(Student.email == email)

    async def search_by_name(self, term: str) -> List[Student]:
        stmt = (
            self.select()
            .where(full_name_matches(Student, term))
            .order_by(Student.last_name, Student.first_name, Student.id)
        )
        return await self.fetch_all(stmt, "search by name")

    async def search_by_email(self, term: str) -> List[Student]:
        stmt = (
            self.select()
            .where(contains_ignore_case(Student.email, term))
            .order_by(Student.email)
        )
        return await self.fetch_all(stmt, "search by email")

    async def get_without_courses(self) -> List[Student]:
        enrolled = exists().where(student_course.c.student_id == Student.id)
        stmt = (
            self.select()
            .where(~enrolled)
            .order_by(Student.created_at, Student.id)
        )
        return await self.fetch_all(stmt, "get without courses")

    async def get_with_more_than_n_courses(self, n: int) -> List[Student]:
        """Get students enrolled in strictly more than ``n`` courses.

        Courses and their instructors are loaded with each student.

        Raises:
            DatabaseConnectionError: If database operation fails.
        """
        busy = (
            select(student_course.c.student_id)
            .group_by(student_course.c.student_id)
            .having(func.count(student_course.c.course_id) > n)
        )
        stmt = (
            self.select()
            .options(WITH_COURSES)
            .where(Student.id.in_(busy))
            .order_by(Student.created_at, Student.id)
        )
        return await self.fetch_all(stmt, "get with more than n courses")
