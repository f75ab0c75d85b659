"""Instructor service providing business logic for Instructor model operations.

Owns the Instructor-InstructorDetails one-to-one link: nested details are
created and updated together with the instructor, and attach/detach move an
existing details record in or out of an instructor.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import selectinload

from app.exceptions import IllegalStateError, RecordAlreadyExistsError, RecordNotFoundError
from app.models.course import Course
from app.models.instructor import Instructor
from app.models.instructor_details import InstructorDetails
from app.services.base import BaseService
from app.services.instructor_details_service import (
    InstructorDetailsService,
    check_details_fields,
)
from app.utils.search import full_name_matches
from app.utils.validation import FieldValidator

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100


class InstructorService(BaseService[Instructor]):
    """Service for managing Instructor entities.

    Provides CRUD operations through BaseService inheritance, with
    overrides for the nested-details aggregate:
    - create(first_name, last_name, email, instructor_details=None)
    - update(id, **kwargs): nested details updated in place or created
    - delete(id): removes owned details; refused while courses exist
    - get_by_email(email) / exists_by_email(email)
    - search_by_name(term): Full-name search
    - get_with_details() / get_without_details()
    - attach_details(instructor_id, details_id)
    - detach_details(instructor_id)

    Usage:
        service = InstructorService(db_session)

        instructor = await service.create(
            first_name="John",
            last_name="Doe",
            email="john.doe@example.com",
            instructor_details={"youtube_channel": "@jdoe", "hobby": "Chess"},
        )
        matches = await service.search_by_name("n D")

    Attributes:
        model: Instructor model class
        db: Database session for operations
    """

    model = Instructor
    load_options = (selectinload(Instructor.instructor_details),)

    def validate(self, values: Dict[str, Any], *, partial: bool = False) -> None:
        validator = FieldValidator()
        for field in ("first_name", "last_name"):
            if not partial or field in values:
                validator.text(field, values.get(field), max_length=NAME_MAX_LENGTH)
        if not partial or "email" in values:
            validator.email("email", values.get("email"))
        details = values.get("instructor_details")
        if details is not None:
            check_details_fields(validator, details)
        validator.raise_if_invalid()

    async def _ensure_email_available(
        self, email: str, exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        criteria = [Instructor.email == email]
        if exclude_id is not None:
            criteria.append(Instructor.id != exclude_id)
        if await self.exists_where(*criteria):
            raise RecordAlreadyExistsError(self.model_name, "email", email)

    async def create(self, **kwargs: Any) -> Instructor:
        """Create an instructor, optionally together with its details.

        Args:
            **kwargs: Instructor attributes; ``instructor_details`` may hold a
                dict of InstructorDetails attributes

        Returns:
            Created Instructor with details loaded

        Raises:
            ValidationFailedError: If field values are rejected
            RecordAlreadyExistsError: If the email is already taken
            IntegrityViolationError: If a database constraint is violated
            DatabaseConnectionError: If database operation fails
        """
        details_values = kwargs.pop("instructor_details", None)
        self.validate({**kwargs, "instructor_details": details_values})

        async with self.transaction("create"):
            await self._ensure_email_available(kwargs["email"])
            instructor = Instructor(**kwargs)
            if details_values is not None:
                instructor.instructor_details = InstructorDetails(**details_values)
            self.db.add(instructor)
            await self.db.flush()

        logger.debug(
            "Created Instructor",
            extra={
                "id": instructor.id,
                "with_details": details_values is not None,
            },
        )
        return await self.get_by_id_or_fail(instructor.id)

    async def update(self, record_id: uuid.UUID, **kwargs: Any) -> Instructor:
        """Update an instructor and, when supplied, its nested details.

        Omitted or None ``instructor_details`` leave the linked details
        untouched. Supplied details update the linked record in place, or
        create and link a new record when none is linked.

        Raises:
            RecordNotFoundError: If instructor not found
            ValidationFailedError: If field values are rejected
            RecordAlreadyExistsError: If changing to an email already taken
            DatabaseConnectionError: If database operation fails
        """
        details_values = kwargs.pop("instructor_details", None)

        async with self.transaction("update", record_id):
            instructor = await self.get_by_id_or_fail(record_id)

            validator = FieldValidator()
            for field in ("first_name", "last_name"):
                if field in kwargs:
                    validator.text(field, kwargs[field], max_length=NAME_MAX_LENGTH)
            if "email" in kwargs:
                validator.email("email", kwargs["email"])
            if details_values is not None:
                check_details_fields(
                    validator,
                    details_values,
                    partial=instructor.instructor_details is not None,
                )
            validator.raise_if_invalid()

            if "email" in kwargs and kwargs["email"] != instructor.email:
                await self._ensure_email_available(kwargs["email"], exclude_id=record_id)

            for key, value in kwargs.items():
                setattr(instructor, key, value)

            if details_values is not None:
                if instructor.instructor_details is None:
                    instructor.instructor_details = InstructorDetails(**details_values)
                else:
                    for key, value in details_values.items():
                        setattr(instructor.instructor_details, key, value)
            await self.db.flush()

        logger.debug("Updated Instructor", extra={"id": record_id})
        return await self.get_by_id_or_fail(record_id)

    async def delete(self, record_id: uuid.UUID) -> None:
        """Delete an instructor together with its owned details.

        Raises:
            RecordNotFoundError: If instructor not found
            IllegalStateError: If the instructor still teaches courses
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("delete", record_id):
            instructor = await self.get_by_id_or_fail(record_id)
            if await self.exists_where(Course.instructor_id == record_id, model=Course):
                raise IllegalStateError(
                    self.model_name,
                    f"Instructor {record_id} still teaches courses; "
                    "delete or reassign them first",
                )
            details = instructor.instructor_details
            await self.db.delete(instructor)
            if details is not None:
                await self.db.delete(details)
            await self.db.flush()

        logger.debug(
            "Deleted Instructor",
            extra={"id": record_id, "details_id": details.id if details else None},
        )

    async def get_by_email(self, email: str) -> Instructor:
        """Get instructor by exact email.

        Raises:
            RecordNotFoundError: If no instructor has this email
            DatabaseConnectionError: If database operation fails
        """
        instructor = await self.fetch_one(
            self.select().where(Instructor.email == email), "get by email"
        )
        if instructor is None:
            raise RecordNotFoundError(self.model_name, "email", email)
        return instructor

    async def exists_by_email(self, email: str) -> bool:
        return await self.exists_where(Instructor.email == email)

    async def search_by_name(self, term: str) -> List[Instructor]:
        """Search instructors by first, last or full name, ignoring case.

        Args:
            term: Substring to look for

        Returns:
            Matching instructors ordered by last and first name.

        Raises:
            DatabaseConnectionError: If database operation fails.
        """
        stmt = (
            self.select()
            .where(full_name_matches(Instructor, term))
            .order_by(Instructor.last_name, Instructor.first_name, Instructor.id)
        )
        return await self.fetch_all(stmt, "search by name")

    async def get_with_details(self) -> List[Instructor]:
        stmt = (
            self.select()
            .where(Instructor.instructor_details_id.is_not(None))
            .order_by(Instructor.created_at, Instructor.id)
        )
        return await self.fetch_all(stmt, "get with details")

    async def get_without_details(self) -> List[Instructor]:
        stmt = (
            self.select()
            .where(Instructor.instructor_details_id.is_(None))
            .order_by(Instructor.created_at, Instructor.id)
        )
        return await self.fetch_all(stmt, "get without details")

    async def attach_details(
        self, instructor_id: uuid.UUID, details_id: uuid.UUID
    ) -> Instructor:
        """Link an existing details record to an instructor.

        Raises:
            RecordNotFoundError: If the instructor or the details are missing
            RecordAlreadyExistsError: If the instructor already has details,
                or the details are linked to another instructor
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("attach details to", instructor_id):
            instructor = await self.get_by_id_or_fail(instructor_id)
            details = await InstructorDetailsService(self.db).get_by_id_or_fail(
                details_id
            )
            if instructor.instructor_details is not None:
                raise RecordAlreadyExistsError(
                    "InstructorDetails", "instructor_id", instructor_id
                )
            linked_elsewhere = await self.exists_where(
                Instructor.instructor_details_id == details_id
            )
            if linked_elsewhere:
                raise RecordAlreadyExistsError(
                    self.model_name, "instructor_details_id", details_id
                )
            instructor.instructor_details = details
            await self.db.flush()

        logger.debug(
            "Attached InstructorDetails",
            extra={"id": instructor_id, "details_id": details_id},
        )
        return await self.get_by_id_or_fail(instructor_id)

    async def detach_details(self, instructor_id: uuid.UUID) -> Instructor:
        """Unlink an instructor's details; the details record is kept.

        Raises:
            RecordNotFoundError: If instructor not found
            IllegalStateError: If no details are linked
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("detach details from", instructor_id):
            instructor = await self.get_by_id_or_fail(instructor_id)
            if instructor.instructor_details is None:
                raise IllegalStateError(
                    self.model_name,
                    f"Instructor {instructor_id} has no details to detach",
                )
            details_id = instructor.instructor_details.id
            instructor.instructor_details = None
            await self.db.flush()

        logger.debug(
            "Detached InstructorDetails",
            extra={"id": instructor_id, "details_id": details_id},
        )
        return await self.get_by_id_or_fail(instructor_id)
