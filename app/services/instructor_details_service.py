"""InstructorDetails service providing business logic for profile records.

Details can be managed standalone; linking to an instructor goes through
InstructorService.attach_details / detach_details.
"""

import logging
import uuid
from typing import Any, Dict, List

from sqlalchemy import exists, select
from sqlalchemy.orm import selectinload

from app.exceptions import IllegalStateError
from app.models.instructor import Instructor
from app.models.instructor_details import InstructorDetails
from app.services.base import BaseService
from app.utils.search import contains_ignore_case
from app.utils.validation import FieldValidator

logger = logging.getLogger(__name__)

YOUTUBE_CHANNEL_MAX_LENGTH = 255
HOBBY_MAX_LENGTH = 500


def check_details_fields(
    validator: FieldValidator, values: Dict[str, Any], *, partial: bool = False
) -> None:
    """Add InstructorDetails field checks to ``validator``.

    Shared with InstructorService, which validates nested details together
    with the instructor's own fields.
    """
    if not partial or "youtube_channel" in values:
        validator.text(
            "youtube_channel",
            values.get("youtube_channel"),
            max_length=YOUTUBE_CHANNEL_MAX_LENGTH,
        )
    if "hobby" in values:
        validator.text(
            "hobby", values["hobby"], max_length=HOBBY_MAX_LENGTH, required=False
        )


class InstructorDetailsService(BaseService[InstructorDetails]):
    """Service for managing InstructorDetails entities.

    Provides CRUD operations through BaseService inheritance plus:
    - search_by_youtube_channel(term): Case-insensitive substring search
    - search_by_hobby(term): Case-insensitive substring search
    - get_orphaned(): Details not linked to any instructor
    - delete(id): Refused while the details are linked

    Usage:
        service = InstructorDetailsService(db_session)
        details = await service.create(
            youtube_channel="https://youtube.com/@jdoe", hobby="Chess"
        )
        orphans = await service.get_orphaned()
    """

    model = InstructorDetails
    load_options = (selectinload(InstructorDetails.instructor),)

    def validate(self, values: Dict[str, Any], *, partial: bool = False) -> None:
        validator = FieldValidator()
        check_details_fields(validator, values, partial=partial)
        validator.raise_if_invalid()

    async def search_by_youtube_channel(self, term: str) -> List[InstructorDetails]:
        stmt = (
            self.select()
            .where(contains_ignore_case(InstructorDetails.youtube_channel, term))
            .order_by(InstructorDetails.created_at, InstructorDetails.id)
        )
        return await self.fetch_all(stmt, "search by youtube channel")

    async def search_by_hobby(self, term: str) -> List[InstructorDetails]:
        stmt = (
            self.select()
            .where(contains_ignore_case(InstructorDetails.hobby, term))
            .order_by(InstructorDetails.created_at, InstructorDetails.id)
        )
        return await self.fetch_all(stmt, "search by hobby")

    async def get_orphaned(self) -> List[InstructorDetails]:
        """Get details that no instructor references.

        Returns:
            List of unlinked InstructorDetails ordered by creation time.

        Raises:
            DatabaseConnectionError: If database operation fails.
        """
        linked = exists(
            select(Instructor.id).where(
                Instructor.instructor_details_id == InstructorDetails.id
            )
        )
        stmt = (
            self.select()
            .where(~linked)
            .order_by(InstructorDetails.created_at, InstructorDetails.id)
        )
        return await self.fetch_all(stmt, "get orphaned")

    async def delete(self, record_id: uuid.UUID) -> None:
        """Delete standalone details.

        Raises:
            RecordNotFoundError: If details not found
            IllegalStateError: If the details are still linked to an instructor
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("delete", record_id):
            details = await self.get_by_id_or_fail(record_id)
            if details.instructor is not None:
                raise IllegalStateError(
                    self.model_name,
                    f"InstructorDetails {record_id} is linked to instructor "
                    f"{details.instructor.id}; detach it first",
                )
            await self.db.delete(details)
            await self.db.flush()
        logger.debug(
            "Deleted InstructorDetails",
            extra={"model": self.model_name, "id": record_id},
        )
