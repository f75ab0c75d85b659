"""InstructorDetails model holding optional instructor profile data."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.models.instructor import Instructor

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class InstructorDetails(BaseModel):
    """Profile data owned by at most one Instructor.

    A details record can exist without an instructor (orphaned) after being
    created standalone or detached. The link column lives on the instructor
    table, so ``instructor`` here is the inverse side.

    Attributes:
        youtube_channel: Channel URL (free text)
        hobby: Free-text hobby (nullable)
        instructor: Owning Instructor, if linked
    """

    __tablename__ = "instructor_details"

    youtube_channel: Mapped[str] = mapped_column(String(255), nullable=False)
    hobby: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    instructor: Mapped[Optional["Instructor"]] = relationship(
        "Instructor", back_populates="instructor_details", uselist=False
    )

    def __repr__(self) -> str:
        return (
            f"InstructorDetails(id={self.id}, "
            f"youtube_channel={self.youtube_channel!r})"
        )
