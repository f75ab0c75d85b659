"""Base model class with UUID identity, timestamp tracking and lookups."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar

from sqlalchemy import DateTime, Uuid, func, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from app.exceptions import DatabaseConnectionError, RecordNotFoundError
from app.utils.db import Base

T = TypeVar("T", bound="BaseModel")


def utcnow() -> datetime:
    """Current UTC time with microsecond precision."""
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Abstract base class for all persisted entities.

    Provides common functionality for all models:
    - UUID primary key (id), generated client-side at creation
    - Timestamps (created_at on insert, updated_at on every write)
    - Read helpers used by services and tests

    Timestamps are generated in Python rather than by the server so that
    several writes inside one transaction still get distinct, ordered values.

    Usage:
        class Student(BaseModel):
            __tablename__ = "student"

            email: Mapped[str] = mapped_column(String(255), unique=True)
    """

    __abstract__ = True  # This is an abstract base class

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

    @classmethod
    async def get_by_id(
        cls: Type[T], db: AsyncSession, record_id: uuid.UUID
    ) -> Optional[T]:
        """Retrieve a record by its primary key ID.

        Args:
            db: Database session
            record_id: Primary key ID

        Returns:
            Model instance or None if not found

        Raises:
            DatabaseConnectionError: If database operation fails
        """
        try:
            result = await db.execute(select(cls).where(cls.id == record_id))
            return result.scalar_one_or_none()
        except (DBAPIError, SQLAlchemyError) as e:
            raise DatabaseConnectionError(f"Database error during get: {str(e)}") from e

    @classmethod
    async def get_by_id_or_fail(
        cls: Type[T], db: AsyncSession, record_id: uuid.UUID
    ) -> T:
        """Retrieve a record by ID or raise RecordNotFoundError."""
        record = await cls.get_by_id(db, record_id)
        if record is None:
            raise RecordNotFoundError(cls.__name__, "id", record_id)
        return record

    def to_dict(self) -> Dict[str, Any]:
        """Convert model instance to dictionary of column values."""
        return {
            column.name: getattr(self, column.name) for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        """String representation of the model."""
        attrs = ", ".join(
            f"{key}={repr(value)}"
            for key, value in self.to_dict().items()
            if key != "id"
        )
        return f"{self.__class__.__name__}(id={self.id}, {attrs})"
