"""Base service class with transaction management for database operations."""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from app.exceptions import (
    AppError,
    DatabaseConnectionError,
    IntegrityViolationError,
    InvalidFilterError,
    RecordNotFoundError,
)
from app.models.base import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class BaseService(Generic[T]):
    """Base service class managing database transactions for model operations.

    Every write operation runs inside ``self.transaction()``: all statements
    of the operation commit together, and any error rolls the whole operation
    back before propagating. Read operations never commit.

    Reads returning entities apply ``load_options`` (eager loaders) and
    ``populate_existing`` so that instances already held by the session are
    refreshed together with their related collections.

    Usage:
        class StudentService(BaseService[Student]):
            model = Student
            load_options = (selectinload(Student.courses),)

        service = StudentService(db_session)
        student = await service.create(first_name="Jane", ...)
        # Transaction is automatically committed

    Attributes:
        db: Database session for operations
        model: Model class this service manages
        load_options: Loader options applied to entity reads
    """

    model: type[T]
    load_options: Sequence[LoaderOption] = ()

    def __init__(self, db: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            db: Database session for operations
        """
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # -- transaction and query helpers -----------------------------------

    @asynccontextmanager
    async def transaction(
        self, operation: str, record_id: Optional[uuid.UUID] = None
    ) -> AsyncIterator[None]:
        """Run the enclosed statements as one atomic unit and commit.

        A rejected write rolls the session back, which expires every instance
        the session holds, including ones loaded by earlier operations.
        Callers must re-read them through the service (or copy plain values
        beforehand); touching an expired attribute outside an awaited load
        fails on an async session.

        Raises:
            IntegrityViolationError: If a database constraint rejects the write
            DatabaseConnectionError: If the database fails or times out
        """
        try:
            yield
            await self.db.commit()
        except AppError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Integrity violation during {operation} of {self.model_name}",
                extra={"model": self.model_name, "id": record_id, "error": str(e)},
            )
            raise IntegrityViolationError(self.model_name, str(e.orig)) from e
        except (DBAPIError, SQLAlchemyError) as e:
            await self.db.rollback()
            logger.error(
                f"Failed to {operation} {self.model_name}",
                extra={"model": self.model_name, "id": record_id, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during {operation}: {str(e)}"
            ) from e

    def select(self) -> Select:
        """Base SELECT for this model with the service's eager loaders."""
        return (
            select(self.model)
            .options(*self.load_options)
            .execution_options(populate_existing=True)
        )

    async def fetch_all(self, stmt: Select, operation: str) -> List[Any]:
        """Execute a SELECT and return de-duplicated scalar results."""
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().unique().all())
        except (DBAPIError, SQLAlchemyError) as e:
            logger.error(
                f"Failed to {operation} {self.model_name}",
                extra={"model": self.model_name, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during {operation}: {str(e)}"
            ) from e

    async def fetch_one(self, stmt: Select, operation: str) -> Optional[Any]:
        """Execute a SELECT and return the first scalar or None."""
        rows = await self.fetch_all(stmt.limit(1), operation)
        return rows[0] if rows else None

    async def fetch_scalar(self, stmt: Select, operation: str) -> Any:
        """Execute an aggregate SELECT and return its single value."""
        try:
            return await self.db.scalar(stmt)
        except (DBAPIError, SQLAlchemyError) as e:
            logger.error(
                f"Failed to {operation} {self.model_name}",
                extra={"model": self.model_name, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during {operation}: {str(e)}"
            ) from e

    async def exists_where(self, *criteria: Any, model: Any = None) -> bool:
        """Boolean probe: does at least one row match the criteria."""
        target = model if model is not None else self.model
        stmt = select(target.id).where(*criteria).limit(1)
        return await self.fetch_scalar(stmt, "check existence of") is not None

    def _filtered(self, stmt: Select, filters: Dict[str, Any]) -> Select:
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise InvalidFilterError(
                    f"Invalid filter key '{key}' for model {self.model_name}"
                )
            stmt = stmt.where(getattr(self.model, key) == value)
        return stmt

    # -- validation hook -------------------------------------------------

    def validate(self, values: Dict[str, Any], *, partial: bool = False) -> None:
        """Reject invalid field values before any statement is issued.

        Subclasses override this with a FieldValidator pass. ``partial`` is
        True for updates, where absent fields keep their stored value.
        """

    # -- CRUD ------------------------------------------------------------

    async def create(self, **kwargs: Any) -> T:
        """Create a new record and commit transaction.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance, reloaded with eager relationships

        Raises:
            ValidationFailedError: If field values are rejected
            IntegrityViolationError: If a database constraint is violated
            DatabaseConnectionError: If database operation fails
        """
        self.validate(kwargs)
        async with self.transaction("create"):
            instance = self.model(**kwargs)
            self.db.add(instance)
            await self.db.flush()
        logger.debug(
            f"Created {self.model_name}",
            extra={"model": self.model_name, "id": instance.id},
        )
        return await self.get_by_id_or_fail(instance.id)

    async def get_by_id(self, record_id: uuid.UUID) -> Optional[T]:
        """Retrieve a record by its primary key ID.

        This is a read operation and does not commit the transaction.

        Returns:
            Model instance or None if not found

        Raises:
            DatabaseConnectionError: If database operation fails
        """
        return await self.fetch_one(
            self.select().where(self.model.id == record_id), "get"
        )

    async def get_by_id_or_fail(self, record_id: uuid.UUID) -> T:
        """Retrieve a record by ID or raise exception if not found.

        Raises:
            RecordNotFoundError: If record not found
            DatabaseConnectionError: If database operation fails
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(self.model_name, "id", record_id)
        return record

    async def exists_by_id(self, record_id: uuid.UUID) -> bool:
        return await self.exists_where(self.model.id == record_id)

    async def ensure_exists(self, record_id: uuid.UUID, model: Any = None) -> None:
        """Raise RecordNotFoundError unless a row with this ID exists.

        Args:
            record_id: Primary key to probe
            model: Model to probe, defaults to the service's own model
        """
        target = model if model is not None else self.model
        if not await self.exists_where(target.id == record_id, model=target):
            raise RecordNotFoundError(target.__name__, "id", record_id)

    async def get_all(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[T]:
        """Retrieve all records ordered by creation time, with optional pagination.

        This is a read operation and does not commit the transaction.

        Raises:
            DatabaseConnectionError: If database operation fails
        """
        query = self.select().order_by(self.model.created_at, self.model.id)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return await self.fetch_all(query, "get all")

    async def count(self, **filters: Any) -> int:
        """Count records matching the given filters.

        Raises:
            InvalidFilterError: If invalid filter key provided
            DatabaseConnectionError: If database operation fails
        """
        query = self._filtered(select(func.count(self.model.id)), filters)
        return int(await self.fetch_scalar(query, "count") or 0)

    async def update(self, record_id: uuid.UUID, **kwargs: Any) -> T:
        """Update a record and commit transaction.

        Raises:
            RecordNotFoundError: If record not found
            InvalidFilterError: If invalid attribute provided
            ValidationFailedError: If field values are rejected
            IntegrityViolationError: If a database constraint is violated
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("update", record_id):
            record = await self.get_by_id_or_fail(record_id)
            for key in kwargs:
                if not hasattr(record, key):
                    raise InvalidFilterError(
                        f"Invalid attribute '{key}' for model {self.model_name}"
                    )
            self.validate(kwargs, partial=True)
            for key, value in kwargs.items():
                setattr(record, key, value)
            await self.db.flush()
        logger.debug(
            f"Updated {self.model_name}",
            extra={"model": self.model_name, "id": record_id},
        )
        return await self.get_by_id_or_fail(record_id)

    async def delete(self, record_id: uuid.UUID) -> None:
        """Delete a record and commit transaction.

        Raises:
            RecordNotFoundError: If record not found
            DatabaseConnectionError: If database operation fails
        """
        async with self.transaction("delete", record_id):
            record = await self.get_by_id_or_fail(record_id)
            await self.db.delete(record)
            await self.db.flush()
        logger.debug(
            f"Deleted {self.model_name}",
            extra={"model": self.model_name, "id": record_id},
        )
