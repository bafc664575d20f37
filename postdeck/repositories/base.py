"""Base repository for database operations."""

from collections.abc import Iterable, Mapping
from logging import getLogger
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from postdeck.configs import file_logger
from postdeck.errors.database import DatabaseError, NotFoundError

logger = file_logger(getLogger(__name__))


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    Repositories only flush; committing belongs to the enclosing
    `transaction()` so a service can group several repository calls into
    one atomic unit.

    Attributes:
        model: The SQLModel database model type.
        resource: Human readable name used in error messages.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    resource: str = "Record"
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: str, *, for_update: bool = False) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record ID
            for_update: Lock the row until the transaction ends

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        if for_update:
            statement = statement.with_for_update()
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: str, *, for_update: bool = False) -> ModelT:
        """
        Get a record by ID or raise if it does not exist.

        Raises:
            NotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id, for_update=for_update)
        if record is None:
            raise NotFoundError(self.resource, record_id)
        return record

    async def existing_ids(self, record_ids: Iterable[str]) -> set[str]:
        """Return the subset of `record_ids` that exist."""
        wanted = set(record_ids)
        if not wanted:
            return set()
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(id_column).where(id_column.in_(wanted)))
        return set(result.scalars().all())

    async def add(self, record: ModelT) -> ModelT:
        """Add a new record and refresh it from the database."""
        return await self._add_and_refresh(record)

    async def update(self, record: ModelT, values: Mapping[str, Any]) -> ModelT:
        """Apply `values` to a loaded record and flush."""
        for key, value in values.items():
            setattr(record, key, value)
        return await self._add_and_refresh(record)

    async def delete(self, record: ModelT) -> None:
        """Delete a loaded record and flush."""
        await self.session.delete(record)
        await self.session.flush()

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Raises:
            DatabaseError: For integrity or driver errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            logger.warning(f"Integrity error saving {self.resource.lower()}: {e.orig or e}")
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            raise DatabaseError(detail=f"Failed to save {self.resource.lower()}") from e
