# =============================================================================
# core/services/crud_service.py - Generic Record Operations
# =============================================================================
# Shared list/get/create/update/delete logic for ORM-backed resources.
# Each resource service is a CrudService bound to one table, optionally
# subclassed to add resource-specific queries.
#
# Services never commit on behalf of the caller implicitly: every write
# method commits its own unit of work and refreshes the returned record.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from app.exceptions import ConflictError, NotFoundError
from core.tables import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudService(Generic[ModelT]):
    """
    Table-bound CRUD operations.

    Example:
        events = CrudService(Event, "Event", order_by=Event.starts_at)
        items, total = await events.list(session, page=1, page_size=20)
        event = await events.get(session, event_id)
    """

    def __init__(
        self,
        model: type[ModelT],
        label: str,
        order_by: Any = None,
    ):
        self.model = model
        self.label = label
        self.order_by = order_by if order_by is not None else model.created_at.desc()

    async def list(
        self,
        session: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        conditions: list[ColumnElement[bool]] | None = None,
        order_by: Any = None,
    ) -> tuple[list[ModelT], int]:
        """
        Fetch one page of records.

        Args:
            session: Borrowed database session
            page: 1-based page number
            page_size: Items per page
            conditions: WHERE clauses combined with AND
            order_by: Overrides the service's default ordering

        Returns:
            Tuple of (records, total matching count)
        """
        conditions = conditions or []

        count_query = select(func.count()).select_from(self.model).where(*conditions)
        total = (await session.execute(count_query)).scalar_one()

        query = (
            select(self.model)
            .where(*conditions)
            .order_by(order_by if order_by is not None else self.order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        records = list((await session.execute(query)).scalars().all())
        return records, total

    async def count(
        self,
        session: AsyncSession,
        conditions: list[ColumnElement[bool]] | None = None,
    ) -> int:
        query = select(func.count()).select_from(self.model).where(*(conditions or []))
        return (await session.execute(query)).scalar_one()

    async def get(self, session: AsyncSession, record_id: UUID) -> ModelT:
        """
        Fetch a record by primary key.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        record = await session.get(self.model, record_id)
        if record is None:
            raise NotFoundError(self.label, record_id)
        return record

    async def get_by(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """Fetch the first record whose columns equal the given values."""
        query = select(self.model).filter_by(**filters).limit(1)
        return (await session.execute(query)).scalars().first()

    async def create(self, session: AsyncSession, data: BaseModel | dict[str, Any]) -> ModelT:
        """
        Insert a record.

        Raises:
            ConflictError: If a unique constraint is violated
        """
        values = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        record = self.model(**values)
        session.add(record)
        await self._commit(session)
        await session.refresh(record)
        logger.info(f"Created {self.label}: {record.id}")
        return record

    async def update(
        self,
        session: AsyncSession,
        record_id: UUID,
        data: BaseModel | dict[str, Any],
    ) -> ModelT:
        """
        Apply a partial update. Fields left unset in `data` are untouched.

        Raises:
            NotFoundError: If the record doesn't exist
            ConflictError: If a unique constraint is violated
        """
        record = await self.get(session, record_id)
        values = data.model_dump(exclude_unset=True) if isinstance(data, BaseModel) else dict(data)

        if not values:
            return record  # Nothing to update

        for field, value in values.items():
            setattr(record, field, value)

        await self._commit(session)
        await session.refresh(record)
        logger.info(f"Updated {self.label}: {record_id}")
        return record

    async def delete(self, session: AsyncSession, record_id: UUID) -> None:
        """
        Delete a record.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        record = await self.get(session, record_id)
        await session.delete(record)
        await self._commit(session)
        logger.info(f"Deleted {self.label}: {record_id}")

    async def _commit(self, session: AsyncSession) -> None:
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"{self.label} write rejected: {e.orig}")
            raise ConflictError(f"{self.label} conflicts with an existing record") from e
