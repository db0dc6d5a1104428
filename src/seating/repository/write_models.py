"""Seating plan - write side.

Capacity is a hard limit: an assignment that would overflow a table is
rejected and nothing is persisted. Occupancy is always summed from the
guests rows, never cached on the table.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.guests.dtos import (
    AssignmentDTO,
    CapacityExceededError,
    GuestDTO,
    NotFoundError,
    TableDTO,
    ValidationFailedError,
)
from src.guests.repository.orm_models import Guest, SeatingTable
from src.guests.validators import validate_table_fields
from src.seating.repository.read_models import load_table

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A table with this name already exists"


async def current_occupancy(
    session: AsyncSession, table_id: UUID, excluding_guest_id: UUID | None = None
) -> int:
    stmt = select(func.coalesce(func.sum(Guest.number_of_people), 0)).where(
        Guest.table_id == table_id
    )
    if excluding_guest_id is not None:
        stmt = stmt.where(Guest.uuid != excluding_guest_id)
    return int((await session.execute(stmt)).scalar_one())


async def ensure_capacity(
    session: AsyncSession, table: SeatingTable, guest_id: UUID | None, number_of_people: int
) -> int:
    """Return the projected occupancy, or raise CapacityExceededError if it overflows."""
    projected = await current_occupancy(session, table.uuid, guest_id) + number_of_people
    if projected > table.capacity:
        logger.info(
            "Refusing seat at table %s: %s/%s", table.name, projected, table.capacity
        )
        raise CapacityExceededError(table.name, projected, table.capacity)
    return projected


async def get_table_or_raise(session: AsyncSession, table_id: UUID) -> SeatingTable:
    table = await session.get(SeatingTable, table_id)
    if table is None:
        raise NotFoundError("Table", table_id)
    return table


class SeatingWriteModel(ABC):
    @abstractmethod
    async def create_table(self, name: str, capacity: int, description: str | None = None) -> TableDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_table(
        self, table_id: UUID, name: str, capacity: int, description: str | None = None
    ) -> TableDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_table(self, table_id: UUID) -> None:
        """Unassign every guest of the table, then remove it. Guests are kept."""
        raise NotImplementedError

    @abstractmethod
    async def assign_guest(self, guest_id: UUID, table_id: UUID) -> AssignmentDTO:
        raise NotImplementedError

    @abstractmethod
    async def unassign_guest(self, guest_id: UUID) -> GuestDTO:
        raise NotImplementedError


class SqlSeatingWriteModel(SeatingWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def _ensure_unique_name(
        self, session: AsyncSession, name: str, table_id: UUID | None = None
    ) -> None:
        stmt = select(SeatingTable.uuid).where(SeatingTable.name == name)
        if table_id is not None:
            stmt = stmt.where(SeatingTable.uuid != table_id)
        if (await session.execute(stmt)).first() is not None:
            raise ValidationFailedError("name", DUPLICATE_NAME_MESSAGE)

    async def _flush(self, session: AsyncSession) -> None:
        try:
            await session.flush()
        except IntegrityError as e:
            # a concurrent request took the name between our check and the insert
            raise ValidationFailedError("name", DUPLICATE_NAME_MESSAGE) from e

    async def create_table(self, name: str, capacity: int, description: str | None = None) -> TableDTO:
        name, capacity, description = validate_table_fields(name, capacity, description)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await self._ensure_unique_name(session, name)
            table = SeatingTable(name=name, capacity=capacity, description=description)
            session.add(table)
            await self._flush(session)
            await session.refresh(table)

            logger.info("Table %s created with %s seats", name, capacity)
            return TableDTO.from_table(table, guests=[])

    async def update_table(
        self, table_id: UUID, name: str, capacity: int, description: str | None = None
    ) -> TableDTO:
        name, capacity, description = validate_table_fields(name, capacity, description)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            table = await get_table_or_raise(session, table_id)
            await self._ensure_unique_name(session, name, table_id)

            table.name = name
            table.capacity = capacity
            table.description = description
            await self._flush(session)
            await session.refresh(table)

            return await load_table(session, table_id)

    async def delete_table(self, table_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            table = await get_table_or_raise(session, table_id)

            unassigned = await session.execute(
                update(Guest)
                .where(Guest.table_id == table_id)
                .values(table_id=None)
                .execution_options(synchronize_session="fetch")
            )
            await session.delete(table)
            await session.flush()

        logger.info("Table %s deleted, %s guest(s) unassigned", table_id, unassigned.rowcount)

    async def assign_guest(self, guest_id: UUID, table_id: UUID) -> AssignmentDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise NotFoundError("Guest", guest_id)
            table = await get_table_or_raise(session, table_id)

            await ensure_capacity(session, table, guest.uuid, guest.number_of_people)

            guest.table_id = table.uuid
            await session.flush()
            await session.refresh(guest)

            logger.info("Guest %s assigned to table %s", guest_id, table.name)
            return AssignmentDTO(
                guest=GuestDTO.from_guest(guest, table_name=table.name),
                table=await load_table(session, table.uuid),
            )

    async def unassign_guest(self, guest_id: UUID) -> GuestDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise NotFoundError("Guest", guest_id)

            if guest.table_id is not None:
                guest.table_id = None
                await session.flush()
                await session.refresh(guest)

            return GuestDTO.from_guest(guest)
