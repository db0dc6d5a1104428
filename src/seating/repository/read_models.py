import abc
from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.guests.dtos import GuestDTO, GuestStatus, SeatingBoardDTO, TableDTO
from src.guests.repository.orm_models import Guest, SeatingTable


async def load_tables(session: AsyncSession, table_ids: list[UUID] | None = None) -> list[TableDTO]:
    """Tables ordered by name, each with its guests. Occupancy is derived from those guests."""
    stmt = select(SeatingTable).order_by(SeatingTable.name)
    if table_ids is not None:
        stmt = stmt.where(SeatingTable.uuid.in_(table_ids))
    tables = (await session.execute(stmt)).scalars().all()
    if not tables:
        return []

    guests_stmt = (
        select(Guest)
        .where(Guest.table_id.in_([table.uuid for table in tables]))
        .order_by(Guest.last_name, Guest.first_name)
    )
    names = {table.uuid: table.name for table in tables}
    guests_by_table: dict[UUID, list[GuestDTO]] = defaultdict(list)
    for guest in (await session.execute(guests_stmt)).scalars().all():
        guests_by_table[guest.table_id].append(
            GuestDTO.from_guest(guest, table_name=names[guest.table_id])
        )

    return [TableDTO.from_table(table, guests=guests_by_table[table.uuid]) for table in tables]


async def load_table(session: AsyncSession, table_id: UUID) -> TableDTO | None:
    tables = await load_tables(session, [table_id])
    return tables[0] if tables else None


class SeatingReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_table(self, table_id: UUID) -> TableDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_tables(self) -> list[TableDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_seating_board(self) -> SeatingBoardDTO:
        """All tables plus the confirmed guests who still need a seat."""
        raise NotImplementedError


class SqlSeatingReadModel(SeatingReadModel):
    async def get_table(self, table_id: UUID) -> TableDTO | None:
        async with async_session_manager() as session:
            return await load_table(session, table_id)

    async def list_tables(self) -> list[TableDTO]:
        async with async_session_manager() as session:
            return await load_tables(session)

    async def get_seating_board(self) -> SeatingBoardDTO:
        async with async_session_manager() as session:
            tables = await load_tables(session)
            unassigned = await session.execute(
                select(Guest)
                .where(Guest.table_id.is_(None), Guest.status == GuestStatus.CONFIRMED)
                .order_by(Guest.last_name, Guest.first_name)
            )
            return SeatingBoardDTO(
                tables=tables,
                unassigned_guests=[GuestDTO.from_guest(guest) for guest in unassigned.scalars().all()],
            )
