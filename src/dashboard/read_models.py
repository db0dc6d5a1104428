"""Aggregates for the administrator dashboard.

Counts are computed in SQL; table occupancy goes through the seating loader
so it is summed from the guests exactly like everywhere else.
"""

import abc

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.dashboard.dtos import DashboardDTO, GroupStatsDTO, GuestStatsDTO, StatsDTO, TableStatsDTO
from src.guests.dtos import GuestDTO, GuestStatus
from src.guests.repository.orm_models import Guest, SeatingTable
from src.seating.repository.read_models import load_tables

LIST_LIMIT = 10


async def count_by_status(session: AsyncSession) -> dict[GuestStatus, tuple[int, int]]:
    """(guests, people) per status. Statuses without guests are (0, 0)."""
    result = await session.execute(
        select(
            Guest.status,
            func.count(Guest.uuid),
            func.coalesce(func.sum(Guest.number_of_people), 0),
        ).group_by(Guest.status)
    )
    counts = {status: (0, 0) for status in GuestStatus}
    for status, guests, people in result.all():
        counts[GuestStatus(status)] = (int(guests), int(people))
    return counts


class DashboardReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_dashboard(self) -> DashboardDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_stats(self) -> StatsDTO:
        raise NotImplementedError


class SqlDashboardReadModel(DashboardReadModel):
    async def get_dashboard(self) -> DashboardDTO:
        async with async_session_manager() as session:
            counts = await count_by_status(session)
            tables = await load_tables(session)

            recent = await session.execute(
                select(Guest, SeatingTable.name)
                .outerjoin(SeatingTable, Guest.table_id == SeatingTable.uuid)
                .where(Guest.responded_at.is_not(None))
                .order_by(Guest.responded_at.desc())
                .limit(LIST_LIMIT)
            )
            pending = await session.execute(
                select(Guest, SeatingTable.name)
                .outerjoin(SeatingTable, Guest.table_id == SeatingTable.uuid)
                .where(Guest.status == GuestStatus.PENDING)
                .order_by(Guest.last_name, Guest.first_name)
                .limit(LIST_LIMIT)
            )

            over_capacity = sorted(
                (table for table in tables if table.is_over_capacity),
                key=lambda table: table.occupancy - table.capacity,
                reverse=True,
            )

            return DashboardDTO(
                total_guests=sum(guests for guests, _ in counts.values()),
                total_people=sum(people for _, people in counts.values()),
                confirmed_guests=counts[GuestStatus.CONFIRMED][0],
                confirmed_people=counts[GuestStatus.CONFIRMED][1],
                declined_guests=counts[GuestStatus.DECLINED][0],
                declined_people=counts[GuestStatus.DECLINED][1],
                pending_guests=counts[GuestStatus.PENDING][0],
                pending_people=counts[GuestStatus.PENDING][1],
                total_tables=len(tables),
                total_seats=sum(table.capacity for table in tables),
                occupied_seats=sum(table.occupancy for table in tables),
                recent_responses=[
                    GuestDTO.from_guest(guest, table_name=name) for guest, name in recent.all()
                ],
                pending_guests_list=[
                    GuestDTO.from_guest(guest, table_name=name) for guest, name in pending.all()
                ],
                over_capacity_tables=over_capacity,
            )

    async def get_stats(self) -> StatsDTO:
        async with async_session_manager() as session:
            counts = await count_by_status(session)
            tables = await load_tables(session)

            group_count = func.count(Guest.uuid)
            by_group = await session.execute(
                select(
                    Guest.group_family,
                    group_count,
                    func.coalesce(func.sum(Guest.number_of_people), 0),
                    func.sum(case((Guest.status == GuestStatus.CONFIRMED, 1), else_=0)),
                )
                .where(Guest.group_family.is_not(None), Guest.group_family != "")
                .group_by(Guest.group_family)
                .order_by(group_count.desc(), Guest.group_family)
            )

            return StatsDTO(
                guests=GuestStatsDTO(
                    total=sum(guests for guests, _ in counts.values()),
                    total_people=sum(people for _, people in counts.values()),
                    confirmed=counts[GuestStatus.CONFIRMED][0],
                    confirmed_people=counts[GuestStatus.CONFIRMED][1],
                    declined=counts[GuestStatus.DECLINED][0],
                    pending=counts[GuestStatus.PENDING][0],
                ),
                tables=TableStatsDTO(
                    total=len(tables),
                    total_capacity=sum(table.capacity for table in tables),
                    occupied=sum(table.occupancy for table in tables),
                    over_capacity=sum(1 for table in tables if table.is_over_capacity),
                ),
                by_group=[
                    GroupStatsDTO(
                        group=group,
                        count=int(count),
                        total_people=int(people),
                        confirmed=int(confirmed or 0),
                    )
                    for group, count, people, confirmed in by_group.all()
                ],
            )
