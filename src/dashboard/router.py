from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.dashboard.read_models import DashboardReadModel, SqlDashboardReadModel
from src.dashboard.urls import DASHBOARD_URL, STATS_URL
from src.guests.schemas import GuestResponse
from src.seating.schemas import TableResponse

router = APIRouter()


class DashboardResponse(BaseModel):
    total_guests: int
    total_people: int
    confirmed_guests: int
    confirmed_people: int
    declined_guests: int
    declined_people: int
    pending_guests: int
    pending_people: int
    total_tables: int
    total_seats: int
    occupied_seats: int
    available_seats: int
    confirmation_rate: float
    seating_occupancy: float
    recent_responses: list[GuestResponse]
    pending_guests_list: list[GuestResponse]
    over_capacity_tables: list[TableResponse]


class GuestStats(BaseModel):
    total: int
    total_people: int
    confirmed: int
    confirmed_people: int
    declined: int
    pending: int
    confirmation_rate: float


class TableStats(BaseModel):
    total: int
    total_capacity: int
    occupied: int
    available: int
    over_capacity: int


class GroupStats(BaseModel):
    group: str
    count: int
    total_people: int
    confirmed: int


class StatsResponse(BaseModel):
    guests: GuestStats
    tables: TableStats
    by_group: list[GroupStats]


def get_dashboard_read_model() -> DashboardReadModel:
    return SqlDashboardReadModel()


@router.get(DASHBOARD_URL, response_model=DashboardResponse)
async def get_dashboard(
    read_model: DashboardReadModel = Depends(get_dashboard_read_model),
) -> DashboardResponse:
    dashboard = await read_model.get_dashboard()
    return DashboardResponse(
        total_guests=dashboard.total_guests,
        total_people=dashboard.total_people,
        confirmed_guests=dashboard.confirmed_guests,
        confirmed_people=dashboard.confirmed_people,
        declined_guests=dashboard.declined_guests,
        declined_people=dashboard.declined_people,
        pending_guests=dashboard.pending_guests,
        pending_people=dashboard.pending_people,
        total_tables=dashboard.total_tables,
        total_seats=dashboard.total_seats,
        occupied_seats=dashboard.occupied_seats,
        available_seats=dashboard.available_seats,
        confirmation_rate=round(dashboard.confirmation_rate, 1),
        seating_occupancy=round(dashboard.seating_occupancy, 1),
        recent_responses=[GuestResponse.from_dto(g) for g in dashboard.recent_responses],
        pending_guests_list=[GuestResponse.from_dto(g) for g in dashboard.pending_guests_list],
        over_capacity_tables=[TableResponse.from_dto(t) for t in dashboard.over_capacity_tables],
    )


@router.get(STATS_URL, response_model=StatsResponse)
async def get_stats(
    read_model: DashboardReadModel = Depends(get_dashboard_read_model),
) -> StatsResponse:
    """Guest, table and per-group figures as JSON, for charts."""
    stats = await read_model.get_stats()
    return StatsResponse(
        guests=GuestStats(
            total=stats.guests.total,
            total_people=stats.guests.total_people,
            confirmed=stats.guests.confirmed,
            confirmed_people=stats.guests.confirmed_people,
            declined=stats.guests.declined,
            pending=stats.guests.pending,
            confirmation_rate=stats.guests.confirmation_rate,
        ),
        tables=TableStats(
            total=stats.tables.total,
            total_capacity=stats.tables.total_capacity,
            occupied=stats.tables.occupied,
            available=stats.tables.available,
            over_capacity=stats.tables.over_capacity,
        ),
        by_group=[
            GroupStats(
                group=group.group,
                count=group.count,
                total_people=group.total_people,
                confirmed=group.confirmed,
            )
            for group in stats.by_group
        ],
    )
