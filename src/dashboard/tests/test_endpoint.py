import pytest

from src.dashboard.dtos import (
    DashboardDTO,
    GroupStatsDTO,
    GuestStatsDTO,
    StatsDTO,
    TableStatsDTO,
)
from src.dashboard.read_models import DashboardReadModel
from src.dashboard.router import get_dashboard_read_model
from src.dashboard.urls import DASHBOARD_URL, STATS_URL


class InMemoryDashboardReadModel(DashboardReadModel):
    def __init__(self, dashboard: DashboardDTO | None = None, stats: StatsDTO | None = None):
        self._dashboard = dashboard or DashboardDTO()
        self._stats = stats

    async def get_dashboard(self) -> DashboardDTO:
        return self._dashboard

    async def get_stats(self) -> StatsDTO:
        return self._stats


@pytest.mark.asyncio
async def test_dashboard_percentages(client_factory):
    dashboard = DashboardDTO(
        total_guests=3,
        confirmed_guests=1,
        total_seats=30,
        occupied_seats=10,
    )
    read_model = InMemoryDashboardReadModel(dashboard=dashboard)

    async with client_factory({get_dashboard_read_model: lambda: read_model}) as client:
        response = await client.get(DASHBOARD_URL)

    assert response.status_code == 200
    data = response.json()
    assert data["confirmation_rate"] == 33.3
    assert data["seating_occupancy"] == 33.3
    assert data["available_seats"] == 20
    assert data["over_capacity_tables"] == []


@pytest.mark.asyncio
async def test_stats(client_factory):
    stats = StatsDTO(
        guests=GuestStatsDTO(total=3, total_people=5, confirmed=2, confirmed_people=4, declined=1),
        tables=TableStatsDTO(total=1, total_capacity=8, occupied=4),
        by_group=[GroupStatsDTO(group="Family", count=2, total_people=4, confirmed=2)],
    )
    read_model = InMemoryDashboardReadModel(stats=stats)

    async with client_factory({get_dashboard_read_model: lambda: read_model}) as client:
        response = await client.get(STATS_URL)

    assert response.status_code == 200
    data = response.json()
    assert data["guests"]["confirmation_rate"] == 66.7
    assert data["tables"]["available"] == 4
    assert data["by_group"] == [
        {"group": "Family", "count": 2, "total_people": 4, "confirmed": 2}
    ]


@pytest.mark.asyncio
async def test_stats_against_empty_database(client):
    response = await client.get(STATS_URL)

    assert response.status_code == 200
    assert response.json()["guests"]["confirmation_rate"] == 0.0
    assert response.json()["by_group"] == []
