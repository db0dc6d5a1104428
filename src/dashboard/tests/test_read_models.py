"""Tests for SqlDashboardReadModel."""

from datetime import timedelta

from src.dashboard.read_models import SqlDashboardReadModel
from src.guests.dtos import GuestStatus
from src.guests.repository.tests.factories import create_guest, create_table
from src.models.base import utcnow


async def seed():
    big = await create_table(name="Big", capacity=10)
    tight = await create_table(name="Tight", capacity=2)
    now = utcnow()
    await create_guest(
        first_name="Ann", last_name="A", status=GuestStatus.CONFIRMED, number_of_people=3,
        group_family="Family", table_id=big.uuid, responded_at=now - timedelta(days=2),
    )
    await create_guest(
        first_name="Bea", last_name="B", status=GuestStatus.CONFIRMED, number_of_people=4,
        group_family="Family", table_id=tight.uuid, responded_at=now - timedelta(days=1),
    )
    await create_guest(
        first_name="Cal", last_name="C", status=GuestStatus.DECLINED, number_of_people=0,
        group_family="Friends", responded_at=now,
    )
    await create_guest(first_name="Dan", last_name="D", number_of_people=2, group_family="Family")
    await create_guest(first_name="Eve", last_name="E", number_of_people=1)


async def test_dashboard_counts():
    await seed()

    dashboard = await SqlDashboardReadModel().get_dashboard()

    assert dashboard.total_guests == 5
    assert dashboard.total_people == 10
    assert (dashboard.confirmed_guests, dashboard.confirmed_people) == (2, 7)
    assert (dashboard.declined_guests, dashboard.declined_people) == (1, 0)
    assert (dashboard.pending_guests, dashboard.pending_people) == (2, 3)
    assert dashboard.confirmation_rate == 40.0

    assert dashboard.total_tables == 2
    assert dashboard.total_seats == 12
    assert dashboard.occupied_seats == 7
    assert dashboard.available_seats == 5

    assert [g.first_name for g in dashboard.recent_responses] == ["Cal", "Bea", "Ann"]
    assert [g.first_name for g in dashboard.pending_guests_list] == ["Dan", "Eve"]
    assert [t.name for t in dashboard.over_capacity_tables] == ["Tight"]


async def test_dashboard_empty():
    dashboard = await SqlDashboardReadModel().get_dashboard()

    assert dashboard.total_guests == 0
    assert dashboard.confirmation_rate == 0.0
    assert dashboard.seating_occupancy == 0.0
    assert dashboard.recent_responses == []


async def test_stats_by_group():
    await seed()

    stats = await SqlDashboardReadModel().get_stats()

    assert stats.guests.total == 5
    assert stats.guests.confirmation_rate == 40.0
    assert stats.tables.total_capacity == 12
    assert stats.tables.occupied == 7
    assert stats.tables.available == 5
    assert stats.tables.over_capacity == 1
    assert [(g.group, g.count, g.total_people, g.confirmed) for g in stats.by_group] == [
        ("Family", 3, 9, 2),
        ("Friends", 1, 0, 0),
    ]
