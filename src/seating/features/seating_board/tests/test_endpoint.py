from uuid import uuid4

import pytest

from src.guests.dtos import GuestDTO, GuestStatus, SeatingBoardDTO, TableDTO
from src.seating.features.seating_board.router import get_seating_read_model
from src.seating.repository.read_models import SeatingReadModel
from src.seating.urls import SEATING_URL


class InMemorySeatingReadModel(SeatingReadModel):
    def __init__(self, board: SeatingBoardDTO):
        self._board = board

    async def get_table(self, table_id):
        return next((t for t in self._board.tables if t.id == table_id), None)

    async def list_tables(self):
        return self._board.tables

    async def get_seating_board(self) -> SeatingBoardDTO:
        return self._board


def make_guest(first_name: str, number_of_people: int, table: TableDTO | None = None) -> GuestDTO:
    return GuestDTO(
        id=uuid4(),
        first_name=first_name,
        last_name="Guest",
        email=f"{first_name.lower()}@example.com",
        status=GuestStatus.CONFIRMED,
        number_of_people=number_of_people,
        table_id=table.id if table else None,
        table_name=table.name if table else None,
    )


@pytest.mark.asyncio
async def test_seating_board(client_factory):
    empty_oak = TableDTO(id=uuid4(), name="Oak", capacity=8)
    oak = TableDTO(
        id=empty_oak.id,
        name="Oak",
        capacity=8,
        guests=[make_guest("Seated", 3, empty_oak)],
    )
    pine = TableDTO(id=uuid4(), name="Pine", capacity=6)
    board = SeatingBoardDTO(tables=[oak, pine], unassigned_guests=[make_guest("Waiting", 2)])

    async with client_factory({get_seating_read_model: lambda: InMemorySeatingReadModel(board)}) as client:
        response = await client.get(SEATING_URL)

    assert response.status_code == 200
    data = response.json()
    assert [t["name"] for t in data["tables"]] == ["Oak", "Pine"]
    assert data["tables"][0]["occupancy"] == 3
    assert data["total_capacity"] == 14
    assert data["total_occupancy"] == 3
    assert data["available_seats"] == 11
    assert data["unassigned_people"] == 2
    assert [g["first_name"] for g in data["unassigned_guests"]] == ["Waiting"]
