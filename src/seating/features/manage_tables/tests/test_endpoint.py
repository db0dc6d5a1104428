from uuid import UUID, uuid4

import pytest

from src.guests.dtos import AssignmentDTO, GuestDTO, NotFoundError, TableDTO, ValidationFailedError
from src.guests.repository.tests.factories import create_guest, create_table
from src.seating.features.manage_tables.router import get_seating_write_model
from src.seating.repository.write_models import SeatingWriteModel
from src.seating.urls import TABLE_URL, TABLES_URL


class InMemorySeatingWriteModel(SeatingWriteModel):
    def __init__(self):
        self.tables: dict[UUID, TableDTO] = {}

    async def create_table(self, name: str, capacity: int, description: str | None = None) -> TableDTO:
        if any(table.name == name for table in self.tables.values()):
            raise ValidationFailedError("name", "A table with this name already exists")
        table = TableDTO(id=uuid4(), name=name, capacity=capacity, description=description)
        self.tables[table.id] = table
        return table

    async def update_table(
        self, table_id: UUID, name: str, capacity: int, description: str | None = None
    ) -> TableDTO:
        if table_id not in self.tables:
            raise NotFoundError("Table", table_id)
        table = TableDTO(id=table_id, name=name, capacity=capacity, description=description)
        self.tables[table_id] = table
        return table

    async def delete_table(self, table_id: UUID) -> None:
        if table_id not in self.tables:
            raise NotFoundError("Table", table_id)
        del self.tables[table_id]

    async def assign_guest(self, guest_id: UUID, table_id: UUID) -> AssignmentDTO:
        raise NotImplementedError

    async def unassign_guest(self, guest_id: UUID) -> GuestDTO:
        raise NotImplementedError


@pytest.mark.asyncio
async def test_create_table(client_factory):
    write_model = InMemorySeatingWriteModel()

    async with client_factory({get_seating_write_model: lambda: write_model}) as client:
        response = await client.post(TABLES_URL, json={"name": "Roses", "capacity": 8})
        duplicate = await client.post(TABLES_URL, json={"name": "Roses", "capacity": 6})

    assert response.status_code == 201
    assert response.json()["name"] == "Roses"
    assert response.json()["available_seats"] == 8
    assert duplicate.status_code == 422
    assert len(write_model.tables) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("capacity", [0, 51])
async def test_create_table_capacity_out_of_range(client_factory, capacity):
    write_model = InMemorySeatingWriteModel()

    async with client_factory({get_seating_write_model: lambda: write_model}) as client:
        response = await client.post(TABLES_URL, json={"name": "Roses", "capacity": capacity})

    assert response.status_code == 422
    assert write_model.tables == {}


@pytest.mark.asyncio
async def test_update_and_delete_table(client_factory):
    write_model = InMemorySeatingWriteModel()
    table = await write_model.create_table("Roses", 8)

    async with client_factory({get_seating_write_model: lambda: write_model}) as client:
        updated = await client.put(
            TABLE_URL.format(table_id=table.id), json={"name": "Peonies", "capacity": 10}
        )
        deleted = await client.delete(TABLE_URL.format(table_id=table.id))
        missing = await client.delete(TABLE_URL.format(table_id=table.id))

    assert updated.status_code == 200
    assert updated.json()["name"] == "Peonies"
    assert deleted.status_code == 204
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_and_get_tables_against_database(client):
    table = await create_table(name="Roses", capacity=4)
    await create_guest(number_of_people=6, table_id=table.uuid)

    listed = await client.get(TABLES_URL)
    single = await client.get(TABLE_URL.format(table_id=table.uuid))
    missing = await client.get(TABLE_URL.format(table_id=uuid4()))

    assert listed.status_code == 200
    assert listed.json()["total"] == 1
    data = single.json()
    assert data["occupancy"] == 6
    assert data["available_seats"] == -2
    assert data["is_over_capacity"] is True
    assert data["occupancy_percentage"] == 150.0
    assert missing.status_code == 404
