from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from src.guests.dtos import (
    CapacityExceededError,
    CreatedGuestDTO,
    GuestDTO,
    GuestStatus,
    TokenDTO,
)
from src.guests.features.create_guest.router import get_guest_create_write_model
from src.guests.features.create_guest.write_model import GuestCreateWriteModel
from src.guests.urls import GUESTS_URL
from src.models.base import utcnow


class InMemoryGuestCreateWriteModel(GuestCreateWriteModel):
    def __init__(self, memory: list, full_tables: set[UUID] | None = None):
        self._memory = memory
        self._full_tables = full_tables or set()

    async def create_guest(
        self,
        first_name: str,
        last_name: str,
        email: str,
        group_family: str | None = None,
        number_of_people: int = 1,
        status: GuestStatus = GuestStatus.PENDING,
        dietary_restrictions: str | None = None,
        table_id: UUID | None = None,
        send_invitation: bool = True,
    ) -> CreatedGuestDTO:
        if table_id in self._full_tables:
            raise CapacityExceededError("Full table", 9, 8)

        guest = GuestDTO(
            id=uuid4(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            status=status,
            number_of_people=number_of_people,
            group_family=group_family,
            dietary_restrictions=dietary_restrictions,
            table_id=table_id,
        )
        token = TokenDTO(
            id=uuid4(),
            token="new-token",
            guest_id=guest.id,
            expires_at=utcnow() + timedelta(days=30),
        )
        self._memory.append(guest)
        return CreatedGuestDTO(
            guest=guest,
            token=token,
            rsvp_link="http://localhost:4321/rsvp/new-token",
            invitation_sent=send_invitation,
        )


@pytest.mark.asyncio
async def test_create_guest(client_factory):
    memory = []
    overrides = {get_guest_create_write_model: lambda: InMemoryGuestCreateWriteModel(memory)}

    async with client_factory(overrides) as client:
        response = await client.post(
            GUESTS_URL,
            json={
                "first_name": "John",
                "last_name": "Doe",
                "email": "john@example.com",
                "number_of_people": 2,
                "group_family": "Doe family",
            },
        )

    assert response.status_code == 201
    data = response.json()
    assert data["guest"]["full_name"] == "John Doe"
    assert data["guest"]["number_of_people"] == 2
    assert data["rsvp_link"] == "http://localhost:4321/rsvp/new-token"
    assert data["invitation_sent"] is True
    assert len(memory) == 1


@pytest.mark.asyncio
async def test_create_guest_invalid_email(client_factory):
    memory = []
    overrides = {get_guest_create_write_model: lambda: InMemoryGuestCreateWriteModel(memory)}

    async with client_factory(overrides) as client:
        response = await client.post(
            GUESTS_URL,
            json={"first_name": "John", "last_name": "Doe", "email": "nope"},
        )

    assert response.status_code == 422
    assert memory == []


@pytest.mark.asyncio
async def test_create_guest_at_full_table(client_factory):
    table_id = uuid4()
    write_model = InMemoryGuestCreateWriteModel([], full_tables={table_id})
    overrides = {get_guest_create_write_model: lambda: write_model}

    async with client_factory(overrides) as client:
        response = await client.post(
            GUESTS_URL,
            json={
                "first_name": "John",
                "last_name": "Doe",
                "email": "john@example.com",
                "table_id": str(table_id),
            },
        )

    assert response.status_code == 409
    assert "Full table" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_guest_against_database(client):
    response = await client.post(
        GUESTS_URL,
        json={
            "first_name": "Real",
            "last_name": "Guest",
            "email": "real@example.com",
            "send_invitation": False,
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["guest"]["token"]["state"] == "active"
    assert data["rsvp_link"].endswith("/rsvp/" + data["guest"]["token"]["token"])
    assert data["invitation_sent"] is False
