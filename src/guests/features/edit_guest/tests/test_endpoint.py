from uuid import UUID, uuid4

import pytest

from src.guests.dtos import CapacityExceededError, GuestDTO, GuestStatus, NotFoundError
from src.guests.features.edit_guest.router import get_guest_edit_write_model, get_guest_read_model
from src.guests.features.edit_guest.write_model import GuestEditWriteModel
from src.guests.repository.read_models import GuestFilters, GuestReadModel
from src.guests.urls import GUEST_URL


class InMemoryGuestModel(GuestReadModel, GuestEditWriteModel):
    """Read and write guests from a dict."""

    def __init__(self, guests: list[GuestDTO] | None = None, full_tables: set[UUID] | None = None):
        self._guests = {guest.id: guest for guest in guests or []}
        self._full_tables = full_tables or set()

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        return self._guests.get(guest_id)

    async def list_guests(self, filters: GuestFilters | None = None) -> list[GuestDTO]:
        return list(self._guests.values())

    async def list_groups(self) -> list[str]:
        return []

    async def update_guest(
        self,
        guest_id: UUID,
        first_name: str,
        last_name: str,
        email: str,
        group_family: str | None = None,
        number_of_people: int = 1,
        status: GuestStatus = GuestStatus.PENDING,
        dietary_restrictions: str | None = None,
        table_id: UUID | None = None,
    ) -> GuestDTO:
        if guest_id not in self._guests:
            raise NotFoundError("Guest", guest_id)
        if table_id in self._full_tables:
            raise CapacityExceededError("Full table", 10, 8)
        guest = GuestDTO(
            id=guest_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            status=status,
            number_of_people=number_of_people,
            group_family=group_family,
            dietary_restrictions=dietary_restrictions,
            table_id=table_id,
        )
        self._guests[guest_id] = guest
        return guest

    async def delete_guest(self, guest_id: UUID) -> None:
        if guest_id not in self._guests:
            raise NotFoundError("Guest", guest_id)
        del self._guests[guest_id]


def make_guest(**kwargs) -> GuestDTO:
    return GuestDTO(
        id=kwargs.pop("id", uuid4()),
        first_name=kwargs.pop("first_name", "John"),
        last_name=kwargs.pop("last_name", "Doe"),
        email=kwargs.pop("email", "john@example.com"),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_guest(client_factory):
    guest = make_guest()
    model = InMemoryGuestModel([guest])

    async with client_factory({get_guest_read_model: lambda: model}) as client:
        response = await client.get(GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 200
    assert response.json()["full_name"] == "John Doe"
    assert response.json()["token"] is None


@pytest.mark.asyncio
async def test_get_unknown_guest(client_factory):
    model = InMemoryGuestModel()

    async with client_factory({get_guest_read_model: lambda: model}) as client:
        response = await client.get(GUEST_URL.format(guest_id=uuid4()))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_guest(client_factory):
    guest = make_guest()
    model = InMemoryGuestModel([guest])

    async with client_factory({get_guest_edit_write_model: lambda: model}) as client:
        response = await client.put(
            GUEST_URL.format(guest_id=guest.id),
            json={
                "first_name": "John",
                "last_name": "Doe",
                "email": "john@example.com",
                "status": "confirmed",
                "number_of_people": 2,
            },
        )

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert response.json()["number_of_people"] == 2


@pytest.mark.asyncio
async def test_update_guest_to_full_table(client_factory):
    guest = make_guest()
    table_id = uuid4()
    model = InMemoryGuestModel([guest], full_tables={table_id})

    async with client_factory({get_guest_edit_write_model: lambda: model}) as client:
        response = await client.put(
            GUEST_URL.format(guest_id=guest.id),
            json={
                "first_name": "John",
                "last_name": "Doe",
                "email": "john@example.com",
                "table_id": str(table_id),
            },
        )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_guest(client_factory):
    guest = make_guest()
    model = InMemoryGuestModel([guest])

    async with client_factory({get_guest_edit_write_model: lambda: model}) as client:
        response = await client.delete(GUEST_URL.format(guest_id=guest.id))
        missing = await client.delete(GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 204
    assert missing.status_code == 404
