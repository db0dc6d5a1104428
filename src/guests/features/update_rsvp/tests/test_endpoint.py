import pytest

from src.guests.dtos import (
    GuestStatus,
    InvalidTokenError,
    RSVPResponseDTO,
    TokenDTO,
    TokenState,
)
from src.guests.features.update_rsvp.router import get_rsvp_write_model
from src.guests.repository.tests.factories import create_guest, create_token
from src.guests.repository.write_models import RSVPWriteModel
from src.guests.urls import UPDATE_RSVP_URL


class InMemoryRSVPWriteModel(RSVPWriteModel):
    """In-memory write model for testing."""

    def __init__(self, memory: dict, tokens: dict[str, TokenState] | None = None):
        self._memory = memory
        self._tokens = tokens or {}

    async def generate_token(self, guest_id, expiration_days=None) -> TokenDTO:
        raise NotImplementedError

    async def regenerate_token(self, guest_id) -> TokenDTO:
        raise NotImplementedError

    async def submit_rsvp(
        self,
        token: str,
        status: GuestStatus,
        number_of_people: int,
        dietary_restrictions: str | None,
    ) -> RSVPResponseDTO:
        state = self._tokens.get(token, TokenState.NOT_FOUND)
        if state != TokenState.ACTIVE:
            raise InvalidTokenError(token, state)

        self._memory[token] = {
            "status": status,
            "number_of_people": number_of_people,
            "dietary_restrictions": dietary_restrictions,
        }
        self._tokens[token] = TokenState.USED
        if status == GuestStatus.DECLINED:
            number_of_people = 0
        return RSVPResponseDTO(
            message="Your response has been recorded.",
            status=status,
            number_of_people=number_of_people,
            notification_sent=status != GuestStatus.PENDING,
        )


@pytest.mark.asyncio
async def test_submit_rsvp_attending(client_factory):
    memory = {}
    write_model = InMemoryRSVPWriteModel(memory, {"test-token": TokenState.ACTIVE})
    rsvp_data = {"status": "confirmed", "number_of_people": 3, "dietary_restrictions": "vegan"}

    async with client_factory({get_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(UPDATE_RSVP_URL.format(token="test-token"), json=rsvp_data)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == GuestStatus.CONFIRMED.value
    assert data["number_of_people"] == 3
    assert data["notification_sent"] is True
    assert memory["test-token"]["dietary_restrictions"] == "vegan"


@pytest.mark.asyncio
async def test_submit_rsvp_declined_ignores_party_size(client_factory):
    memory = {}
    write_model = InMemoryRSVPWriteModel(memory, {"test-token": TokenState.ACTIVE})

    async with client_factory({get_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="test-token"),
            json={"status": "declined", "number_of_people": 0},
        )

    assert response.status_code == 200
    assert response.json()["number_of_people"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("number_of_people", [0, 21])
async def test_submit_rsvp_party_size_out_of_range(client_factory, number_of_people):
    memory = {}
    write_model = InMemoryRSVPWriteModel(memory, {"test-token": TokenState.ACTIVE})

    async with client_factory({get_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="test-token"),
            json={"status": "confirmed", "number_of_people": number_of_people},
        )

    assert response.status_code == 422
    assert memory == {}


@pytest.mark.asyncio
async def test_submit_rsvp_dietary_too_long(client_factory):
    write_model = InMemoryRSVPWriteModel({}, {"test-token": TokenState.ACTIVE})

    async with client_factory({get_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="test-token"),
            json={"status": "confirmed", "number_of_people": 1, "dietary_restrictions": "x" * 501},
        )

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "state, status_code",
    [
        (TokenState.NOT_FOUND, 404),
        (TokenState.USED, 410),
        (TokenState.EXPIRED, 410),
    ],
)
async def test_submit_rsvp_invalid_token(client_factory, state, status_code):
    write_model = InMemoryRSVPWriteModel({}, {"bad-token": state})

    async with client_factory({get_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="bad-token"),
            json={"status": "confirmed", "number_of_people": 1},
        )

    assert response.status_code == status_code


@pytest.mark.asyncio
async def test_submit_rsvp_twice_against_database(client):
    guest = await create_guest(email="")
    await create_token(guest.uuid, token="db-token")
    url = UPDATE_RSVP_URL.format(token="db-token")

    first = await client.post(url, json={"status": "declined", "number_of_people": 0})
    second = await client.post(url, json={"status": "confirmed", "number_of_people": 2})

    assert first.status_code == 200
    assert first.json()["status"] == "declined"
    assert first.json()["notification_sent"] is False
    assert second.status_code == 410
