from datetime import timedelta
from uuid import uuid4

import pytest

from src.guests.dtos import GuestDTO, GuestStatus, RsvpTokenInfoDTO, TokenDTO
from src.guests.features.get_rsvp.router import get_rsvp_read_model
from src.guests.repository.read_models import RSVPReadModel
from src.guests.urls import GET_RSVP_URL
from src.models.base import utcnow


class InMemoryRSVPReadModel(RSVPReadModel):
    """In-memory read model for testing."""

    def __init__(self, tokens: list[RsvpTokenInfoDTO] | None = None):
        self._tokens = {info.token.token: info for info in tokens or []}

    async def get_token(self, token: str) -> RsvpTokenInfoDTO | None:
        return self._tokens.get(token)


def make_token_info(
    token: str,
    expires_in: timedelta = timedelta(days=30),
    is_used: bool = False,
    status: GuestStatus = GuestStatus.PENDING,
) -> RsvpTokenInfoDTO:
    guest_id = uuid4()
    token_dto = TokenDTO(
        id=uuid4(),
        token=token,
        guest_id=guest_id,
        expires_at=utcnow() + expires_in,
        is_used=is_used,
    )
    guest = GuestDTO(
        id=guest_id,
        first_name="John",
        last_name="Doe",
        email="john@example.com",
        status=status,
        number_of_people=2,
        token=token_dto,
    )
    return RsvpTokenInfoDTO(token=token_dto, guest=guest)


@pytest.mark.asyncio
async def test_get_rsvp_form(client_factory):
    read_model = InMemoryRSVPReadModel([make_token_info("active-token")])

    async with client_factory({get_rsvp_read_model: lambda: read_model}) as client:
        response = await client.get(GET_RSVP_URL.format(token="active-token"))

    assert response.status_code == 200
    data = response.json()
    assert data["view"] == "form"
    assert data["guest"]["full_name"] == "John Doe"
    assert data["guest"]["number_of_people"] == 2
    assert data["days_until_expiration"] >= 29
    assert data["event"]["couple_names"]


@pytest.mark.asyncio
async def test_get_rsvp_already_responded(client_factory):
    info = make_token_info("used-token", is_used=True, status=GuestStatus.CONFIRMED)
    read_model = InMemoryRSVPReadModel([info])

    async with client_factory({get_rsvp_read_model: lambda: read_model}) as client:
        response = await client.get(GET_RSVP_URL.format(token="used-token"))

    assert response.status_code == 200
    assert response.json()["view"] == "already_responded"
    assert response.json()["guest"]["status"] == "confirmed"
    assert response.json()["days_until_expiration"] == 0


@pytest.mark.asyncio
async def test_get_rsvp_expired(client_factory):
    info = make_token_info("expired-token", expires_in=timedelta(days=-2))
    read_model = InMemoryRSVPReadModel([info])

    async with client_factory({get_rsvp_read_model: lambda: read_model}) as client:
        response = await client.get(GET_RSVP_URL.format(token="expired-token"))

    assert response.status_code == 200
    assert response.json()["view"] == "expired"


@pytest.mark.asyncio
async def test_get_rsvp_unknown_token(client_factory):
    read_model = InMemoryRSVPReadModel()

    async with client_factory({get_rsvp_read_model: lambda: read_model}) as client:
        response = await client.get(GET_RSVP_URL.format(token="nope"))

    assert response.status_code == 404
    assert response.json()["detail"] == "Invalid RSVP link"
