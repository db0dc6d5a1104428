from enum import Enum

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.config.settings import settings
from src.guests.dtos import TokenState
from src.guests.repository.read_models import RSVPReadModel, SqlRSVPReadModel
from src.guests.schemas import GuestResponse
from src.guests.urls import GET_RSVP_URL

router = APIRouter()


class RSVPView(str, Enum):
    FORM = "form"
    ALREADY_RESPONDED = "already_responded"
    EXPIRED = "expired"


class EventDetails(BaseModel):
    couple_names: str
    event_date: str
    event_location: str


class RSVPPageResponse(BaseModel):
    """What the RSVP page needs to render. The token itself is in the URL."""

    view: RSVPView
    guest: GuestResponse
    days_until_expiration: int
    event: EventDetails


def get_rsvp_read_model() -> RSVPReadModel:
    """Dependency to get RSVP read model instance."""
    return SqlRSVPReadModel()


@router.get(GET_RSVP_URL, response_model=RSVPPageResponse)
async def get_rsvp(
    token: str,
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> RSVPPageResponse:
    """
    Get RSVP page information by token.
    Used and expired tokens are still answered, with a view telling the guest why
    the form is closed.
    """
    info = await read_model.get_token(token)
    if info is None:
        raise HTTPException(status_code=404, detail="Invalid RSVP link")

    state = info.token.state()
    if state == TokenState.USED:
        view = RSVPView.ALREADY_RESPONDED
    elif state == TokenState.EXPIRED:
        view = RSVPView.EXPIRED
    else:
        view = RSVPView.FORM

    return RSVPPageResponse(
        view=view,
        guest=GuestResponse.from_dto(info.guest),
        days_until_expiration=info.token.days_until_expiration(),
        event=EventDetails(
            couple_names=settings.couple_names,
            event_date=settings.event_date,
            event_location=settings.event_location,
        ),
    )
