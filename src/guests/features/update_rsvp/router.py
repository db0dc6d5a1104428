from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, model_validator

from src.email_service import get_notification_dispatcher
from src.guests.dtos import (
    MAX_DIETARY_LENGTH,
    MAX_PEOPLE,
    MIN_PEOPLE,
    GuestStatus,
    InvalidTokenError,
    TokenState,
    ValidationFailedError,
)
from src.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from src.guests.urls import UPDATE_RSVP_URL

router = APIRouter()


class RSVPSubmit(BaseModel):
    status: GuestStatus
    number_of_people: int = 1
    dietary_restrictions: str | None = Field(default=None, max_length=MAX_DIETARY_LENGTH)

    @model_validator(mode="after")
    def check_party_size(self) -> "RSVPSubmit":
        if self.status != GuestStatus.DECLINED and not (
            MIN_PEOPLE <= self.number_of_people <= MAX_PEOPLE
        ):
            raise ValueError(
                f"number_of_people must be between {MIN_PEOPLE} and {MAX_PEOPLE}"
            )
        return self


class RSVPResponse(BaseModel):
    message: str
    status: GuestStatus
    number_of_people: int
    notification_sent: bool


def get_rsvp_write_model() -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel(dispatcher=get_notification_dispatcher())


@router.post(UPDATE_RSVP_URL, response_model=RSVPResponse)
async def submit_rsvp(
    token: str,
    rsvp_data: RSVPSubmit,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> RSVPResponse:
    """
    Submit RSVP response for a guest.
    The link works once: a second submission, concurrent or not, is refused.
    """
    try:
        response_dto = await write_model.submit_rsvp(
            token=token,
            status=rsvp_data.status,
            number_of_people=rsvp_data.number_of_people,
            dietary_restrictions=rsvp_data.dietary_restrictions,
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidTokenError as e:
        if e.reason == TokenState.NOT_FOUND:
            raise HTTPException(status_code=404, detail="Invalid RSVP link")
        raise HTTPException(status_code=410, detail=f"This RSVP link is {e.reason.value}")

    return RSVPResponse(
        message=response_dto.message,
        status=response_dto.status,
        number_of_people=response_dto.number_of_people,
        notification_sent=response_dto.notification_sent,
    )
