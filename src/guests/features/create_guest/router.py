from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from src.email_service import get_notification_dispatcher
from src.guests.dtos import (
    MAX_DIETARY_LENGTH,
    MAX_PEOPLE,
    CapacityExceededError,
    GuestStatus,
    NotFoundError,
    ValidationFailedError,
)
from src.guests.features.create_guest.write_model import (
    GuestCreateWriteModel,
    SqlGuestCreateWriteModel,
)
from src.guests.repository.write_models import SqlRSVPWriteModel
from src.guests.schemas import GuestResponse
from src.guests.urls import GUESTS_URL

router = APIRouter()


class GuestCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    group_family: str | None = Field(default=None, max_length=100)
    number_of_people: int = Field(default=1, ge=0, le=MAX_PEOPLE)
    status: GuestStatus = GuestStatus.PENDING
    dietary_restrictions: str | None = Field(default=None, max_length=MAX_DIETARY_LENGTH)
    table_id: UUID | None = None
    send_invitation: bool = True


class CreateGuestResponse(BaseModel):
    guest: GuestResponse
    rsvp_link: str
    invitation_sent: bool


def get_guest_create_write_model() -> GuestCreateWriteModel:
    """Dependency to get guest create write model instance."""
    dispatcher = get_notification_dispatcher()
    return SqlGuestCreateWriteModel(
        rsvp_write_model=SqlRSVPWriteModel(dispatcher=dispatcher),
        dispatcher=dispatcher,
    )


@router.post(GUESTS_URL, response_model=CreateGuestResponse, status_code=201)
async def create_guest(
    guest_data: GuestCreate,
    write_model: GuestCreateWriteModel = Depends(get_guest_create_write_model),
) -> CreateGuestResponse:
    """
    Create a guest and issue their RSVP link.
    The invitation email is sent unless send_invitation is false; a failed send
    does not undo the guest.
    """
    try:
        created = await write_model.create_guest(
            first_name=guest_data.first_name,
            last_name=guest_data.last_name,
            email=guest_data.email,
            group_family=guest_data.group_family,
            number_of_people=guest_data.number_of_people,
            status=guest_data.status,
            dietary_restrictions=guest_data.dietary_restrictions,
            table_id=guest_data.table_id,
            send_invitation=guest_data.send_invitation,
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CapacityExceededError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return CreateGuestResponse(
        guest=GuestResponse.from_dto(created.guest),
        rsvp_link=created.rsvp_link,
        invitation_sent=created.invitation_sent,
    )
