from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, EmailStr, Field

from src.guests.dtos import (
    MAX_DIETARY_LENGTH,
    MAX_PEOPLE,
    CapacityExceededError,
    GuestStatus,
    NotFoundError,
    ValidationFailedError,
)
from src.guests.features.edit_guest.write_model import GuestEditWriteModel, SqlGuestEditWriteModel
from src.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from src.guests.schemas import GuestResponse
from src.guests.urls import GUEST_URL

router = APIRouter()


class GuestUpdate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    group_family: str | None = Field(default=None, max_length=100)
    number_of_people: int = Field(default=1, ge=0, le=MAX_PEOPLE)
    status: GuestStatus = GuestStatus.PENDING
    dietary_restrictions: str | None = Field(default=None, max_length=MAX_DIETARY_LENGTH)
    table_id: UUID | None = None


def get_guest_read_model() -> GuestReadModel:
    return SqlGuestReadModel()


def get_guest_edit_write_model() -> GuestEditWriteModel:
    return SqlGuestEditWriteModel()


@router.get(GUEST_URL, response_model=GuestResponse)
async def get_guest(
    guest_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestResponse:
    guest = await read_model.get_guest(guest_id)
    if guest is None:
        raise HTTPException(status_code=404, detail="Guest not found")
    return GuestResponse.from_dto(guest)


@router.put(GUEST_URL, response_model=GuestResponse)
async def update_guest(
    guest_id: UUID,
    guest_data: GuestUpdate,
    write_model: GuestEditWriteModel = Depends(get_guest_edit_write_model),
) -> GuestResponse:
    """Replace the guest's details. Moving to another table goes through the capacity check."""
    try:
        guest = await write_model.update_guest(
            guest_id=guest_id,
            first_name=guest_data.first_name,
            last_name=guest_data.last_name,
            email=guest_data.email,
            group_family=guest_data.group_family,
            number_of_people=guest_data.number_of_people,
            status=guest_data.status,
            dietary_restrictions=guest_data.dietary_restrictions,
            table_id=guest_data.table_id,
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CapacityExceededError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return GuestResponse.from_dto(guest)


@router.delete(GUEST_URL, status_code=204)
async def delete_guest(
    guest_id: UUID,
    write_model: GuestEditWriteModel = Depends(get_guest_edit_write_model),
) -> Response:
    try:
        await write_model.delete_guest(guest_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
