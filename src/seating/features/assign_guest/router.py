from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.guests.dtos import CapacityExceededError, NotFoundError
from src.guests.schemas import GuestResponse
from src.seating.repository.write_models import SeatingWriteModel, SqlSeatingWriteModel
from src.seating.schemas import TableResponse
from src.seating.urls import ASSIGN_GUEST_URL, UNASSIGN_GUEST_URL

router = APIRouter()


class AssignGuestSubmit(BaseModel):
    guest_id: UUID
    table_id: UUID


class UnassignGuestSubmit(BaseModel):
    guest_id: UUID


class AssignmentResponse(BaseModel):
    message: str
    guest: GuestResponse
    table: TableResponse


def get_seating_write_model() -> SeatingWriteModel:
    return SqlSeatingWriteModel()


@router.post(ASSIGN_GUEST_URL, response_model=AssignmentResponse)
async def assign_guest(
    data: AssignGuestSubmit,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> AssignmentResponse:
    """
    Seat a guest (and their whole party) at a table.
    Refused with 409 when the table cannot take the party.
    """
    try:
        assignment = await write_model.assign_guest(data.guest_id, data.table_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CapacityExceededError as e:
        raise HTTPException(
            status_code=409,
            detail={
                "message": str(e),
                "table": e.table_name,
                "projected_occupancy": e.projected,
                "capacity": e.capacity,
            },
        )

    return AssignmentResponse(
        message=f"{assignment.guest.full_name} assigned to {assignment.table.name}",
        guest=GuestResponse.from_dto(assignment.guest),
        table=TableResponse.from_dto(assignment.table),
    )


@router.post(UNASSIGN_GUEST_URL, response_model=GuestResponse)
async def unassign_guest(
    data: UnassignGuestSubmit,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> GuestResponse:
    try:
        guest = await write_model.unassign_guest(data.guest_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return GuestResponse.from_dto(guest)
