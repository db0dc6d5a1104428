from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.guests.dtos import GuestStatus
from src.guests.repository.read_models import GuestFilters, GuestReadModel, SqlGuestReadModel
from src.guests.schemas import GuestResponse
from src.guests.urls import GUEST_GROUPS_URL, GUESTS_URL

router = APIRouter()


class GuestListResponse(BaseModel):
    guests: list[GuestResponse]
    total: int
    total_people: int
    groups: list[str]


class GroupListResponse(BaseModel):
    groups: list[str]


def get_guest_list_read_model() -> GuestReadModel:
    return SqlGuestReadModel()


@router.get(GUESTS_URL, response_model=GuestListResponse)
async def list_guests(
    search: str | None = Query(None, description="Matches first name, last name or email"),
    status: GuestStatus | None = Query(None, description="Filter by RSVP status"),
    table_id: UUID | None = Query(None, description="Filter by table"),
    group: str | None = Query(None, description="Filter by group or family"),
    read_model: GuestReadModel = Depends(get_guest_list_read_model),
) -> GuestListResponse:
    """
    List guests ordered by last name, with optional filtering.
    The group labels are returned too so the filter can be rendered.
    """
    guests = await read_model.list_guests(
        GuestFilters(search=search, status=status, table_id=table_id, group=group)
    )
    return GuestListResponse(
        guests=[GuestResponse.from_dto(guest) for guest in guests],
        total=len(guests),
        total_people=sum(guest.number_of_people for guest in guests),
        groups=await read_model.list_groups(),
    )


@router.get(GUEST_GROUPS_URL, response_model=GroupListResponse)
async def list_groups(
    read_model: GuestReadModel = Depends(get_guest_list_read_model),
) -> GroupListResponse:
    return GroupListResponse(groups=await read_model.list_groups())
