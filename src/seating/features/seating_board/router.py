from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.guests.schemas import GuestResponse
from src.seating.repository.read_models import SeatingReadModel, SqlSeatingReadModel
from src.seating.schemas import TableResponse
from src.seating.urls import SEATING_URL

router = APIRouter()


class SeatingBoardResponse(BaseModel):
    tables: list[TableResponse]
    unassigned_guests: list[GuestResponse]
    total_capacity: int
    total_occupancy: int
    available_seats: int
    unassigned_people: int


def get_seating_read_model() -> SeatingReadModel:
    return SqlSeatingReadModel()


@router.get(SEATING_URL, response_model=SeatingBoardResponse)
async def get_seating_board(
    read_model: SeatingReadModel = Depends(get_seating_read_model),
) -> SeatingBoardResponse:
    """Every table with its guests, and the confirmed guests still waiting for a seat."""
    board = await read_model.get_seating_board()
    total_capacity = sum(table.capacity for table in board.tables)
    total_occupancy = sum(table.occupancy for table in board.tables)
    return SeatingBoardResponse(
        tables=[TableResponse.from_dto(table) for table in board.tables],
        unassigned_guests=[GuestResponse.from_dto(guest) for guest in board.unassigned_guests],
        total_capacity=total_capacity,
        total_occupancy=total_occupancy,
        available_seats=total_capacity - total_occupancy,
        unassigned_people=sum(guest.number_of_people for guest in board.unassigned_guests),
    )
