from uuid import UUID

from pydantic import BaseModel

from src.guests.dtos import TableDTO
from src.guests.schemas import GuestResponse


class TableResponse(BaseModel):
    id: UUID
    name: str
    capacity: int
    description: str | None = None
    occupancy: int
    guest_count: int
    available_seats: int
    is_over_capacity: bool
    occupancy_percentage: float
    guests: list[GuestResponse] = []

    @classmethod
    def from_dto(cls, table: TableDTO) -> "TableResponse":
        return cls(
            id=table.id,
            name=table.name,
            capacity=table.capacity,
            description=table.description,
            occupancy=table.occupancy,
            guest_count=table.guest_count,
            available_seats=table.available_seats,
            is_over_capacity=table.is_over_capacity,
            occupancy_percentage=round(table.occupancy_percentage, 1),
            guests=[GuestResponse.from_dto(guest) for guest in table.guests],
        )
