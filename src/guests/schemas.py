"""Response models shared by the guest routers."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.guests.dtos import GuestDTO, GuestStatus, TokenDTO, TokenState


class TokenResponse(BaseModel):
    token: str
    expires_at: datetime
    is_used: bool
    used_at: datetime | None = None
    state: TokenState
    days_until_expiration: int

    @classmethod
    def from_dto(cls, token: TokenDTO) -> "TokenResponse":
        return cls(
            token=token.token,
            expires_at=token.expires_at,
            is_used=token.is_used,
            used_at=token.used_at,
            state=token.state(),
            days_until_expiration=token.days_until_expiration(),
        )


class GuestResponse(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    status: GuestStatus
    number_of_people: int
    group_family: str | None = None
    dietary_restrictions: str | None = None
    table_id: UUID | None = None
    table_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    responded_at: datetime | None = None
    token: TokenResponse | None = None

    @classmethod
    def from_dto(cls, guest: GuestDTO) -> "GuestResponse":
        return cls(
            id=guest.id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            full_name=guest.full_name,
            email=guest.email,
            status=guest.status,
            number_of_people=guest.number_of_people,
            group_family=guest.group_family,
            dietary_restrictions=guest.dietary_restrictions,
            table_id=guest.table_id,
            table_name=guest.table_name,
            created_at=guest.created_at,
            updated_at=guest.updated_at,
            responded_at=guest.responded_at,
            token=TokenResponse.from_dto(guest.token) if guest.token else None,
        )
