from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from src.models.base import as_utc, utcnow

if TYPE_CHECKING:
    from src.guests.repository.orm_models import Guest, RsvpToken, SeatingTable

MIN_PEOPLE = 1
MAX_PEOPLE = 20
MIN_CAPACITY = 1
MAX_CAPACITY = 50
MAX_DIETARY_LENGTH = 500


class NotFoundError(Exception):
    """Raised when a referenced guest, table or token does not exist."""

    def __init__(self, entity: str, identifier) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} '{identifier}' not found")


class ValidationFailedError(Exception):
    """Raised when a field constraint is violated, before anything is persisted."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class TokenState(str, Enum):
    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


class InvalidTokenError(Exception):
    """Raised when an RSVP token is unknown, already used or expired."""

    def __init__(self, token: str, reason: TokenState = TokenState.NOT_FOUND) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid RSVP token ({reason.value})")


class CapacityExceededError(Exception):
    """Raised when seating a guest would push a table over its capacity."""

    def __init__(self, table_name: str, projected: int, capacity: int) -> None:
        self.table_name = table_name
        self.projected = projected
        self.capacity = capacity
        super().__init__(f"Capacity exceeded for table '{table_name}': {projected}/{capacity} seats")


class NotificationFailedError(Exception):
    """Raised when an email that an operation depends on could not be sent."""

    def __init__(self, email: str, kind: str) -> None:
        self.email = email
        self.kind = kind
        super().__init__(f"Could not send {kind} email to {email}")


class GuestStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"


@dataclass(frozen=True)
class TokenDTO:
    """DTO for an RSVP token. Expiry is derived, never stored."""

    id: UUID
    token: str
    guest_id: UUID
    expires_at: datetime
    is_used: bool = False
    used_at: datetime | None = None
    created_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires_at) <= (now or utcnow())

    def is_valid(self, now: datetime | None = None) -> bool:
        return not self.is_used and not self.is_expired(now)

    def state(self, now: datetime | None = None) -> TokenState:
        if self.is_used:
            return TokenState.USED
        if self.is_expired(now):
            return TokenState.EXPIRED
        return TokenState.ACTIVE

    def days_until_expiration(self, now: datetime | None = None) -> int:
        now = now or utcnow()
        if not self.is_valid(now):
            return 0
        return (as_utc(self.expires_at) - now).days

    @classmethod
    def from_token(cls, token: "RsvpToken") -> "TokenDTO":
        return cls(
            id=token.uuid,
            token=token.token,
            guest_id=token.guest_id,
            expires_at=as_utc(token.expires_at),
            is_used=token.is_used,
            used_at=as_utc(token.used_at),
            created_at=as_utc(token.created_at),
        )


@dataclass(frozen=True)
class GuestDTO:
    """DTO for guest data."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    status: GuestStatus = GuestStatus.PENDING
    number_of_people: int = 1
    group_family: str | None = None
    dietary_restrictions: str | None = None
    table_id: UUID | None = None
    table_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    responded_at: datetime | None = None
    token: TokenDTO | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_guest(
        cls,
        guest: "Guest",
        table_name: str | None = None,
        token: TokenDTO | None = None,
    ) -> "GuestDTO":
        """Create GuestDTO from Guest ORM model."""
        return cls(
            id=guest.uuid,
            first_name=guest.first_name,
            last_name=guest.last_name,
            email=guest.email,
            status=GuestStatus(guest.status),
            number_of_people=guest.number_of_people,
            group_family=guest.group_family,
            dietary_restrictions=guest.dietary_restrictions,
            table_id=guest.table_id,
            table_name=table_name,
            created_at=as_utc(guest.created_at),
            updated_at=as_utc(guest.updated_at),
            responded_at=as_utc(guest.responded_at),
            token=token,
        )


@dataclass(frozen=True)
class RsvpTokenInfoDTO:
    """A token together with the guest it belongs to."""

    token: TokenDTO
    guest: GuestDTO


@dataclass(frozen=True)
class RSVPResponseDTO:
    """DTO for RSVP response."""

    message: str
    status: GuestStatus
    number_of_people: int
    notification_sent: bool = False


@dataclass(frozen=True)
class CreatedGuestDTO:
    """Guest created by an administrator, with its first RSVP link."""

    guest: GuestDTO
    token: TokenDTO
    rsvp_link: str
    invitation_sent: bool = False


@dataclass(frozen=True)
class TableDTO:
    """DTO for a seating table. Occupancy is recomputed from the assigned guests on every read."""

    id: UUID
    name: str
    capacity: int
    description: str | None = None
    guests: list[GuestDTO] = field(default_factory=list)

    @property
    def occupancy(self) -> int:
        return sum(guest.number_of_people for guest in self.guests)

    @property
    def guest_count(self) -> int:
        return len(self.guests)

    @property
    def available_seats(self) -> int:
        return self.capacity - self.occupancy

    @property
    def is_over_capacity(self) -> bool:
        return self.occupancy > self.capacity

    @property
    def occupancy_percentage(self) -> float:
        if self.capacity <= 0:
            return 0.0
        return self.occupancy * 100.0 / self.capacity

    @classmethod
    def from_table(cls, table: "SeatingTable", guests: list[GuestDTO]) -> "TableDTO":
        return cls(
            id=table.uuid,
            name=table.name,
            capacity=table.capacity,
            description=table.description,
            guests=guests,
        )


@dataclass(frozen=True)
class AssignmentDTO:
    """Result of seating a guest at a table."""

    guest: GuestDTO
    table: TableDTO


@dataclass(frozen=True)
class SeatingBoardDTO:
    tables: list[TableDTO] = field(default_factory=list)
    unassigned_guests: list[GuestDTO] = field(default_factory=list)
