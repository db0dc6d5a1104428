import abc
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import or_, select

from src.config.database import async_session_manager
from src.guests.dtos import GuestDTO, GuestStatus, RsvpTokenInfoDTO, TokenDTO, TokenState
from src.guests.repository.orm_models import Guest, RsvpToken, SeatingTable

logger = logging.getLogger(__name__)


class RSVPReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_token(self, token: str) -> RsvpTokenInfoDTO | None:
        """
        Get an RSVP token with its guest.
        Returns the token even when used or expired, so the caller can tell the guest why.
        """
        raise NotImplementedError

    async def validate_token(self, token: str) -> bool:
        """True iff the token exists, is unused and has not expired."""
        info = await self.get_token(token)
        if info is None:
            logger.warning("RSVP token not found")
            return False

        state = info.token.state()
        if state != TokenState.ACTIVE:
            logger.warning("RSVP token for guest %s is %s", info.guest.id, state.value)
            return False
        return True


class SqlRSVPReadModel(RSVPReadModel):
    """SQL implementation of RSVP read model."""

    async def get_token(self, token: str) -> RsvpTokenInfoDTO | None:
        async with async_session_manager() as session:
            stmt = (
                select(RsvpToken, Guest, SeatingTable.name)
                .join(Guest, RsvpToken.guest_id == Guest.uuid)
                .outerjoin(SeatingTable, Guest.table_id == SeatingTable.uuid)
                .where(RsvpToken.token == token)
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return None

            rsvp_token, guest, table_name = row
            token_dto = TokenDTO.from_token(rsvp_token)
            return RsvpTokenInfoDTO(
                token=token_dto,
                guest=GuestDTO.from_guest(guest, table_name=table_name, token=token_dto),
            )


@dataclass(frozen=True)
class GuestFilters:
    search: str | None = None
    status: GuestStatus | None = None
    table_id: UUID | None = None
    group: str | None = None


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_guests(self, filters: GuestFilters | None = None) -> list[GuestDTO]:
        """Guests ordered by last name then first name."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_groups(self) -> list[str]:
        """Distinct, non-empty group labels, sorted."""
        raise NotImplementedError


class SqlGuestReadModel(GuestReadModel):
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        async with async_session_manager() as session:
            stmt = (
                select(Guest, SeatingTable.name, RsvpToken)
                .outerjoin(SeatingTable, Guest.table_id == SeatingTable.uuid)
                .outerjoin(RsvpToken, RsvpToken.guest_id == Guest.uuid)
                .where(Guest.uuid == guest_id)
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return None

            guest, table_name, rsvp_token = row
            return GuestDTO.from_guest(
                guest,
                table_name=table_name,
                token=TokenDTO.from_token(rsvp_token) if rsvp_token else None,
            )

    async def list_guests(self, filters: GuestFilters | None = None) -> list[GuestDTO]:
        filters = filters or GuestFilters()
        stmt = select(Guest, SeatingTable.name).outerjoin(
            SeatingTable, Guest.table_id == SeatingTable.uuid
        )

        if filters.search and filters.search.strip():
            pattern = f"%{filters.search.strip()}%"
            stmt = stmt.where(
                or_(
                    Guest.first_name.ilike(pattern),
                    Guest.last_name.ilike(pattern),
                    Guest.email.ilike(pattern),
                )
            )
        if filters.status is not None:
            stmt = stmt.where(Guest.status == filters.status)
        if filters.table_id is not None:
            stmt = stmt.where(Guest.table_id == filters.table_id)
        if filters.group and filters.group.strip():
            stmt = stmt.where(Guest.group_family == filters.group.strip())

        stmt = stmt.order_by(Guest.last_name, Guest.first_name)

        async with async_session_manager() as session:
            result = await session.execute(stmt)
            return [
                GuestDTO.from_guest(guest, table_name=table_name)
                for guest, table_name in result.all()
            ]

    async def list_groups(self) -> list[str]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(Guest.group_family)
                .where(Guest.group_family.is_not(None), Guest.group_family != "")
                .distinct()
                .order_by(Guest.group_family)
            )
            return list(result.scalars().all())
