"""Write model for editing and deleting guests."""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.guests.dtos import GuestDTO, GuestStatus, NotFoundError
from src.guests.repository.orm_models import Guest, RsvpToken
from src.guests.validators import normalize_dietary, normalize_party_size, validate_guest_fields
from src.seating.repository.write_models import ensure_capacity, get_table_or_raise

logger = logging.getLogger(__name__)


class GuestEditWriteModel(ABC):
    @abstractmethod
    async def update_guest(
        self,
        guest_id: UUID,
        first_name: str,
        last_name: str,
        email: str,
        group_family: str | None = None,
        number_of_people: int = 1,
        status: GuestStatus = GuestStatus.PENDING,
        dietary_restrictions: str | None = None,
        table_id: UUID | None = None,
    ) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> None:
        """Delete the guest and its RSVP token."""
        raise NotImplementedError


class SqlGuestEditWriteModel(GuestEditWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def _get_guest(self, session: AsyncSession, guest_id: UUID) -> Guest:
        guest = await session.get(Guest, guest_id)
        if guest is None:
            raise NotFoundError("Guest", guest_id)
        return guest

    async def update_guest(
        self,
        guest_id: UUID,
        first_name: str,
        last_name: str,
        email: str,
        group_family: str | None = None,
        number_of_people: int = 1,
        status: GuestStatus = GuestStatus.PENDING,
        dietary_restrictions: str | None = None,
        table_id: UUID | None = None,
    ) -> GuestDTO:
        status = GuestStatus(status)
        first_name, last_name, email, group_family = validate_guest_fields(
            first_name, last_name, email, group_family
        )
        number_of_people = normalize_party_size(status, number_of_people)
        dietary_restrictions = normalize_dietary(status, dietary_restrictions)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, guest_id)

            table_name = None
            if table_id is not None:
                table = await get_table_or_raise(session, table_id)
                table_name = table.name
                # an unchanged seat only needs checking when the party grows
                if table_id != guest.table_id or number_of_people > guest.number_of_people:
                    await ensure_capacity(session, table, guest.uuid, number_of_people)

            guest.first_name = first_name
            guest.last_name = last_name
            guest.email = email
            guest.group_family = group_family
            guest.number_of_people = number_of_people
            guest.status = status
            guest.dietary_restrictions = dietary_restrictions
            guest.table_id = table_id
            await session.flush()
            await session.refresh(guest)

            logger.info("Guest %s updated", guest_id)
            return GuestDTO.from_guest(guest, table_name=table_name)

    async def delete_guest(self, guest_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, guest_id)
            await session.execute(delete(RsvpToken).where(RsvpToken.guest_id == guest.uuid))
            await session.delete(guest)
            await session.flush()

        logger.info("Guest %s deleted", guest_id)
