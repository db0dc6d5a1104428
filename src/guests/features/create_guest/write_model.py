"""Write model for creating guests.

Creates the Guest and its first RSVP token in one transaction, then sends the
invitation. A failed invitation never undoes the guest.
Returns DTOs instead of ORM models.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.email_service.dispatcher import NotificationDispatcher
from src.guests.dtos import CreatedGuestDTO, GuestDTO, GuestStatus
from src.guests.repository.orm_models import Guest
from src.guests.repository.write_models import SqlRSVPWriteModel
from src.guests.validators import normalize_dietary, normalize_party_size, validate_guest_fields
from src.seating.repository.write_models import ensure_capacity, get_table_or_raise

logger = logging.getLogger(__name__)


class GuestCreateWriteModel(ABC):
    """Abstract base class for guest creation write operations."""

    @abstractmethod
    async def create_guest(
        self,
        first_name: str,
        last_name: str,
        email: str,
        group_family: str | None = None,
        number_of_people: int = 1,
        status: GuestStatus = GuestStatus.PENDING,
        dietary_restrictions: str | None = None,
        table_id: UUID | None = None,
        send_invitation: bool = True,
    ) -> CreatedGuestDTO:
        """Create a new guest with an RSVP token. Returns DTO.

        Args:
            first_name: The guest's first name
            last_name: The guest's last name
            email: Where the invitation goes
            group_family: Optional group label used for filtering and stats
            number_of_people: Party size, 1..20 (forced to 0 when declined)
            status: Initial RSVP status (default pending)
            dietary_restrictions: Optional free-text notes
            table_id: Optional table, subject to its capacity
            send_invitation: Whether to email the RSVP link (default True)
        """
        raise NotImplementedError


class SqlGuestCreateWriteModel(GuestCreateWriteModel):
    """SQL implementation of guest creation write operations."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        rsvp_write_model: SqlRSVPWriteModel | None = None,
        dispatcher: NotificationDispatcher | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.rsvp_write_model = rsvp_write_model or SqlRSVPWriteModel()
        self.dispatcher = dispatcher

    async def create_guest(
        self,
        first_name: str,
        last_name: str,
        email: str,
        group_family: str | None = None,
        number_of_people: int = 1,
        status: GuestStatus = GuestStatus.PENDING,
        dietary_restrictions: str | None = None,
        table_id: UUID | None = None,
        send_invitation: bool = True,
    ) -> CreatedGuestDTO:
        status = GuestStatus(status)
        first_name, last_name, email, group_family = validate_guest_fields(
            first_name, last_name, email, group_family
        )
        number_of_people = normalize_party_size(status, number_of_people)
        dietary_restrictions = normalize_dietary(status, dietary_restrictions)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            # 1. Check the table can take the party
            table_name = None
            if table_id is not None:
                table = await get_table_or_raise(session, table_id)
                await ensure_capacity(session, table, None, number_of_people)
                table_name = table.name

            # 2. Create Guest
            guest = Guest(
                first_name=first_name,
                last_name=last_name,
                email=email,
                group_family=group_family,
                number_of_people=number_of_people,
                status=status,
                dietary_restrictions=dietary_restrictions,
                table_id=table_id,
            )
            session.add(guest)
            await session.flush()  # Get guest.uuid without full refresh

            # 3. Issue the RSVP token in the same transaction
            token = await self.rsvp_write_model.replace_token(
                session, guest.uuid, self.rsvp_write_model.expiration_days
            )
            await session.refresh(guest)
            guest_dto = GuestDTO.from_guest(guest, table_name=table_name, token=token)

        rsvp_link = self.rsvp_write_model.rsvp_link(token.token)
        logger.info("Guest %s created", guest_dto.id)

        # 4. Send invitation email if requested
        invitation_sent = False
        if send_invitation:
            if self.dispatcher is not None:
                invitation_sent = await self.dispatcher.send_invitation(guest_dto, rsvp_link)
            if not invitation_sent:
                logger.warning("Guest %s created but the invitation was not sent", guest_dto.id)

        return CreatedGuestDTO(
            guest=guest_dto,
            token=token,
            rsvp_link=rsvp_link,
            invitation_sent=invitation_sent,
        )
