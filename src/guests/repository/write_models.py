"""RSVP token lifecycle - write side. Returns DTOs, never ORM models."""

import logging
import secrets
from abc import ABC, abstractmethod
from datetime import timedelta
from functools import partial
from typing import Protocol
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.config.settings import settings
from src.email_service.dispatcher import NotificationDispatcher
from src.email_service.templates import MessageKind
from src.guests.dtos import (
    GuestDTO,
    GuestStatus,
    InvalidTokenError,
    NotFoundError,
    NotificationFailedError,
    RSVPResponseDTO,
    TokenDTO,
    TokenState,
)
from src.guests.repository.orm_models import Guest, RsvpToken
from src.guests.validators import normalize_dietary, normalize_party_size
from src.models.base import utcnow

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class RSVPConfig(Protocol):
    rsvp_token_expiration_days: int
    rsvp_base_url: str


def build_rsvp_link(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/rsvp/{token}"


def new_token_string() -> str:
    """Unguessable, URL-safe token. Never sequential or time-derived."""
    return secrets.token_urlsafe(TOKEN_BYTES)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def generate_token(self, guest_id: UUID, expiration_days: int | None = None) -> TokenDTO:
        """Replace the guest's token with a fresh one."""
        raise NotImplementedError

    @abstractmethod
    async def submit_rsvp(
        self,
        token: str,
        status: GuestStatus,
        number_of_people: int,
        dietary_restrictions: str | None,
    ) -> RSVPResponseDTO:
        """
        Record a guest's answer and consume the token.
        Returns DTO instead of ORM model.
        """
        raise NotImplementedError

    @abstractmethod
    async def regenerate_token(self, guest_id: UUID) -> TokenDTO:
        """Issue a new token and email a fresh invitation."""
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """Write operations for RSVP tokens. Returns DTOs, never ORM models."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        config: RSVPConfig = settings,
        session_overwrite: AsyncSession | None = None,
        dispatcher: NotificationDispatcher | None = None,
    ):
        self._config = config
        self._session_overwrite = session_overwrite
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> NotificationDispatcher | None:
        return self._dispatcher

    @property
    def expiration_days(self) -> int:
        return self._config.rsvp_token_expiration_days

    def rsvp_link(self, token: str) -> str:
        return build_rsvp_link(self._config.rsvp_base_url, token)

    async def replace_token(
        self, session: AsyncSession, guest_id: UUID, expiration_days: int
    ) -> TokenDTO:
        """Delete any token of the guest and insert a new one, inside the caller's transaction."""
        # executed immediately, so the unique guest_id is free before the insert is flushed
        await session.execute(delete(RsvpToken).where(RsvpToken.guest_id == guest_id))

        rsvp_token = RsvpToken(
            token=new_token_string(),
            guest_id=guest_id,
            expires_at=utcnow() + timedelta(days=expiration_days),
            is_used=False,
        )
        session.add(rsvp_token)
        await session.flush()
        return TokenDTO.from_token(rsvp_token)

    async def _generate(self, guest_id: UUID, expiration_days: int) -> tuple[GuestDTO, TokenDTO]:
        async with self.async_session_manager(session_overwrite=self._session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                logger.warning("Cannot generate an RSVP token: guest %s not found", guest_id)
                raise NotFoundError("Guest", guest_id)

            token = await self.replace_token(session, guest.uuid, expiration_days)
            guest_dto = GuestDTO.from_guest(guest, token=token)

        logger.info("RSVP token generated for guest %s", guest_id)
        return guest_dto, token

    async def generate_token(self, guest_id: UUID, expiration_days: int | None = None) -> TokenDTO:
        if expiration_days is None:
            expiration_days = self._config.rsvp_token_expiration_days
        _, token = await self._generate(guest_id, expiration_days)
        return token

    async def submit_rsvp(
        self,
        token: str,
        status: GuestStatus,
        number_of_people: int,
        dietary_restrictions: str | None,
    ) -> RSVPResponseDTO:
        """
        Submit RSVP response for a guest.

        Field validation happens before the token is even looked up. The token is
        consumed with a conditional update so that, of several concurrent
        submissions, only one can flip it to used; the others get InvalidTokenError.
        """
        status = GuestStatus(status)
        number_of_people = normalize_party_size(status, number_of_people)
        dietary_restrictions = normalize_dietary(status, dietary_restrictions)

        async with self.async_session_manager(session_overwrite=self._session_overwrite) as session:
            now = utcnow()
            stmt = (
                select(RsvpToken, Guest)
                .join(Guest, RsvpToken.guest_id == Guest.uuid)
                .where(RsvpToken.token == token)
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                logger.warning("Invalid RSVP token submitted")
                raise InvalidTokenError(token, TokenState.NOT_FOUND)

            rsvp_token, guest = row
            state = TokenDTO.from_token(rsvp_token).state(now)
            if state != TokenState.ACTIVE:
                logger.warning("RSVP token for guest %s rejected: %s", guest.uuid, state.value)
                raise InvalidTokenError(token, state)

            consumed = await session.execute(
                update(RsvpToken)
                .where(
                    RsvpToken.uuid == rsvp_token.uuid,
                    RsvpToken.is_used.is_(False),
                    RsvpToken.expires_at > now,
                )
                .values(is_used=True, used_at=now)
                .execution_options(synchronize_session=False)
            )
            if consumed.rowcount != 1:
                logger.warning("RSVP token for guest %s was consumed concurrently", guest.uuid)
                raise InvalidTokenError(token, TokenState.USED)

            guest.status = status
            guest.number_of_people = number_of_people
            guest.dietary_restrictions = dietary_restrictions
            guest.responded_at = now
            await session.flush()
            await session.refresh(guest)
            guest_dto = GuestDTO.from_guest(guest)

        logger.info("RSVP recorded for guest %s (%s)", guest_dto.full_name, status.value)

        notification_sent = False
        if self._dispatcher is not None:
            if status == GuestStatus.CONFIRMED:
                notification_sent = await self._dispatcher.dispatch(guest_dto, MessageKind.CONFIRMATION)
            elif status == GuestStatus.DECLINED:
                notification_sent = await self._dispatcher.dispatch(guest_dto, MessageKind.DECLINE)

        message = (
            "Thank you for confirming your attendance!"
            if status == GuestStatus.CONFIRMED
            else "We're sorry you can't make it. Your response has been recorded."
            if status == GuestStatus.DECLINED
            else "Your response has been recorded."
        )
        return RSVPResponseDTO(
            message=message,
            status=status,
            number_of_people=number_of_people,
            notification_sent=notification_sent,
        )

    async def regenerate_token(self, guest_id: UUID) -> TokenDTO:
        """
        Regenerate the guest's token (lost or expired link) and send a new invitation.

        The new token is committed before the email goes out; a failed send is
        reported with NotificationFailedError.
        """
        guest, token = await self._generate(guest_id, self._config.rsvp_token_expiration_days)

        sent = False
        if self._dispatcher is not None:
            sent = await self._dispatcher.send_invitation(guest, self.rsvp_link(token.token))
        if not sent:
            raise NotificationFailedError(guest.email, MessageKind.INVITATION.value)
        return token
