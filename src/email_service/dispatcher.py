"""Notification dispatch for the RSVP flow.

Transport errors stop here: they are logged and turned into a boolean so that
the request that triggered the email is never failed by the mail server.
"""

import logging

from src.email_service.base import EmailServiceBase
from src.email_service.templates import MessageKind
from src.guests.dtos import GuestDTO

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, email_service: EmailServiceBase | None = None):
        self._email_service = email_service

    @property
    def email_service(self) -> EmailServiceBase | None:
        return self._email_service

    async def dispatch(
        self,
        guest: GuestDTO,
        kind: MessageKind,
        rsvp_url: str | None = None,
    ) -> bool:
        """Send one templated email to the guest. Returns whether it went out."""
        if self._email_service is None:
            logger.warning("No email service configured, skipping %s email for guest %s", kind.value, guest.id)
            return False
        if not guest.email or not guest.email.strip():
            logger.warning("Guest %s has no email address, skipping %s email", guest.id, kind.value)
            return False

        try:
            if kind == MessageKind.INVITATION:
                if not rsvp_url:
                    raise ValueError("An invitation needs an RSVP url")
                await self._email_service.send_invitation(
                    to_address=guest.email,
                    guest_name=guest.full_name or "Guest",
                    rsvp_url=rsvp_url,
                )
            elif kind == MessageKind.CONFIRMATION:
                await self._email_service.send_confirmation(
                    to_address=guest.email,
                    guest_name=guest.full_name,
                    number_of_people=guest.number_of_people,
                    dietary=guest.dietary_restrictions or "None",
                )
            else:
                await self._email_service.send_decline(
                    to_address=guest.email,
                    guest_name=guest.full_name,
                )
        except Exception:
            logger.exception("Failed to send %s email to %s", kind.value, guest.email)
            return False

        logger.info("Sent %s email to %s", kind.value, guest.email)
        return True

    async def send_invitation(self, guest: GuestDTO, rsvp_url: str) -> bool:
        return await self.dispatch(guest, MessageKind.INVITATION, rsvp_url=rsvp_url)
