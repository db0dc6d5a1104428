from abc import ABC, abstractmethod
from typing import Protocol

from src.email_service.templates import EmailTemplates, MessageKind


class EmailContentConfig(Protocol):
    emails_from: str
    couple_names: str
    event_date: str
    event_location: str


class EmailServiceBase(ABC):
    """Renders the wedding emails and leaves delivery to the transport."""

    def __init__(self, config: EmailContentConfig):
        self._config = config

    @abstractmethod
    async def send_email(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        """Deliver one message. Raises on transport errors."""
        raise NotImplementedError

    async def _send_kind(self, kind: MessageKind, to_address: str, **context) -> None:
        subject, html_body, text_body = EmailTemplates.render(
            kind,
            couple_names=self._config.couple_names,
            event_date=self._config.event_date,
            event_location=self._config.event_location,
            **context,
        )
        await self.send_email(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )

    async def send_invitation(self, to_address: str, guest_name: str, rsvp_url: str) -> None:
        await self._send_kind(
            MessageKind.INVITATION, to_address, guest_name=guest_name, rsvp_url=rsvp_url
        )

    async def send_confirmation(
        self,
        to_address: str,
        guest_name: str,
        number_of_people: int,
        dietary: str,
    ) -> None:
        await self._send_kind(
            MessageKind.CONFIRMATION,
            to_address,
            guest_name=guest_name,
            number_of_people=number_of_people,
            dietary=dietary,
        )

    async def send_decline(self, to_address: str, guest_name: str) -> None:
        await self._send_kind(MessageKind.DECLINE, to_address, guest_name=guest_name)
