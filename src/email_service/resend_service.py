import logging
from typing import Protocol

import httpx

from src.email_service.base import EmailContentConfig, EmailServiceBase

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(EmailContentConfig, Protocol):
    resend_api_key: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config)
        self._transport = transport

    async def send_email(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                RESEND_EMAILS_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self._config.emails_from,
                    "to": [to_address],
                    "subject": subject,
                    "html": html_body,
                    "text": text_body,
                },
            )
            response.raise_for_status()
            logger.info("Resend accepted email %s to %s", response.json().get("id"), to_address)
