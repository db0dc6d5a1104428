import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Protocol

from src.email_service.base import EmailContentConfig, EmailServiceBase


class SMTPEmailConfig(EmailContentConfig, Protocol):
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    emails_from_name: str


class SMTPEmailService(EmailServiceBase):
    def __init__(self, config: SMTPEmailConfig):
        super().__init__(config)
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.username = config.smtp_user
        self.password = config.smtp_password
        self.from_address = formataddr((config.emails_from_name, config.emails_from))

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_address

        part1 = MIMEText(text_body, "plain")
        part2 = MIMEText(html_body, "html")
        msg.attach(part1)
        msg.attach(part2)

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        if self.username and self.password:
            with smtplib.SMTP(self.host, self.port) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(msg)
        else:
            # For development against a local catcher without authentication
            with smtplib.SMTP(self.host, self.port) as server:
                server.send_message(msg)

    async def send_email(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        msg = self._create_message(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
        await asyncio.to_thread(self._send, msg)
