from src.config.settings import settings
from src.email_service.base import EmailServiceBase
from src.email_service.dispatcher import NotificationDispatcher
from src.email_service.resend_service import ResendEmailService
from src.email_service.smtp_service import SMTPEmailService
from src.email_service.templates import EmailTemplates, MessageKind


def get_email_service() -> EmailServiceBase:
    if settings.resend_api_key:
        return ResendEmailService(config=settings)
    return SMTPEmailService(config=settings)


def get_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(email_service=get_email_service())


__all__ = [
    "EmailServiceBase",
    "EmailTemplates",
    "MessageKind",
    "NotificationDispatcher",
    "get_email_service",
    "get_notification_dispatcher",
]
