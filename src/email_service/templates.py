from dataclasses import dataclass
from enum import Enum


class MessageKind(str, Enum):
    INVITATION = "invitation"
    CONFIRMATION = "confirmation"
    DECLINE = "decline"


@dataclass
class EmailTemplates:
    INVITATION_SUBJECT = "You're Invited to Our Wedding!"
    INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #667eea;">You're Invited!</h1>
        </div>

        <p>Dear {guest_name},</p>

        <p>We are delighted to invite you to celebrate our wedding!</p>

        <div style="background-color: #f4f4fb; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <h2 style="color: #764ba2; margin-top: 0;">Wedding Details</h2>
            <p><strong>Date:</strong> {event_date}</p>
            <p><strong>Location:</strong> {event_location}</p>
        </div>

        <p>Please confirm your attendance by clicking the button below. You can also tell us
        how many people are coming with you and about any dietary restrictions.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{rsvp_url}" style="background-color: #667eea; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                RSVP Now
            </a>
        </div>

        <p><em>This link is personal and can only be used once. Please do not share it.</em></p>

        <p>If the button doesn't work, you can copy and paste the following link into your browser:</p>
        <p style="word-break: break-all;"><a href="{rsvp_url}">{rsvp_url}</a></p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    INVITATION_TEXT = """
    Dear {guest_name},

    We are delighted to invite you to celebrate our wedding!

    Wedding Details:
    - Date: {event_date}
    - Location: {event_location}

    Please confirm your attendance by visiting:
    {rsvp_url}

    This link is personal and can only be used once. Please do not share it.

    With love,
    {couple_names}
    """

    CONFIRMATION_SUBJECT = "Your attendance is confirmed!"
    CONFIRMATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #10b981;">Response received!</h1>
        </div>

        <p>Dear {guest_name},</p>

        <p>Thank you for confirming your attendance at our wedding!</p>

        <div style="background-color: #f0fdf4; padding: 20px; border-left: 4px solid #10b981; margin: 20px 0;">
            <p><strong>Number of people:</strong> {number_of_people}</p>
            <p><strong>Dietary restrictions:</strong> {dietary}</p>
        </div>

        <p>We can't wait to celebrate with you on {event_date}!</p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    CONFIRMATION_TEXT = """
    Dear {guest_name},

    Thank you for confirming your attendance at our wedding!

    Your Response:
    - Number of people: {number_of_people}
    - Dietary restrictions: {dietary}

    We can't wait to celebrate with you on {event_date}!

    With love,
    {couple_names}
    """

    DECLINE_SUBJECT = "We received your response"
    DECLINE_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>Dear {guest_name},</p>

        <p>Thank you for letting us know. We are sorry you can't make it,
        and we will be thinking of you on our big day.</p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    DECLINE_TEXT = """
    Dear {guest_name},

    Thank you for letting us know. We are sorry you can't make it,
    and we will be thinking of you on our big day.

    With love,
    {couple_names}
    """

    @classmethod
    def get_templates(cls, kind: MessageKind) -> tuple[str, str, str]:
        """Get the templates for a message kind.

        Returns: (subject, html_body, text_body)
        """
        prefix = kind.name
        return (
            getattr(cls, f"{prefix}_SUBJECT"),
            getattr(cls, f"{prefix}_HTML"),
            getattr(cls, f"{prefix}_TEXT"),
        )

    @classmethod
    def render(cls, kind: MessageKind, **context) -> tuple[str, str, str]:
        subject, html_template, text_template = cls.get_templates(kind)
        return subject, html_template.format(**context), text_template.format(**context)
