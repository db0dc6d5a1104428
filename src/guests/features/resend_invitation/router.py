from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.email_service import get_notification_dispatcher
from src.guests.dtos import NotFoundError, NotificationFailedError
from src.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from src.guests.urls import RESEND_INVITATION_URL

router = APIRouter()


class ResendInvitationResponse(BaseModel):
    message: str
    guest_id: UUID
    expires_at: datetime


def get_rsvp_write_model() -> RSVPWriteModel:
    return SqlRSVPWriteModel(dispatcher=get_notification_dispatcher())


@router.post(RESEND_INVITATION_URL, response_model=ResendInvitationResponse)
async def resend_invitation(
    guest_id: UUID,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> ResendInvitationResponse:
    """
    Issue a new RSVP link for the guest and email it.
    The previous link stops working even when the email cannot be sent.
    """
    try:
        token = await write_model.regenerate_token(guest_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotificationFailedError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return ResendInvitationResponse(
        message="Invitation sent",
        guest_id=guest_id,
        expires_at=token.expires_at,
    )
