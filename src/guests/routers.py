from fastapi import APIRouter

from .features.create_guest.router import router as create_guest_router
from .features.edit_guest.router import router as edit_guest_router
from .features.get_rsvp.router import router as get_rsvp_router
from .features.list_guests.router import router as list_guests_router
from .features.resend_invitation.router import router as resend_invitation_router
from .features.update_rsvp.router import router as update_rsvp_router

router = APIRouter()

router.include_router(get_rsvp_router, tags=["RSVP"])
router.include_router(update_rsvp_router, tags=["RSVP"])
# the groups route has to be matched before /{guest_id}
router.include_router(list_guests_router, tags=["Guests"])
router.include_router(create_guest_router, tags=["Guests"])
router.include_router(edit_guest_router, tags=["Guests"])
router.include_router(resend_invitation_router, tags=["Guests"])
