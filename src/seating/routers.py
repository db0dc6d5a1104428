from fastapi import APIRouter

from .features.assign_guest.router import router as assign_guest_router
from .features.manage_tables.router import router as manage_tables_router
from .features.seating_board.router import router as seating_board_router

router = APIRouter()

router.include_router(manage_tables_router, tags=["Tables"])
router.include_router(seating_board_router, tags=["Seating"])
router.include_router(assign_guest_router, tags=["Seating"])
