import logging

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.config.database import async_session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    database: str
    version: str = "0.1.0"


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint to verify the API and its database are reachable.
    """
    try:
        async with async_session_manager(auto_commit=False) as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return HealthCheckResponse(status="degraded", database="unavailable")
    return HealthCheckResponse(status="healthy", database="ok")
