"""Health check endpoint with a database connectivity probe."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rideshare.core.config import Settings, get_settings
from rideshare.core.database import check_db_connected, get_db
from rideshare.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Service status and whether the user/trip store answers a trivial query."""
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )
