"""Health check endpoint with optional database connectivity check."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter

from acquisitions.api.deps import AppSettings, DbSession
from acquisitions.core.database import check_db_connected
from acquisitions.schemas.health import HealthResponse

router = APIRouter()

_STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthResponse)
def get_health(db: DbSession, settings: AppSettings) -> HealthResponse:
    """
    Return service health, uptime and database connectivity.
    Always 200; a down database is reported, not raised.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="Ok",
        timestamp=datetime.now(UTC),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
        environment=settings.APP_ENV,
        database=db_status,
    )
