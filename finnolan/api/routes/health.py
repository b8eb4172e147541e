"""Health check endpoint."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from finnolan.api.dependencies import get_settings
from finnolan.api.schemas import HealthResponse
from finnolan.config import Settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint; reports which provider keys are configured."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        providers=settings.configured(),
    )
