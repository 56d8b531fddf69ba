"""Health check."""

from fastapi import APIRouter, Depends

from genoserve import __version__
from genoserve.config import Settings, get_settings
from genoserve.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Lightweight connectivity check used by the front end."""
    return HealthResponse(data_dir=settings.data_dir, version=__version__)
