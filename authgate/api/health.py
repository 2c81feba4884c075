"""Health check endpoint with user store connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from authgate.api.deps import get_components
from authgate.container import AuthComponents
from authgate.core.database import check_db_connected
from authgate.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
async def get_health(components: Annotated[AuthComponents, Depends(get_components)]) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    connected = await check_db_connected(components.session_factory)

    return HealthResponse(
        status="ok",
        environment=components.settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )
