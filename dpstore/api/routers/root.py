from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from dpstore.api.internal.response_models import HealthCheckResponse

router = APIRouter()


@router.get("/", tags=["Health"])
async def health_check() -> HealthCheckResponse:
    """Health check

    Returns simple 'It works!' response.
    """
    return HealthCheckResponse()


@router.get("/v1/status", tags=["Health"], response_class=PlainTextResponse)
async def status() -> str:
    """Service status, plain `OK`"""
    return "OK"
