"""Health check endpoint."""

from fastapi import APIRouter

from awibi_api.api.schemas import HEALTH_OK, HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint."""
    return {"status": HEALTH_OK}
