"""Service-level route handlers."""
from fastapi import APIRouter

from schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check endpoint; does not touch the database."""
    return HealthResponse()


@router.get("/")
def root() -> dict:
    """Service info."""
    return {"service": "restaurant-directory", "docs": "/docs", "health": "/health"}
