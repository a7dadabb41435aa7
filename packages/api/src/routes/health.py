# This project was developed with assistance from AI tools.
"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from ..core.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    app: str
    storage_backend: str


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        app=settings.APP_NAME,
        storage_backend=settings.STORAGE_BACKEND,
    )
