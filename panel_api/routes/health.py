"""Health check and status endpoints"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from panel_api.models.schemas import HealthCheck
from panel_api.core.config import settings
from panel_api.db.session import get_db, ping

router = APIRouter(tags=["Health"])


@router.get("/", summary="Root Endpoint")
async def root():
    """Root endpoint - API welcome message"""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/health",
        "users": f"{settings.API_PREFIX}/users"
    }


@router.get("/health", response_model=HealthCheck, summary="Health Check")
def health_check(db: Session = Depends(get_db)):
    """
    Check API health and database availability.

    No authentication required.
    """
    database_ok = ping(db)

    return HealthCheck(
        status="healthy" if database_ok else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=database_ok,
        version=settings.VERSION
    )
