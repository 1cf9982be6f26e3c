# app/api/v1/routes/health.py
from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "success",
        "message": "Server is running",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }
