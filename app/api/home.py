"""
Root endpoint with service information
"""

from fastapi import APIRouter

from app.core.config import config

router = APIRouter()


@router.get("/")
async def root():
    """Basic service metadata and status"""
    return {
        "service": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
        "message": "Storefront API is running",
        "status": "operational",
    }
