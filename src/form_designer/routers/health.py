from datetime import datetime, timezone

from fastapi import APIRouter

from form_designer.config import config

health = APIRouter()


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "form-designer",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storage_backend": config["storage_backend"],
    }
