from datetime import datetime

from fastapi import APIRouter, status

from config import ApplicationConfig

router = APIRouter(tags=["Index"])


@router.get("/", status_code=status.HTTP_200_OK)
async def index():
    """API version and server timezone"""
    return {
        "version": ApplicationConfig.APP_VERSION,
        "timezone": str(datetime.now().astimezone().tzinfo),
    }
