from fastapi import APIRouter, Depends
from managers.config_manager import Settings, get_settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "payment_configured": bool(settings.payment_api_key),
        "email_configured": bool(settings.email_api_key),
    }
