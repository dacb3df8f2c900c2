from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from hosting_functions.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    """Health check reporting which upstream services are configured."""
    return {
        "status": "ok",
        "gopay_environment": settings.gopay_environment.upper(),
        "gopay_go_id": settings.gopay_go_id or None,
        "supabase_configured": settings.supabase_enabled or settings.db_enabled,
        "email_configured": bool(settings.resend_api_key),
    }
