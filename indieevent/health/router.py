from fastapi import APIRouter, Request

from indieevent import config
from indieevent.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/config")
def health_config(request: Request):
    """Modes effectifs (sans exposer de secret) et état du rate limiting."""
    return {
        "payments": getattr(request.app.state.payment_gateway, "mode", None),
        "payments_configured": config.payments_live(),
        "store_configured": config.store_live(),
        "event_store": request.app.state.event_store.__class__.__name__,
        "rate_limit": rate_limit_health_info(request),
    }
