from fastapi import APIRouter, Request
from datetime import datetime, timezone

from ondc_shopify import __version__

router = APIRouter()

@router.get("/")
def home():
    return {
        "name": "ONDC Shopify BPP",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "status": "/status",
        "ondc": ["/search", "/select", "/init"],
    }

@router.get("/health")
def health():
    return {"ok": True}

@router.get("/status")
def status(request: Request):
    s = request.app.state.settings
    return {
        "ok": True,
        "service": "ondc-shopify-bpp",
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "has_shopify_token": bool(s.shopify_access_token),
        "pending_jobs": request.app.state.pool.pending,
    }
