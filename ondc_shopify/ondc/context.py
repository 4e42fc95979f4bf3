from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Optional

from ondc_shopify.core.config import Settings
from .models import Context

TWO_PLACES = Decimal("0.01")


def utc_timestamp(dt: Optional[datetime] = None) -> str:
    # ONDC wants millisecond precision with a literal Z
    dt = dt or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_decimal(x: Any) -> Decimal:
    """Parse a price-like value; unparseable or non-finite input is 0."""
    try:
        d = Decimal(str(x).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return d if d.is_finite() else Decimal("0")


def money(x: Any) -> str:
    """Render an amount with exactly two decimal places."""
    d = x if isinstance(x, Decimal) else to_decimal(x)
    if not d.is_finite():
        d = Decimal("0")
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the two places
        ctx.prec = max(ctx.prec, d.adjusted() + 3)
        return str(d.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def price(value: Any, settings: Settings) -> Dict[str, str]:
    return {"currency": settings.currency, "value": money(value)}


def build_context(
    ctx: Context,
    action: str,
    settings: Settings,
    timestamp: Optional[str] = None,
) -> Dict[str, str]:
    """
    Outbound context for an on_<action> callback.

    transaction_id and message_id are copied as-is so the BAP can correlate
    the callback with its request.
    """
    return {
        "domain": ctx.domain,
        "country": ctx.country,
        "city": ctx.city,
        "action": action,
        "core_version": settings.core_version,
        "bap_id": ctx.bap_id,
        "bap_uri": ctx.bap_uri,
        "bpp_id": settings.bpp_id,
        "bpp_uri": settings.bpp_uri,
        "transaction_id": ctx.transaction_id,
        "message_id": ctx.message_id,
        "timestamp": timestamp or utc_timestamp(),
    }
