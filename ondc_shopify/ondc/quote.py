"""
on_select: selected products -> priced ONDC quote

Quote arithmetic:
  product_total = sum(item prices)
  each applied offer: product_total -= product_total * pct / 100
  total = product_total + delivery fee

Breakup order is fixed: one line per applied offer, "Product Total",
"Delivery Charge".
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Tuple

from ondc_shopify.core.config import Settings
from .catalog import PROVIDER_ID
from .context import TWO_PLACES, build_context, price, to_decimal
from .models import NormalizedProduct, Offer, SelectRequest

FULFILLMENT_ID = "F1"
PLACEHOLDER_QTY = "99"
MAX_PERCENT = Decimal("100")

logger = logging.getLogger(__name__)


def applied_offers(req: SelectRequest, settings: Settings) -> List[Tuple[Offer, Decimal]]:
    """
    Offers tagged apply=yes, with their discount percentage.

    An explicit percentage must lie in (0, 100]; anything else falls back to
    the configured default.
    """
    out: List[Tuple[Offer, Decimal]] = []
    for offer in req.message.order.offers:
        if (offer.lookup("apply") or "").strip().lower() != "yes":
            continue
        pct = settings.default_discount_percent
        explicit = offer.lookup("percentage")
        if explicit:
            d = to_decimal(explicit)
            if d.is_finite() and 0 < d <= MAX_PERCENT:
                pct = d
            else:
                logger.warning("Ignoring percentage %r on offer %s, using %s%%", explicit, offer.id, pct)
        out.append((offer, pct))
    return out


def _pct_label(pct: Decimal) -> str:
    return f"{pct.normalize():f}"


def _order_item(p: NormalizedProduct, settings: Settings) -> Dict[str, Any]:
    return {
        "id": p.id,
        "fulfillment_id": FULFILLMENT_ID,
        "quantity": {
            "available": {"count": PLACEHOLDER_QTY},
            "maximum": {"count": PLACEHOLDER_QTY},
        },
        "price": price(p.price, settings),
        "breakup": [
            {
                "title": f"Base Item - {p.title}",
                "price": price(p.price, settings),
            }
        ],
    }


def _delivery_fulfillment() -> Dict[str, Any]:
    return {
        "id": FULFILLMENT_ID,
        "type": "Delivery",
        "@ondc/org/provider_name": "Seller NP",
        "tracking": False,
        "@ondc/org/category": "Immediate Delivery",
        "@ondc/org/TAT": "PT60M",
        "state": {"descriptor": {"code": "Serviceable"}},
    }


def transform_select(
    req: SelectRequest,
    products: List[NormalizedProduct],
    settings: Settings,
) -> Dict[str, Any]:
    items = [_order_item(p, settings) for p in products]
    product_total = sum((to_decimal(p.price) for p in products), Decimal("0"))

    breakup: List[Dict[str, Any]] = []
    for offer, pct in applied_offers(req, settings):
        discount = (product_total * pct / Decimal("100")).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        product_total -= discount
        breakup.append({
            "@ondc/org/item_id": offer.id,
            "title": f"Offer {offer.id} ({_pct_label(pct)}%)",
            "@ondc/org/title_type": "offer",
            "price": price(-discount, settings),
        })

    total = product_total + settings.delivery_fee
    breakup.append({
        "title": "Product Total",
        "@ondc/org/title_type": "item",
        "price": price(product_total, settings),
    })
    breakup.append({
        "@ondc/org/item_id": FULFILLMENT_ID,
        "title": "Delivery Charge",
        "@ondc/org/title_type": "delivery",
        "price": price(settings.delivery_fee, settings),
    })

    return {
        "provider": {"id": req.message.order.provider.id or PROVIDER_ID},
        "items": items,
        "fulfillments": [_delivery_fulfillment()],
        "quote": {
            "price": price(total, settings),
            "breakup": breakup,
            "ttl": "P1D",
        },
    }


def build_on_select(
    req: SelectRequest,
    products: List[NormalizedProduct],
    settings: Settings,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "context": build_context(req.context, "on_select", settings, timestamp),
        "message": {"order": transform_select(req, products, settings)},
    }
