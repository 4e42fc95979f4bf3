"""
on_init: requested order items + Shopify products -> ONDC order draft
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ondc_shopify.core.config import Settings
from .catalog import PROVIDER_ID
from .context import build_context, price, to_decimal
from .models import InitRequest, NormalizedProduct, Order

DEFAULT_DELIVERY_FULFILLMENT_ID = "F1"
MAX_ITEM_QUANTITY = 10000

logger = logging.getLogger(__name__)


def delivery_fulfillment_id(order: Order) -> str:
    for f in order.fulfillments:
        if f.type == "Delivery" and f.id:
            return f.id
    return DEFAULT_DELIVERY_FULFILLMENT_ID


def _clamp_quantity(count: int, item_id: str) -> int:
    if count > MAX_ITEM_QUANTITY:
        logger.warning("Quantity %s for item %s capped at %s", count, item_id, MAX_ITEM_QUANTITY)
        return MAX_ITEM_QUANTITY
    return max(count, 1)


def _billing(settings: Settings, now: str) -> Dict[str, Any]:
    return {
        "name": settings.billing_name,
        "address": {
            "name": settings.billing_name,
            "building": settings.billing_building,
            "locality": settings.billing_locality,
            "city": settings.billing_city,
            "state": settings.billing_state,
            "country": settings.billing_country,
            "area_code": settings.billing_area_code,
        },
        "phone": settings.billing_phone,
        "email": settings.billing_email,
        "created_at": now,
        "updated_at": now,
    }


def _cancellation_terms(settings: Settings) -> List[Dict[str, Any]]:
    return [
        {
            "fulfillment_state": {"descriptor": {"code": "Pending"}},
            "cancellation_fee": {
                "percentage": "0.00",
                "amount": price(0, settings),
            },
        }
    ]


def _payment(settings: Settings) -> Dict[str, Any]:
    # pass-through values, nothing here is computed
    return {
        "uri": settings.payment_uri,
        "type": "ON-ORDER",
        "collected_by": "BPP",
        "@ondc/org/buyer_app_finder_fee_type": settings.finder_fee_type,
        "@ondc/org/buyer_app_finder_fee_amount": settings.finder_fee_amount,
        "@ondc/org/withholding_amount": settings.withholding_amount,
        "tags": [
            {
                "code": "collection",
                "list": [
                    {"code": "success_code", "value": settings.payment_success_code},
                    {"code": "error_code", "value": settings.payment_error_code},
                ],
            }
        ],
    }


def transform_init(
    req: InitRequest,
    products: List[NormalizedProduct],
    settings: Settings,
    timestamp: str,
) -> Dict[str, Any]:
    """
    Build the on_init order.

    Requested items are matched to products by exact id; unmatched items are
    dropped and duplicate product matches are all kept. A quantity below 1
    is treated as 1 and one above MAX_ITEM_QUANTITY is capped.
    """
    order = req.message.order
    fulfillment_id = delivery_fulfillment_id(order)

    items: List[Dict[str, Any]] = []
    breakup: List[Dict[str, Any]] = []
    subtotal = Decimal("0")

    for requested in order.items:
        qty = _clamp_quantity(requested.quantity.count, requested.id)
        for p in products:
            if p.id != requested.id:
                continue
            unit = to_decimal(p.price)
            line_total = unit * qty
            subtotal += line_total
            items.append({
                "id": p.id,
                "fulfillment_id": requested.fulfillment_id or fulfillment_id,
                "quantity": {"count": qty},
            })
            breakup.append({
                "@ondc/org/item_id": p.id,
                "@ondc/org/item_quantity": {"count": qty},
                "title": p.title,
                "@ondc/org/title_type": "item",
                "price": price(line_total, settings),
                "item": {"price": price(unit, settings)},
            })

    breakup.append({
        "@ondc/org/item_id": fulfillment_id,
        "title": "Delivery charges",
        "@ondc/org/title_type": "delivery",
        "price": price(settings.delivery_fee, settings),
    })
    total = subtotal + settings.delivery_fee

    return {
        "provider": {"id": order.provider.id or PROVIDER_ID},
        "items": items,
        "billing": _billing(settings, timestamp),
        "fulfillments": [{"id": fulfillment_id, "type": "Delivery", "tracking": False}],
        "quote": {
            "price": price(total, settings),
            "breakup": breakup,
            "ttl": "P1D",
        },
        "payment": _payment(settings),
        "cancellation_terms": _cancellation_terms(settings),
    }


def build_on_init(
    req: InitRequest,
    products: List[NormalizedProduct],
    settings: Settings,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    context = build_context(req.context, "on_init", settings, timestamp)
    return {
        "context": context,
        "message": {"order": transform_init(req, products, settings, context["timestamp"])},
    }
