"""
on_search: Shopify products -> ONDC catalog
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ondc_shopify.core.config import Settings
from .context import build_context, price
from .models import NormalizedProduct, SearchRequest

PROVIDER_ID = "P1"
NP_IMAGE = "https://sellerNP.com/images/np.png"

FULFILLMENT_TYPES = (
    ("1", "Delivery"),
    ("2", "Self-Pickup"),
    ("3", "Delivery and Self-Pickup"),
)


def _descriptor() -> Dict[str, Any]:
    return {
        "name": "Seller NP",
        "symbol": NP_IMAGE,
        "short_desc": "Seller Marketplace",
        "long_desc": "Seller Marketplace",
        "images": [NP_IMAGE],
        "tags": [
            {
                "code": "bpp_terms",
                "list": [
                    {"code": "np_type", "value": "MSN"},
                    {"code": "accept_bap_terms", "value": "Y"},
                    {"code": "collect_payment", "value": "Y"},
                ],
            }
        ],
    }


def transform_catalog(products: List[NormalizedProduct], settings: Settings) -> Dict[str, Any]:
    # item ids are positional (I1, I2, ...), not Shopify ids
    items = [
        {
            "id": f"I{i}",
            "descriptor": {"name": p.title},
            "price": price(p.price, settings),
        }
        for i, p in enumerate(products, start=1)
    ]
    return {
        "bpp/fulfillments": [{"id": fid, "type": ftype} for fid, ftype in FULFILLMENT_TYPES],
        "bpp/descriptor": _descriptor(),
        "bpp/providers": [{"id": PROVIDER_ID, "items": items}],
    }


def build_on_search(
    req: SearchRequest,
    products: List[NormalizedProduct],
    settings: Settings,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "context": build_context(req.context, "on_search", settings, timestamp),
        "message": {"catalog": transform_catalog(products, settings)},
    }
