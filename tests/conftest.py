"""Shared fixtures: settings and sample ONDC requests."""

import pytest

from ondc_shopify.core.config import Settings
from ondc_shopify.ondc.models import NormalizedProduct

TOKEN = "shpat_test_token_do_not_log"


def _context(action: str) -> dict:
    return {
        "domain": "ONDC:RET10",
        "action": action,
        "country": "IND",
        "city": "std:080",
        "core_version": "1.2.0",
        "bap_id": "buyer.example.com",
        "bap_uri": "https://buyer.example.com/ondc",
        "transaction_id": "3f0c1f6e-txn-0001",
        "message_id": "a9b8c7d6-msg-0001",
        "timestamp": "2026-10-19T05:00:00.000Z",
        "ttl": "PT30S",
    }


@pytest.fixture
def settings():
    return Settings(
        shopify_url="https://shop.example.com",
        shopify_access_token=TOKEN,
        bpp_id="seller.example.com",
        bpp_uri="https://seller.example.com/ondc",
    )


@pytest.fixture
def products():
    return [
        NormalizedProduct(id="gid://shopify/Product/1", title="Basmati Rice 1kg", price="100.00"),
        NormalizedProduct(id="gid://shopify/Product/2", title="Toor Dal 500g", price="50.00"),
    ]


@pytest.fixture
def search_payload():
    return {
        "context": _context("search"),
        "message": {
            "intent": {
                "category": {"id": "Grocery"},
                "fulfillment": {"type": "Delivery"},
                "payment": {
                    "@ondc/org/buyer_app_finder_fee_type": "percent",
                    "@ondc/org/buyer_app_finder_fee_amount": "3",
                },
            }
        },
    }


@pytest.fixture
def select_payload():
    return {
        "context": _context("select"),
        "message": {
            "order": {
                "provider": {"id": "P1"},
                "items": [
                    {"id": "gid://shopify/Product/1", "quantity": {"count": 1}},
                    {"id": "gid://shopify/Product/2", "quantity": {"count": 1}},
                ],
                "offers": [
                    {
                        "id": "FESTIVE",
                        "tags": [{"code": "selection", "list": [{"code": "apply", "value": "yes"}]}],
                    }
                ],
            }
        },
    }


@pytest.fixture
def init_payload():
    return {
        "context": _context("init"),
        "message": {
            "order": {
                "provider": {"id": "P1"},
                "items": [
                    {"id": "gid://shopify/Product/1", "fulfillment_id": "F7", "quantity": {"count": 2}},
                    {"id": "gid://shopify/Product/404", "fulfillment_id": "F7", "quantity": {"count": 1}},
                ],
                "fulfillments": [
                    {"id": "F9", "type": "Self-Pickup"},
                    {"id": "F7", "type": "Delivery"},
                ],
            }
        },
    }
