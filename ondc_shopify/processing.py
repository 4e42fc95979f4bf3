"""
Background pipelines: Shopify query -> ONDC transform -> BAP callback.
"""
from __future__ import annotations

import logging

import httpx

from ondc_shopify.callback import send_callback
from ondc_shopify.core.config import Settings
from ondc_shopify.exceptions import CallbackDeliveryError
from ondc_shopify.ondc.catalog import build_on_search
from ondc_shopify.ondc.models import InitRequest, SearchRequest, SelectRequest
from ondc_shopify.ondc.order import build_on_init
from ondc_shopify.ondc.quote import build_on_select
from ondc_shopify import shopify_client

logger = logging.getLogger(__name__)


def search_filter_for(req: SearchRequest) -> str:
    """Shopify search string for a search intent, "" when there is nothing to filter on."""
    city = req.context.city.strip()
    category_id = req.message.intent.category.id.strip()
    if category_id:
        return shopify_client.category_filter(city, category_id)
    if city:
        return shopify_client.city_filter(city)
    return ""


async def _deliver(client: httpx.AsyncClient, settings: Settings, payload: dict) -> None:
    ctx = payload["context"]
    try:
        await send_callback(client, ctx["bap_uri"], payload, settings.callback_timeout)
    except CallbackDeliveryError as e:
        logger.error("Failed to send %s for message ID %s: %s", ctx["action"], ctx["message_id"], e)


async def process_search(req: SearchRequest, client: httpx.AsyncClient, settings: Settings) -> None:
    logger.info("Processing search for city: %s, category: %s",
                req.context.city, req.message.intent.category.id or "-")

    products = []
    search_filter = search_filter_for(req)
    if search_filter:
        products = await shopify_client.query_products(client, settings, search_filter)
    if not products:
        logger.info("No products found for search (message ID %s)", req.context.message_id)

    await _deliver(client, settings, build_on_search(req, products, settings))


async def process_select(req: SelectRequest, client: httpx.AsyncClient, settings: Settings) -> None:
    ids = [item.id for item in req.message.order.items]
    logger.info("Processing select for items: %s", ids)

    products = await shopify_client.query_products(
        client, settings, shopify_client.product_ids_filter(ids)
    )
    await _deliver(client, settings, build_on_select(req, products, settings))


async def process_init(req: InitRequest, client: httpx.AsyncClient, settings: Settings) -> None:
    ids = [item.id for item in req.message.order.items]
    logger.info("Processing init for items: %s", ids)

    products = await shopify_client.query_products(
        client, settings, shopify_client.product_ids_filter(ids)
    )
    await _deliver(client, settings, build_on_init(req, products, settings))
