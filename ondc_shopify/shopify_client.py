"""
Shopify Admin GraphQL product search.

Every failure (missing credentials, transport error, non-2xx answer,
malformed JSON, GraphQL errors) is logged and degrades to an empty product
list; nothing here raises to the caller.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from ondc_shopify.core.config import Settings
from ondc_shopify.ondc.models import NormalizedProduct

logger = logging.getLogger(__name__)

PAGE_SIZE = 10

# legacy rule: Delhi listings were tagged before ONDC city codes were used
CITY_TAG_ALIASES = {
    "std:080": ("Delhi", "080"),
}

PRODUCTS_QUERY = """
query ($query: String!, $first: Int!) {
  products(first: $first, query: $query) {
    edges {
      node {
        id
        title
        variants(first: 1) {
          edges {
            node {
              price
            }
          }
        }
      }
    }
  }
}
""".strip()


def _tag(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("tag value must not be blank")
    if any(ch.isspace() for ch in value) or '"' in value:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'tag:"{escaped}"'
    return f"tag:{value}"


def city_filter(city: str) -> str:
    aliases = CITY_TAG_ALIASES.get(city)
    if aliases:
        return "(" + " OR ".join(_tag(a) for a in aliases) + ")"
    return _tag(city)


def category_filter(city: str, category_id: str) -> str:
    """Category AND city; the category alone when no city is given."""
    if not city.strip():
        return _tag(category_id)
    return f"{city_filter(city)} AND {_tag(category_id)}"


def product_ids_filter(product_ids: Iterable[str]) -> str:
    ids = [pid for pid in product_ids if pid and pid.strip()]
    return " OR ".join(_tag(pid) for pid in ids)


def graphql_url(settings: Settings) -> str:
    return f"{settings.shopify_url}/admin/api/{settings.shopify_api_version}/graphql.json"


def parse_products(payload: Dict[str, Any]) -> List[NormalizedProduct]:
    edges = (((payload.get("data") or {}).get("products") or {}).get("edges")) or []
    out: List[NormalizedProduct] = []
    for edge in edges:
        node = (edge or {}).get("node") or {}
        variants = ((node.get("variants") or {}).get("edges")) or []
        price = ""
        if variants:
            price = str(((variants[0] or {}).get("node") or {}).get("price") or "")
        out.append(NormalizedProduct(
            id=str(node.get("id") or ""),
            title=str(node.get("title") or ""),
            price=price,
        ))
    return out


async def query_products(
    client: httpx.AsyncClient,
    settings: Settings,
    search_filter: str,
) -> List[NormalizedProduct]:
    """
    Run a product search with a Shopify search-syntax filter
    (see city_filter / category_filter / product_ids_filter).
    """
    if not search_filter or not search_filter.strip():
        logger.error("Refusing Shopify query with an empty filter")
        return []

    if not settings.has_shopify_credentials:
        logger.error(
            "Missing Shopify configuration - URL: %s, Access Token: %s",
            settings.shopify_url,
            settings.redacted()["shopify_access_token"],
        )
        return []

    url = graphql_url(settings)
    body = {"query": PRODUCTS_QUERY, "variables": {"query": search_filter, "first": PAGE_SIZE}}
    headers = {
        "Content-Type": "application/json",
        "X-Shopify-Access-Token": settings.shopify_access_token,
    }
    logger.info("Executing Shopify product query against %s with filter: %s", url, search_filter)

    try:
        r = await client.post(url, json=body, headers=headers, timeout=settings.shopify_timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("Shopify request failed: %s: %s", type(e).__name__, e)
        return []

    logger.info("Raw Shopify response (%s): %s", r.status_code, r.text)

    if r.status_code < 200 or r.status_code >= 300:
        logger.error("Shopify query failed with status %s", r.status_code)
        return []

    try:
        payload: Optional[Any] = r.json()
    except ValueError as e:
        logger.error("Error decoding Shopify GraphQL response: %s", e)
        return []
    if not isinstance(payload, dict):
        logger.error("Unexpected Shopify GraphQL response type: %s", type(payload).__name__)
        return []

    errors = payload.get("errors")
    if errors:
        for err in errors if isinstance(errors, list) else [errors]:
            message = err.get("message") if isinstance(err, dict) else err
            logger.error("GraphQL error: %s", message)
        return []

    try:
        products = parse_products(payload)
    except (AttributeError, TypeError) as e:
        logger.error("Unexpected Shopify GraphQL response shape: %s", e)
        return []
    logger.info("Successfully found %d products", len(products))
    return products
