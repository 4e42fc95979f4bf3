from __future__ import annotations

import json
import logging
from typing import Any, Dict

import httpx

from ondc_shopify.exceptions import CallbackDeliveryError

logger = logging.getLogger(__name__)


def callback_url(bap_uri: str, action: str) -> str:
    return f"{bap_uri.rstrip('/')}/{action}"


def pretty(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


async def send_callback(
    client: httpx.AsyncClient,
    bap_uri: str,
    payload: Dict[str, Any],
    timeout: float,
) -> None:
    """
    POST an on_<action> document to the BAP. One attempt only.

    Raises CallbackDeliveryError on transport failure or any answer other than 200.
    """
    action = payload["context"]["action"]
    if not bap_uri or not bap_uri.strip():
        raise CallbackDeliveryError(f"{action}: request carried no bap_uri", url="")

    url = callback_url(bap_uri.strip(), action)
    body = pretty(payload)
    logger.info("Sending %s to %s with payload:\n%s", action, url, body)

    try:
        r = await client.post(
            url,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise CallbackDeliveryError(f"failed to send {action}: {type(e).__name__}: {e}", url=url) from e

    if r.status_code != 200:
        raise CallbackDeliveryError(
            f"{action} failed with status: {r.status_code}",
            url=url,
            status_code=r.status_code,
        )

    logger.info(
        "Successfully sent %s response for message ID: %s",
        action,
        payload["context"].get("message_id"),
    )
