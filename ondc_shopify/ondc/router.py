"""
ONDC BPP endpoints: /search, /select, /init.

Every endpoint answers synchronously with an ACK and hands the decoded
request to the background pool; the real answer goes to the BAP's
on_<action> callback.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Type, TypeVar

import httpx
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ondc_shopify.core.config import Settings
from ondc_shopify.processing import process_init, process_search, process_select
from .models import InitRequest, SearchRequest, SelectRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ondc"])

ACK = {"message": {"ack": {"status": "ACK"}}}

M = TypeVar("M", bound=BaseModel)


def nack(message: str) -> dict:
    return {
        "message": {"ack": {"status": "NACK"}},
        "error": {"type": "CORE-ERROR", "code": "50000", "message": message},
    }


async def _decode(request: Request, model: Type[M], action: str) -> M:
    body = await request.body()
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Error decoding %s request: %s", action, e)
        raise HTTPException(status_code=400, detail=f"Invalid request: {e}")


def _dispatch(
    request: Request,
    action: str,
    req: BaseModel,
    pipeline: Callable[[BaseModel, httpx.AsyncClient, Settings], Awaitable[None]],
) -> JSONResponse:
    state = request.app.state
    message_id = req.context.message_id
    accepted = state.pool.submit(
        f"{action}:{message_id}",
        pipeline(req, state.http, state.settings),
    )
    if not accepted:
        return JSONResponse(status_code=503, content=nack("BPP is busy, retry later"))
    return JSONResponse(content=ACK)


@router.post("/search")
async def search(request: Request):
    req = await _decode(request, SearchRequest, "search")
    return _dispatch(request, "search", req, process_search)


@router.post("/select")
async def select(request: Request):
    req = await _decode(request, SelectRequest, "select")
    return _dispatch(request, "select", req, process_select)


@router.post("/init")
async def init(request: Request):
    req = await _decode(request, InitRequest, "init")
    return _dispatch(request, "init", req, process_init)
