"""Read-only node endpoints.

Endpoints:
  GET /node_id  — node id (text)
  GET /pub_key  — validator ed25519 public key (JSON)
  GET /block    — latest block hash/height/time (JSON)
  GET /height   — latest block height (text)
  GET /health   — UP/DOWN + latest block age (text, 200/503)

Handlers are sync so each request runs on its own threadpool worker;
the status fetch and its retry sleeps block only that worker.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from droid.node.client import NodeUnreachableError, StatusFetcher
from droid.node.health import HealthEvaluator, HealthReport
from droid.node.models import PUB_KEY_TYPE, NodeStatus

logger = logging.getLogger(__name__)

router = APIRouter()


def _fetch_status(request: Request) -> NodeStatus:
    fetcher: StatusFetcher = request.app.state.status_fetcher
    return fetcher.fetch()


@router.get("/node_id", response_class=PlainTextResponse)
def node_id(request: Request) -> PlainTextResponse:
    status = _fetch_status(request)
    return PlainTextResponse(status.node_id)


@router.get("/pub_key")
def pub_key(request: Request) -> JSONResponse:
    status = _fetch_status(request)
    return JSONResponse({"@type": PUB_KEY_TYPE, "key": status.pub_key.value})


@router.get("/block")
def latest_block(request: Request) -> JSONResponse:
    block = _fetch_status(request).latest_block()
    return JSONResponse(block.model_dump(mode="json"))


@router.get("/height", response_class=PlainTextResponse)
def latest_height(request: Request) -> PlainTextResponse:
    block = _fetch_status(request).latest_block()
    return PlainTextResponse(block.height)


@router.get("/health", response_class=PlainTextResponse)
def health(request: Request) -> PlainTextResponse:
    evaluator: HealthEvaluator = request.app.state.health_evaluator
    try:
        report = evaluator.evaluate(_fetch_status(request))
    except NodeUnreachableError as e:
        report = HealthReport.unreachable(e.reason)
    return PlainTextResponse(report.render(), status_code=report.status_code)
