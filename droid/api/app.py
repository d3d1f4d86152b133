"""FastAPI application — wires clients, epoch tracker and evaluator."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from droid import __version__
from droid.api.routes import router
from droid.config import DroidSettings, settings as default_settings
from droid.node.client import EpochClient, NodeUnreachableError, StatusFetcher
from droid.node.epoch import EpochTracker
from droid.node.health import HealthEvaluator

logger = logging.getLogger(__name__)


# ── Error handlers ───────────────────────────────────────────────────────────


async def node_unreachable_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse("Node unreachable\n", status_code=503)


async def internal_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Failed to build response for %s", request.url.path, exc_info=exc)
    return PlainTextResponse("Internal Server Error\n", status_code=500)


# ── Lifespan ─────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg: DroidSettings = app.state.settings
    logger.info("RPC: %s", cfg.rpc_endpoint)
    logger.info("LCD: %s", cfg.lcd_endpoint)
    yield
    logger.info("droid shutting down")


# ── App factory ──────────────────────────────────────────────────────────────


def create_app(cfg: DroidSettings | None = None) -> FastAPI:
    """Create the droid FastAPI application."""
    cfg = cfg or default_settings

    app = FastAPI(
        title="droid — node health sidecar",
        version=__version__,
        lifespan=lifespan,
    )

    epoch_tracker = EpochTracker(
        EpochClient(cfg.epochs_url, timeout=cfg.request_timeout),
        identifier=cfg.epoch_identifier,
        grace_minutes=cfg.epoch_grace_minutes,
        lead_minutes=cfg.epoch_lead_minutes,
    )
    app.state.settings = cfg
    app.state.status_fetcher = StatusFetcher(
        cfg.status_url,
        attempts=cfg.status_retry_attempts,
        retry_delay=cfg.status_retry_delay,
        timeout=cfg.request_timeout,
    )
    app.state.epoch_tracker = epoch_tracker
    app.state.health_evaluator = HealthEvaluator(
        epoch_tracker, stale_after_seconds=cfg.block_stale_seconds
    )

    app.add_exception_handler(NodeUnreachableError, node_unreachable_handler)
    app.add_exception_handler(Exception, internal_error_handler)
    app.include_router(router)

    return app
