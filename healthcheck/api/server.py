"""FastAPI app exposing the health endpoints."""

from __future__ import annotations

import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI

from healthcheck.api.routes import health_router
from healthcheck.checks import (
    async_check_with_context,
    http_get_check,
    tcp_dial_check,
    thread_count_check,
)
from healthcheck.config import Settings, settings
from healthcheck.handler import Handler

logger = logging.getLogger(__name__)


def build_handler(stop: threading.Event, cfg: Settings) -> Handler:
    """Build a Handler from settings.

    Readiness probes hit the network, so each one runs in the background via
    async_check_with_context and the endpoint only reads its last result.
    """
    handler = Handler()
    handler.add_liveness_check("threads", thread_count_check(cfg.max_threads))

    registered = 0
    for url in cfg.ready_urls:
        handler.add_readiness_check(
            f"http:{url}",
            async_check_with_context(stop, http_get_check(url, cfg.check_timeout), cfg.check_interval),
        )
        registered += 1

    for target in cfg.ready_tcp_targets:
        host, _, port = target.rpartition(":")
        if not host or not port.isdigit():
            logger.warning("Ignoring malformed TCP target %r (want host:port)", target)
            continue
        handler.add_readiness_check(
            f"tcp:{target}",
            async_check_with_context(stop, tcp_dial_check(host, int(port), cfg.check_timeout), cfg.check_interval),
        )
        registered += 1

    logger.info(
        "Health handler built: %d readiness targets, interval=%ss",
        registered, cfg.check_interval,
    )
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the default handler on startup and stop its checks on shutdown."""
    stop = threading.Event()
    if getattr(app.state, "handler", None) is None:
        app.state.handler = build_handler(stop, settings)

    yield

    stop.set()
    logger.info("Background health checks stopped")


def create_app(handler: Handler | None = None) -> FastAPI:
    app = FastAPI(
        title="healthcheck",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.handler = handler
    app.include_router(health_router)
    return app
