"""Health endpoints.

Endpoints:
  GET /live   — liveness checks only
  GET /ready  — liveness + readiness checks

Both answer 200 when every check passes and 503 otherwise. Pass ?full=1 to
get the per-check results in the body.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from healthcheck.handler import STATUS_OK

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["health"])


def _respond(status: int, results: dict[str, str], full: bool) -> JSONResponse:
    body: dict[str, Any] = results if full else {}
    return JSONResponse(content=body, status_code=status)


@health_router.get("/live")
def live(request: Request, full: bool = False) -> JSONResponse:
    """Is the process worth keeping alive?"""
    status, results = request.app.state.handler.live()
    return _respond(status, results, full)


@health_router.get("/ready")
def ready(request: Request, full: bool = False) -> JSONResponse:
    """Can the process serve traffic right now?"""
    status, results = request.app.state.handler.ready()
    if status != STATUS_OK:
        logger.info("Not ready: %s", {k: v for k, v in results.items() if v != "OK"})
    return _respond(status, results, full)
