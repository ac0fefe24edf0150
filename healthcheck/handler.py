"""Handler — named liveness and readiness checks, evaluated on demand."""

from __future__ import annotations

import logging
import threading

from .checks.async_check import Check

logger = logging.getLogger(__name__)

STATUS_OK = 200
STATUS_UNAVAILABLE = 503


class Handler:
    """Registry of liveness and readiness checks.

    Readiness includes liveness: a process that is not live is never ready.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._liveness: dict[str, Check] = {}
        self._readiness: dict[str, Check] = {}

    def add_liveness_check(self, name: str, check: Check) -> None:
        with self._lock:
            self._liveness[name] = check

    def add_readiness_check(self, name: str, check: Check) -> None:
        with self._lock:
            self._readiness[name] = check

    def live(self) -> tuple[int, dict[str, str]]:
        with self._lock:
            checks = dict(self._liveness)
        return self._collect(checks)

    def ready(self) -> tuple[int, dict[str, str]]:
        with self._lock:
            checks = {**self._liveness, **self._readiness}
        return self._collect(checks)

    def _collect(self, checks: dict[str, Check]) -> tuple[int, dict[str, str]]:
        results: dict[str, str] = {}
        status = STATUS_OK
        for name, check in checks.items():
            err = check()
            if err is None:
                results[name] = "OK"
            else:
                results[name] = str(err)
                status = STATUS_UNAVAILABLE
                logger.debug("Check %s failed: %s", name, err)
        return status, results
