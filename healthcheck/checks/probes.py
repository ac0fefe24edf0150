"""Ready-made checks: TCP connect, HTTP GET, DNS resolve, thread count.

Every factory returns a Check, a zero-argument callable that returns None
when healthy and an exception instance describing the failure otherwise.
"""

from __future__ import annotations

import logging
import socket
import threading

import httpx

from ..errors import CheckTimeoutError, ProbeError
from .async_check import Check

logger = logging.getLogger(__name__)


def tcp_dial_check(hostname: str, port: int, timeout: float = 5.0) -> Check:
    """Raw TCP port connectivity check."""

    def check() -> Exception | None:
        try:
            sock = socket.create_connection((hostname, port), timeout=timeout)
            sock.close()
        except OSError as e:
            return ProbeError(f"TCP connect to {hostname}:{port} failed: {type(e).__name__}: {e}")
        return None

    return check


def http_get_check(url: str, timeout: float = 5.0) -> Check:
    """HTTP(S) GET that expects a 200 response."""

    def check() -> Exception | None:
        try:
            with httpx.Client(timeout=timeout, follow_redirects=False) as client:
                resp = client.get(url)
        except httpx.HTTPError as e:
            return ProbeError(f"GET {url} failed: {type(e).__name__}: {e}")

        if resp.status_code != 200:
            return ProbeError(f"GET {url}: expected 200, got {resp.status_code}")
        return None

    return check


def dns_resolve_check(hostname: str) -> Check:
    """DNS resolution check. Fails if the name resolves to nothing.

    getaddrinfo has no timeout of its own; combine with timeout() to bound it.
    """

    def check() -> Exception | None:
        try:
            addrs = socket.getaddrinfo(hostname, None)
        except socket.gaierror as e:
            return ProbeError(f"DNS resolution of {hostname} failed: {e}")
        if not addrs:
            return ProbeError(f"DNS resolution of {hostname} returned no addresses")
        return None

    return check


def thread_count_check(threshold: int) -> Check:
    def check() -> Exception | None:
        count = threading.active_count()
        if count > threshold:
            return ProbeError(f"too many threads ({count} > {threshold})")
        return None

    return check


def timeout(check: Check, seconds: float) -> Check:
    """Bound a check's run time.

    The check runs in a daemon thread. If it has not returned within
    ``seconds`` a CheckTimeoutError is returned; the thread is left to finish
    on its own since Python threads cannot be interrupted.

    At most one worker exists per wrapped check. While a timed-out run is
    still going, later calls wait on that same run instead of starting a new
    thread, so a hung dependency never piles up threads.
    """
    lock = threading.Lock()
    pending: list[tuple[threading.Thread, list[Exception | None]]] = []

    def timed() -> Exception | None:
        with lock:
            if pending and pending[0][0].is_alive():
                worker, outcome = pending[0]
            else:
                outcome = []

                def run() -> None:
                    try:
                        outcome.append(check())
                    except Exception as e:
                        outcome.append(e)

                worker = threading.Thread(target=run, name="healthcheck-timeout", daemon=True)
                pending[:] = [(worker, outcome)]
                worker.start()

        worker.join(seconds)
        if worker.is_alive():
            logger.debug("Check timed out after %ss", seconds)
            return CheckTimeoutError(seconds)
        return outcome[0]

    return timed
