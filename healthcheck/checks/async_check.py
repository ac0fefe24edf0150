"""Async check wrapper — turns a slow check into a non-blocking probe.

A background thread runs the wrapped check on a fixed interval and stores the
latest outcome in a ResultCache. The returned wrapper only reads that cache,
so callers (e.g. a readiness endpoint) never wait on the check itself.

Two constructors:
- async_check: refreshes forever, there is no way to stop it
- async_check_with_context: stops once the given Event is set
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections.abc import Callable

from ..errors import NoDataError

logger = logging.getLogger(__name__)

Check = Callable[[], "Exception | None"]

_ids = itertools.count(1)


class ResultCache:
    """Latest check outcome plus a flag telling whether one exists yet."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._has_data = False
        self._value: Exception | None = None

    def get(self) -> tuple[bool, Exception | None]:
        with self._lock:
            return self._has_data, self._value

    def set(self, value: Exception | None) -> None:
        with self._lock:
            self._value = value
            self._has_data = True


def _invoke(check: Check) -> Exception | None:
    try:
        return check()
    except Exception as e:
        # Raised errors are stored like returned ones
        logger.debug("Async check raised %s: %s", type(e).__name__, e)
        return e


def _run_forever(check: Check, cache: ResultCache, interval: float) -> None:
    while True:
        cache.set(_invoke(check))
        time.sleep(interval)


def _run_until_stopped(
    check: Check, cache: ResultCache, interval: float, stop: threading.Event,
) -> None:
    while True:
        cache.set(_invoke(check))
        # Returns immediately if already set, or as soon as it gets set
        if stop.wait(interval):
            break
    logger.debug("Async check loop stopped (%s)", threading.current_thread().name)


def _spawn(target: Callable[..., None], *args: object) -> None:
    thread = threading.Thread(
        target=target,
        args=args,
        name=f"healthcheck-async-{next(_ids)}",
        daemon=True,
    )
    thread.start()
    logger.debug("Started %s", thread.name)


def _wrapper(cache: ResultCache) -> Check:
    def check() -> Exception | None:
        has_data, value = cache.get()
        if not has_data:
            return NoDataError()
        return value

    return check


def _validate_interval(interval: float) -> float:
    interval = float(interval)
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    return interval


def async_check(check: Check, interval: float) -> Check:
    """Run ``check`` every ``interval`` seconds in the background.

    The first run starts immediately. Until it completes the returned
    wrapper yields a NoDataError; afterwards it yields the latest result.

    The background thread is a daemon and cannot be stopped. Use
    async_check_with_context when the check must be shut down.
    """
    interval = _validate_interval(interval)
    cache = ResultCache()
    _spawn(_run_forever, check, cache, interval)
    return _wrapper(cache)


def async_check_with_context(
    stop: threading.Event, check: Check, interval: float,
) -> Check:
    """Like async_check, but the background loop exits once ``stop`` is set.

    A run already in flight when ``stop`` fires is allowed to finish and its
    result is kept. The last stored result stays readable afterwards.
    """
    interval = _validate_interval(interval)
    cache = ResultCache()
    _spawn(_run_until_stopped, check, cache, interval, stop)
    return _wrapper(cache)
