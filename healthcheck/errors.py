"""Error types returned (not raised) by checks and wrappers."""

from __future__ import annotations


class HealthCheckError(Exception):
    """Base class for errors produced by this library."""


class NoDataError(HealthCheckError):
    """An async check has not completed its first run yet."""

    def __init__(self, message: str = "no data yet") -> None:
        super().__init__(message)


class CheckTimeoutError(HealthCheckError):
    def __init__(self, seconds: float) -> None:
        super().__init__(f"timed out after {seconds}s")
        self.seconds = seconds


class ProbeError(HealthCheckError):
    """A built-in probe found its target unhealthy."""
