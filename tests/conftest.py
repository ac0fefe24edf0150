"""Shared test fixtures."""

from __future__ import annotations

import logging
import socket
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture library debug logs so failing tests show scheduler activity."""
    caplog.set_level(logging.DEBUG, logger="healthcheck")


@pytest.fixture
def listening_port() -> Generator[int, None, None]:
    """A local TCP port that accepts connections."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(128)
    yield server.getsockname()[1]
    server.close()


@pytest.fixture
def closed_port() -> int:
    """A local TCP port nothing is listening on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
