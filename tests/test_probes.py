"""Tests for the built-in probes and the timeout combinator."""

from __future__ import annotations

import socket
import threading
import time
from unittest.mock import MagicMock, patch

import httpx

from healthcheck.checks.probes import (
    dns_resolve_check,
    http_get_check,
    tcp_dial_check,
    thread_count_check,
    timeout,
)
from healthcheck.errors import CheckTimeoutError, ProbeError


# ── TCP ──────────────────────────────────────────────────────────────────────


class TestTCPDialCheck:
    def test_open_port(self, listening_port: int) -> None:
        assert tcp_dial_check("127.0.0.1", listening_port, timeout=1.0)() is None

    def test_closed_port(self, closed_port: int) -> None:
        err = tcp_dial_check("127.0.0.1", closed_port, timeout=1.0)()
        assert isinstance(err, ProbeError)
        assert f"127.0.0.1:{closed_port}" in str(err)


# ── HTTP ─────────────────────────────────────────────────────────────────────


class TestHTTPGetCheck:
    @patch("healthcheck.checks.probes.httpx.Client")
    def test_ok(self, mock_client_cls: MagicMock) -> None:
        client = mock_client_cls.return_value.__enter__.return_value
        client.get.return_value = MagicMock(status_code=200)

        assert http_get_check("http://localhost/health", timeout=1.0)() is None
        client.get.assert_called_once_with("http://localhost/health")

    @patch("healthcheck.checks.probes.httpx.Client")
    def test_bad_status(self, mock_client_cls: MagicMock) -> None:
        client = mock_client_cls.return_value.__enter__.return_value
        client.get.return_value = MagicMock(status_code=503)

        err = http_get_check("http://localhost/health")()
        assert isinstance(err, ProbeError)
        assert "got 503" in str(err)

    @patch("healthcheck.checks.probes.httpx.Client")
    def test_transport_error(self, mock_client_cls: MagicMock) -> None:
        client = mock_client_cls.return_value.__enter__.return_value
        client.get.side_effect = httpx.ConnectError("connection refused")

        err = http_get_check("http://localhost/health")()
        assert isinstance(err, ProbeError)
        assert "ConnectError" in str(err)


# ── DNS ──────────────────────────────────────────────────────────────────────


class TestDNSResolveCheck:
    def test_localhost_resolves(self) -> None:
        assert dns_resolve_check("localhost")() is None

    @patch("healthcheck.checks.probes.socket.getaddrinfo")
    def test_resolution_failure(self, mock_gai: MagicMock) -> None:
        mock_gai.side_effect = socket.gaierror(-2, "Name or service not known")
        err = dns_resolve_check("nope.invalid")()
        assert isinstance(err, ProbeError)
        assert "nope.invalid" in str(err)

    @patch("healthcheck.checks.probes.socket.getaddrinfo", return_value=[])
    def test_no_addresses(self, _mock_gai: MagicMock) -> None:
        err = dns_resolve_check("empty.example")()
        assert isinstance(err, ProbeError)


# ── Thread count ─────────────────────────────────────────────────────────────


class TestThreadCountCheck:
    def test_under_threshold(self) -> None:
        assert thread_count_check(10_000)() is None

    def test_over_threshold(self) -> None:
        err = thread_count_check(0)()
        assert isinstance(err, ProbeError)
        assert "too many threads" in str(err)


# ── timeout ──────────────────────────────────────────────────────────────────


class TestTimeout:
    def test_fast_check_passes_through(self) -> None:
        err = ValueError("unhealthy")
        assert timeout(lambda: None, 1.0)() is None
        assert timeout(lambda: err, 1.0)() is err

    def test_slow_check_times_out(self) -> None:
        release = threading.Event()

        def hung() -> Exception | None:
            release.wait(2.0)
            return None

        start = time.perf_counter()
        err = timeout(hung, 0.05)()
        elapsed = time.perf_counter() - start
        release.set()

        assert isinstance(err, CheckTimeoutError)
        assert str(err) == "timed out after 0.05s"
        assert elapsed < 1.0

    def test_hung_check_reuses_one_worker(self) -> None:
        release = threading.Event()
        runs = []

        def hung() -> Exception | None:
            runs.append(1)
            release.wait(2.0)
            return None

        timed = timeout(hung, 0.02)
        before = threading.active_count()
        try:
            for _ in range(5):
                assert isinstance(timed(), CheckTimeoutError)
            assert len(runs) == 1
            assert threading.active_count() <= before + 1
        finally:
            release.set()

    def test_new_run_after_hung_one_finishes(self) -> None:
        release = threading.Event()
        runs = []

        def hung_once() -> Exception | None:
            runs.append(1)
            if len(runs) == 1:
                release.wait(2.0)
            return None

        timed = timeout(hung_once, 0.02)
        assert isinstance(timed(), CheckTimeoutError)
        release.set()
        assert timed() is None
        settled = len(runs)
        assert settled <= 2
        # The previous worker has exited, so this call starts a fresh run
        assert timed() is None
        assert len(runs) == settled + 1

    def test_raised_error_is_returned(self) -> None:
        def raises() -> Exception | None:
            raise OSError("disk gone")

        err = timeout(raises, 1.0)()
        assert isinstance(err, OSError)
