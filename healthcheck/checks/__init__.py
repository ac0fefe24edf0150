"""Checks — async wrapper plus built-in probes."""

from .async_check import Check, ResultCache, async_check, async_check_with_context
from .probes import (
    dns_resolve_check,
    http_get_check,
    tcp_dial_check,
    thread_count_check,
    timeout,
)
