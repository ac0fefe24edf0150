"""healthcheck — liveness/readiness checks with non-blocking async probes."""

from .checks import Check, async_check, async_check_with_context
from .errors import CheckTimeoutError, HealthCheckError, NoDataError, ProbeError
from .handler import Handler
