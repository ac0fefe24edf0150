from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "HEALTHCHECK_",
        "extra": "ignore",
    }

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8086

    # Logging
    log_level: str = "INFO"

    # Readiness checks run in the background at this cadence (seconds)
    check_interval: float = 10.0
    check_timeout: float = 5.0  # per-probe network timeout

    # Liveness fails above this many live threads
    max_threads: int = 500

    # Readiness targets, e.g. ["http://db-proxy:8080/health"], ["redis:6379"]
    ready_urls: list[str] = []
    ready_tcp_targets: list[str] = []


settings = Settings()
