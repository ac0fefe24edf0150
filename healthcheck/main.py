"""Entry point for the healthcheck server."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from rich.console import Console
from rich.panel import Panel

from healthcheck.config import settings

console = Console()


def run_server(host: str, port: int) -> None:
    """Start the health endpoint server."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    console.print(Panel(f"Serving /live and /ready on {host}:{port}", style="bold green"))
    uvicorn.run(
        "healthcheck.api.server:create_app",
        factory=True,
        host=host,
        port=port,
        reload=False,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Liveness/readiness endpoint server")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Start the health endpoint server")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)

    args = parser.parse_args()

    if args.command == "serve":
        run_server(args.host, args.port)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
