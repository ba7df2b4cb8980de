#!/usr/bin/env python3
"""
ProxyBase MCP server entrypoint.

Usage:
    PROXYBASE_API_URL=https://api.proxybase.xyz proxybase-mcp
    proxybase-mcp --api-url http://localhost:8080 --log-level DEBUG
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import click

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient
from proxybase_mcp.app.core.config import Settings, get_settings
from proxybase_mcp.app.core.log_setup import setup_logging
from proxybase_mcp.app.core.metrics import start_exporter
from proxybase_mcp.mcp.server import MCPServer


def build_settings(
    api_url: Optional[str] = None,
    log_level: Optional[str] = None,
    http_timeout: Optional[float] = None,
    metrics_port: Optional[int] = None,
) -> Settings:
    """Environment settings with any CLI overrides applied on top."""
    overrides: Dict[str, Any] = {}
    if api_url is not None:
        overrides["api_url"] = api_url
    if log_level is not None:
        overrides["log_level"] = log_level
    if http_timeout is not None:
        overrides["http_timeout"] = http_timeout
    if metrics_port is not None:
        overrides["metrics_port"] = metrics_port
    base = get_settings()
    if not overrides:
        return base
    return Settings(**{**base.model_dump(), **overrides})


def build_server(settings: Settings) -> MCPServer:
    client = ProxyBaseClient(base_url=settings.api_url, timeout=settings.http_timeout)
    return MCPServer(client)


@click.command()
@click.option("--api-url", type=str, default=None, help="ProxyBase API base URL (env: PROXYBASE_API_URL)")
@click.option("--log-level", type=str, default=None, help="Log level for stderr diagnostics (env: PROXYBASE_LOG_LEVEL)")
@click.option("--http-timeout", type=float, default=None, help="Per-request timeout in seconds (env: PROXYBASE_HTTP_TIMEOUT)")
@click.option("--metrics-port", type=int, default=None, help="Expose Prometheus metrics on this port (env: PROXYBASE_METRICS_PORT)")
def main(api_url: Optional[str], log_level: Optional[str], http_timeout: Optional[float], metrics_port: Optional[int]) -> None:
    """Serve ProxyBase tools over MCP on stdin/stdout."""
    settings = build_settings(api_url, log_level, http_timeout, metrics_port)
    setup_logging(settings.log_level)
    if settings.metrics_port:
        start_exporter(settings.metrics_port)
    build_server(settings).serve()


if __name__ == "__main__":
    main()
