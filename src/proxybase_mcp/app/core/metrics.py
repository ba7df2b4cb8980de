from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

BACKEND_LATENCY = Histogram(
    "proxybase_backend_latency_seconds",
    "Latency of ProxyBase API calls",
    labelnames=("operation",),
)
BACKEND_ERRORS = Counter(
    "proxybase_backend_errors_total",
    "Failed ProxyBase API calls",
    labelnames=("operation", "kind"),
)
TOOL_CALLS = Counter(
    "proxybase_tool_calls_total",
    "MCP tool calls",
    labelnames=("tool", "outcome"),
)


@contextmanager
def record_latency(operation: str) -> Iterator[None]:
    start = time.time()
    try:
        yield
    finally:
        BACKEND_LATENCY.labels(operation=operation).observe(time.time() - start)


def record_backend_error(operation: str, kind: str) -> None:
    BACKEND_ERRORS.labels(operation=operation, kind=kind).inc()


def record_tool_call(tool: str, ok: bool) -> None:
    TOOL_CALLS.labels(tool=tool, outcome="ok" if ok else "error").inc()


def start_exporter(port: int) -> None:
    """Serve /metrics on the given port from a background thread."""
    start_http_server(port)
    logger.info("Prometheus exporter listening on :%d", port)
