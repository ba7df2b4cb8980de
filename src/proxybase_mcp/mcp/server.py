"""
MCP server over stdio: one JSON-RPC request per input line, one response
per output line. Requests are handled strictly one at a time, so responses
leave in the order requests arrived.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient
from proxybase_mcp.app.schemas.jsonrpc import (
    RequestParseError,
    decode_request,
    encode_response,
    parse_error_response,
)
from proxybase_mcp.mcp.runtime import MCPRuntime

logger = logging.getLogger(__name__)


class MCPServer:
    def __init__(self, client: ProxyBaseClient, runtime: Optional[MCPRuntime] = None) -> None:
        self.client = client
        self.runtime = runtime or MCPRuntime(client)

    def handle_line(self, line: str) -> Optional[str]:
        """Run one raw line through decode, dispatch, encode.

        Returns the response line, or None when nothing must be written.
        """
        line = line.strip()
        if not line:
            return None

        try:
            request = decode_request(line)
        except RequestParseError as e:
            logger.warning("unparseable request: %s", e)
            return encode_response(parse_error_response(str(e)))

        logger.debug("<- %s (id=%r)", request.method, request.id)
        response = self.runtime.handle(request)

        # Notifications get processed but never answered
        if request.is_notification:
            return None
        return encode_response(response)

    def serve(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        logger.info("ProxyBase MCP Server starting (backend: %s)", self.client.base_url)

        while True:
            try:
                line = stdin.readline()
            except (OSError, ValueError) as e:
                logger.error("Failed to read stdin: %s", e)
                break
            if not line:
                break

            out = self.handle_line(line)
            if out is None:
                continue
            stdout.write(out + "\n")
            stdout.flush()

        logger.info("ProxyBase MCP Server shutting down")
