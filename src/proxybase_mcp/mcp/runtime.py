from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from proxybase_mcp import __version__
from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient
from proxybase_mcp.app.core.errors import ToolError
from proxybase_mcp.app.core.metrics import record_tool_call
from proxybase_mcp.app.schemas.jsonrpc import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    JsonRpcFailure,
    JsonRpcRequest,
    JsonRpcResponse,
    JsonRpcSuccess,
)
from proxybase_mcp.mcp import catalog
from proxybase_mcp.mcp.tools import HANDLERS, ToolHandler

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "proxybase-mcp"

NOTIFICATION_METHODS = frozenset({"notifications/initialized", "notifications/cancelled"})


class MCPRuntime:
    """Routes one JSON-RPC request by method name and builds its response.

    Holds no state between requests besides the backend client. Tool
    failures come back as ``isError`` content inside a success envelope;
    only unknown methods and internal faults become JSON-RPC errors.
    """

    def __init__(self, client: ProxyBaseClient, tools: Optional[Dict[str, ToolHandler]] = None) -> None:
        self.client = client
        self.tools: Dict[str, ToolHandler] = dict(HANDLERS if tools is None else tools)

    def register_tool(self, name: str, func: ToolHandler) -> None:
        self.tools[name] = func

    def call_tool(self, name: str, args: Dict[str, Any]) -> Any:
        handler = self.tools.get(name)
        if handler is None:
            raise ToolError(f"Unknown tool: {name}")
        return handler(self.client, args)

    def handle(self, request: JsonRpcRequest) -> JsonRpcResponse:
        rid = request.id
        method = request.method

        # MCP lifecycle
        if method == "initialize":
            return JsonRpcSuccess(id=rid, result=self.server_info())

        # Tool discovery
        if method == "tools/list":
            return JsonRpcSuccess(id=rid, result={"tools": catalog.list_tools()})

        # Tool execution
        if method == "tools/call":
            return self._tools_call(rid, request.params)

        if method in NOTIFICATION_METHODS:
            return JsonRpcSuccess(id=rid, result=None)

        return JsonRpcFailure.build(rid, METHOD_NOT_FOUND, f"Method not found: {method}")

    @staticmethod
    def server_info() -> Dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def _tools_call(self, rid: Any, params: Any) -> JsonRpcResponse:
        params = params if isinstance(params, dict) else {}
        name = params.get("name")
        if not isinstance(name, str):
            name = ""
        args = params.get("arguments")
        if not isinstance(args, dict):
            args = {}

        metric_name = name if name in self.tools else "unknown"
        logger.debug("tools/call %s", name)
        try:
            value = self.call_tool(name, args)
        except ToolError as e:
            record_tool_call(metric_name, ok=False)
            logger.info("tool %s failed: %s", name or "<none>", e.message)
            return JsonRpcSuccess(id=rid, result=tool_error_content(e.message))
        except Exception:
            record_tool_call(metric_name, ok=False)
            logger.exception("tool %s raised unexpectedly", name)
            return JsonRpcFailure.build(rid, INTERNAL_ERROR, f"Internal error while running tool: {name}")

        record_tool_call(metric_name, ok=True)
        return JsonRpcSuccess(id=rid, result=tool_result_content(value))


def tool_result_content(value: Any) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(value, indent=2, ensure_ascii=False)}]}


def tool_error_content(message: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": message}], "isError": True}
