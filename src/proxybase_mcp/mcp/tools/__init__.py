from __future__ import annotations

from typing import Any, Callable, Dict

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient
from proxybase_mcp.mcp.tools import agents, orders, packages

ToolHandler = Callable[[ProxyBaseClient, Dict[str, Any]], Any]

# Keyed by the names in tools.yaml
HANDLERS: Dict[str, ToolHandler] = {
    "register_agent": agents.register_agent,
    "list_packages": packages.list_packages,
    "list_currencies": packages.list_currencies,
    "create_order": orders.create_order,
    "check_order_status": orders.check_order_status,
    "topup_order": orders.topup_order,
    "rotate_proxy": orders.rotate_proxy,
}
