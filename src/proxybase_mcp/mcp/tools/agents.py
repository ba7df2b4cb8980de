from __future__ import annotations

from typing import Any, Dict

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient


def register_agent(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    return client.register_agent()
