from __future__ import annotations

import logging
from typing import Any, Dict, List

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient
from proxybase_mcp.app.core.errors import ToolError
from proxybase_mcp.mcp.tools.args import require_str

logger = logging.getLogger(__name__)


def list_packages(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    api_key = require_str(args, "api_key")
    return client.list_packages(api_key)


def list_currencies(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    api_key = require_str(args, "api_key")
    return client.list_currencies(api_key)


def validate_pay_currency(client: ProxyBaseClient, api_key: str, pay_currency: str) -> None:
    """Check pay_currency against the live currency list.

    This is its own API round-trip and is not atomic with the order call
    that follows. Failures of the lookup propagate unchanged.
    """
    body = client.list_currencies(api_key)
    currencies = body.get("currencies") if isinstance(body, dict) else None
    if not isinstance(currencies, list):
        logger.debug("currency list missing from response, skipping pay_currency check")
        return
    valid: List[str] = [c for c in currencies if isinstance(c, str)]
    wanted = pay_currency.lower()
    if not any(c.lower() == wanted for c in valid):
        raise ToolError(f"Invalid pay_currency: '{pay_currency}'. Supported currencies: {', '.join(valid)}")
