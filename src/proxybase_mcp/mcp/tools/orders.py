from __future__ import annotations

from typing import Any, Dict

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient
from proxybase_mcp.mcp.tools.args import optional_str, require_str
from proxybase_mcp.mcp.tools.packages import validate_pay_currency


def create_order(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    api_key = require_str(args, "api_key")
    package_id = require_str(args, "package_id")
    pay_currency = optional_str(args, "pay_currency")
    if pay_currency is not None:
        validate_pay_currency(client, api_key, pay_currency)
    callback_url = optional_str(args, "callback_url")
    return client.create_order(api_key, package_id, pay_currency=pay_currency, callback_url=callback_url)


def check_order_status(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    api_key = require_str(args, "api_key")
    order_id = require_str(args, "order_id")
    return client.check_order_status(api_key, order_id)


def topup_order(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    api_key = require_str(args, "api_key")
    order_id = require_str(args, "order_id")
    package_id = require_str(args, "package_id")
    pay_currency = optional_str(args, "pay_currency")
    if pay_currency is not None:
        validate_pay_currency(client, api_key, pay_currency)
    return client.topup_order(api_key, order_id, package_id, pay_currency=pay_currency)


def rotate_proxy(client: ProxyBaseClient, args: Dict[str, Any]) -> Any:
    api_key = require_str(args, "api_key")
    order_id = require_str(args, "order_id")
    return client.rotate_proxy(api_key, order_id)
