"""
Client for the ProxyBase REST API
https://api.proxybase.xyz
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

import requests

from proxybase_mcp.app.core.config import DEFAULT_BASE_URL
from proxybase_mcp.app.core.errors import BackendError
from proxybase_mcp.app.core.metrics import record_backend_error, record_latency

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


class ProxyBaseClient:
    """
    Thin wrapper over the ProxyBase API.

    Every operation issues exactly one HTTP request and either returns the
    decoded JSON body untouched or raises ``BackendError``. Nothing is retried.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            base_url: API root; trailing slashes are dropped
            timeout: per-request timeout in seconds, ``None`` keeps the requests default
            session: pre-built session, mostly for tests
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def execute_request(
        self,
        method: str,
        path: str,
        operation: str,
        api_key: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request to the API and classify the outcome.

        Args:
            method: HTTP method (GET, POST)
            path: API path, e.g. /v1/orders/{order_id}/status already filled in
            operation: label used for logs and metrics
            api_key: sent verbatim in the X-API-Key header when given
            payload: JSON body for write operations

        Returns:
            The decoded JSON body of a 2xx response

        Raises:
            BackendError: transport failure, non-JSON body or non-2xx status
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if api_key is not None:
            headers[API_KEY_HEADER] = api_key
        kwargs: Dict[str, Any] = {"headers": headers}
        if payload is not None:
            kwargs["json"] = payload
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        logger.debug("%s %s (%s)", method, url, operation)
        with record_latency(operation):
            try:
                response = self.session.request(method, url, **kwargs)
            except (requests.RequestException, ValueError) as e:
                # ValueError: header values http.client cannot encode (non-latin-1 api key)
                record_backend_error(operation, "http")
                logger.warning("%s failed: %s", operation, e)
                raise BackendError(f"HTTP error: {e}") from e

        # The body is decoded before the status is looked at, so a non-JSON
        # error page reports as a parse failure.
        try:
            body = response.json()
        except ValueError as e:
            record_backend_error(operation, "parse")
            logger.warning("%s returned a non-JSON body (status %s)", operation, response.status_code)
            raise BackendError(f"Parse error: {e}") from e

        if 200 <= response.status_code < 300:
            return body

        record_backend_error(operation, "api")
        logger.warning("%s returned status %s", operation, response.status_code)
        compact = json.dumps(body, separators=(",", ":"))
        raise BackendError(f"API error ({_status_text(response.status_code)}): {compact}")

    # Operations

    def register_agent(self) -> Any:
        """Register a new agent; the response carries its API key."""
        return self.execute_request("POST", "/v1/agents", "register_agent")

    def list_packages(self, api_key: str) -> Any:
        """Available bandwidth packages with pricing."""
        return self.execute_request("GET", "/v1/packages", "list_packages", api_key=api_key)

    def list_currencies(self, api_key: str) -> Any:
        """Payment currencies enabled on the merchant account."""
        return self.execute_request("GET", "/v1/currencies", "list_currencies", api_key=api_key)

    def create_order(
        self,
        api_key: str,
        package_id: str,
        pay_currency: Optional[str] = None,
        callback_url: Optional[str] = None,
    ) -> Any:
        payload: Dict[str, Any] = {"package_id": package_id}
        if pay_currency is not None:
            payload["pay_currency"] = pay_currency
        if callback_url is not None:
            payload["callback_url"] = callback_url
        return self.execute_request("POST", "/v1/orders", "create_order", api_key=api_key, payload=payload)

    def check_order_status(self, api_key: str, order_id: str) -> Any:
        return self.execute_request("GET", f"/v1/orders/{order_id}/status", "check_order_status", api_key=api_key)

    def topup_order(
        self,
        api_key: str,
        order_id: str,
        package_id: str,
        pay_currency: Optional[str] = None,
    ) -> Any:
        payload: Dict[str, Any] = {"package_id": package_id}
        if pay_currency is not None:
            payload["pay_currency"] = pay_currency
        return self.execute_request(
            "POST", f"/v1/orders/{order_id}/topup", "topup_order", api_key=api_key, payload=payload
        )

    def rotate_proxy(self, api_key: str, order_id: str) -> Any:
        """Ask the upstream partner for a fresh exit IP on an active order."""
        return self.execute_request("POST", f"/v1/orders/{order_id}/rotate", "rotate_proxy", api_key=api_key)


def _status_text(code: int) -> str:
    try:
        return f"{code} {HTTPStatus(code).phrase}"
    except ValueError:
        return str(code)
