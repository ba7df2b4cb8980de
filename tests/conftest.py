from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from proxybase_mcp.app.adapters.proxybase_client import ProxyBaseClient

NOT_JSON = object()


class DummyResp:
    def __init__(self, status_code: int = 200, body: Any = None, reason: str = "OK") -> None:
        self.status_code = status_code
        self.reason = reason
        self._body = body

    def json(self) -> Any:
        if self._body is NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeSession:
    """Stands in for requests.Session; replies are served in order."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> DummyResp:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def client(session: FakeSession) -> ProxyBaseClient:
    return ProxyBaseClient(base_url="http://backend.test/", session=session)  # type: ignore[arg-type]


def ok(body: Any, status: int = 200) -> DummyResp:
    return DummyResp(status_code=status, body=body)


def fail(status: int, body: Any, reason: Optional[str] = None) -> DummyResp:
    return DummyResp(status_code=status, body=body, reason=reason or "")
