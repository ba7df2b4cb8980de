"""JSON-RPC 2.0 envelopes used on the MCP stdio stream.

A response is either ``JsonRpcSuccess`` or ``JsonRpcFailure``; the
optional-field wire shape only exists in ``encode_response``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class RequestParseError(ValueError):
    """The line is not a JSON-RPC request object."""


class JsonRpcRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    jsonrpc: str
    id: Any = None
    method: str
    params: Any = None

    @property
    def is_notification(self) -> bool:
        # "id": null is a real (if odd) id; only a missing key means notification
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Any = None

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class JsonRpcSuccess(BaseModel):
    id: Any = None
    result: Any = None

    def to_wire(self) -> Dict[str, Any]:
        return {"jsonrpc": JSONRPC_VERSION, "id": self.id, "result": self.result}


class JsonRpcFailure(BaseModel):
    id: Any = None
    error: JsonRpcError

    @classmethod
    def build(cls, id: Any, code: int, message: str, data: Any = None) -> "JsonRpcFailure":
        return cls(id=id, error=JsonRpcError(code=code, message=message, data=data))

    def to_wire(self) -> Dict[str, Any]:
        return {"jsonrpc": JSONRPC_VERSION, "id": self.id, "error": self.error.to_wire()}


JsonRpcResponse = Union[JsonRpcSuccess, JsonRpcFailure]


def decode_request(line: str) -> JsonRpcRequest:
    try:
        return JsonRpcRequest.model_validate_json(line)
    except ValidationError as e:
        raise RequestParseError(_describe(e)) from e


def encode_response(response: JsonRpcResponse) -> str:
    """Serialize to a single ASCII-only line; non-ASCII and lone surrogates are \\u-escaped."""
    return json.dumps(response.to_wire())


def decode_response(line: str) -> JsonRpcResponse:
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError("response must be a JSON object")
    if "error" in data:
        if "result" in data:
            raise ValueError("response carries both result and error")
        return JsonRpcFailure(id=data.get("id"), error=JsonRpcError.model_validate(data["error"]))
    if "result" not in data:
        raise ValueError("response carries neither result nor error")
    return JsonRpcSuccess(id=data.get("id"), result=data["result"])


def parse_error_response(message: str) -> JsonRpcFailure:
    return JsonRpcFailure.build(None, PARSE_ERROR, f"Parse error: {message}")


def _describe(e: ValidationError) -> str:
    first: Optional[Dict[str, Any]] = next(iter(e.errors()), None)
    if first is None:
        return str(e)
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]
